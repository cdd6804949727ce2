"""
Armature command layer: declare a command's input and run it.

What this module provides
- Command: base class for CLI commands. A command owns exactly one
  InputDefinition, declares its arguments and options in configure(), and
  implements run(input) to do its work.

Lifecycle
- construction: name/descr/runtime flags are sanitized, then configure() runs
  so subclasses can declare their input.
- handle(argv): argv (an ArgvInput) is parsed against the definition; on
  success run(input) is called with the bound Input.
- faults raised while binding are surfaced through trigger(): raised outside
  shell mode, rendered on stderr (rich) in shell mode.

Quick start
    from armature import Command, ArgvInput

    class Greet(Command):
        def configure(self):
            self.add_argument("name").descr("who to greet").required()
            self.add_option("shout", "s").descr("use capitals")

        def run(self, input):
            greeting = "hello %s" % input.argument("name")
            print(greeting.upper() if input.option("shout") else greeting)

    Greet("greet", shell=True).handle(ArgvInput(["greet", "world", "-s"]))
"""
import logging

from rich.text import Text

from .definition import InputDefinition
from .faults import *
from .inputs import ArgvInput
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_string(cls, label, object, /):
    """
    Internal: validate a scalar string/Text field; Unset becomes None.
    """
    if not isinstance(object, str | Text | Unset):
        raise TypeError(f"{cls.__name__} {label!r} must be a string")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{cls.__name__} {label!r} cannot be empty")
    return coalesce(object)


class Command:
    """
    Base class for commands built on an InputDefinition.

    Properties
    - name: str (defaults to the class name)
    - descr: str | Text | None (defaults to the class docstring)
    - definition: the owned InputDefinition
    - shell / fancy / colorful: runtime flags merged into triggered faults

    Extension points
    - configure(): declare arguments and options (called on construction).
    - is_enabled(): whether the command is available in this environment.
    - run(input): the command body; must be implemented by subclasses.
    """

    name = mirror("name")
    descr = mirror("descr")
    definition = mirror("definition")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, /, *, descr=Unset, shell=False, fancy=False, colorful=True):
        cls = type(self)
        self._name = _sanitize_string(cls, "name", coalesce(name, cls.__name__))
        # only the subclass's own docstring counts, not the inherited one
        self._descr = _sanitize_string(cls, "descr", coalesce(descr, (cls.__dict__.get("__doc__") or "").strip() or Unset))
        self._definition = InputDefinition()
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self.configure()

    def rename(self, name, /):
        self._name = _sanitize_string(type(self), "name", name)
        return self

    def describe(self, descr, /):
        self._descr = _sanitize_string(type(self), "descr", descr)
        return self

    def configure(self):
        """
        Declare arguments and options; empty by default since a command may
        need nothing but its name.
        """

    def is_enabled(self):
        return True

    def add_argument(self, name, /):
        """
        Declare a positional argument and return its builder.
        """
        return self._definition.declare_argument(name)

    def add_option(self, name, /, *shortcuts):
        """
        Declare an option (optionally with shortcuts) and return its builder.
        """
        return self._definition.declare_option(name, *shortcuts)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's runtime flags merged in; explicit
        options take precedence over them.
        """
        trigger(fault, **{
            "command": self,
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
        } | options)

    def handle(self, argv=Unset, /):
        """
        Parse argv against the definition and run the command.

        Returns
        - whatever run() returns, or None when a binding fault was rendered in
          shell mode.
        """
        if not isinstance(argv, ArgvInput):
            argv = ArgvInput(argv)

        try:
            input = argv.parse(self._definition)
        except BindingError as fault:
            logger.debug("command %r rejected its input: %s", self.name, fault)
            return self.trigger(fault)

        return self.run(input)

    def run(self, input, /):
        raise NotImplementedError(f"you must implement the 'run' method in your {self.name!r} command")

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "definition", self._definition

    def __repr__(self):
        return f"command(name={self.name!r}, descr={self.descr!r}, definition={self._definition!r})"


__all__ = (
    "Command",
)
