r"""
Armature argument and option declarations.

Overview
- Value objects
  • Argument: positional input, addressed by its registration index in a
    definition (name, descr, required, default).
  • Option: named input with zero or more shortcut aliases (name, shortcuts,
    descr, default, expects_value).

- Builders
  • ArgumentBuilder: fluent configuration of a declared Argument.
  • OptionBuilder: fluent configuration of a declared Option; shortcut changes
    are routed through the owning definition so its shortcut index stays the
    single source of truth.

- Introspection & representation
  • InputType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: required, non-empty after trimming, no inner whitespace. Option names
  and shortcuts drop their leading dashes ("--verbose" -> "verbose"), since
  tokenized option keys never carry them.
- descr: Unset | str | Text, non-empty when provided (None when omitted).
- shortcuts: Iterable[str], sanitized like names; duplicates collapse and a
  shortcut equal to the option's own name is rejected.

Quick example:
    >>> from armature.arguments import Argument, Option
    >>> Argument("file", "file to read", required=True)
    argument(name='file', descr='file to read', required=True, default=None)
    >>> Option("--verbose", "-v").shortcuts
    {'v'}

Public API
- Classes: Argument, Option, ArgumentBuilder, OptionBuilder
"""
import functools
import operator
import re

from rich.text import Text

from .faults import InvalidDefinitionError, FaultCode, getdoc
from .utils import *


class InputType(type):
    """
    Metaclass that turns declarations into introspectable value objects.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='verbose', shortcuts={'v'}, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /, *, dashed=False, label="name"):
    """
    Internal: validate a declaration name (or shortcut) and return it trimmed.

    Parameters
    - cls: the declaring class, used for its __typename__ in messages.
    - name: the raw value handed in by the caller.
    - dashed: strip leading dashes (options and shortcuts).
    - label: what is being named, for the message ("name", "shortcut").

    Raises
    - InvalidDefinitionError: when the name is missing, empty (after trimming
      and dash stripping) or contains whitespace.
    """
    if isinstance(name, str):
        name = name.strip()
        if dashed:
            name = name.lstrip("-")

    if not isinstance(name, str) or not name:
        raise InvalidDefinitionError(
            "missing %s %s" % (cls.__typename__, label),
            title="invalid definition",
            code=FaultCode.INVALID_DEFINITION,
            hint="give every %s a non-empty %s" % (cls.__typename__, label),
            name=name,
            docs=getdoc(FaultCode.INVALID_DEFINITION)
        )
    if re.search(r"\s", name):
        raise InvalidDefinitionError(
            "%s %s %r cannot contain whitespace" % (cls.__typename__, label, name),
            title="invalid definition",
            code=FaultCode.INVALID_DEFINITION,
            hint="use dashes to separate words (for example: %s)" % re.sub(r"\s+", "-", name),
            name=name,
            docs=getdoc(FaultCode.INVALID_DEFINITION)
        )
    return name


def _sanitize_shortcuts(cls, name, shortcuts, /):
    """
    Internal: sanitize an option's shortcuts into a set.

    Every shortcut goes through _sanitize_name (dashes stripped); repeats
    collapse, and a shortcut equal to the option name itself is rejected
    since it would shadow the name it aliases.
    """
    sanitized = set()
    for shortcut in shortcuts:
        shortcut = _sanitize_name(cls, shortcut, dashed=True, label="shortcut")
        if shortcut == name:
            raise InvalidDefinitionError(
                "%s %r cannot use its own name as a shortcut" % (cls.__typename__, name),
                title="invalid definition",
                code=FaultCode.INVALID_DEFINITION,
                hint="pick a shorter alias (for example: %s)" % name[0],
                name=name,
                shortcut=shortcut,
                docs=getdoc(FaultCode.INVALID_DEFINITION)
            )
        sanitized.add(shortcut)
    return sanitized


def _sanitize_descr(cls, descr, /):
    """
    Internal: validate a description, returning None when it is Unset.
    """
    if not isinstance(descr, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


class Argument(metaclass=InputType):
    """
    Positional input declaration.

    An Argument is identified by its name; once added to an InputDefinition it
    is addressable by its registration index as well. Binding assigns the
    positional token found at that index to the argument's name.

    Properties
    - name: str
    - descr: str | Text | None
    - required: bool (informational; binding does not enforce presence)
    - default: any value, returned by Input.argument() when nothing was bound
    """

    __introspectable__ = (
        "name",
        "descr",
        "required",
        "default",
    )

    def __init__(self, name, /, descr=Unset, *, required=False, default=None):
        cls = type(self)
        self._name = _sanitize_name(cls, name)
        self._descr = _sanitize_descr(cls, descr)
        self._required = bool(required)
        self._default = default

    def __eq__(self, other):
        if not isinstance(other, Argument):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash((Argument, self._name))


class Option(metaclass=InputType):
    """
    Named input declaration.

    An Option is identified by its name and may be reached through any of its
    shortcuts ("v" for "verbose"). Shortcuts are unique across a whole
    definition, which enforces that rule when the option is registered.

    Properties
    - name: str (without leading dashes)
    - shortcuts: set[str] (fresh copy on every read)
    - descr: str | Text | None
    - default: any value, returned by Input.option() when nothing was bound
    - expects_value: bool, False for presence-only flags
    """

    __introspectable__ = (
        "name",
        "shortcuts",
        "descr",
        "default",
        "expects_value",
    )

    def __init__(self, name, /, *shortcuts, descr=Unset, default=None, expects_value=False):
        cls = type(self)
        self._name = _sanitize_name(cls, name, dashed=True)
        self._shortcuts = _sanitize_shortcuts(cls, self._name, shortcuts)
        self._descr = _sanitize_descr(cls, descr)
        self._default = default
        self._expects_value = bool(expects_value)

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash((Option, self._name))


class ArgumentBuilder:
    """
    Fluent configuration for a declared Argument.

    Each method updates the argument in place and returns the builder, so
    declarations read as one chain:

        command.add_argument("file").descr("file to read").required()
    """

    def __init__(self, argument, /):
        if not isinstance(argument, Argument):
            raise TypeError("ArgumentBuilder() argument must be an argument")
        self._argument = argument

    @property
    def argument(self):
        return self._argument

    def descr(self, descr, /):
        self._argument._descr = _sanitize_descr(Argument, descr)
        return self

    def required(self):
        self._argument._required = True
        return self

    def optional(self):
        self._argument._required = False
        return self

    def default(self, default, /):
        self._argument._default = default
        return self

    def __repr__(self):
        return f"argument-builder({self._argument!r})"


class OptionBuilder:
    """
    Fluent configuration for a declared Option.

    The builder keeps a handle on the owning definition: shortcuts are added
    through InputDefinition.alias(), which checks them against every other
    option and updates the shortcut index in the same step.

        command.add_option("verbose").shortcuts("v").descr("chatty output")
    """

    def __init__(self, definition, option, /):
        if not isinstance(option, Option):
            raise TypeError("OptionBuilder() second argument must be an option")
        self._definition = definition
        self._option = option

    @property
    def option(self):
        return self._option

    def descr(self, descr, /):
        self._option._descr = _sanitize_descr(Option, descr)
        return self

    def shortcuts(self, *shortcuts):
        self._definition.alias(self._option.name, *shortcuts)
        return self

    def default(self, default, /):
        self._option._default = default
        return self

    def expects_value(self, flag=True, /):
        self._option._expects_value = bool(flag)
        return self

    def flag(self):
        return self.expects_value(False)

    def __repr__(self):
        return f"option-builder({self._option!r})"


__all__ = (
    # Classes (declarations)
    "Argument",
    "Option",

    # Builders
    "ArgumentBuilder",
    "OptionBuilder",
)

# Keep the metaclass out of star-imports; it is not part of the public API.
del InputType
