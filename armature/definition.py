"""
Armature input definition: the registry of a command's arguments and options.

What this module provides
- InputDefinition: ordered arguments (registration order is the positional
  index) and named options with a secondary shortcut index.

Invariants
- No two arguments share a name.
- No two options share a name.
- No two options share a shortcut; the shortcut index (shortcut -> option
  name) is updated on every registration, so collision checks and binder
  lookups are dictionary hits instead of scans over every option.
- A failed registration leaves the definition exactly as it was.

Lookups never raise: argument()/option() return None for unknown keys and the
caller decides whether that is an error.
"""
import logging

from .arguments import Argument, Option, ArgumentBuilder, OptionBuilder, _sanitize_shortcuts
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class InputDefinition:
    """
    Registry of declared arguments and options.

    Properties
    - arguments: tuple of Argument in registration order.
    - options: dict mapping option name -> Option.

    Declaration
    - add_argument(Argument) / add_option(Option) register ready-made objects.
    - declare_argument(name) / declare_option(name, *shortcuts) create, register
      and return a builder for fluent configuration.
    """

    arguments = mirror("arguments")
    options = mirror("options")

    def __init__(self):
        self._arguments = ()
        self._positions = {}
        self._options = {}
        self._shortcuts = {}

    def add_argument(self, argument, /):
        """
        Register an argument at the next free positional index.

        Raises
        - TypeError: when argument is not an Argument.
        - DuplicateArgumentError: when an argument with that name exists.
        """
        if not isinstance(argument, Argument):
            raise TypeError("add_argument() argument must be an argument")
        if argument.name in self._positions:
            raise DuplicateArgumentError(
                "argument %r is already registered" % argument.name,
                title="duplicate argument",
                code=FaultCode.DUPLICATE_ARGUMENT,
                hint="rename one of the arguments called %r" % argument.name,
                name=argument.name,
                docs=getdoc(FaultCode.DUPLICATE_ARGUMENT)
            )

        self._positions[argument.name] = len(self._arguments)
        self._arguments += (argument,)
        logger.debug("registered argument %r at index %d", argument.name, self._positions[argument.name])
        return self

    def add_option(self, option, /):
        """
        Register an option and index its shortcuts.

        Raises
        - TypeError: when option is not an Option.
        - DuplicateOptionError: when an option with that name exists.
        - DuplicateShortcutError: when any shortcut already belongs to another option.

        A name that is already another option's shortcut is accepted, but the
        binder resolves shortcuts first, so tokens never reach that option.
        """
        if not isinstance(option, Option):
            raise TypeError("add_option() argument must be an option")
        if option.name in self._options:
            raise DuplicateOptionError(
                "option %r is already registered" % option.name,
                title="duplicate option",
                code=FaultCode.DUPLICATE_OPTION,
                hint="rename one of the options called %r" % option.name,
                name=option.name,
                docs=getdoc(FaultCode.DUPLICATE_OPTION)
            )

        shortcuts = option.shortcuts
        self._check_shortcuts(option.name, shortcuts)

        if (owner := self._shortcuts.get(option.name)) is not None:
            logger.debug("option %r is shadowed by the shortcut of option %r", option.name, owner)

        self._options[option.name] = option
        self._shortcuts.update(dict.fromkeys(shortcuts, option.name))
        logger.debug("registered option %r with shortcuts %s", option.name, sorted(shortcuts))
        return self

    def alias(self, name, /, *shortcuts):
        """
        Add shortcuts to an already registered option.

        Shortcuts the option already owns are accepted again silently; a
        shortcut owned by another option raises DuplicateShortcutError and
        nothing is added.
        """
        try:
            option = self._options[name]
        except KeyError:
            raise KeyError(f"alias() option {name!r} is not registered") from None

        shortcuts = _sanitize_shortcuts(Option, option.name, shortcuts) - option._shortcuts
        self._check_shortcuts(option.name, shortcuts)

        option._shortcuts |= shortcuts
        self._shortcuts.update(dict.fromkeys(shortcuts, option.name))
        logger.debug("aliased option %r with shortcuts %s", option.name, sorted(shortcuts))
        return self

    def _check_shortcuts(self, name, shortcuts, /):
        for shortcut in sorted(shortcuts):
            if (owner := self._shortcuts.get(shortcut)) is not None:
                raise DuplicateShortcutError(
                    "shortcut %r is already registered for option %r" % (shortcut, owner),
                    title="duplicate shortcut",
                    code=FaultCode.DUPLICATE_SHORTCUT,
                    hint="choose another shortcut for option %r" % name,
                    name=name,
                    shortcut=shortcut,
                    owner=owner,
                    docs=getdoc(FaultCode.DUPLICATE_SHORTCUT)
                )

    def declare_argument(self, name, /):
        """
        Create and register an Argument, returning its builder.
        """
        argument = Argument(name)
        self.add_argument(argument)
        return ArgumentBuilder(argument)

    def declare_option(self, name, /, *shortcuts):
        """
        Create and register an Option, returning its builder.
        """
        option = Option(name, *shortcuts)
        self.add_option(option)
        return OptionBuilder(self, option)

    def argument(self, key, /):
        """
        Return the argument for a name or a registration index, or None.
        """
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            return self._arguments[key] if 0 <= key < len(self._arguments) else None
        if isinstance(key, str) and (index := self._positions.get(key)) is not None:
            return self._arguments[index]
        return None

    def option(self, key, /):
        """
        Return the option for a name (checked first) or a shortcut, or None.
        """
        if not isinstance(key, str):
            return None
        try:
            return self._options[key]
        except KeyError:
            return self.option_by_shortcut(key)

    def option_by_shortcut(self, shortcut, /):
        """
        Return the option owning the given shortcut, or None.
        """
        if (name := self._shortcuts.get(shortcut)) is None:
            return None
        return self._options[name]

    def has_argument(self, key, /):
        return self.argument(key) is not None

    def has_option(self, key, /):
        return self.option(key) is not None

    def has_shortcut(self, shortcut, /):
        return shortcut in self._shortcuts

    def is_missing_argument(self, key, /):
        return not self.has_argument(key)

    def is_missing_option(self, key, /):
        return not self.has_option(key)

    def argument_names(self):
        """
        Return the argument names in registration (positional) order.
        """
        return tuple(argument.name for argument in self._arguments)

    def shortcuts(self):
        """
        Return a snapshot of the shortcut index (shortcut -> option name).
        """
        return dict(self._shortcuts)

    def __len__(self):
        return len(self._arguments) + len(self._options)

    def __contains__(self, name):
        return name in self._positions or name in self._options

    def __rich_repr__(self):
        yield "arguments", self.arguments
        yield "options", self.options

    def __repr__(self):
        return "input-definition(arguments=%r, options=%r)" % (self.argument_names(), tuple(self._options))


__all__ = (
    "InputDefinition",
)
