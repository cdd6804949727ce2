"""
Armature faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- InputException: base type carrying a message plus structured options; knows
  how to render itself with rich and how to surface (raise or print).
- DefinitionError / BindingError: phase bases, so callers can catch everything
  raised while declaring a command apart from everything raised while binding
  its input.
- trigger(): central entry point to surface a fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Messages name the offending token, and positional faults say where it was
  found ("at second position").
- Too-many-arguments faults list every expected argument, in declaration
  order, so the user can see what the command accepts.
- Lowercased, short titles and a single hint; styling configurable via
  __styles__ in __main__.

Integration
- The definition and binding layers only raise.
- Commands surface faults through trigger(fault, shell=..., fancy=...): outside
  shell mode the fault is raised, in shell mode it is rendered on stderr.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definition (112xx)
      • INVALID_DEFINITION, DUPLICATE_ARGUMENT, DUPLICATE_OPTION, DUPLICATE_SHORTCUT
    - binding (111xx)
      • UNEXPECTED_OPTION, NO_ARGUMENTS_EXPECTED, TOO_MANY_ARGUMENTS

    normalize() lets the host remap codes to its own labels.
    """
    # --- binding errors (111xx) ---
    UNEXPECTED_OPTION           = 11112
    NO_ARGUMENTS_EXPECTED       = 11121
    TOO_MANY_ARGUMENTS          = 11122

    # --- definition errors (112xx) ---
    INVALID_DEFINITION          = 11201
    DUPLICATE_ARGUMENT          = 11202
    DUPLICATE_OPTION            = 11203
    DUPLICATE_SHORTCUT          = 11204

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class InputException(Exception):
    """
    base type for every armature fault.

    contract
    - message: the user-facing sentence, surfaced verbatim.
    - options: read-only mapping with title/code/hint plus fault-specific
      context (name, shortcut, token, index, expected, ...).
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        command = self.options.get("command")
        prog = text(getattr(main, "__prog__", getattr(command, "name", None) or "armature"), styler("prog-name"))
        code = self.options.get("code")
        title = self.options.get("title") or type(self).__name__

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else code, styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DefinitionError(InputException): ...
class BindingError(InputException): ...

class InvalidDefinitionError(DefinitionError): ...
class DuplicateArgumentError(DefinitionError): ...
class DuplicateOptionError(DefinitionError): ...
class DuplicateShortcutError(DefinitionError): ...

class NoArgumentsExpectedError(BindingError): ...
class TooManyArgumentsError(BindingError): ...
class UnexpectedOptionError(BindingError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see InputException).
    - options are merged into the fault via copy.replace(fault, **options) before
      triggering, so the original fault is never mutated.
    - in shell mode, rendering happens via the rich console; otherwise the
      fault is raised.

    typical options
    - command, shell, fancy, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "InputException",
    "DefinitionError",
    "BindingError",
    "InvalidDefinitionError",
    "DuplicateArgumentError",
    "DuplicateOptionError",
    "DuplicateShortcutError",
    "NoArgumentsExpectedError",
    "TooManyArgumentsError",
    "UnexpectedOptionError",
    "FaultCode",
    "trigger",
    "getdoc",
)
