"""
Armature input surface: the argv boundary and bound-value access.

What this module provides
- tokenize(argv, flags=()): weak tokenizer turning an already-split word list
  into the (positional, options) pair the binder consumes. It performs no
  quoting or escaping; words arrive exactly as the shell delivered them.
- Input: holds a definition plus the values of its last successful bind and
  answers argument()/option() with bound values or declared defaults.
- ArgvInput: an Input fed from sys.argv (or an explicit word list) whose first
  positional word names the command and is kept apart from the arguments.

Tokenizer forms
    --name=value    name -> "value"
    --name value    name -> "value"  (unless name is a flag or value starts with "-")
    --name          name -> True
    --no-name       name -> False
    -abc            a, b -> True; c behaves like --c (may take the next word)
    -n=5            n -> 5
    --              every following word is positional
Numeric-looking option values become int/float; a key given more than once
collects its values into a list; positional words always stay strings, and
negative numbers ("-5") are positional words, not shortcuts.
"""
import re
import sys
from collections import deque
from collections.abc import Iterable

from .binding import bind
from .definition import InputDefinition
from .utils import *

_INTEGER = re.compile(r"[-+]?[0-9]+")
_FLOAT = re.compile(r"[-+]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][-+]?[0-9]+)?")


def _coerce(value, /):
    """
    Turn numeric-looking strings into int/float; everything else is unchanged.

    Only ASCII digits count, and integers past the interpreter's conversion
    limit stay strings.
    """
    try:
        if _INTEGER.fullmatch(value):
            return int(value)
        if _FLOAT.fullmatch(value):
            return float(value)
    except ValueError:
        pass
    return value


def tokenize(argv, /, *, flags=()):
    """
    Split a word list into (positional, options).

    Parameters
    - argv: Iterable[str], already split into words (a plain string is refused).
    - flags: Iterable[str], option keys that never take the following word as
      their value (leading dashes are ignored).

    Returns
    - tuple[list[str], dict[str, Any]]
    """
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("tokenize() argument must be an iterable of words")
    flags = frozenset(flag.lstrip("-") for flag in flags)

    positional = []
    options = {}
    words = deque(argv)

    def assign(key, value):
        if key not in options:
            options[key] = value
        elif isinstance(options[key], list):
            options[key].append(value)
        else:
            options[key] = [options[key], value]

    def take(key):
        # the value of a spaced option is the next word, unless it looks like a switch
        if key not in flags and words and not (words[0].startswith("-") and not _FLOAT.fullmatch(words[0])):
            return _coerce(words.popleft())
        return True

    while words:
        if not isinstance(word := words.popleft(), str):
            raise TypeError("tokenize() words must be strings")

        if word == "--":
            positional.extend(words)
            break

        if match := re.fullmatch(r"--([^=]+)=(.*)", word, re.DOTALL):
            assign(match[1], _coerce(match[2]))
        elif match := re.fullmatch(r"--no-(.+)", word, re.DOTALL):
            assign(match[1], False)
        elif match := re.fullmatch(r"--(.+)", word, re.DOTALL):
            assign(match[1], take(match[1]))
        elif word.startswith("-") and len(word) > 1 and not _FLOAT.fullmatch(word):
            letters, separator, value = word[1:].partition("=")
            if not letters:
                positional.append(word)
                continue
            for index, letter in enumerate(letters[:-1]):
                # -n5: a letter followed by a number takes it as its value
                if letter.isalpha() and _FLOAT.fullmatch(rest := letters[index + 1:]):
                    assign(letter, _coerce(rest))
                    break
                assign(letter, True)
            else:
                assign(letters[-1], _coerce(value) if separator else take(letters[-1]))
        else:
            positional.append(word)

    return positional, options


class Input:
    """
    Bound input values for one definition.

    Lifecycle
    - created empty (optionally with its definition), filled by bind().
    - a failed bind raises and keeps the previously bound values.

    Accessors
    - argument(name_or_index) / option(name): bound value, else the declared
      default, else None for names the definition does not know.
    - has_argument(name_or_index) / has_option(name): whether a value was
      supplied.
    """

    arguments = mirror("arguments")
    options = mirror("options")

    def __init__(self, definition=Unset, /):
        if not isinstance(definition, InputDefinition | Unset):
            raise TypeError(f"{type(self).__name__}() argument must be an input definition")
        self._definition = coalesce(definition)
        self._arguments = {}
        self._options = {}

    @property
    def definition(self):
        return self._definition

    def bind(self, tokens, definition=Unset, /):
        """
        Bind tokens onto the definition (the given one, or the current one).
        """
        if not isinstance(definition, InputDefinition | Unset):
            raise TypeError("bind() second argument must be an input definition")
        if (definition := coalesce(definition, self._definition)) is None:
            raise TypeError(f"{type(self).__name__} has no input definition to bind onto")

        arguments, options = bind(tokens, definition)
        self._definition = definition
        self._arguments = arguments
        self._options = options
        return self

    def argument(self, key, /):
        if (argument := self._locate(key)) is None:
            return None
        return self._arguments.get(argument.name, argument.default)

    def option(self, name, /):
        if (option := self._resolve(name)) is not None:
            name = option.name
        try:
            return self._options[name]
        except KeyError:
            pass
        return option.default if option is not None else None

    def has_argument(self, key, /):
        return (argument := self._locate(key)) is not None and argument.name in self._arguments

    def has_option(self, name, /):
        if (option := self._resolve(name)) is not None:
            name = option.name
        return name in self._options

    def _resolve(self, name, /):
        # shortcuts and dashed spellings resolve to the declared option
        if self._definition is None or not isinstance(name, str):
            return None
        return self._definition.option(name.lstrip("-"))

    def _locate(self, key, /):
        # names and registration indexes resolve to the declared argument
        if self._definition is None:
            return None
        return self._definition.argument(key)

    def __rich_repr__(self):
        yield "arguments", self.arguments
        yield "options", self.options

    def __repr__(self):
        return f"{type(self).__name__.lower()}(arguments={self._arguments!r}, options={self._options!r})"


class ArgvInput(Input):
    """
    Input read from the process arguments.

    The first positional word is the command name (see first_argument()); only
    the words after it are bound to the definition's arguments.
    """

    def __init__(self, argv=Unset, /):
        super().__init__()
        argv = coalesce(argv, sys.argv[1:])
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("ArgvInput() argument must be an iterable of words")
        self._argv = tuple(argv)
        self._parsed = ([], {})

    @property
    def argv(self):
        return self._argv

    def parse(self, definition, /):
        """
        Tokenize argv against the definition and bind it.

        Options that do not expect a value are tokenized as flags, so they
        never swallow the following word.
        """
        if not isinstance(definition, InputDefinition):
            raise TypeError("parse() argument must be an input definition")

        flags = set()
        for option in definition.options.values():
            if not option.expects_value:
                flags |= {option.name, *option.shortcuts}

        positional, options = self._parsed = tokenize(self._argv, flags=flags)
        return self.bind((positional[1:], options), definition)

    def first_argument(self):
        """
        Return the first positional word (usually the command name) or "".
        """
        positional, _ = self._parsed
        return positional[0] if positional else ""


__all__ = (
    "Input",
    "ArgvInput",
    "tokenize",
)
