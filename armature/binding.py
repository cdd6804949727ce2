"""
Armature binder: fold tokenized input onto an input definition.

Input shape
- tokens: a pair (positional, options) as produced by a weak tokenizer:
  • positional: ordered sequence of strings (command name already removed).
  • options: mapping of option key -> raw value (str, bool, number, list).

Positional tokens (in order, index i from 0)
1. the definition has an argument at i -> bind the token to its name.
2. the definition has no arguments at all -> NoArgumentsExpectedError.
3. otherwise -> TooManyArgumentsError listing every expected argument name.
Supplying fewer tokens than declared arguments is not an error here.

Option tokens (keys are unique, order is irrelevant)
1. key is a registered shortcut -> bind under the owning option's name.
2. key is a registered option name -> bind under that name.
3. otherwise -> UnexpectedOptionError naming the key.

Binding is pure: it never mutates the definition, keeps no state between
calls, and returns nothing at all when it fails.
"""
import difflib
import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from .definition import InputDefinition
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class BoundInput(NamedTuple):
    """
    Result of a successful bind: bound argument and option values by name.
    """
    arguments: dict[str, Any]
    options: dict[str, Any]


class Binder:
    """
    Binds (positional, options) token pairs onto an InputDefinition.

    The binder holds no state; one instance can serve any number of
    definitions and calls.
    """

    def bind(self, tokens, definition, /):
        """
        Bind tokens onto definition and return a BoundInput.

        Raises
        - TypeError: when tokens is not a (sequence, mapping) pair or definition
          is not an InputDefinition.
        - NoArgumentsExpectedError / TooManyArgumentsError: surplus positionals.
        - UnexpectedOptionError: an option key matching no name or shortcut.
        """
        if not isinstance(definition, InputDefinition):
            raise TypeError("bind() second argument must be an input definition")
        try:
            positional, options = tokens
        except (TypeError, ValueError):
            raise TypeError("bind() first argument must be a (positional, options) pair") from None
        if not isinstance(positional, Sequence) or isinstance(positional, str):
            raise TypeError("bind() positional tokens must be a sequence of strings")
        if not isinstance(options, Mapping):
            raise TypeError("bind() option tokens must be a mapping")

        bound = BoundInput(
            self._bind_arguments(positional, definition),
            self._bind_options(options, definition),
        )
        logger.debug("bound arguments %r and options %r", bound.arguments, bound.options)
        return bound

    def _bind_arguments(self, positional, definition, /):
        arguments = {}

        for index, token in enumerate(positional):
            if (argument := definition.argument(index)) is not None:
                arguments[argument.name] = token
                continue

            if not definition.arguments:
                raise NoArgumentsExpectedError(
                    "no arguments expected, got %r at %s position" % (token, ordinal(index + 1)),
                    title="no arguments expected",
                    code=FaultCode.NO_ARGUMENTS_EXPECTED,
                    hint="remove %r, this command takes options only" % token,
                    token=token,
                    index=index,
                    docs=getdoc(FaultCode.NO_ARGUMENTS_EXPECTED)
                )

            names = definition.argument_names()
            raise TooManyArgumentsError(
                "too many arguments, unexpected %r at %s position: expected arguments \"%s\"" % (
                    token, ordinal(index + 1), ", ".join(names)
                ),
                title="too many arguments",
                code=FaultCode.TOO_MANY_ARGUMENTS,
                hint="pass at most %d %s" % (len(names), "argument" if len(names) == 1 else pluralize("argument")),
                token=token,
                index=index,
                expected=names,
                docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS)
            )

        return arguments

    def _bind_options(self, tokens, definition, /):
        options = {}

        for key, value in tokens.items():
            name = key.lstrip("-") if isinstance(key, str) else key

            if (option := definition.option_by_shortcut(name)) is not None:
                options[option.name] = value
                continue

            if (option := definition.option(name)) is not None:
                options[option.name] = value
                continue

            raise UnexpectedOptionError(
                "unexpected option %r" % key,
                title="unexpected option",
                code=FaultCode.UNEXPECTED_OPTION,
                hint=_suggest(name, definition),
                token=key,
                docs=getdoc(FaultCode.UNEXPECTED_OPTION)
            )

        return options


def _suggest(name, definition, /):
    """
    Build the hint for an unknown option key, naming the closest known key.
    """
    candidates = list(definition.options) + list(definition.shortcuts())
    if isinstance(name, str) and (matches := difflib.get_close_matches(name, candidates, 1)):
        return "did you mean %r?" % matches[0]
    if candidates:
        return "known options are %s" % ", ".join(map(repr, sorted(definition.options)))
    return "this command takes no options"


_binder = Binder()


def bind(tokens, definition, /):
    """
    Bind tokens onto definition with a shared stateless Binder.
    """
    return _binder.bind(tokens, definition)


__all__ = (
    "Binder",
    "BoundInput",
    "bind",
)
