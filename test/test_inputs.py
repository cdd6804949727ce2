"""
Inputs module behavioral tests (tokenizer boundary, Input, ArgvInput).

Scope
- Validate the weak tokenizer forms (inline/spaced values, negation, short
  clusters, "--" terminator, flags, numeric values, repeated keys).
- Validate Input value access with declared defaults and fail-fast binds.
- Validate ArgvInput command-name stripping and flag-aware tokenizing.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from armature import Argument, Option, InputDefinition, Input, ArgvInput, tokenize
from armature.faults import TooManyArgumentsError, UnexpectedOptionError


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testMixedForms(self):
        positional, options = tokenize(["a", "--name=x", "--count", "3", "-v", "--no-color", "--", "-z"])
        self.assertEqual(positional, ["a", "-z"])
        self.assertEqual(options, {"name": "x", "count": 3, "v": True, "color": False})

    def testSpacedValueNotTakenFromSwitch(self):
        self.assertEqual(tokenize(["--dry", "--force"]), ([], {"dry": True, "force": True}))

    def testFlagsNeverTakeTheNextWord(self):
        self.assertEqual(tokenize(["-v", "file"], flags={"v"}), (["file"], {"v": True}))
        self.assertEqual(tokenize(["--verbose", "file"], flags={"--verbose"}), (["file"], {"verbose": True}))
        self.assertEqual(tokenize(["-v", "file"]), ([], {"v": "file"}))

    def testShortCluster(self):
        self.assertEqual(tokenize(["-abc", "val"]), ([], {"a": True, "b": True, "c": "val"}))

    def testShortInlineValue(self):
        self.assertEqual(tokenize(["-n=5"]), ([], {"n": 5}))

    def testNumericValues(self):
        _, options = tokenize(["--ratio=0.5", "--offset", "-3", "--big=1e3", "--name=007x"])
        self.assertEqual(options, {"ratio": 0.5, "offset": -3, "big": 1000.0, "name": "007x"})

    def testShortAttachedNumber(self):
        self.assertEqual(tokenize(["-n5"]), ([], {"n": 5}))
        self.assertEqual(tokenize(["-vn2.5", "x"]), (["x"], {"v": True, "n": 2.5}))
        self.assertEqual(tokenize(["-ab"], flags={"b"}), ([], {"a": True, "b": True}))

    def testNonAsciiDigitsStayStrings(self):
        self.assertEqual(tokenize(["--n", "٣", "--ratio=٣.٥"]), ([], {"n": "٣", "ratio": "٣.٥"}))

    def testOversizedIntegerStaysString(self):
        limit = sys.get_int_max_str_digits()
        sys.set_int_max_str_digits(4300)
        self.addCleanup(sys.set_int_max_str_digits, limit)

        digits = "1" * 5000
        self.assertEqual(tokenize(["--n", digits]), ([], {"n": digits}))

    def testNegativeNumberIsPositional(self):
        self.assertEqual(tokenize(["-5", "x"]), (["-5", "x"], {}))

    def testPositionalWordsStayStrings(self):
        self.assertEqual(tokenize(["42", "3.14"]), (["42", "3.14"], {}))

    def testRepeatedKeysCollect(self):
        _, options = tokenize(["--tag=a", "--tag=b", "--tag", "c"])
        self.assertEqual(options, {"tag": ["a", "b", "c"]})

    def testEmptyInlineValue(self):
        self.assertEqual(tokenize(["--name="]), ([], {"name": ""}))

    def testLoneDashIsPositional(self):
        self.assertEqual(tokenize(["-"]), (["-"], {}))

    def testPlainStringRejected(self):
        with self.assertRaises(TypeError):
            tokenize("a --b")

    def testNonStringWordRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["a", 1])


class TestInput(TestCase):
    """Behavioral tests for Input."""

    def setUp(self):
        self.definition = InputDefinition()
        self.definition.add_argument(Argument("file", default="a.txt"))
        self.definition.add_option(Option("verbose", "v", default=False))

    def testBoundValuesWin(self):
        input = Input(self.definition).bind((["b.txt"], {"v": True}))
        self.assertEqual(input.argument("file"), "b.txt")
        self.assertIs(input.option("verbose"), True)
        self.assertIs(input.option("v"), True)
        self.assertIs(input.option("--verbose"), True)
        self.assertTrue(input.has_argument("file"))
        self.assertTrue(input.has_option("v"))

    def testDefaultsFillMissingValues(self):
        input = Input(self.definition).bind(([], {}))
        self.assertEqual(input.argument("file"), "a.txt")
        self.assertIs(input.option("verbose"), False)
        self.assertFalse(input.has_argument("file"))
        self.assertFalse(input.has_option("verbose"))

    def testArgumentsByRegistrationIndex(self):
        input = Input(self.definition).bind((["b.txt"], {}))
        self.assertEqual(input.argument(0), "b.txt")
        self.assertTrue(input.has_argument(0))
        self.assertIsNone(input.argument(1))
        self.assertFalse(input.has_argument(1))

        input = Input(self.definition).bind(([], {}))
        self.assertEqual(input.argument(0), "a.txt")
        self.assertFalse(input.has_argument(0))

    def testUnknownNamesAreNone(self):
        input = Input(self.definition).bind(([], {}))
        self.assertIsNone(input.argument("missing"))
        self.assertIsNone(input.option("missing"))

    def testFailedBindKeepsPreviousValues(self):
        input = Input(self.definition).bind((["b.txt"], {}))
        with self.assertRaises(TooManyArgumentsError):
            input.bind((["c.txt", "d.txt"], {}))
        with self.assertRaises(UnexpectedOptionError):
            input.bind((["c.txt"], {"x": True}))
        self.assertEqual(input.arguments, {"file": "b.txt"})
        self.assertEqual(input.options, {})

    def testBindWithoutDefinitionRejected(self):
        with self.assertRaises(TypeError):
            Input().bind(([], {}))

    def testBindAdoptsGivenDefinition(self):
        input = Input().bind((["b.txt"], {}), self.definition)
        self.assertIs(input.definition, self.definition)
        self.assertEqual(input.argument("file"), "b.txt")

    def testSnapshotsAreDetached(self):
        input = Input(self.definition).bind((["b.txt"], {}))
        input.arguments["file"] = "changed"
        self.assertEqual(input.argument("file"), "b.txt")

    def testRepr(self):
        input = Input(self.definition).bind((["b.txt"], {"v": True}))
        self.assertEqual(repr(input), "input(arguments={'file': 'b.txt'}, options={'verbose': True})")


class TestArgvInput(TestCase):
    """Behavioral tests for ArgvInput."""

    def setUp(self):
        self.definition = InputDefinition()
        self.definition.declare_argument("source")
        self.definition.declare_argument("dest")
        self.definition.declare_option("force", "f")
        self.definition.declare_option("output", "o").expects_value()

    def testCommandNameIsStripped(self):
        input = ArgvInput(["copy", "a", "b", "-f"]).parse(self.definition)
        self.assertEqual(input.first_argument(), "copy")
        self.assertEqual(input.arguments, {"source": "a", "dest": "b"})
        self.assertEqual(input.options, {"force": True})

    def testFlagOptionDoesNotSwallowArgument(self):
        input = ArgvInput(["copy", "-f", "a"]).parse(self.definition)
        self.assertEqual(input.arguments, {"source": "a"})
        self.assertEqual(input.options, {"force": True})

    def testValueOptionTakesAttachedNumber(self):
        definition = InputDefinition()
        definition.declare_option("lines", "n").expects_value()
        input = ArgvInput(["head", "-n5"]).parse(definition)
        self.assertEqual(input.option("lines"), 5)

    def testValueOptionTakesNextWord(self):
        input = ArgvInput(["copy", "-o", "out.txt", "in.txt"]).parse(self.definition)
        self.assertEqual(input.arguments, {"source": "in.txt"})
        self.assertEqual(input.option("output"), "out.txt")

    def testSurplusArgumentsRaise(self):
        with self.assertRaises(TooManyArgumentsError) as context:
            ArgvInput(["copy", "a", "b", "c"]).parse(self.definition)
        self.assertEqual(context.exception.options["expected"], ("source", "dest"))

    def testEmptyArgv(self):
        input = ArgvInput([]).parse(self.definition)
        self.assertEqual(input.first_argument(), "")
        self.assertEqual(input.arguments, {})

    def testDefaultsToProcessArguments(self):
        with patch.object(sys, "argv", ["prog", "copy", "a"]):
            input = ArgvInput()
        self.assertEqual(input.argv, ("copy", "a"))

    def testParseRequiresDefinition(self):
        with self.assertRaises(TypeError):
            ArgvInput([]).parse(None)


if __name__ == "__main__":
    unittest.main()
