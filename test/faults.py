"""
Fault tests (messages, context, triggering and rendering).

Scope
- Validate GNU-style message copy for every error kind.
- Validate context options (name, token, index, code) and copy.replace().
- Validate trigger(): raising by default, printing and exiting in shell mode.

Conventions
- Test method names follow CamelCase per project convention.
- stderr is captured with contextlib.redirect_stderr; rendering is uncolored.
"""

from __future__ import annotations

import contextlib
import copy
import io
import unittest
import warnings
from unittest import TestCase

from gnuopts import (
    EXIT_ARGUMENT_ERROR,
    FaultCode,
    IgnoredMetavarWarning,
    MissingArgumentError,
    OptionError,
    UnexpectedArgumentError,
    UnrecognizedLongOptionError,
    UnrecognizedShortOptionError,
    trigger,
)


class TestMessages(TestCase):

    def testUnrecognizedLong(self):
        self.assertEqual(str(UnrecognizedLongOptionError.build("frobnicate")), "unrecognized option '--frobnicate'")

    def testUnrecognizedShort(self):
        self.assertEqual(str(UnrecognizedShortOptionError.build("q")), "invalid option -- 'q'")

    def testUnexpectedArgument(self):
        self.assertEqual(str(UnexpectedArgumentError.build("verbose")), "option '--verbose' doesn't allow an argument")

    def testMissingLongArgument(self):
        self.assertEqual(str(MissingArgumentError.build("level")), "option '--level' requires an argument")

    def testMissingShortArgument(self):
        self.assertEqual(str(MissingArgumentError.build("o", short=True)), "option requires an argument -- 'o'")

    def testHierarchy(self):
        for kind in (
            UnrecognizedLongOptionError,
            UnrecognizedShortOptionError,
            UnexpectedArgumentError,
            MissingArgumentError,
        ):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, OptionError))
                self.assertIsInstance(kind.code, FaultCode)


class TestContext(TestCase):

    def testOptions(self):
        fault = UnrecognizedLongOptionError.build("nope", token="--nope=1", index=3)
        self.assertEqual(fault.name, "nope")
        self.assertEqual(fault.token, "--nope=1")
        self.assertEqual(fault.index, 3)
        self.assertIs(fault.options["code"], FaultCode.UNRECOGNIZED_LONG_OPTION)

    def testOptionsReadOnly(self):
        fault = UnrecognizedShortOptionError.build("x")
        with self.assertRaises(TypeError):
            fault.options["name"] = "y"

    def testReplace(self):
        fault = MissingArgumentError.build("o", short=True, index=1)
        replaced = copy.replace(fault, prog="tool")
        self.assertIsNot(replaced, fault)
        self.assertIs(type(replaced), MissingArgumentError)
        self.assertEqual(str(replaced), str(fault))
        self.assertEqual(replaced.options["prog"], "tool")
        self.assertEqual(replaced.index, 1)
        self.assertNotIn("prog", fault.options)


class TestNormalize(TestCase):

    def testDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "11122")


class TestTrigger(TestCase):

    def testRaisesByDefault(self):
        with self.assertRaises(UnexpectedArgumentError) as context:
            trigger(UnexpectedArgumentError.build("verbose"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")

    def testShellPrintsAndExits(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream):
            with self.assertRaises(SystemExit) as context:
                trigger(UnrecognizedLongOptionError.build("nope"), prog="tool", shell=True, colorful=False)
        self.assertEqual(context.exception.code, EXIT_ARGUMENT_ERROR)
        self.assertEqual(stream.getvalue().splitlines(), [
            "tool: unrecognized option '--nope'",
            "Try 'tool --help' for more information.",
        ])

    def testCustomHint(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream):
            with self.assertRaises(SystemExit):
                trigger(UnrecognizedShortOptionError.build("x"), prog="tool", shell=True, hint="See the manual.")
        self.assertIn("See the manual.", stream.getvalue())

    def testFancyPanel(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream):
            with self.assertRaises(SystemExit):
                trigger(MissingArgumentError.build("level"), prog="tool", shell=True, fancy=True, colorful=False)
        output = stream.getvalue()
        self.assertIn("11122", output)
        self.assertIn("Missing Argument", output)
        self.assertIn("option '--level' requires an argument", output)

    def testWarningEmitted(self):
        with self.assertWarns(IgnoredMetavarWarning):
            trigger(IgnoredMetavarWarning("metavar ignored"))

    def testWarningPrintedInShellMode(self):
        stream = io.StringIO()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with contextlib.redirect_stderr(stream):
                trigger(IgnoredMetavarWarning("metavar ignored"), prog="tool", shell=True)
        self.assertEqual(stream.getvalue().strip(), "tool: warning: metavar ignored")

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
