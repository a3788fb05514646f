"""
Tests for the internal utilities.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, copying, pickling, finality).
- coalesce() replacing only Unset, never other falsy values.
- rename() in both direct and decorator forms.
- mirror() exposing read-only views of backing fields.
- progname() honoring __prog__ in __main__.
"""
import copy
import pickle
import sys
import unittest
from types import MappingProxyType
from unittest import TestCase, mock

from gnuopts.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButDistinct(self) -> None:
        """
        Unset is falsy yet distinct from None and the empty string.
        """
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickle(self) -> None:
        """
        Copy, deepcopy and pickle round-trips preserve identity.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionWithTypes(self) -> None:
        """
        `str | Unset` builds a union usable with isinstance().
        """
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(None, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(Unset, "ARG"), "ARG")

    def testKeepsFalsyValues(self) -> None:
        self.assertEqual(coalesce("", "ARG"), "")
        self.assertIsNone(coalesce(None, "ARG"))
        self.assertEqual(coalesce(0, 1), 0)


class RenameTest(TestCase):

    def testDirect(self) -> None:
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecorator(self) -> None:
        @rename("handler")
        def function():
            pass

        self.assertEqual(function.__name__, "handler")

    def testInvalidArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            flags = mirror("flags")
            name = mirror("name")

            def __init__(self):
                self._items = ["a", "b"]
                self._table = {"a": 1}
                self._flags = {"x"}
                self._name = "holder"

        self.holder = Holder()

    def testReadOnlyViews(self) -> None:
        """
        Containers come back as tuple, mappingproxy and frozenset.
        """
        self.assertEqual(self.holder.items, ("a", "b"))
        self.assertIsInstance(self.holder.table, MappingProxyType)
        self.assertEqual(self.holder.flags, frozenset({"x"}))
        self.assertEqual(self.holder.name, "holder")

    def testNoSetter(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.name = "other"

    def testRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class PrognameTest(TestCase):

    def testMainOverride(self) -> None:
        with mock.patch.object(sys.modules["__main__"], "__prog__", "custom", create=True):
            self.assertEqual(progname(), "custom")

    def testArgvBasename(self) -> None:
        main = sys.modules["__main__"]
        with mock.patch.object(sys, "argv", ["/usr/local/bin/tool", "-v"]):
            if getattr(main, "__prog__", None) is None:
                self.assertEqual(progname(), "tool")

    def testFallback(self) -> None:
        main = sys.modules["__main__"]
        with mock.patch.object(sys, "argv", []):
            if getattr(main, "__prog__", None) is None:
                self.assertEqual(progname(), "prog")


if __name__ == "__main__":
    unittest.main()
