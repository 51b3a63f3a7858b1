"""
Tests for the internal utilities.

Scope
- Unset sentinel semantics (singleton, falsy, sealed, union-friendly).
- coalesce(), rename() and mirror().
"""
import unittest
from unittest import TestCase

from declargs.utils import *


class TestUnset(TestCase):
    """The Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class TestHelpers(TestCase):
    """coalesce, rename and mirror."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testRenameDecoratorForm(self):
        @rename("work")
        def f():
            pass

        self.assertEqual(f.__name__, "work")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")

            def __init__(self):
                self._items = [1, [2]]
                self._table = {"a": [1]}
                self._tags = {"x"}

        holder = Holder()
        self.assertEqual(holder.items, (1, (2,)))
        self.assertEqual(holder.table["a"], (1,))
        self.assertEqual(holder.tags, frozenset({"x"}))
        with self.assertRaises(TypeError):
            holder.table["b"] = 2
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
