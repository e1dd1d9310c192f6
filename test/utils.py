"""
Utility tests (Unset sentinel, coalesce, mirror).
"""

import unittest
from unittest import TestCase

from parseargv.utils import Unset, UnsetType, coalesce, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testNoRuntimeUnions(self):
        with self.assertRaises(TypeError):
            Unset | None

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))


class TestMirror(TestCase):

    def testReadOnlyViews(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(TypeError):
            holder.table["b"] = 2
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == '__main__':
    unittest.main()
