"""
Argument spec tests (construction, equality, representation).

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from parseargv import Cardinal, Option, Switch, spell


class TestArguments(TestCase):

    def testCardinalDefaults(self):
        cardinal = Cardinal("file")
        self.assertTrue(cardinal.required)
        self.assertFalse(cardinal.variadic)

    def testCardinalRejectsEmptyName(self):
        with self.assertRaises(ValueError):
            Cardinal("")
        with self.assertRaises(TypeError):
            Cardinal(1)

    def testValueEquality(self):
        self.assertEqual(Option("value"), Option("value"))
        self.assertNotEqual(Option("value"), Switch("value"))
        self.assertEqual(len({Switch("s"), Switch("s")}), 1)

    def testFieldsAreReadOnly(self):
        with self.assertRaises(AttributeError):
            Switch("s").key = "t"

    def testRepr(self):
        self.assertEqual(repr(Cardinal("files", variadic=True)), "cardinal(name='files', required=True, variadic=True)")
        self.assertEqual(repr(Option("value")), "option(key='value')")

    def testSpell(self):
        self.assertEqual(spell("s"), "-s")
        self.assertEqual(spell("switch"), "--switch")


if __name__ == '__main__':
    unittest.main()
