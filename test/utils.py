# python
"""
Utils module behavioral tests (Unset sentinel, rename, mirror).

Scope
- Validate the Unset sentinel: singleton identity, falsiness, repr, finality.
- Validate rename() in function and decorator forms.
- Validate mirror() exposes frozen copies of private fields.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from argonorm.utils import *


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionSupport(self):
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("subtype", (UnsetType,), {})


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testFunctionForm(self):
        def original():
            pass

        renamed = rename(original, "renamed")
        self.assertIs(renamed, original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testWrongArityRejected(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    def setUp(self):
        class Holder:
            values = mirror("values")
            mapping = mirror("mapping")
            tags = mirror("tags")
            name = mirror("name")

            def __init__(self):
                self._values = ["a", ["b"]]
                self._mapping = {"k": ["v"]}
                self._tags = {"x"}
                self._name = "holder"

        self.holder = Holder()

    def testSequencesBecomeTuples(self):
        self.assertEqual(self.holder.values, ("a", ("b",)))

    def testMappingsBecomeReadOnly(self):
        self.assertIsInstance(self.holder.mapping, MappingProxyType)
        self.assertEqual(self.holder.mapping["k"], ("v",))

    def testSetsBecomeFrozen(self):
        self.assertEqual(self.holder.tags, frozenset({"x"}))

    def testScalarsPassThrough(self):
        self.assertEqual(self.holder.name, "holder")

    def testPropertyIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.values = ()

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
