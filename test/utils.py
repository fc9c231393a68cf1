# python
"""
Utils module behavioral tests.

Scope
- Unset sentinel and coalesce().
- mirror() read-only views and container copies.
- IntrospectableType: typename, generated properties and representations
  shared by registry entries and bindings.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argot import Flag, Option
from argot.bindings import Binding, SignedBinding
from argot.utils import *


class Sample(metaclass=IntrospectableType):
    __introspectable__ = ("name", "items", "hidden")
    __displayable__ = ("name", "items")

    def __init__(self, name, items):
        self._name = name
        self._items = items
        self._hidden = "secret"


class TestUnset(TestCase):
    """Sentinel and coalesce."""

    def testUnsetIsFalseySingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCoalesceOnlyReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testUnsetJoinsUnions(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class TestIntrospectableType(TestCase):
    """Metaclass shared by entries and bindings."""

    def testTypenameFromClassName(self):
        self.assertEqual(Sample.__typename__, "sample")
        self.assertEqual(SignedBinding.__typename__, "signed-binding")
        self.assertEqual(Option.__typename__, "option")

    def testPropertiesAreReadOnly(self):
        sample = Sample("cakes", [1, 2])
        with self.assertRaises(AttributeError):
            sample.name = "pies"

    def testContainersAreCopied(self):
        sample = Sample("cakes", [1, 2])
        self.assertEqual(sample.items, (1, 2))
        sample._items.append(3)
        self.assertEqual(sample.items, (1, 2, 3))

    def testDisplayableNarrowsRepr(self):
        self.assertEqual(repr(Sample("cakes", [1])), "sample(name='cakes', items=(1,))")

    def testIntrospectableUsedWithoutDisplayable(self):
        binding = SignedBinding({"cakes": 0}, "cakes", 16)
        self.assertEqual(dict(binding.__rich_repr__()), {"name": "cakes", "optional": False, "bits": 16})

    def testEntriesAndBindingsShareTheMetaclass(self):
        for kind in (Option, Flag, Binding, SignedBinding):
            with self.subTest(kind=kind.__name__):
                self.assertIs(type(kind), IntrospectableType)


if __name__ == "__main__":
    unittest.main()
