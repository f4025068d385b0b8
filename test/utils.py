"""
Utils module behavioral tests (sentinel, read-only views, schema metaclass).

Scope
- Validate the Unset sentinel: singleton, falsey, isinstance unions, pickling.
- Validate coalesce() and rename().
- Validate that mirror() hands out copies of container fields.
- Validate SchemaType (typename, mirrored fields, repr) and sanitize_name().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import pickle
import unittest
from unittest import TestCase

from switchboard.utils import SchemaType, Unset, UnsetType, coalesce, mirror, rename, sanitize_name


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testIsinstanceUnion(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("name", str | Unset))
        self.assertFalse(isinstance(None, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testDirectAndDecorator(self):
        def original():
            pass

        self.assertIs(rename(original, "renamed"), original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__name__, "decorated")

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(5)
        with self.assertRaises(TypeError):
            rename("name")(5)


class Sample(metaclass=SchemaType):
    __introspectable__ = ("name", "tags", "options")
    __displayable__ = ("name", "tags")

    def __init__(self, name, tags, options):
        self._name = name
        self._tags = tags
        self._options = options


class TestSchemaType(TestCase):
    """Behavioral tests for SchemaType and mirror()."""

    def setUp(self):
        self.sample = Sample("alpha", ["x", "y"], {"depth": [1]})

    def testTypename(self):
        self.assertEqual(Sample.__typename__, "sample")

    def testMirroredFieldsAreReadOnlyCopies(self):
        self.assertEqual(self.sample.tags, ("x", "y"))
        self.assertEqual(self.sample.options, {"depth": (1,)})
        self.sample.options["depth"] = ()
        self.assertEqual(self.sample.options, {"depth": (1,)})
        with self.assertRaises(AttributeError):
            self.sample.name = "beta"

    def testStringsAreNotSplit(self):
        self.assertEqual(self.sample.name, "alpha")

    def testRepr(self):
        self.assertEqual(repr(self.sample), "sample(name='alpha', tags=('x', 'y'))")
        self.assertEqual(dict(self.sample.__rich_repr__()), {"name": "alpha", "tags": ("x", "y")})

    def testMirrorRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            mirror(5)


class TestSanitizeName(TestCase):
    """Behavioral tests for sanitize_name()."""

    def testStripsWhitespace(self):
        self.assertEqual(sanitize_name(Sample, "  greet "), "greet")

    def testRejections(self):
        with self.assertRaises(TypeError):
            sanitize_name(Sample, 5)
        for name in ("", "   ", "-greet", "two words"):
            with self.assertRaises(ValueError):
                sanitize_name(Sample, name)


if __name__ == "__main__":
    unittest.main()
