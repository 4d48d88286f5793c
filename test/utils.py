"""
Helper tests (Unset, freeze, module globbing).

Conventions
- Test method names follow CamelCase per project convention.
- Globbing uses the 'leiningen' fixture package next to this module.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from lein_dispatch.utils import Unset, UnsetType, coalesce, freeze, mglob, rename


class TestUnset(TestCase):

    def testSingletonSurvivesCopyAndPickle(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)
        self.assertFalse(Unset)

    def testCoalesceKeepsFalsyValues(self):
        self.assertEqual(coalesce(Unset, "help"), "help")
        self.assertIsNone(coalesce(None, "help"))
        self.assertEqual(coalesce("", "help"), "")


class TestHelpers(TestCase):

    def testFreeze(self):
        self.assertEqual(freeze(["a", "b"]), ("a", "b"))
        self.assertEqual(freeze({"a"}), frozenset({"a"}))
        self.assertEqual(freeze("ab"), "ab")
        with self.assertRaises(TypeError):
            freeze({"a": 1})["a"] = 2

    def testRename(self):
        @rename("with-profile")
        def wrapper():
            pass

        self.assertEqual(wrapper.__name__, "with-profile")
        self.assertEqual(wrapper.__qualname__, "with-profile")


class TestModuleGlob(TestCase):

    def testDirectChildren(self):
        self.assertEqual(
            mglob("leiningen.*"),
            ["leiningen.core", "leiningen.hello", "leiningen.javac", "leiningen.utils"],
        )

    def testSegmentWildcards(self):
        self.assertEqual(mglob("leiningen.?ello"), ["leiningen.hello"])
        self.assertEqual(mglob("leiningen.[hj]*"), ["leiningen.hello", "leiningen.javac"])
        self.assertEqual(mglob("leiningen.[!hj]*"), ["leiningen.core", "leiningen.utils"])

    def testConcreteNameIsReturnedAsIs(self):
        self.assertEqual(mglob("leiningen.hello"), ["leiningen.hello"])

    def testUnknownPackageYieldsNothing(self):
        self.assertEqual(mglob("no_such_package_here.*"), [])

    def testInvalidPatterns(self):
        with self.assertRaises(ValueError):
            mglob("  ")
        with self.assertRaises(ValueError):
            mglob("*.tasks")
        with self.assertRaises(TypeError):
            mglob(None)


if __name__ == "__main__":
    unittest.main()
