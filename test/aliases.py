"""
Alias resolution tests (static table, project aliases, profile pool, help redirect).

Scope
- Validate the precedence of the three alias sources.
- Validate that profile aliases are consumed at most once per key.
- Validate the '<task> --help' redirection and multi-token expansions.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest import TestCase

from lein_dispatch import ALIASES, ProfileAliases, ProjectConfig, lookup_alias, task_args
from lein_dispatch.utils import Unset


class TestLookupAlias(TestCase):
    """Precedence and fall-through of lookup_alias()."""

    def testStaticAliasResolves(self):
        self.assertEqual(lookup_alias("cp", None), "classpath")
        self.assertEqual(lookup_alias("überjar", None), "uberjar")

    def testStaticAliasWinsOverProjectAlias(self):
        project = ProjectConfig({"cp": "compile"})
        self.assertEqual(lookup_alias("cp", project), "classpath")

    def testProjectAliasResolves(self):
        project = ProjectConfig({"t": ["test", ":integration"]})
        self.assertEqual(lookup_alias("t", project), ("test", ":integration"))

    def testUnknownTokenIsCanonical(self):
        self.assertEqual(lookup_alias("compile", ProjectConfig()), "compile")
        self.assertEqual(lookup_alias("compile", None), "compile")

    def testMissingTokenFallsBackToHelp(self):
        self.assertEqual(lookup_alias(None, None), "help")
        self.assertEqual(lookup_alias(None, None, not_found="version"), "version")

    def testProfileAliasIsConsumedOnce(self):
        profile = ProfileAliases({"go": "run"})
        self.assertEqual(lookup_alias("go", None, profile), "run")
        self.assertEqual(lookup_alias("go", None, profile), "go")
        self.assertNotIn("go", profile)

    def testProfileAliasIgnoredWithProject(self):
        profile = ProfileAliases({"go": "run"})
        self.assertEqual(lookup_alias("go", ProjectConfig(), profile), "go")
        self.assertIn("go", profile)

    def testStaticAliasDoesNotDrainProfile(self):
        profile = ProfileAliases({"cp": "compile"})
        self.assertEqual(lookup_alias("cp", None, profile), "classpath")
        self.assertEqual(len(profile), 1)


class TestTaskArgs(TestCase):
    """Splitting raw tokens into (task, args)."""

    def testTaskAndRemainingArgs(self):
        self.assertEqual(task_args(["test", "a", "b"], None), ("test", ["a", "b"]))

    def testHelpFlagAfterTaskRedirectsToHelp(self):
        for flag in ("--help", "-h", "-?", "-help"):
            with self.subTest(flag=flag):
                self.assertEqual(task_args(["jar", flag, "extra"], None), ("help", ["jar"]))

    def testHelpRedirectBypassesAliases(self):
        profile = ProfileAliases({"go": "run"})
        self.assertEqual(task_args(["go", "--help"], None, profile), ("help", ["go"]))
        self.assertIn("go", profile)

    def testMultiTokenAliasKeepsBoundArgs(self):
        task, args = task_args(["-o", "test"], None)
        self.assertEqual(task, ("with-profile", "offline,dev,user,default"))
        self.assertEqual(args, ["test"])

    def testEmptyInputResolvesToHelp(self):
        self.assertEqual(task_args([], None), ("help", []))

    def testStaticTableIsReadOnly(self):
        with self.assertRaises(TypeError):
            ALIASES["cp"] = "compile"  # type: ignore[index]


class TestProfileAliases(TestCase):
    """The consumable profile pool."""

    def testTakeReturnsDefaultWhenMissing(self):
        profile = ProfileAliases()
        self.assertIs(profile.take("go"), Unset)
        self.assertIsNone(profile.take("go", None))

    def testSequencesAreNormalized(self):
        profile = ProfileAliases({"dev": ["with-profile", "dev"]})
        self.assertEqual(profile.take("dev"), ("with-profile", "dev"))

    def testConcurrentTakesYieldValueOnce(self):
        profile = ProfileAliases({"go": "run"})
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: profile.take("go"), range(64)))
        self.assertEqual([result for result in results if result is not Unset], ["run"])


if __name__ == "__main__":
    unittest.main()
