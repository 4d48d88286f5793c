"""
Settings tests (defaults, environment, immutability).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import os
import unittest
from unittest import TestCase, mock

from lein_dispatch import Settings


class TestSettings(TestCase):

    def testDefaults(self):
        settings = Settings()
        self.assertIsNone(settings.version)
        self.assertFalse(settings.debug)
        self.assertEqual(settings.prog, "lein")
        self.assertEqual(settings.prefix, "leiningen")
        self.assertEqual(settings.excluded, ("core", "main", "util"))

    def testFromEnvironment(self):
        environ = {"LEIN_VERSION": "2.9.1", "DEBUG": "true", "LEIN_PROG": "build", "LEIN_COLORFUL": "0"}
        with mock.patch.dict(os.environ, environ, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.version, "2.9.1")
        self.assertTrue(settings.debug)
        self.assertEqual(settings.prog, "build")
        self.assertFalse(settings.colorful)

    def testOverridesWinOverEnvironment(self):
        with mock.patch.dict(os.environ, {"DEBUG": "1"}, clear=True):
            settings = Settings.from_env(debug=False, version="3.0.0")
        self.assertFalse(settings.debug)
        self.assertEqual(settings.version, "3.0.0")

    def testReadOnlyAndReplace(self):
        settings = Settings()
        with self.assertRaises(AttributeError):
            settings.debug = True  # type: ignore[misc]
        replaced = settings.replace(debug=True)
        self.assertTrue(replaced.debug)
        self.assertFalse(settings.debug)


if __name__ == "__main__":
    unittest.main()
