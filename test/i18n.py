# python
"""
Localization module behavioral tests.

Scope
- Validate identity translation when no catalog is installed.
- Validate %-formatting in localize() and literal templates without arguments.
- Validate host configuration of the gettext domain through __main__.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import gettext
import sys
import unittest
from unittest import TestCase, mock

from argonorm.i18n import DOMAIN, translation, localize, _


class TestLocalize(TestCase):
    """Behavioral tests for _() and localize()."""

    def testIdentityWithoutCatalog(self):
        self.assertEqual(_("Numeric value is required."), "Numeric value is required.")

    def testFormatting(self):
        self.assertEqual(localize("Value must be %s.", "'a'"), "Value must be 'a'.")

    def testMultipleArguments(self):
        self.assertEqual(localize("%s and %s", "a", "b"), "a and b")

    def testNoArgumentsKeepsPercent(self):
        self.assertEqual(localize("100% sure"), "100% sure")

    def testDefaultDomain(self):
        self.assertEqual(DOMAIN, "argonorm")

    def testHostDomainFallsBackToIdentity(self):
        with mock.patch.object(sys.modules["__main__"], "__domain__", "missing-domain", create=True):
            self.assertIsInstance(translation(), gettext.NullTranslations)
            self.assertEqual(_("Unable to parse JSON input."), "Unable to parse JSON input.")

    def testTranslationIsCached(self):
        self.assertIs(translation(), translation())


if __name__ == "__main__":
    unittest.main()
