# python
"""
Tokenizer module behavioral tests (comma splitting, quoting, escaping).

Scope
- Validate plain splitting, trimming and empty values.
- Validate single/double quoting and backslash escapes around commas.
- Validate the rejection of unterminated quotes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argonorm.faults import FaultCode, ValidationError
from argonorm.tokenizer import split


class TestSplit(TestCase):
    """Behavioral tests for split()."""

    def testPlainValues(self):
        self.assertEqual(split("a,b,c"), ["a", "b", "c"])

    def testSingleValue(self):
        self.assertEqual(split("a"), ["a"])

    def testEmptyInput(self):
        self.assertEqual(split(""), [])
        self.assertEqual(split(None), [])

    def testValuesTrimmed(self):
        self.assertEqual(split(" a , b "), ["a", "b"])

    def testEmptyValuesKept(self):
        self.assertEqual(split("a,,b"), ["a", "", "b"])

    def testDoubleQuotedComma(self):
        self.assertEqual(split('a,"b,c",d'), ["a", "b,c", "d"])

    def testSingleQuotedComma(self):
        self.assertEqual(split("a,'b,c'"), ["a", "b,c"])

    def testOtherQuoteLiteralInsideQuotes(self):
        self.assertEqual(split("'say \"hi\"',x"), ['say "hi"', "x"])

    def testEscapedComma(self):
        self.assertEqual(split(r"a\,b,c"), ["a,b", "c"])

    def testEscapedQuote(self):
        self.assertEqual(split(r"it\'s,x"), ["it's", "x"])

    def testEscapedBackslash(self):
        self.assertEqual(split(r"a\\,b"), ["a\\", "b"])

    def testTrailingBackslashKept(self):
        self.assertEqual(split("a\\"), ["a\\"])

    def testUnterminatedQuoteRejected(self):
        with self.assertRaises(ValidationError) as context:
            split('a,"b')
        self.assertEqual(str(context.exception), "Illegal quoting in b")
        self.assertIs(context.exception.options["code"], FaultCode.ILLEGAL_QUOTING)


if __name__ == "__main__":
    unittest.main()
