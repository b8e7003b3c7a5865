"""
Utilities module behavioral tests (name derivation, env naming, bool tags, sentinel).

Scope
- Validate dashify(): mixed-case splitting, acronym boundaries, digits, snake_case, idempotence.
- Validate envify() and parse_bool().
- Validate the Unset sentinel, coalesce() and ordinal().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdbind.utils import Unset, UnsetType, coalesce, dashify, envify, ordinal, parse_bool


class TestDashify(TestCase):
    """Behavioral tests for option name derivation."""

    def testMixedCaseWords(self):
        self.assertEqual(dashify("MaxRetryCount"), "max-retry-count")

    def testAcronymBeforeWord(self):
        self.assertEqual(dashify("HTTPServer"), "http-server")

    def testAcronymAfterWord(self):
        self.assertEqual(dashify("userID"), "user-id")

    def testSingleWordIsLowercased(self):
        self.assertEqual(dashify("Port"), "port")
        self.assertEqual(dashify("port"), "port")

    def testAllCapitals(self):
        self.assertEqual(dashify("URL"), "url")

    def testDigitsCountAsLowercase(self):
        self.assertEqual(dashify("Retry2Count"), "retry2-count")
        self.assertEqual(dashify("ipv6Address"), "ipv6-address")

    def testSnakeCase(self):
        self.assertEqual(dashify("max_retry_count"), "max-retry-count")

    def testNoLeadingOrTrailingSeparators(self):
        self.assertEqual(dashify("_private_"), "private")
        self.assertEqual(dashify("__Dunder__Name"), "dunder-name")

    def testIdempotent(self):
        for identifier in ("MaxRetryCount", "HTTPServer", "userID", "TLSCertFile", "a1B2c3", "max_retry_count"):
            once = dashify(identifier)
            self.assertEqual(dashify(once), once, identifier)

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            dashify(42)


class TestEnvify(TestCase):
    """Behavioral tests for environment variable naming."""

    def testUppercasesAndUnderscores(self):
        self.assertEqual(envify("max-retry-count"), "MAX_RETRY_COUNT")

    def testSingleWord(self):
        self.assertEqual(envify("port"), "PORT")


class TestParseBool(TestCase):
    """Behavioral tests for textual boolean tags."""

    def testTruths(self):
        for text in ("1", "t", "T", "TRUE", "true", "True"):
            self.assertIs(parse_bool(text), True, text)

    def testFalsehoods(self):
        for text in ("0", "f", "F", "FALSE", "false", "False"):
            self.assertIs(parse_bool(text), False, text)

    def testBoolsPassThrough(self):
        self.assertIs(parse_bool(True), True)
        self.assertIs(parse_bool(False), False)

    def testMalformedRejected(self):
        for text in ("yes", "", "tRuE", " true"):
            with self.assertRaises(ValueError):
                parse_bool(text)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            parse_bool(1)


class TestSentinel(TestCase):
    """Behavioral tests for Unset and coalesce()."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})


class TestOrdinal(TestCase):
    """Behavioral tests for position labels."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(113), "113th")


if __name__ == "__main__":
    unittest.main()
