"""
Options tests (Opt state machine, environment fallback, Flags mapping).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from cmdbind.options import Flags, Opt, OptState
from cmdbind.utils import Unset


def _opt(name="max-retry-count", required=False):
    target = SimpleNamespace(value="")
    return Opt(name, lambda value: setattr(target, "value", value), required=required), target


class TestOpt(TestCase):
    """Behavioral tests for one resolved option."""

    def testStartsUntouched(self):
        opt, _ = _opt()
        self.assertIs(opt.state, OptState.UNTOUCHED)
        self.assertEqual(opt.value, "")

    def testSetWritesThroughAndMarksFlag(self):
        opt, target = _opt()
        opt.set("3")
        self.assertIs(opt.state, OptState.FLAG_PASSED)
        self.assertEqual(opt.value, "3")
        self.assertEqual(target.value, "3")

    def testRepeatedSetKeepsLastValue(self):
        opt, target = _opt()
        opt.set("3")
        opt.set("5")
        self.assertIs(opt.state, OptState.FLAG_PASSED)
        self.assertEqual(target.value, "5")

    def testFallbackUsesUppercasedName(self):
        opt, target = _opt()
        self.assertTrue(opt.fallback({"MAX_RETRY_COUNT": "7"}))
        self.assertIs(opt.state, OptState.ENV_PASSED)
        self.assertEqual(target.value, "7")

    def testFallbackIgnoresOtherSpellings(self):
        opt, _ = _opt()
        self.assertFalse(opt.fallback({"max-retry-count": "7", "MAX-RETRY-COUNT": "7"}))
        self.assertIs(opt.state, OptState.UNTOUCHED)

    def testFallbackNeverOverridesFlag(self):
        opt, target = _opt()
        opt.set("3")
        self.assertFalse(opt.fallback({"MAX_RETRY_COUNT": "7"}))
        self.assertIs(opt.state, OptState.FLAG_PASSED)
        self.assertEqual(target.value, "3")

    def testEmptyEnvironmentValueCounts(self):
        opt, _ = _opt(required=True)
        self.assertTrue(opt.fallback({"MAX_RETRY_COUNT": ""}))
        self.assertFalse(opt.missing)

    def testSetAfterFallbackIsRejected(self):
        opt, _ = _opt()
        opt.fallback({"MAX_RETRY_COUNT": "7"})
        with self.assertRaises(RuntimeError):
            opt.set("3")

    def testMissing(self):
        optional, _ = _opt()
        required, _ = _opt(required=True)
        self.assertFalse(optional.missing)
        self.assertTrue(required.missing)
        required.set("")
        self.assertFalse(required.missing)

    def testInvalidConstruction(self):
        with self.assertRaises(TypeError):
            Opt("", print)
        with self.assertRaises(TypeError):
            Opt("port", "not callable")


class TestFlags(TestCase):
    """Behavioral tests for the name-keyed option mapping."""

    def testLookupAndOrder(self):
        port, _ = _opt("port")
        host, _ = _opt("host")
        flags = Flags([port, host])
        self.assertIs(flags["port"], port)
        self.assertEqual(list(flags), ["port", "host"])
        self.assertEqual(len(flags), 2)
        self.assertIn("host", flags)
        self.assertNotIn("verbose", flags)

    def testRegisterReportsClash(self):
        first, _ = _opt("port")
        second, _ = _opt("port")
        flags = Flags()
        self.assertIs(flags.register(first), Unset)
        self.assertIs(flags.register(second), first)
        self.assertIs(flags["port"], first)

    def testConstructorRejectsDuplicates(self):
        with self.assertRaises(ValueError):
            Flags([_opt("port")[0], _opt("port")[0]])

    def testRegisterRejectsNonOpts(self):
        with self.assertRaises(TypeError):
            Flags().register("port")

    def testSelect(self):
        port, _ = _opt("port")
        host, _ = _opt("host")
        user, _ = _opt("user")
        flags = Flags([port, host, user])
        port.set("80")
        user.fallback({"USER": "root"})
        self.assertEqual(flags.select(OptState.FLAG_PASSED), [port])
        self.assertEqual(flags.select(OptState.ENV_PASSED), [user])
        self.assertEqual(flags.select(OptState.UNTOUCHED), [host])


if __name__ == "__main__":
    unittest.main()
