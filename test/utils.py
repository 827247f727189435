"""
Utilities tests (Unset sentinel, flag normalization, formatting helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from argclay.utils import Unset, UnsetType, coalesce, columns, normalize, pad, quote, tokenize, usage, wants_help


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestNormalize(TestCase):

    def testBareNames(self):
        self.assertEqual(normalize(["age", "a"]), ("--age", "-a"))

    def testDashedNamesKeptVerbatim(self):
        self.assertEqual(normalize(["-x", "--s", "-long-single-dash", "---three-dash"]),
                         ("-x", "--s", "-long-single-dash", "---three-dash"))

    def testEmptyDropped(self):
        self.assertEqual(normalize(["", "v", ""]), ("-v",))
        self.assertEqual(normalize([]), ())

    def testOrderAndDuplicatesPreserved(self):
        self.assertEqual(normalize(["b", "a", "b"]), ("-b", "-a", "-b"))

    def testStringRejected(self):
        with self.assertRaises(TypeError):
            normalize("age")

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            normalize(["age", 1])


class TestFormatting(TestCase):

    def testQuote(self):
        self.assertEqual(quote("plain"), "'plain'")
        self.assertEqual(quote("it's"), "'it\\'s'")

    def testPad(self):
        self.assertEqual(pad("ab", 5), "ab   ")
        self.assertEqual(pad("abcdef", 3), "abcdef")

    def testUsage(self):
        self.assertEqual(usage([], "<a>", "[OPTIONS]"), "USAGE:\n\t<a> [OPTIONS]")
        self.assertEqual(usage(["tool", "sub"], "<command>"), "USAGE:\n\ttool sub <command>")

    def testColumns(self):
        rows = [("-a, --age <NUMBER>", "Age."), ("--verbose", Unset), ("-x", "Extra.")]
        self.assertEqual(
            columns([(label, coalesce(description)) for label, description in rows]),
            "\t-a, --age <NUMBER>  Age.\n\t--verbose\n\t-x                  Extra.",
        )


class TestTokens(TestCase):

    def testWantsHelp(self):
        self.assertTrue(wants_help(["x", " -H "]))
        self.assertTrue(wants_help(["--Help"]))
        self.assertFalse(wants_help(["--help", "x"], 1))
        self.assertFalse(wants_help(["-help", "---help"]))

    def testTokenize(self):
        self.assertEqual(tokenize("a 'b c' --d"), ["a", "b c", "--d"])
        self.assertEqual(tokenize(("a", "b")), ["a", "b"])


if __name__ == "__main__":
    unittest.main()
