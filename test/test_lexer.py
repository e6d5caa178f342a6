# python
"""
Lexer behavioral tests (classification, clusters, end of options, indices).

Scope
- Validate one-token-per-element classification for every token kind.
- Validate lazy short clusters: value claiming vs further short options.
- Validate that option processing stops at the first positional-shaped element.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot.lexer import Lexer, Token, TokenKind, is_option_marker, tokenize


class TestTokenize(TestCase):
    """Schema-less classification of whole inputs."""

    def testShortClusterSplitsPerCharacter(self):
        self.assertEqual(tokenize(["-abc"]), [
            Token(TokenKind.SHORT, "-a", None, 0),
            Token(TokenKind.SHORT, "-b", None, 0),
            Token(TokenKind.SHORT, "-c", None, 0),
        ])

    def testEqualsAfterShortAttachesRestToThatShort(self):
        self.assertEqual(tokenize(["-ab=V"]), [
            Token(TokenKind.SHORT, "-a", None, 0),
            Token(TokenKind.SHORT_ATTACHED, "-b", "V", 0),
        ])

    def testShortAttachedKeepsLaterEquals(self):
        self.assertEqual(tokenize(["-f=a=b"]), [Token(TokenKind.SHORT_ATTACHED, "-f", "a=b", 0)])

    def testLongOption(self):
        self.assertEqual(tokenize(["--log"]), [Token(TokenKind.LONG, "--log", None, 0)])

    def testLongAttachedSplitsOnFirstEquals(self):
        self.assertEqual(tokenize(["--define=a=b"]), [Token(TokenKind.LONG_ATTACHED, "--define", "a=b", 0)])

    def testLongAttachedEmptyValue(self):
        self.assertEqual(tokenize(["--name="]), [Token(TokenKind.LONG_ATTACHED, "--name", "", 0)])

    def testDoubleDashEndsOptions(self):
        self.assertEqual(tokenize(["--", "-x", "--y"]), [
            Token(TokenKind.END_OF_OPTIONS, None, "--", 0),
            Token(TokenKind.POSITIONAL, None, "-x", 1),
            Token(TokenKind.POSITIONAL, None, "--y", 2),
        ])

    def testLoneDashIsDash(self):
        self.assertEqual(tokenize(["-"]), [Token(TokenKind.DASH, None, "-", 0)])

    def testFirstPositionalStopsOptionProcessing(self):
        self.assertEqual(tokenize(["-v", "file", "-x", "--"]), [
            Token(TokenKind.SHORT, "-v", None, 0),
            Token(TokenKind.POSITIONAL, None, "file", 1),
            Token(TokenKind.POSITIONAL, None, "-x", 2),
            Token(TokenKind.POSITIONAL, None, "--", 3),
        ])

    def testSecondDoubleDashIsPositional(self):
        kinds = [token.kind for token in tokenize(["--", "--"])]
        self.assertEqual(kinds, [TokenKind.END_OF_OPTIONS, TokenKind.POSITIONAL])

    def testOffsetShiftsIndices(self):
        self.assertEqual(tokenize(["-x", "y"], offset=3), [
            Token(TokenKind.SHORT, "-x", None, 3),
            Token(TokenKind.POSITIONAL, None, "y", 4),
        ])

    def testUnicodeShortCluster(self):
        names = [token.name for token in tokenize(["-äö"])]
        self.assertEqual(names, ["-ä", "-ö"])

    def testEmptyInput(self):
        self.assertEqual(tokenize([]), [])

    def testTokenText(self):
        self.assertEqual(Token(TokenKind.LONG_ATTACHED, "--log", "3", 0).text, "--log")
        self.assertEqual(Token(TokenKind.POSITIONAL, None, "file", 0).text, "file")

    def testOptionKinds(self):
        self.assertTrue(TokenKind.SHORT.option)
        self.assertTrue(TokenKind.LONG_ATTACHED.option)
        self.assertFalse(TokenKind.DASH.option)
        self.assertFalse(TokenKind.END_OF_OPTIONS.option)


class TestLexer(TestCase):
    """Value claiming and laziness of the stateful lexer."""

    def testValueFromRestOfCluster(self):
        lexer = Lexer(["-f100"])
        self.assertEqual(lexer.next(), Token(TokenKind.SHORT, "-f", None, 0))
        self.assertEqual(lexer.value(), ("100", 0))
        self.assertIsNone(lexer.next())

    def testValueFromNextElement(self):
        lexer = Lexer(["-f", "100", "rest"])
        lexer.next()
        self.assertEqual(lexer.value(), ("100", 1))
        self.assertEqual(lexer.next(), Token(TokenKind.POSITIONAL, None, "rest", 2))

    def testValueRefusesOptionShapedElement(self):
        lexer = Lexer(["-f", "-x"])
        lexer.next()
        self.assertIsNone(lexer.value())
        self.assertEqual(lexer.next(), Token(TokenKind.SHORT, "-x", None, 1))

    def testValueRefusesDoubleDash(self):
        lexer = Lexer(["--log", "--"])
        lexer.next()
        self.assertIsNone(lexer.value())

    def testValueAcceptsLoneDash(self):
        lexer = Lexer(["-o", "-"])
        lexer.next()
        self.assertEqual(lexer.value(), ("-", 1))

    def testValueAtEndOfInput(self):
        lexer = Lexer(["--log"])
        lexer.next()
        self.assertIsNone(lexer.value())

    def testTerminatedAfterPositional(self):
        lexer = Lexer(["-a", "b"])
        lexer.next()
        self.assertFalse(lexer.terminated)
        lexer.next()
        self.assertTrue(lexer.terminated)

    def testIterationYieldsEveryToken(self):
        self.assertEqual(len(list(Lexer(["-ab", "c", "d"]))), 4)

    def testNonStringArgumentRejected(self):
        with self.assertRaises(TypeError):
            Lexer(["-a", 3])

    def testNegativeOffsetRejected(self):
        with self.assertRaises(ValueError):
            Lexer([], offset=-1)


class TestOptionMarker(TestCase):

    def testMarkers(self):
        self.assertTrue(is_option_marker("-x"))
        self.assertTrue(is_option_marker("--"))
        self.assertTrue(is_option_marker("--log"))
        self.assertFalse(is_option_marker("-"))
        self.assertFalse(is_option_marker("value"))
        self.assertFalse(is_option_marker(""))


if __name__ == "__main__":
    unittest.main()
