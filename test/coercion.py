# python
"""
Coercion module behavioral tests.

Scope
- Notation classification of numeric literals (hex, negative hex, general).
- Saturation of signed/unsigned integers and floats at the requested width.
- Boolean synonyms and single characters.
- Strict grammar: bad text raises ValueError, nothing is guessed.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import unittest
from unittest import TestCase

from argot.coercion import *


class TestClassify(TestCase):
    """Prefix-based notation detection."""

    def testHexPrefix(self):
        self.assertIs(classify("0x1F"), Notation.HEX)
        self.assertIs(classify("0XFF"), Notation.HEX)

    def testNegativeHexPrefix(self):
        self.assertIs(classify("-0xA0"), Notation.NEGATIVE_HEX)

    def testBarePrefixIsGeneral(self):
        self.assertIs(classify("0x"), Notation.GENERAL)
        self.assertIs(classify("-0x"), Notation.GENERAL)

    def testPlainNumbersAreGeneral(self):
        for text in ("10", "-3", "1.5e3", ""):
            with self.subTest(text=text):
                self.assertIs(classify(text), Notation.GENERAL)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            classify(10)


class TestSigned(TestCase):
    """Signed integers with saturation."""

    def testDecimal(self):
        self.assertEqual(signed("-10", 32), -10)
        self.assertEqual(signed("42"), 42)

    def testHex(self):
        self.assertEqual(signed("0x0F", 32), 15)
        self.assertEqual(signed("-0xA0", 32), -160)

    def testSaturatesAtWidth(self):
        self.assertEqual(signed("10000000000000", 32), 2**31 - 1)
        self.assertEqual(signed("-10000000000000", 32), -2**31)
        self.assertEqual(signed("300", 8), 127)
        self.assertEqual(signed("-300", 8), -128)
        self.assertEqual(signed("0x8000", 16), 32767)
        self.assertEqual(signed("-0x8001", 16), -32768)

    def testSaturatesBeyondSixtyFourBits(self):
        self.assertEqual(signed("9" * 400), 2**63 - 1)
        self.assertEqual(signed("-" + "9" * 400), -2**63)
        self.assertEqual(signed("-0x" + "F" * 40), -2**63)

    def testLeadingZerosAreIgnored(self):
        self.assertEqual(signed("0" * 30 + "7", 8), 7)

    def testStrictGrammar(self):
        for text in ("", "abc", "1.5", "+1", " 1", "1 ", "0x", "0xZZ", "--1"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    signed(text)


class TestUnsigned(TestCase):
    """Unsigned integers with saturation."""

    def testDecimalAndHex(self):
        self.assertEqual(unsigned("15", 8), 15)
        self.assertEqual(unsigned("0x0F", 32), 15)

    def testSaturatesAtWidth(self):
        self.assertEqual(unsigned("256", 8), 255)
        self.assertEqual(unsigned("0x1FFFFFFFF", 32), 2**32 - 1)
        self.assertEqual(unsigned("9" * 400), 2**64 - 1)

    def testNegativeRejected(self):
        for text in ("-1", "-0", "-0xA0"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    unsigned(text)


class TestFloating(TestCase):
    """Floats in general and hexadecimal notation."""

    def testGeneralNotation(self):
        self.assertEqual(floating("1.5"), 1.5)
        self.assertEqual(floating(".5"), 0.5)
        self.assertEqual(floating("-2e3"), -2000.0)
        self.assertEqual(floating("7"), 7.0)

    def testHexNotation(self):
        self.assertEqual(floating("0xFF", 32), 255.0)
        self.assertEqual(floating("0x1.8p3"), 12.0)
        self.assertEqual(floating("-0xA0"), -160.0)

    def testOverflowSaturates(self):
        self.assertEqual(floating("1e400"), 1.7976931348623157e308)
        self.assertEqual(floating("-1e400"), -1.7976931348623157e308)
        self.assertEqual(floating("1e39", 32), 3.4028234663852886e38)

    def testInfinityLiteralStaysInfinite(self):
        self.assertEqual(floating("inf"), math.inf)
        self.assertEqual(floating("-Infinity", 32), -math.inf)

    def testNan(self):
        self.assertTrue(math.isnan(floating("nan")))

    def testSinglePrecisionRounding(self):
        self.assertNotEqual(floating("0.1", 32), 0.1)
        self.assertAlmostEqual(floating("0.1", 32), 0.1, places=6)

    def testBadText(self):
        for text in ("", "one", "1.2.3", "1e", "+1", "0xG"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    floating(text)

    def testUnsupportedWidth(self):
        with self.assertRaises(ValueError):
            floating("1", 16)


class TestBoolean(TestCase):
    """Boolean synonyms."""

    def testTrueSynonyms(self):
        for text in ("true", "T", "Yes", "y", "1"):
            with self.subTest(text=text):
                self.assertIs(boolean(text), True)

    def testFalseSynonyms(self):
        for text in ("FALSE", "f", "no", "N", "0"):
            with self.subTest(text=text):
                self.assertIs(boolean(text), False)

    def testOtherTextRejected(self):
        for text in ("", "on", "off", "2", "truth"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    boolean(text)


class TestCharacter(TestCase):
    """Single characters."""

    def testSingleCharacter(self):
        self.assertEqual(character("a"), "a")

    def testLengthMustBeOne(self):
        for text in ("", "ab"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    character(text)


if __name__ == "__main__":
    unittest.main()
