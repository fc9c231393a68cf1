r"""
Argot value coercion: text to booleans, integers, floats and characters.

Overview
- classify(text) sorts numeric text into one of three notations:
  • Notation.HEX           "0x1F", "0XFF"   (case-insensitive prefix)
  • Notation.NEGATIVE_HEX  "-0xA0"
  • Notation.GENERAL       everything else ("10", "-3", "1.5e3", ...)
  A prefix only counts when at least one character follows it, so "0x" and
  "-0x" are GENERAL (and then fail as decimals).

- signed(text, bits) / unsigned(text, bits)
  • Integers in decimal, hex or (signed only) negative hex.
  • Out-of-range values saturate to the bounds of the requested width instead
    of failing: "300" as 8-bit signed is 127, "-0x8001" as 16-bit is -32768.

- floating(text, bits)
  • General notation (digits, fraction, exponent, inf, nan) or hexadecimal
    notation ("0xFF", "0x1.8p3", "-0xA0").
  • Overflow saturates to the largest finite value of the precision, keeping
    the sign of the literal. bits=32 rounds the result to single precision.

- boolean(text) / character(text)
  • boolean accepts the synonyms in TRUE_STRINGS / FALSE_STRINGS (any case).
  • character accepts exactly one character.

Contract
- Every function returns the converted value or raises ValueError for text it
  cannot read. Nothing here touches a destination; bindings do that only after
  a successful conversion, so a failure never leaves partial state behind.
- The grammar is strict: no surrounding whitespace, no leading '+', no digit
  separators. The whole text must be consumed.

Examples
    >>> signed("-0xA0", 32)
    -160
    >>> unsigned("0x0F", 32)
    15
    >>> signed("10000000000000", 32)
    2147483647
"""
import math
import re
import struct
import sys
from enum import Enum

TRUE_STRINGS = ("true", "t", "yes", "y", "1")
FALSE_STRINGS = ("false", "f", "no", "n", "0")

_DECIMAL = re.compile(r"-?[0-9]+")
_HEXADECIMAL = re.compile(r"[0-9a-fA-F]+")
_GENERAL_FLOAT = re.compile(r"-?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)
_HEXADECIMAL_FLOAT = re.compile(r"(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?", re.IGNORECASE)

# Decimal digits of 2**64; anything longer is out of range for every width.
_DIGITS = 20

# Largest finite magnitude per floating-point width.
_LARGEST = {
    32: struct.unpack("<f", b"\xff\xff\x7f\x7f")[0],
    64: sys.float_info.max,
}


class Notation(Enum):
    """
    textual notation of a numeric literal (see classify()).
    """
    GENERAL = "general"
    HEX = "hex"
    NEGATIVE_HEX = "negative-hex"


def classify(text, /):
    """
    Return the Notation of a numeric literal by looking at its prefix only.
    """
    if not isinstance(text, str):
        raise TypeError("classify() argument must be a string")
    if len(text) > 2 and text[:2].lower() == "0x":
        return Notation.HEX
    if len(text) > 3 and text[:3].lower() == "-0x":
        return Notation.NEGATIVE_HEX
    return Notation.GENERAL


def _decimal(text):
    if not _DECIMAL.fullmatch(text):
        raise ValueError("invalid decimal integer %r" % text)
    negative = text.startswith("-")
    digits = text.lstrip("-").lstrip("0") or "0"
    if len(digits) > _DIGITS:
        # int() refuses very long strings; these saturate anyway.
        return -(1 << 64) if negative else 1 << 64
    return -int(digits) if negative else int(digits)


def _hexadecimal(digits):
    if not _HEXADECIMAL.fullmatch(digits):
        raise ValueError("invalid hexadecimal integer %r" % digits)
    return int(digits, 16)


def _saturate(value, lower, upper):
    return max(lower, min(value, upper))


def signed(text, /, bits=64):
    """
    Convert text to a signed integer of the given width, saturating on overflow.

    Accepted forms are "-?[0-9]+", "0x<hex>" and "-0x<hex>". The result is
    clamped into [-2**(bits-1), 2**(bits-1) - 1].
    """
    match classify(text):
        case Notation.HEX:
            value = _hexadecimal(text[2:])
        case Notation.NEGATIVE_HEX:
            value = -_hexadecimal(text[3:])
        case _:
            value = _decimal(text)
    return _saturate(value, -(1 << bits - 1), (1 << bits - 1) - 1)


def unsigned(text, /, bits=64):
    """
    Convert text to an unsigned integer of the given width, saturating on overflow.

    Accepted forms are "[0-9]+" and "0x<hex>". Any negative literal, including
    negative hex, is rejected rather than wrapped.
    """
    match classify(text):
        case Notation.HEX:
            value = _hexadecimal(text[2:])
        case Notation.NEGATIVE_HEX:
            raise ValueError("negative hexadecimal %r cannot be unsigned" % text)
        case _:
            if text.startswith("-"):
                raise ValueError("negative integer %r cannot be unsigned" % text)
            value = _decimal(text)
    return min(value, (1 << bits) - 1)


def _hexfloat(digits):
    if not _HEXADECIMAL_FLOAT.fullmatch(digits):
        raise ValueError("invalid hexadecimal float %r" % digits)
    try:
        return float.fromhex("0x" + digits)
    except OverflowError:
        return math.inf


def floating(text, /, bits=64):
    """
    Convert text to a float of the given precision (32 or 64 bits).

    Overflowing literals become the largest finite value of the precision with
    the literal's sign; explicit "inf"/"infinity" literals stay infinite.
    """
    try:
        largest = _LARGEST[bits]
    except KeyError:
        raise ValueError("unsupported floating-point width %r" % bits) from None

    match classify(text):
        case Notation.HEX:
            value = _hexfloat(text[2:])
        case Notation.NEGATIVE_HEX:
            value = -_hexfloat(text[3:])
        case _:
            if not _GENERAL_FLOAT.fullmatch(text):
                raise ValueError("invalid float %r" % text)
            value = float(text)

    if math.isinf(value) and "inf" in text.lower():
        return value
    if abs(value) > largest:
        value = math.copysign(largest, value)
    if bits == 32:
        value = struct.unpack("<f", struct.pack("<f", value))[0]
    return value


def boolean(text, /):
    """
    Convert one of the boolean synonyms (case-insensitive) to True or False.
    """
    if not isinstance(text, str):
        raise TypeError("boolean() argument must be a string")
    if (lower := text.lower()) in TRUE_STRINGS:
        return True
    if lower in FALSE_STRINGS:
        return False
    raise ValueError("invalid boolean %r" % text)


def character(text, /):
    if not isinstance(text, str):
        raise TypeError("character() argument must be a string")
    if len(text) != 1:
        raise ValueError("expected exactly one character, got %r" % text)
    return text


__all__ = (
    "TRUE_STRINGS",
    "FALSE_STRINGS",
    "Notation",
    "classify",
    "signed",
    "unsigned",
    "floating",
    "boolean",
    "character",
)
