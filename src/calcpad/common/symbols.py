"""Canonical glyphs and key names shared by the engine and the input surface."""
from typing import FrozenSet

# Binary operators use full-width / typographic glyphs so that the
# subtraction glyph never collides with a plain hyphen-minus.
ADD: str = "＋"
SUB: str = "−"
MUL: str = "×"
DIV: str = "÷"
PERCENT: str = "%"
DECIMAL_POINT: str = "."

EVALUATE: str = "="
CLEAR: str = "C"
DELETE: str = "DEL"

DIGITS: str = "0123456789"
BINARY_OPERATORS: FrozenSet[str] = frozenset({ADD, SUB, MUL, DIV})

ERROR_MARKER: str = "Err"


def is_operator(char: str) -> bool:
    """Return True if ``char`` is one of the binary operator glyphs."""
    return char in BINARY_OPERATORS


def is_digit(char: str) -> bool:
    """Return True for a single ASCII digit (``str.isdigit`` also accepts superscripts)."""
    return len(char) == 1 and char in DIGITS
