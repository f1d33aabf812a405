"""Map physical keyboard keys onto the calculator's logical key alphabet."""
from typing import Dict, Optional

from calcpad.common.symbols import (
    ADD,
    BINARY_OPERATORS,
    CLEAR,
    DECIMAL_POINT,
    DELETE,
    DIGITS,
    DIV,
    EVALUATE,
    MUL,
    PERCENT,
    SUB,
)

# ASCII operator characters and their calculator glyphs
ASCII_OPERATORS: Dict[str, str] = {
    "+": ADD,
    "-": SUB,
    "*": MUL,
    "/": DIV,
}

KEYMAP: Dict[str, str] = {
    **{digit: digit for digit in DIGITS},
    **{glyph: glyph for glyph in BINARY_OPERATORS},
    **ASCII_OPERATORS,
    DECIMAL_POINT: DECIMAL_POINT,
    PERCENT: PERCENT,
    EVALUATE: EVALUATE,
    "Enter": EVALUATE,
    "Backspace": DELETE,
    DELETE: DELETE,
    "Escape": CLEAR,
    CLEAR: CLEAR,
}


def map_key(name: str) -> Optional[str]:
    """
    Translate a physical key name (as reported by a keyboard event) to a logical key.

    :param str name: Key name, e.g. "7", "*", "Enter" or "Backspace"

    :return: Logical key, or None if the key has no meaning for the calculator
    :rtype: Optional[str]
    """
    return KEYMAP.get(name)


def translate_expression(text: str) -> str:
    """Replace ASCII operators in a typed expression with the calculator glyphs."""
    return "".join(ASCII_OPERATORS.get(char, char) for char in text)
