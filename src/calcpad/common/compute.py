"""Evaluate an expression buffer into the string shown on the display."""
from decimal import Decimal
import math
from typing import List, Optional

from calcpad.common.config import settings
from calcpad.common.logger import logger
from calcpad.common.models import Token
from calcpad.common.parser import ExpressionParser
from calcpad.common.symbols import ERROR_MARKER


def format_number(value: float, round_digits: int) -> str:
    """
    Round a finite value and render it as the shortest exact decimal string.

    Positional notation is always used ("10000000000000000", not "1e+16"),
    integral values carry no fractional part and negative zero is shown as "0".

    :param float value: Finite value to format
    :param int round_digits: Number of fractional digits kept

    :return: Formatted number
    :rtype: str
    """
    rounded: float = round(value, round_digits)
    if rounded == 0:
        rounded = 0.0
    # repr() yields the shortest string that round-trips to the same float
    return format(Decimal(repr(rounded)).normalize(), "f")


def compute(text: str, round_digits: Optional[int] = None) -> str:
    """
    Evaluate an infix expression buffer.

    Empty input gives "0". Division by zero, malformed expressions and
    non-finite results give the error marker "Err". Nothing is raised.

    :param str text: Expression buffer using the calculator glyphs
    :param int round_digits: Override for the configured rounding precision

    :return: Display string
    :rtype: str
    """
    if not text:
        return "0"

    tokens: List[Token] = ExpressionParser.tokenize(text)
    postfix: List[Token] = ExpressionParser.to_postfix(tokens)
    value: float = ExpressionParser.evaluate(postfix)

    if not math.isfinite(value):
        logger.debug("❌ Could not evaluate %r", text)
        return ERROR_MARKER

    digits: int = settings.round_digits if round_digits is None else round_digits
    result: str = format_number(value, digits)
    logger.debug("🧮 %r = %s", text, result)
    return result
