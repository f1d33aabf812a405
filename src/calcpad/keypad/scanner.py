"""
Scan the trailing characters of an expression buffer.

The input state machine only ever needs to know what the buffer ends with and
which operand is being typed. Both are answered by walking the buffer
backwards over a small grammar::

    tail    := operator | percent | number
    number  := digits [ "." digits ]
"""
from enum import Enum

from calcpad.common.symbols import DECIMAL_POINT, PERCENT, is_digit, is_operator


class TailKind(str, Enum):
    """What the expression buffer currently ends with."""

    EMPTY = "empty"
    DIGIT = "digit"
    DECIMAL_POINT = "decimal_point"
    OPERATOR = "operator"
    PERCENT = "percent"
    OTHER = "other"


def classify_tail(expr: str) -> TailKind:
    """Classify the last character of ``expr``."""
    if not expr:
        return TailKind.EMPTY
    last = expr[-1]
    if is_digit(last):
        return TailKind.DIGIT
    if last == DECIMAL_POINT:
        return TailKind.DECIMAL_POINT
    if is_operator(last):
        return TailKind.OPERATOR
    if last == PERCENT:
        return TailKind.PERCENT
    return TailKind.OTHER


def _skip_digits(expr: str, end: int) -> int:
    """Return the index where the run of digits ending just before ``end`` starts."""
    start = end
    while start > 0 and is_digit(expr[start - 1]):
        start -= 1
    return start


def _number_start(expr: str, end: int) -> int:
    start = _skip_digits(expr, end)
    if start > 0 and expr[start - 1] == DECIMAL_POINT:
        start = _skip_digits(expr, start - 1)
    return start


def current_number(expr: str) -> str:
    """
    Return the operand being typed at the end of ``expr``.

    This is the longest suffix made of digits with at most one decimal point,
    e.g. "12.5" for "3＋12.5", "0." for "7×0." and "" for "7×".

    :param str expr: Expression buffer

    :return: Trailing numeric run, possibly empty
    :rtype: str
    """
    return expr[_number_start(expr, len(expr)):]


def tail_display(expr: str) -> str:
    """
    Project the expression buffer to the value shown on the display.

    A trailing operator or percent sign is shown on its own. Otherwise the
    trailing operand is shown; when there is no such operand the whole
    buffer is.

    :param str expr: Expression buffer

    :return: Display string
    :rtype: str
    """
    kind = classify_tail(expr)
    if kind in (TailKind.OPERATOR, TailKind.PERCENT):
        return expr[-1]
    return current_number(expr) or expr
