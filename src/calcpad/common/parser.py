"""Tokenize, reorder and evaluate calculator expressions without eval()."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Dict, List, Tuple

from calcpad.common.models import NumberToken, OperatorToken, PercentToken, Token
from calcpad.common.symbols import ADD, DECIMAL_POINT, DIGITS, DIV, MUL, PERCENT, SUB


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]


def _divide(a: float, b: float) -> float:
    """Divide, mapping division by zero to NaN instead of raising."""
    if b == 0:
        return math.nan
    return operator.truediv(a, b)


# Mapping of binary operator glyphs to (precedence, function)
OPERATORS: Dict[str, Tuple[int, OperatorFn]] = {
    ADD: (1, operator.add),
    SUB: (1, operator.sub),
    MUL: (2, operator.mul),
    DIV: (2, _divide),
}

# Percent binds tighter than every binary operator
PRECEDENCE: Dict[str, int] = {symbol: prec for symbol, (prec, _) in OPERATORS.items()}
PRECEDENCE[PERCENT] = 3

_LITERAL_CHARS = DIGITS + DECIMAL_POINT


class ExpressionParser:
    """
    Parse and evaluate calculator expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Failures are reported as NaN, never raised

    Algorithm:
        1. Tokenize the buffer into numbers, binary operators and percent signs
        2. Convert to postfix (Reverse Polish Notation) using Shunting-yard
        3. Evaluate the postfix sequence using a stack

    Percent is a postfix unary operator with the highest precedence, so it always
    applies to the operand right before it.

    Examples:
        - Infix expression: 2＋50%×4
        - Corresponding postfix: 2 50 % 4 × ＋
    """

    @staticmethod
    def _number(literal: str) -> NumberToken:
        try:
            return NumberToken(value=float(literal))
        except ValueError:
            # "." or "1.2.3": not producible from the keypad, evaluated as an error
            return NumberToken(value=math.nan)

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Split an expression buffer into tokens.

        Digits and decimal points are accumulated into numeric literals, operator
        and percent glyphs become tokens of their own. Any other character is dropped.

        :param str expr: Expression buffer, e.g. "12＋3.5%"

        :return: List of tokens
        :rtype: List[Token]
        """
        tokens: List[Token] = []
        literal: str = ""
        for char in expr:
            if char in _LITERAL_CHARS:
                literal += char
                continue
            if char in OPERATORS or char == PERCENT:
                if literal:
                    tokens.append(ExpressionParser._number(literal))
                    literal = ""
                if char == PERCENT:
                    tokens.append(PercentToken())
                else:
                    tokens.append(OperatorToken(symbol=char))
        if literal:
            tokens.append(ExpressionParser._number(literal))
        return tokens

    @staticmethod
    def to_postfix(tokens: List[Token]) -> List[Token]:
        """
        Convert a list of tokens into postfix order using the Shunting-yard algorithm.

        Malformed input (e.g. a leading operator) is not rejected here;
        :meth:`evaluate` turns it into NaN.

        :param List[Token] tokens: Infix tokens

        :return: Tokens in postfix order
        :rtype: List[Token]
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if isinstance(token, NumberToken):
                # Numbers are added directly to the output
                output.append(token)
                continue

            prec = PRECEDENCE[token.symbol]
            if isinstance(token, PercentToken):
                # Postfix: only strictly tighter operators are popped, which is none
                while stack and PRECEDENCE[stack[-1].symbol] > prec:
                    output.append(stack.pop())
            else:
                # Binary operator: pop operators with higher or equal precedence
                while stack and PRECEDENCE[stack[-1].symbol] >= prec:
                    output.append(stack.pop())
            stack.append(token)

        # Append remaining operators in reverse order (stack top first)
        output.extend(stack[::-1])
        return output

    @staticmethod
    def evaluate(postfix: List[Token]) -> float:
        """
        Reduce a postfix token sequence to a single value.

        An empty sequence evaluates to 0. Division by zero, missing operands and
        leftover operands all produce NaN.

        :param List[Token] postfix: Tokens in postfix order

        :return: Computed value, or NaN on failure
        :rtype: float
        """
        stack: List[float] = []
        for token in postfix:
            if isinstance(token, NumberToken):
                stack.append(token.value)
            elif isinstance(token, PercentToken):
                if not stack:
                    return math.nan
                stack.append(stack.pop() / 100)
            else:
                # Binary operator requires two operands
                if len(stack) < 2:
                    return math.nan
                b: float = stack.pop()
                a: float = stack.pop()
                stack.append(OPERATORS[token.symbol][1](a, b))

        if not stack:
            return 0.0
        if len(stack) != 1:
            return math.nan
        return stack[0]
