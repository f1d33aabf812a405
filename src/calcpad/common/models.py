"""Pydantic models for expression tokens, calculator state and batch results."""
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from calcpad.common.symbols import ADD, DIV, MUL, PERCENT, SUB


class NumberToken(BaseModel):
    """Numeric literal; holds NaN when the literal text was not a valid number."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float = Field(..., description="Parsed numeric value of the literal")


class OperatorToken(BaseModel):
    """Binary infix operator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    symbol: Literal[ADD, SUB, MUL, DIV] = Field(..., description="Operator glyph")


class PercentToken(BaseModel):
    """Postfix unary percent: divides the preceding operand by 100."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["percent"] = "percent"
    symbol: Literal[PERCENT] = PERCENT


Token = Union[NumberToken, OperatorToken, PercentToken]


class CalculatorState(BaseModel):
    """
    Snapshot of the input surface.

    ``expr`` is the full infix expression typed so far and is the source of truth.
    ``display`` is what the user sees: the operand or operator being entered,
    or the formatted result right after an evaluation.
    """

    model_config = ConfigDict(frozen=True)

    expr: str = Field(default="", description="Accumulated infix expression")
    display: str = Field(default="0", description="Value currently shown to the user")


class OperationResult(BaseModel):
    """Represents the result of one expression evaluated in batch mode."""

    expression: str = Field(..., description="Original expression line")
    result: str = Field(..., description="Formatted result, or the error marker")

    def to_line(self) -> str:
        """Render the result as a line of the output file."""
        return f"{self.expression} = {self.result}"
