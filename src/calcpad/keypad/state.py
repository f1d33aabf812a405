"""Input state machine turning key presses into an expression buffer and a display value."""
from typing import Callable, List

from calcpad.common.compute import compute
from calcpad.common.logger import logger
from calcpad.common.models import CalculatorState
from calcpad.common.symbols import (
    CLEAR,
    DECIMAL_POINT,
    DELETE,
    ERROR_MARKER,
    EVALUATE,
    PERCENT,
    SUB,
    is_digit,
    is_operator,
)
from calcpad.keypad.scanner import TailKind, classify_tail, current_number, tail_display

StateListener = Callable[[CalculatorState], None]

INITIAL_STATE = CalculatorState()


def _typed(expr: str) -> CalculatorState:
    """State after an edit: the display follows the end of the buffer."""
    return CalculatorState(expr=expr, display=tail_display(expr) if expr else "0")


def _result_expr(result: str) -> str:
    """Expression that continues a chain from an evaluation result."""
    if result == ERROR_MARKER:
        return ""
    if result.startswith("-"):
        # The buffer has no unary minus; keep it tokenizable as 0 − magnitude
        return f"0{SUB}{result[1:]}"
    return result


def _press_delete(state: CalculatorState) -> CalculatorState:
    return _typed(state.expr[:-1])


def _press_evaluate(state: CalculatorState) -> CalculatorState:
    # Nothing typed since the last result: evaluate what is on the display again
    result = compute(state.expr or state.display)
    return CalculatorState(expr=_result_expr(result), display=result)


def _press_decimal_point(state: CalculatorState) -> CalculatorState:
    expr = state.expr
    if DECIMAL_POINT in current_number(expr):
        return state
    if classify_tail(expr) is TailKind.DIGIT:
        return _typed(expr + DECIMAL_POINT)
    # Seed an implicit leading zero for the new operand
    return _typed(expr + "0" + DECIMAL_POINT)


def _press_percent(state: CalculatorState) -> CalculatorState:
    if classify_tail(state.expr) is not TailKind.DIGIT:
        return state
    return _typed(state.expr + PERCENT)


def _press_operator(state: CalculatorState, key: str) -> CalculatorState:
    expr = state.expr
    if not expr:
        # Only a leading minus is accepted, entered as 0 − ...
        if key == SUB:
            return CalculatorState(expr="0" + SUB, display=SUB)
        return state

    # The newest operator replaces a pending one
    if classify_tail(expr) is TailKind.OPERATOR:
        expr = expr[:-1]
    # An operand left as "5." is truncated to "5"
    if classify_tail(expr) is TailKind.DECIMAL_POINT:
        expr = expr[:-1]
    return CalculatorState(expr=expr + key, display=key)


def _press_digit(state: CalculatorState, key: str) -> CalculatorState:
    expr = state.expr
    lone_zero = expr.endswith("0") and (len(expr) == 1 or is_operator(expr[-2]))
    if lone_zero and key != "0":
        return _typed(expr[:-1] + key)
    return _typed(expr + key)


def press(state: CalculatorState, key: str) -> CalculatorState:
    """
    Apply one logical key to a calculator state.

    Keys: "0"-"9", ".", "＋", "−", "×", "÷", "%", "=", "C" (clear) and "DEL".
    Key presses that would produce an invalid edit, and unknown keys, return
    ``state`` itself unchanged.

    :param CalculatorState state: Current state
    :param str key: Logical key symbol

    :return: New state
    :rtype: CalculatorState
    """
    if key == CLEAR:
        return INITIAL_STATE
    if key == DELETE:
        return _press_delete(state)
    if key == EVALUATE:
        return _press_evaluate(state)
    if key == DECIMAL_POINT:
        return _press_decimal_point(state)
    if key == PERCENT:
        return _press_percent(state)
    if is_operator(key):
        return _press_operator(state, key)
    if is_digit(key):
        return _press_digit(state, key)
    return state


class Calculator:
    """
    Stateful calculator input surface.

    Holds the current :class:`CalculatorState`, feeds key presses through
    :func:`press` and notifies subscribers whenever the state changes, so a
    renderer can redraw the expression and display.
    """

    def __init__(self, state: CalculatorState = INITIAL_STATE) -> None:
        self._state: CalculatorState = state
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def expr(self) -> str:
        return self._state.expr

    @property
    def display(self) -> str:
        return self._state.display

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback invoked with the new state after every change.

        :param StateListener listener: Callback receiving the new state

        :return: Function removing the callback again
        :rtype: Callable[[], None]
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def press(self, key: str) -> CalculatorState:
        """Feed one logical key and return the resulting state."""
        new_state = press(self._state, key)
        if new_state != self._state:
            logger.debug("⌨️ %r: %r -> %r", key, self._state.expr, new_state.expr)
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    def press_all(self, keys: List[str]) -> CalculatorState:
        """Feed a sequence of logical keys in order."""
        for key in keys:
            self.press(key)
        return self._state

    def reset(self) -> CalculatorState:
        """Return to the initial state, as the clear key does."""
        return self.press(CLEAR)
