"""Keypad calculator engine: incremental input buffer and expression evaluation."""
from calcpad.common.compute import compute
from calcpad.keypad.state import Calculator, CalculatorState, press

__all__ = ["Calculator", "CalculatorState", "compute", "press"]
