"""Test class CalculatorSettings."""
from pydantic import ValidationError
import pytest

from calcpad.common.config import CalculatorSettings


def test_settings_defaults(monkeypatch) -> None:
    """Without environment overrides results keep 12 fractional digits."""
    monkeypatch.delenv("CALCPAD_ROUND_DIGITS", raising=False)
    assert CalculatorSettings().round_digits == 12


def test_settings_from_environment(monkeypatch) -> None:
    """CALCPAD_* variables override the defaults."""
    monkeypatch.setenv("CALCPAD_ROUND_DIGITS", "4")
    monkeypatch.setenv("CALCPAD_LOG_LEVEL", "DEBUG")
    settings = CalculatorSettings()
    assert settings.round_digits == 4
    assert settings.log_level == "DEBUG"


def test_settings_invalid_round_digits(monkeypatch) -> None:
    """Out of range precision is rejected."""
    monkeypatch.setenv("CALCPAD_ROUND_DIGITS", "99")
    with pytest.raises(ValidationError):
        CalculatorSettings()


def test_settings_log_level_case_insensitive(monkeypatch) -> None:
    """Level names are accepted in any case."""
    monkeypatch.setenv("CALCPAD_LOG_LEVEL", "info")
    assert CalculatorSettings().log_level == "INFO"


def test_settings_invalid_log_level(monkeypatch) -> None:
    """Unknown level names are rejected."""
    monkeypatch.setenv("CALCPAD_LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        CalculatorSettings()
