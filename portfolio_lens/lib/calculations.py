"""Generic finance arithmetic helpers."""

from __future__ import annotations


def round_to(value: float, decimals: int = 2) -> float:
    factor = 10**decimals
    return round(value * factor) / factor


def percentage_change(old_value: float, new_value: float) -> float:
    if old_value == 0:
        return 0.0
    return (new_value - old_value) / old_value * 100.0


def cagr(beginning_value: float, ending_value: float, years: float) -> float:
    """Compound annual growth rate as a fraction (0.07 == 7%)."""
    if beginning_value <= 0 or years <= 0:
        return 0.0
    return (ending_value / beginning_value) ** (1.0 / years) - 1.0


def present_value(future_value: float, rate: float, periods: float) -> float:
    return future_value / (1.0 + rate) ** periods


def future_value(present_value: float, rate: float, periods: float) -> float:
    return present_value * (1.0 + rate) ** periods
