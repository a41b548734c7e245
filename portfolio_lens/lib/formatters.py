"""Response formatting helpers."""

from __future__ import annotations

FINANCIAL_DISCLAIMER = "Informational use only. This is not financial advice."


def _fmt_number(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}"


def format_currency(amount: float | None) -> str:
    if amount is None:
        return "n/a"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}%"


def format_response(
    title: str,
    lines: list[str],
    warning: str | None = None,
    include_disclaimer: bool = True,
) -> str:
    chunks: list[str] = [title]
    if warning:
        chunks.append(f"Warning: {warning}")
    chunks.extend(lines)
    if include_disclaimer:
        chunks.extend(["---", FINANCIAL_DISCLAIMER])
    return "\n".join(chunks)


def line_money(label: str, value: float | None) -> str:
    return f"{label}: {format_currency(value)}"


def line_number(label: str, value: float | None, decimals: int = 2) -> str:
    return f"{label}: {_fmt_number(value, decimals)}"


def line_score(label: str, value: float | None, scale: int = 10) -> str:
    return f"{label}: {_fmt_number(value, 1)}/{scale}"


def line_percent(label: str, value: float | None) -> str:
    return f"{label}: {format_percentage(value)}"
