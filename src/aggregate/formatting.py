"""Display formatting for aggregate values."""

from __future__ import annotations

from core.constants import COMPACT_NUMBER_SUFFIXES, CURRENCY_SYMBOL


def format_compact_number(value: float) -> str:
    """Render a number with a one-decimal K/M/B/T suffix.

    Args:
        value: Number to render.

    Returns:
        Compact label such as ``1.5M``; values below one thousand keep
        one decimal and no suffix.
    """
    for threshold, suffix in COMPACT_NUMBER_SUFFIXES:
        if value >= threshold:
            return f"{value / threshold:.1f}{suffix}"
    return f"{value:.1f}"


def format_generation(value: float) -> str:
    """Render a generation rate per second."""
    return f"{format_compact_number(value)}/s"


def format_currency(value: float) -> str:
    """Render a price in Brazilian real notation, e.g. ``R$ 1.234,50``."""
    grouped = f"{value:,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{CURRENCY_SYMBOL} {localized}"
