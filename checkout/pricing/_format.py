"""
Display formatting — rupiah and Indonesian dates.

Payable and displayed amounts go through the same rounding: half-up to
whole rupiah.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP

from checkout._types import Money, MoneyLike, to_money
from checkout.config import get_settings

_MONTHS = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def round_rupiah(amount: MoneyLike) -> Money:
    return to_money(amount).to_integral_value(rounding=ROUND_HALF_UP)


def format_rupiah(amount: MoneyLike, symbol: str | None = None) -> str:
    """
    1000000 -> "Rp 1.000.000"

    The symbol defaults to the configured currency_symbol. Negative
    amounts keep their sign in front of the symbol.
    """
    if symbol is None:
        symbol = get_settings().currency_symbol
    rounded = round_rupiah(amount)
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(int(rounded)):,}".replace(",", ".")
    return f"{sign}{symbol} {grouped}"


def format_date(value: date | datetime) -> str:
    """date(2026, 10, 18) -> "18 Oktober 2026" """
    return f"{value.day} {_MONTHS[value.month - 1]} {value.year}"


__all__ = ("round_rupiah", "format_rupiah", "format_date")
