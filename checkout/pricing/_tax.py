"""
Tax (PPN) on the post-discount subtotal.
"""

from __future__ import annotations

from checkout._types import Money, MoneyLike, HUNDRED, to_money


def apply_tax(subtotal: MoneyLike, tax_percent: MoneyLike) -> Money:
    """Grand total. Non-positive tax leaves the subtotal untouched."""
    subtotal = to_money(subtotal)
    percent = to_money(tax_percent)
    if percent <= 0:
        return subtotal
    return subtotal + subtotal * percent / HUNDRED


def tax_amount(subtotal: MoneyLike, tax_percent: MoneyLike) -> Money:
    subtotal = to_money(subtotal)
    return apply_tax(subtotal, tax_percent) - subtotal


__all__ = ("apply_tax", "tax_amount")
