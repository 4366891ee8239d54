"""
Core types for checkout.

Re-exports from kungfu + money helpers.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Never

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

type Pure[T] = Lazy[T, Never]
"""Lazy computation that cannot fail."""

# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Rupiah amount. Always Decimal, never float."""

type MoneyLike = Decimal | int | float | str

ZERO: Money = Decimal(0)
HUNDRED: Money = Decimal(100)


def to_money(value: MoneyLike) -> Money:
    """
    Normalise a numeric input to Decimal.

    Floats go through str() so 0.1 stays 0.1.
    Raises ValueError for non-numeric or non-finite input, Decimals included.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a money value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a money value: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a money value: {value!r}")
    return result


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "LazyCoroResult",
    # Type aliases
    "Lazy",
    "Pure",
    # Money
    "Money",
    "MoneyLike",
    "ZERO",
    "HUNDRED",
    "to_money",
)
