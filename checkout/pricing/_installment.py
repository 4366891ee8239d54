"""
Installment planner — grand total → ordered payment schedule.

Authored rows win verbatim. Without one every period is
floor(grand_total / count); the remainder is not collected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_FLOOR

from kungfu import Option, Some, Nothing

from checkout._types import Money, MoneyLike, to_money
from checkout.domain import (
    HistoryInstallment,
    InstallmentPaymentDetail,
    InstallmentPricingRow,
    PaymentStatus,
    Product,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InstallmentAmount:
    number: int  # 1-based
    amount: Money


def _authored_amounts(
    count: int,
    rows: Iterable[InstallmentPricingRow],
) -> tuple[Money, ...] | None:
    for row in rows:
        if row.count != count:
            continue
        if len(row.amounts) != count:
            logger.warning(
                f"Authored installment row for {count} periods has "
                f"{len(row.amounts)} amounts, using even division"
            )
            return None
        return row.amounts
    return None


def even_amount(grand_total: MoneyLike, count: int) -> Money:
    return (to_money(grand_total) / count).to_integral_value(rounding=ROUND_FLOOR)


def build_schedule(
    grand_total: MoneyLike,
    count: int,
    authored_rows: Iterable[InstallmentPricingRow] = (),
) -> tuple[InstallmentAmount, ...]:
    """
    Schedule of exactly `count` periods.

    Example:
        build_schedule(1_000_000, 3)
        # (333333, 333333, 333333), sum 999999
    """
    if count < 1:
        raise ValueError(f"Installment count must be at least 1, got {count}")

    amounts = _authored_amounts(count, authored_rows)
    if amounts is None:
        per_period = even_amount(grand_total, count)
        amounts = (per_period,) * count

    return tuple(InstallmentAmount(i, amount) for i, amount in enumerate(amounts, start=1))


def offers_plan(product: Product, count: int) -> bool:
    """A plan exists only for installment products and more than one period."""
    return product.supports_installments and count > 1


def next_pending_installment(
    installment: HistoryInstallment,
) -> Option[InstallmentPaymentDetail]:
    """PENDING detail with the lowest number."""
    pending = [d for d in installment.details if d.status is PaymentStatus.PENDING]
    if not pending:
        return Nothing()
    return Some(min(pending, key=lambda d: d.number))


__all__ = (
    "InstallmentAmount",
    "even_amount",
    "build_schedule",
    "offers_plan",
    "next_pending_installment",
)
