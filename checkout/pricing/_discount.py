"""
Discount engine — coupon → subtotal.

Bad coupon payloads never block checkout: they come back as
CouponIgnored and the base price stands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from checkout._types import Money, MoneyLike, ZERO, HUNDRED, to_money
from checkout.domain import Coupon, ValueType
from checkout.errors import CouponIgnored

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CouponApplied:
    code: str
    value_type: ValueType
    value: Decimal


type CouponOutcome = CouponApplied | CouponIgnored


@dataclass(frozen=True, slots=True)
class DiscountResult:
    subtotal: Money
    discount_amount: Money
    coupon: CouponOutcome | None = None

    @property
    def ignored(self) -> CouponIgnored | None:
        return self.coupon if isinstance(self.coupon, CouponIgnored) else None


def calculate_discount_percentage(amount: MoneyLike, percentage: MoneyLike) -> Money:
    """percentage of amount."""
    return to_money(amount) * to_money(percentage) / HUNDRED


def price_after_discount(amount: MoneyLike, percentage: MoneyLike) -> Money:
    amount = to_money(amount)
    return amount - calculate_discount_percentage(amount, percentage)


def _parse_value_type(raw: ValueType | str) -> ValueType | None:
    if isinstance(raw, ValueType):
        return raw
    try:
        return ValueType(str(raw).strip().upper())
    except ValueError:
        return None


def _ignored(base_price: Money, coupon: Coupon, reason: str) -> DiscountResult:
    logger.warning(f"Coupon {coupon.code!r} ignored: {reason}")
    return DiscountResult(base_price, ZERO, CouponIgnored(coupon.code, reason))


def apply_discount(base_price: MoneyLike, coupon: Coupon | None = None) -> DiscountResult:
    """
    Apply a coupon to a pre-tax base price.

    PERCENTAGE: discount = base * value / 100
    FIXED:      discount = min(value, base), subtotal never negative
    """
    base = to_money(base_price)
    if coupon is None:
        return DiscountResult(base, ZERO)

    value_type = _parse_value_type(coupon.value_type)
    if value_type is None:
        return _ignored(base, coupon, f"unknown value type {coupon.value_type!r}")

    try:
        value = to_money(coupon.value)
    except ValueError:
        return _ignored(base, coupon, f"malformed value {coupon.value!r}")

    if value <= 0:
        return _ignored(base, coupon, "value is not positive")

    match value_type:
        case ValueType.PERCENTAGE:
            if value > HUNDRED:
                return _ignored(base, coupon, "percentage above 100")
            discount = calculate_discount_percentage(base, value)
        case ValueType.FIXED:
            discount = min(value, base)

    return DiscountResult(
        subtotal=base - discount,
        discount_amount=discount,
        coupon=CouponApplied(coupon.code, value_type, value),
    )


__all__ = (
    "CouponApplied",
    "CouponOutcome",
    "DiscountResult",
    "calculate_discount_percentage",
    "price_after_discount",
    "apply_discount",
)
