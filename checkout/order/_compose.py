"""
Order composer — product + selected price + coupon + payload → summary.

    base price ─► discount ─► tax (ppn > 0) ─► schedule (plan offered)
                                                    │
                                   payable now ◄────┘

price_order() is pure and never raises; compose() adds validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from kungfu import Result, Ok, Error

from checkout._types import Money, ZERO
from checkout.config import CheckoutSettings
from checkout.domain import Coupon, OrderPayload, Product
from checkout.errors import ValidationErrors
from checkout.order._validate import validate_order
from checkout.pricing import (
    DiscountResult,
    InstallmentAmount,
    SelectedPrice,
    apply_discount,
    apply_tax,
    build_schedule,
    offers_plan,
    round_rupiah,
)


@dataclass(frozen=True, slots=True)
class OrderSummary:
    product_id: str
    selected_price: SelectedPrice
    base_price: Money
    shadow_price: Money | None
    discount: DiscountResult
    tax_percent: Money
    tax_amount: Money
    grand_total: Money
    schedule: tuple[InstallmentAmount, ...]
    payable_now: Money
    is_registration: bool

    @property
    def subtotal(self) -> Money:
        return self.discount.subtotal

    @property
    def has_plan(self) -> bool:
        return bool(self.schedule)

    @property
    def shows_tax(self) -> bool:
        return self.tax_percent > 0


def base_price_for(product: Product, selected: SelectedPrice) -> Money:
    """Tier price for custom-priced products, else the product's own price."""
    return selected.price if product.is_custom_price else product.price


def price_order(
    product: Product,
    selected: SelectedPrice,
    coupon: Coupon | None = None,
    installment_count: int = 0,
) -> OrderSummary:
    base = base_price_for(product, selected)
    discount = apply_discount(base, coupon)

    grand_total = discount.subtotal
    if product.ppn > 0:
        grand_total = apply_tax(discount.subtotal, product.ppn)

    schedule: tuple[InstallmentAmount, ...] = ()
    if offers_plan(product, installment_count):
        schedule = build_schedule(grand_total, installment_count, product.installment_price)

    # charged in whole rupiah, the same rounding format_rupiah displays
    if product.is_registration:
        payable_now = round_rupiah(product.booking_fee)
    elif schedule:
        payable_now = round_rupiah(schedule[0].amount)
    else:
        payable_now = round_rupiah(grand_total)

    return OrderSummary(
        product_id=product.id,
        selected_price=selected,
        base_price=base,
        shadow_price=product.shadow_price,
        discount=discount,
        tax_percent=product.ppn if product.ppn > 0 else ZERO,
        tax_amount=grand_total - discount.subtotal,
        grand_total=grand_total,
        schedule=schedule,
        payable_now=payable_now,
        is_registration=product.is_registration,
    )


def compose(
    product: Product,
    selected: SelectedPrice,
    coupon: Coupon | None,
    payload: OrderPayload,
    *,
    settings: CheckoutSettings | None = None,
) -> Result[OrderSummary, ValidationErrors]:
    """Validate the payload, then price it."""
    match validate_order(payload, settings):
        case Error(errors):
            return Error(errors)
        case Ok(valid):
            return Ok(price_order(product, selected, coupon, valid.installment_count))


__all__ = ("OrderSummary", "base_price_for", "price_order", "compose")
