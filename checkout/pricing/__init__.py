"""
Pricing — the deterministic money pipeline.

    from checkout import pricing as P

    selected = P.select_price(product, now=now).unwrap()
    discount = P.apply_discount(selected.price, coupon)
    grand_total = P.apply_tax(discount.subtotal, product.ppn)
    schedule = P.build_schedule(grand_total, 3, product.installment_price)

Every function here is pure: same inputs, same outputs.
"""

from checkout.pricing._price import (
    SelectedPrice,
    tier_contains,
    current_tier,
    select_price,
)
from checkout.pricing._discount import (
    CouponApplied,
    CouponOutcome,
    DiscountResult,
    calculate_discount_percentage,
    price_after_discount,
    apply_discount,
)
from checkout.pricing._tax import apply_tax, tax_amount
from checkout.pricing._installment import (
    InstallmentAmount,
    even_amount,
    build_schedule,
    offers_plan,
    next_pending_installment,
)
from checkout.pricing._format import round_rupiah, format_rupiah, format_date

__all__ = (
    # Price selection
    "SelectedPrice",
    "tier_contains",
    "current_tier",
    "select_price",
    # Discount
    "CouponApplied",
    "CouponOutcome",
    "DiscountResult",
    "calculate_discount_percentage",
    "price_after_discount",
    "apply_discount",
    # Tax
    "apply_tax",
    "tax_amount",
    # Installments
    "InstallmentAmount",
    "even_amount",
    "build_schedule",
    "offers_plan",
    "next_pending_installment",
    # Formatting
    "round_rupiah",
    "format_rupiah",
    "format_date",
)
