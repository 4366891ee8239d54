"""
Order — payload building, validation, composition.

    from checkout import order as O

    payload = O.PayloadBuilder().payer(payer).items(item).set(
        "payment", "payment_method", "QRIS"
    ).build()

    match O.compose(product, selected, coupon, payload):
        case Ok(summary): ...
        case Error(errors): errors.as_dict()
"""

from checkout.order._builder import PAYLOAD_FIELDS, PayloadUpdate, PayloadBuilder
from checkout.order._validate import (
    EMAIL_RE,
    validate_payer,
    validate_payment_method,
    validate_items,
    validate_order,
)
from checkout.order._compose import OrderSummary, base_price_for, price_order, compose

__all__ = (
    # Builder
    "PAYLOAD_FIELDS",
    "PayloadUpdate",
    "PayloadBuilder",
    # Validation
    "EMAIL_RE",
    "validate_payer",
    "validate_payment_method",
    "validate_items",
    "validate_order",
    # Composition
    "OrderSummary",
    "base_price_for",
    "price_order",
    "compose",
)
