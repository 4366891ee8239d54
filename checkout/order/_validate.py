"""
Order validation.

Categories run in order: payer → payment method → items. Within a
category every field is checked; the first failing category is returned.
"""

from __future__ import annotations

import re

from kungfu import Result, Ok, Error

from checkout.config import CheckoutSettings, get_settings
from checkout.domain import OrderPayload, Payer
from checkout.errors import ValidationError, ValidationErrors

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_payer(payer: Payer | None, settings: CheckoutSettings) -> list[ValidationError]:
    payer = payer or Payer()
    errors: list[ValidationError] = []

    if not payer.name.strip():
        errors.append(ValidationError("name", "Name is required"))

    phone = payer.phone.strip()
    if not phone:
        errors.append(ValidationError("phone", "Phone number is required"))
    elif len(phone) < settings.min_phone_length:
        errors.append(ValidationError(
            "phone", f"Phone number must be at least {settings.min_phone_length} characters"
        ))

    email = payer.email.strip()
    if not email:
        errors.append(ValidationError("email", "Email is required"))
    elif not EMAIL_RE.match(email):
        errors.append(ValidationError("email", "Email is not valid"))

    return errors


def validate_payment_method(payload: OrderPayload) -> list[ValidationError]:
    if not (payload.payment_method or "").strip():
        return [ValidationError("payment_method", "Choose a payment method")]
    return []


def validate_items(payload: OrderPayload) -> list[ValidationError]:
    resolved = [
        item for item in payload.items
        if item.product_id and item.quantity is not None and item.quantity > 0
    ]
    if not resolved:
        return [ValidationError("items", "Order has no product")]
    return []


def validate_order(
    payload: OrderPayload,
    settings: CheckoutSettings | None = None,
) -> Result[OrderPayload, ValidationErrors]:
    settings = settings or get_settings()

    for errors in (
        validate_payer(payload.payer, settings),
        validate_payment_method(payload),
        validate_items(payload),
    ):
        if errors:
            return Error(ValidationErrors(tuple(errors)))

    return Ok(payload)


__all__ = (
    "EMAIL_RE",
    "validate_payer",
    "validate_payment_method",
    "validate_items",
    "validate_order",
)
