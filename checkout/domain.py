"""
Domain — products, coupons, order payloads, installment history.

All models are immutable. Money fields are Decimal; use the `of()`
constructors to build them from raw JSON-ish values.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from kungfu import Result, Ok, Error

from checkout._types import Money, MoneyLike, ZERO, HUNDRED, to_money
from checkout.errors import ValidationError, ValidationErrors

type Bound = date | datetime


# ═══════════════════════════════════════════════════════════════════════════════
# Product Domain
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PriceTier:
    """
    Time-windowed alternate price.

    Bounds are inclusive; None means unbounded on that side.
    """

    price: Money
    id: str | None = None
    title: str | None = None
    desc: str | None = None
    start_at: Bound | None = None
    finish_at: Bound | None = None

    @classmethod
    def of(
        cls,
        price: MoneyLike,
        *,
        id: str | None = None,
        title: str | None = None,
        desc: str | None = None,
        start_at: Bound | None = None,
        finish_at: Bound | None = None,
    ) -> PriceTier:
        return cls(to_money(price), id, title, desc, start_at, finish_at)


@dataclass(frozen=True, slots=True)
class InstallmentPricingRow:
    """Authored per-period amounts for one installment count."""

    count: int
    amounts: tuple[Money, ...]

    @classmethod
    def of(cls, count: int, amounts: Iterable[MoneyLike]) -> InstallmentPricingRow:
        return cls(count, tuple(to_money(a) for a in amounts))


@dataclass(frozen=True, slots=True)
class Product:
    id: str
    name: str
    price: Money
    code: str = ""
    description: str | None = None
    shadow_price: Money | None = None  # strikethrough display only
    ppn: Money = ZERO
    is_custom_price: bool = False
    booking_fee: Money = ZERO
    benefits: tuple[str, ...] = ()
    product_price: tuple[PriceTier, ...] = ()
    installment: tuple[int, ...] = ()
    installment_price: tuple[InstallmentPricingRow, ...] = ()
    category_id: str | None = None
    image_url: str = ""
    interview: str | None = None

    @property
    def supports_installments(self) -> bool:
        return bool(self.installment) or bool(self.installment_price)

    @property
    def is_registration(self) -> bool:
        """Booking-fee products take a registration payment, not the full price."""
        return self.booking_fee > 0

    def tier(self, tier_id: str) -> PriceTier | None:
        for t in self.product_price:
            if t.id == tier_id:
                return t
        return None

    @classmethod
    def of(
        cls,
        id: str,
        name: str,
        price: MoneyLike,
        *,
        shadow_price: MoneyLike | None = None,
        ppn: MoneyLike = 0,
        booking_fee: MoneyLike = 0,
        benefits: Sequence[str] = (),
        product_price: Sequence[PriceTier] = (),
        installment: Sequence[int] = (),
        installment_price: Sequence[InstallmentPricingRow] = (),
        **rest: Any,
    ) -> Product:
        return cls(
            id=id,
            name=name,
            price=to_money(price),
            shadow_price=to_money(shadow_price) if shadow_price is not None else None,
            ppn=to_money(ppn),
            booking_fee=to_money(booking_fee),
            benefits=tuple(benefits),
            product_price=tuple(product_price),
            installment=tuple(installment),
            installment_price=tuple(installment_price),
            **rest,
        )


@dataclass(frozen=True, slots=True)
class Institution:
    id: str
    name: str


# ═══════════════════════════════════════════════════════════════════════════════
# Coupon Domain
# ═══════════════════════════════════════════════════════════════════════════════


class ValueType(Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


@dataclass(frozen=True, slots=True)
class Coupon:
    """
    Resolved coupon.

    value / value_type are kept as received; the discount engine decides
    whether they are usable.
    """

    code: str
    value: Any
    value_type: ValueType | str
    id: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Order Domain
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Payer:
    name: str = ""
    email: str = ""
    phone: str = ""
    company: str | None = None
    position: str | None = None


@dataclass(frozen=True, slots=True)
class OrderItem:
    product_id: str | None
    quantity: int | None = 1
    order_id: str | None = None  # set when paying an existing order's installment
    price_id: str | None = None  # pins a price tier


@dataclass(frozen=True, slots=True)
class InstallmentRequest:
    amount: int  # installment count
    is_booking: bool = False


@dataclass(frozen=True, slots=True)
class OrderPayload:
    payment_method: str | None = None
    coupon_id: str | None = None
    items: tuple[OrderItem, ...] = ()
    payer: Payer | None = None
    installment: InstallmentRequest | None = None
    institution_id: str | None = None

    @property
    def installment_count(self) -> int:
        return self.installment.amount if self.installment is not None else 0


@dataclass(frozen=True, slots=True)
class PayerCredentials:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class PaymentLink:
    url: str


@dataclass(frozen=True, slots=True)
class OrderCreated:
    """Order creation response: provisional payer account + payment URL."""

    user: PayerCredentials
    payment: PaymentLink


@dataclass(frozen=True, slots=True)
class InstallmentCreated:
    payment: PaymentLink


# ═══════════════════════════════════════════════════════════════════════════════
# History Domain
# ═══════════════════════════════════════════════════════════════════════════════


class PaymentStatus(Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True, slots=True)
class InstallmentPaymentDetail:
    number: int  # 1-based
    status: PaymentStatus
    grand_total: Money
    expired_date: Bound | None = None


@dataclass(frozen=True, slots=True)
class HistoryInstallment:
    id: str
    order_id: str
    details: tuple[InstallmentPaymentDetail, ...] = ()


@dataclass(frozen=True, slots=True)
class History:
    installments: tuple[HistoryInstallment, ...] = field(default_factory=tuple)


# ═══════════════════════════════════════════════════════════════════════════════
# Product Validation
# ═══════════════════════════════════════════════════════════════════════════════


def _as_datetime(value: Bound) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _window_inverted(start_at: Bound, finish_at: Bound) -> bool:
    start, finish = _as_datetime(start_at), _as_datetime(finish_at)
    if (start.tzinfo is None) != (finish.tzinfo is None):
        # mixed naive/aware bounds compare by wall-clock time
        start, finish = start.replace(tzinfo=None), finish.replace(tzinfo=None)
    return start > finish


def validate_product(product: Product) -> Result[Product, ValidationErrors]:
    """Authoring rules for a product. Collects every violation."""
    errors: list[ValidationError] = []

    if not product.name.strip():
        errors.append(ValidationError("name", "Name is required"))
    if not product.code.strip():
        errors.append(ValidationError("code", "Code is required"))
    if product.price < 0:
        errors.append(ValidationError("price", "Price must be non-negative"))
    if product.shadow_price is not None and product.shadow_price < 0:
        errors.append(ValidationError("shadow_price", "Shadow price must be non-negative"))
    if not ZERO <= product.ppn <= HUNDRED:
        errors.append(ValidationError("ppn", "PPN must be between 0 and 100"))
    if product.booking_fee < 0:
        errors.append(ValidationError("booking_fee", "Booking fee must be non-negative"))
    if not product.image_url.strip():
        errors.append(ValidationError("image_url", "Thumbnail is required"))

    for i, tier in enumerate(product.product_price):
        if tier.price < 0:
            errors.append(ValidationError(f"product_price.{i}.price", "Price must be non-negative"))
        if tier.start_at is not None and tier.finish_at is not None:
            if _window_inverted(tier.start_at, tier.finish_at):
                errors.append(ValidationError(
                    f"product_price.{i}.finish_at",
                    "Finish date must not be before start date",
                ))

    for i, row in enumerate(product.installment_price):
        if row.count < 1:
            errors.append(ValidationError(f"installment_price.{i}.count", "Count must be at least 1"))
        if any(a < 0 for a in row.amounts):
            errors.append(ValidationError(
                f"installment_price.{i}.amounts", "Amounts must be non-negative"
            ))

    if errors:
        return Error(ValidationErrors(tuple(errors)))
    return Ok(product)


def coupon_from_payload(data: Mapping[str, Any]) -> Coupon:
    """Build a Coupon from a coupon-service response without judging its values."""
    return Coupon(
        code=str(data.get("code", "")),
        value=data.get("value"),
        value_type=data.get("value_type", ""),
        id=data.get("id"),
    )


__all__ = (
    "PriceTier",
    "InstallmentPricingRow",
    "Product",
    "Institution",
    "ValueType",
    "Coupon",
    "coupon_from_payload",
    "Payer",
    "OrderItem",
    "InstallmentRequest",
    "OrderPayload",
    "PayerCredentials",
    "PaymentLink",
    "OrderCreated",
    "InstallmentCreated",
    "PaymentStatus",
    "InstallmentPaymentDetail",
    "HistoryInstallment",
    "History",
    "validate_product",
)
