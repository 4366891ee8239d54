"""
Payload builder — immutable, section-scoped partial updates.

Each checkout section (payer form, payment picker, coupon box, ...) adds
named field updates. build() merges them last-writer-wins per field, so
the result never depends on which section happened to render first.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from checkout.domain import InstallmentRequest, OrderItem, OrderPayload, Payer

# ═══════════════════════════════════════════════════════════════════════════════
# Fields
# ═══════════════════════════════════════════════════════════════════════════════

PAYLOAD_FIELDS = frozenset({
    "payment_method",
    "coupon_id",
    "items",
    "institution_id",
    "payer.name",
    "payer.email",
    "payer.phone",
    "payer.company",
    "payer.position",
    "installment.amount",
    "installment.is_booking",
})


@dataclass(frozen=True, slots=True)
class PayloadUpdate:
    """One field contributed by one section."""

    section: str
    field: str
    value: Any


def _installment_amount(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Installment amount must be a whole number of periods: {value!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PayloadBuilder:
    """
    Fluent payload builder.

    Example:
        payload = (
            PayloadBuilder()
            .update("payer", **{"payer.name": "Siti", "payer.email": "siti@mail.id"})
            .set("payment", "payment_method", "BCA_VA")
            .items(OrderItem(product_id="p-1", quantity=1))
            .build()
        )

    Note: immutable, every method returns a new builder.
    """

    updates: tuple[PayloadUpdate, ...] = ()

    def set(self, section: str, field: str, value: Any) -> PayloadBuilder:
        if field not in PAYLOAD_FIELDS:
            raise ValueError(f"Unknown payload field: {field!r}")
        if field == "installment.amount":
            value = _installment_amount(value)
        return PayloadBuilder((*self.updates, PayloadUpdate(section, field, value)))

    def update(self, section: str, **fields: Any) -> PayloadBuilder:
        builder = self
        for name, value in fields.items():
            builder = builder.set(section, name, value)
        return builder

    # Convenience setters for the usual sections

    def payer(self, payer: Payer, section: str = "payer") -> PayloadBuilder:
        return self.update(section, **{
            "payer.name": payer.name,
            "payer.email": payer.email,
            "payer.phone": payer.phone,
            "payer.company": payer.company,
            "payer.position": payer.position,
        })

    def items(self, *items: OrderItem, section: str = "items") -> PayloadBuilder:
        return self.set(section, "items", tuple(items))

    def installment(
        self, amount: int, is_booking: bool = False, section: str = "installment"
    ) -> PayloadBuilder:
        return self.update(section, **{
            "installment.amount": amount,
            "installment.is_booking": is_booking,
        })

    def merged(self) -> dict[str, Any]:
        """Field → value, last writer wins."""
        out: dict[str, Any] = {}
        for u in self.updates:
            out[u.field] = u.value
        return out

    def sources(self) -> dict[str, str]:
        """Field → section that wrote the winning value."""
        out: dict[str, str] = {}
        for u in self.updates:
            out[u.field] = u.section
        return out

    def build(self) -> OrderPayload:
        fields = self.merged()

        payer = None
        if any(k.startswith("payer.") for k in fields):
            payer = Payer(
                name=fields.get("payer.name") or "",
                email=fields.get("payer.email") or "",
                phone=fields.get("payer.phone") or "",
                company=fields.get("payer.company"),
                position=fields.get("payer.position"),
            )

        installment = None
        if fields.get("installment.amount") is not None:
            installment = InstallmentRequest(
                amount=fields["installment.amount"],
                is_booking=bool(fields.get("installment.is_booking", False)),
            )

        items: Iterable[OrderItem] = fields.get("items") or ()

        return OrderPayload(
            payment_method=fields.get("payment_method"),
            coupon_id=fields.get("coupon_id"),
            items=tuple(items),
            payer=payer,
            installment=installment,
            institution_id=fields.get("institution_id"),
        )


__all__ = ("PAYLOAD_FIELDS", "PayloadUpdate", "PayloadBuilder")
