"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from kungfu import Result, Ok, Error

from checkout.domain import (
    Coupon,
    History,
    HistoryInstallment,
    InstallmentCreated,
    InstallmentPaymentDetail,
    InstallmentPricingRow,
    Institution,
    OrderCreated,
    OrderPayload,
    PayerCredentials,
    PaymentLink,
    PaymentStatus,
    PriceTier,
    Product,
    ValueType,
)
from checkout.gateways import Gateways


# Catalog
BOOTCAMP = Product.of(
    "prod-1",
    "Bootcamp Data Analyst",
    4_500_000,
    code="DA-BOOTCAMP",
    shadow_price=6_000_000,
    ppn=11,
    is_custom_price=True,
    image_url="https://cdn.example/da.png",
    benefits=["12 sesi live", "Sertifikat", "Portofolio"],
    product_price=[
        PriceTier.of(3_500_000, id="early", title="Early Bird",
                     start_at=date(2026, 9, 1), finish_at=date(2026, 10, 31)),
        PriceTier.of(4_000_000, id="batch-2", title="Batch 2", start_at=date(2026, 11, 1)),
    ],
    installment=[3, 6],
    installment_price=[InstallmentPricingRow.of(3, [1_500_000, 1_200_000, 1_185_000])],
)


# Fake backend
@dataclass(slots=True)
class FakeApi:
    products: dict[str, Product] = field(default_factory=lambda: {BOOTCAMP.code: BOOTCAMP})
    coupons: dict[str, Coupon] = field(default_factory=lambda: {
        "HEMAT10": Coupon("HEMAT10", 10, ValueType.PERCENTAGE, id="c-1"),
        "RUSAK": Coupon("RUSAK", "sepuluh", ValueType.FIXED, id="c-2"),
    })
    sign_in_error: str | None = None
    orders_down: bool = False
    invoice: int = 0

    async def get_product_by_code(self, code: str) -> Product | None:
        await asyncio.sleep(0.01)
        return self.products.get(code)

    async def resolve_coupon(self, code: str) -> Coupon | None:
        await asyncio.sleep(0.01)
        return self.coupons.get(code)

    async def get_institution_by_id(self, institution_id: str) -> Institution | None:
        return Institution(institution_id, "Universitas Indonesia")

    async def get_history_by_product_id(self, user_id: str, product_id: str) -> History:
        return History(installments=(
            HistoryInstallment(
                id="hist-1",
                order_id="ord-77",
                details=(
                    InstallmentPaymentDetail(1, PaymentStatus.SUCCESS, Decimal(1_500_000), date(2026, 9, 30)),
                    InstallmentPaymentDetail(2, PaymentStatus.PENDING, Decimal(1_200_000), date(2026, 10, 31)),
                    InstallmentPaymentDetail(3, PaymentStatus.PENDING, Decimal(1_185_000), date(2026, 11, 30)),
                ),
            ),
        ))

    def _next_invoice(self) -> str:
        self.invoice += 1
        return f"https://pay.example/invoice/{self.invoice}"

    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        await asyncio.sleep(0.01)
        if self.orders_down:
            raise ConnectionError("order service unavailable")
        print(f"  ✓ Order created for {payload.payer.email}")
        return OrderCreated(
            user=PayerCredentials(payload.payer.email, "temp-1234"),
            payment=PaymentLink(self._next_invoice()),
        )

    async def create_installment_payment(self, payload: OrderPayload) -> InstallmentCreated:
        await asyncio.sleep(0.01)
        print(f"  ✓ Installment invoice for order {payload.items[0].order_id}")
        return InstallmentCreated(PaymentLink(self._next_invoice()))

    async def sign_in(self, email: str, password: str) -> Result[None, str]:
        if self.sign_in_error is not None:
            print(f"  ✗ Sign in {email}: {self.sign_in_error}")
            return Error(self.sign_in_error)
        print(f"  ✓ Signed in {email}")
        return Ok(None)

    async def redirect(self, url: str) -> None:
        print(f"  → {url}")

    def gateways(self) -> Gateways:
        return Gateways(
            products=self,
            coupons=self,
            institutions=self,
            history=self,
            orders=self,
            session=self,
            navigator=self,
        )


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    logging.basicConfig(level=logging.WARNING, format="  [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(main())
