from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pytest
from kungfu import Result, Ok

from checkout.config import CheckoutSettings
from checkout.domain import (
    Coupon,
    History,
    InstallmentCreated,
    InstallmentPricingRow,
    Institution,
    OrderCreated,
    OrderItem,
    OrderPayload,
    Payer,
    PayerCredentials,
    PaymentLink,
    PriceTier,
    Product,
)
from checkout.gateways import Gateways


@dataclass
class FakeBackend:
    """Records every collaborator call; behaviour is set per test."""

    products: dict[str, Product] = field(default_factory=dict)
    coupons: dict[str, Coupon] = field(default_factory=dict)
    institutions: dict[str, Institution] = field(default_factory=dict)
    history: History = field(default_factory=History)
    sign_in_result: Result[None, str] = field(default_factory=lambda: Ok(None))
    fail_create_order: Exception | None = None
    fail_create_installment: Exception | None = None
    calls: list[tuple[str, tuple]] = field(default_factory=list)
    redirects: list[str] = field(default_factory=list)

    def called(self, name: str) -> int:
        return sum(1 for n, _ in self.calls if n == name)

    async def get_product_by_code(self, code: str) -> Product | None:
        self.calls.append(("get_product", (code,)))
        return self.products.get(code)

    async def resolve_coupon(self, code: str) -> Coupon | None:
        self.calls.append(("resolve_coupon", (code,)))
        return self.coupons.get(code)

    async def get_institution_by_id(self, institution_id: str) -> Institution | None:
        self.calls.append(("get_institution", (institution_id,)))
        return self.institutions.get(institution_id)

    async def get_history_by_product_id(self, user_id: str, product_id: str) -> History:
        self.calls.append(("get_history", (user_id, product_id)))
        return self.history

    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        self.calls.append(("create_order", (payload,)))
        if self.fail_create_order is not None:
            raise self.fail_create_order
        return OrderCreated(
            user=PayerCredentials(payload.payer.email, "generated-pass"),
            payment=PaymentLink("https://pay.example/inv/1"),
        )

    async def create_installment_payment(self, payload: OrderPayload) -> InstallmentCreated:
        self.calls.append(("create_installment", (payload,)))
        if self.fail_create_installment is not None:
            raise self.fail_create_installment
        return InstallmentCreated(PaymentLink("https://pay.example/inv/2"))

    async def sign_in(self, email: str, password: str) -> Result[None, str]:
        self.calls.append(("sign_in", (email, password)))
        return self.sign_in_result

    async def redirect(self, url: str) -> None:
        self.calls.append(("redirect", (url,)))
        self.redirects.append(url)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def gateways(backend: FakeBackend) -> Gateways:
    return Gateways(
        products=backend,
        coupons=backend,
        institutions=backend,
        history=backend,
        orders=backend,
        session=backend,
        navigator=backend,
    )


@pytest.fixture
def settings() -> CheckoutSettings:
    return CheckoutSettings(redirect_delay_seconds=0)


@pytest.fixture
def product() -> Product:
    return Product.of(
        "p-1",
        "Kelas Data Science",
        1_000_000,
        code="DS-01",
        ppn=11,
        image_url="https://cdn.example/ds.png",
    )


@pytest.fixture
def tiered_product() -> Product:
    return Product.of(
        "p-2",
        "Bootcamp",
        2_000_000,
        code="BC-01",
        is_custom_price=True,
        image_url="https://cdn.example/bc.png",
        product_price=[
            PriceTier.of(1_500_000, id="early", title="Early bird",
                         start_at=date(2026, 1, 1), finish_at=date(2026, 3, 31)),
            PriceTier.of(1_750_000, id="normal", title="Normal",
                         start_at=date(2026, 4, 1)),
            PriceTier.of(1_250_000, id="partner", title="Partner"),
        ],
        installment=[3, 6],
        installment_price=[InstallmentPricingRow.of(3, [600_000, 600_000, 600_000])],
    )


@pytest.fixture
def payer() -> Payer:
    return Payer(name="Siti Rahma", email="siti@mail.id", phone="081234567890")


@pytest.fixture
def payload(payer: Payer) -> OrderPayload:
    return OrderPayload(
        payment_method="BCA_VA",
        items=(OrderItem(product_id="p-1", quantity=1),),
        payer=payer,
    )
