"""
Gateways — collaborator protocols at the checkout boundary.

Concrete HTTP clients live outside this package. Implementations may raise
on transport failure; the flow wraps every call and turns exceptions into
NetworkError.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from kungfu import Result

from checkout.domain import (
    Coupon,
    History,
    InstallmentCreated,
    Institution,
    OrderCreated,
    OrderPayload,
    Product,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Protocols
# ═══════════════════════════════════════════════════════════════════════════════


class ProductGateway(Protocol):
    async def get_product_by_code(self, code: str) -> Product | None:
        """None when no product has this code."""
        ...


class CouponGateway(Protocol):
    async def resolve_coupon(self, code: str) -> Coupon | None:
        """None when the code is invalid or expired."""
        ...


class InstitutionGateway(Protocol):
    async def get_institution_by_id(self, institution_id: str) -> Institution | None:
        ...


class HistoryGateway(Protocol):
    async def get_history_by_product_id(self, user_id: str, product_id: str) -> History:
        ...


class OrderGateway(Protocol):
    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        ...

    async def create_installment_payment(self, payload: OrderPayload) -> InstallmentCreated:
        """Payload carries order_id on its item and extended payer fields."""
        ...


class SessionGateway(Protocol):
    async def sign_in(self, email: str, password: str) -> Result[None, str]:
        """Credential sign-in. Error carries the provider's message."""
        ...


class Navigator(Protocol):
    async def redirect(self, url: str) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Function-based Gateway Builder
# ═══════════════════════════════════════════════════════════════════════════════

type GetProductFn = Callable[[str], Awaitable[Product | None]]
type ResolveCouponFn = Callable[[str], Awaitable[Coupon | None]]
type GetInstitutionFn = Callable[[str], Awaitable[Institution | None]]
type GetHistoryFn = Callable[[str, str], Awaitable[History]]
type CreateOrderFn = Callable[[OrderPayload], Awaitable[OrderCreated]]
type CreateInstallmentFn = Callable[[OrderPayload], Awaitable[InstallmentCreated]]
type SignInFn = Callable[[str, str], Awaitable[Result[None, str]]]
type RedirectFn = Callable[[str], Awaitable[None]]


@dataclass(frozen=True)
class FunctionalGateways:
    """
    Gateways built from plain async functions.

    Example:
        gateways = gateways_from(
            get_product=api.products.by_code,
            create_order=api.orders.create,
            sign_in=auth.sign_in,
            redirect=browser.open,
        )
    """

    _get_product: GetProductFn | None = None
    _resolve_coupon: ResolveCouponFn | None = None
    _get_institution: GetInstitutionFn | None = None
    _get_history: GetHistoryFn | None = None
    _create_order: CreateOrderFn | None = None
    _create_installment: CreateInstallmentFn | None = None
    _sign_in: SignInFn | None = None
    _redirect: RedirectFn | None = None

    @staticmethod
    def _require[F](fn: F | None, name: str) -> F:
        if fn is None:
            raise NotImplementedError(f"No {name} function configured")
        return fn

    async def get_product_by_code(self, code: str) -> Product | None:
        return await self._require(self._get_product, "get_product")(code)

    async def resolve_coupon(self, code: str) -> Coupon | None:
        return await self._require(self._resolve_coupon, "resolve_coupon")(code)

    async def get_institution_by_id(self, institution_id: str) -> Institution | None:
        return await self._require(self._get_institution, "get_institution")(institution_id)

    async def get_history_by_product_id(self, user_id: str, product_id: str) -> History:
        return await self._require(self._get_history, "get_history")(user_id, product_id)

    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        return await self._require(self._create_order, "create_order")(payload)

    async def create_installment_payment(self, payload: OrderPayload) -> InstallmentCreated:
        return await self._require(self._create_installment, "create_installment")(payload)

    async def sign_in(self, email: str, password: str) -> Result[None, str]:
        return await self._require(self._sign_in, "sign_in")(email, password)

    async def redirect(self, url: str) -> None:
        await self._require(self._redirect, "redirect")(url)


@dataclass(frozen=True)
class Gateways:
    """Everything the checkout talks to."""

    products: ProductGateway
    coupons: CouponGateway
    institutions: InstitutionGateway
    history: HistoryGateway
    orders: OrderGateway
    session: SessionGateway
    navigator: Navigator


def gateways_from(
    *,
    get_product: GetProductFn | None = None,
    resolve_coupon: ResolveCouponFn | None = None,
    get_institution: GetInstitutionFn | None = None,
    get_history: GetHistoryFn | None = None,
    create_order: CreateOrderFn | None = None,
    create_installment: CreateInstallmentFn | None = None,
    sign_in: SignInFn | None = None,
    redirect: RedirectFn | None = None,
) -> Gateways:
    """
    Create Gateways from functions. Missing ones raise NotImplementedError
    when called, which the flow reports as a NetworkError.
    """
    fns = FunctionalGateways(
        _get_product=get_product,
        _resolve_coupon=resolve_coupon,
        _get_institution=get_institution,
        _get_history=get_history,
        _create_order=create_order,
        _create_installment=create_installment,
        _sign_in=sign_in,
        _redirect=redirect,
    )
    return Gateways(
        products=fns,
        coupons=fns,
        institutions=fns,
        history=fns,
        orders=fns,
        session=fns,
        navigator=fns,
    )


__all__ = (
    "ProductGateway",
    "CouponGateway",
    "InstitutionGateway",
    "HistoryGateway",
    "OrderGateway",
    "SessionGateway",
    "Navigator",
    "FunctionalGateways",
    "Gateways",
    "gateways_from",
)
