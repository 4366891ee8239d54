"""
Checkout preparation — everything the checkout page needs before the
payer fills the form.

    product (by code) ─► coupon (optional) ─► selected price ─► summary

A missing product or pinned tier is a NotFoundError: the caller leaves
the checkout. An invalid coupon only produces a notice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from kungfu import Result, Ok, Error

from checkout.domain import Coupon, Institution, Product
from checkout.errors import CouponIgnored, NetworkError, NotFoundError
from checkout.gateways import Gateways
from checkout.lift import from_collaborator
from checkout.order import OrderSummary, price_order
from checkout.pricing import SelectedPrice, select_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckoutPreview:
    product: Product
    selected_price: SelectedPrice
    coupon: Coupon | None
    summary: OrderSummary
    institution: Institution | None = None
    notices: tuple[CouponIgnored, ...] = ()


async def _resolve_coupon(
    gateways: Gateways, code: str
) -> tuple[Coupon | None, CouponIgnored | None]:
    match await from_collaborator("resolve_coupon", lambda: gateways.coupons.resolve_coupon(code)):
        case Ok(coupon) if coupon is not None:
            return coupon, None
        case Ok(_):
            return None, CouponIgnored(code, "invalid or expired")
        case Error(err):
            return None, CouponIgnored(code, f"lookup failed: {err.message}")


async def prepare_checkout(
    gateways: Gateways,
    code: str,
    *,
    tier_id: str | None = None,
    coupon_code: str | None = None,
    installment_count: int = 0,
    institution_id: str | None = None,
    now: datetime | date | None = None,
) -> Result[CheckoutPreview, NotFoundError | NetworkError]:
    match await from_collaborator("get_product", lambda: gateways.products.get_product_by_code(code)):
        case Error(err):
            return Error(err)
        case Ok(None):
            logger.info(f"Checkout for unknown product code {code!r}")
            return Error(NotFoundError("product", code))
        case Ok(found):
            product: Product = found

    coupon: Coupon | None = None
    notices: list[CouponIgnored] = []
    if coupon_code:
        coupon, notice = await _resolve_coupon(gateways, coupon_code)
        if notice is not None:
            notices.append(notice)

    institution: Institution | None = None
    if institution_id:
        # display only, a failed lookup does not block checkout
        match await from_collaborator(
            "get_institution",
            lambda: gateways.institutions.get_institution_by_id(institution_id),
        ):
            case Ok(inst):
                institution = inst
            case Error(_):
                pass

    match select_price(product, tier_id, now=now):
        case Error(not_found):
            return Error(not_found)
        case Ok(selected):
            pass

    summary = price_order(product, selected, coupon, installment_count)
    if (ignored := summary.discount.ignored) is not None:
        notices.append(ignored)

    return Ok(CheckoutPreview(
        product=product,
        selected_price=selected,
        coupon=coupon,
        summary=summary,
        institution=institution,
        notices=tuple(notices),
    ))


__all__ = ("CheckoutPreview", "prepare_checkout")
