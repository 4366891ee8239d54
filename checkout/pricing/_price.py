"""
Price selection — which price applies to a product right now.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from kungfu import Result, Ok, Error

from checkout._types import Money
from checkout.domain import Bound, PriceTier, Product
from checkout.errors import NotFoundError

# ═══════════════════════════════════════════════════════════════════════════════
# SelectedPrice
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SelectedPrice:
    """The applicable price, with the tier's labels when a tier won."""

    price: Money
    title: str | None = None
    desc: str | None = None
    tier_id: str | None = None

    @classmethod
    def from_tier(cls, tier: PriceTier) -> SelectedPrice:
        return cls(price=tier.price, title=tier.title, desc=tier.desc, tier_id=tier.id)

    @classmethod
    def base(cls, product: Product) -> SelectedPrice:
        return cls(price=product.price)


# ═══════════════════════════════════════════════════════════════════════════════
# Window matching
# ═══════════════════════════════════════════════════════════════════════════════


def _wall_clock(now: datetime, bound: datetime) -> tuple[datetime, datetime]:
    # mixed naive/aware pairs compare by wall-clock time
    if (now.tzinfo is None) == (bound.tzinfo is None):
        return now, bound
    return now.replace(tzinfo=None), bound.replace(tzinfo=None)


def _not_before(now: datetime, bound: Bound) -> bool:
    # date bounds compare by day, datetime bounds by instant
    if isinstance(bound, datetime):
        now, bound = _wall_clock(now, bound)
        return now >= bound
    return now.date() >= bound


def _not_after(now: datetime, bound: Bound) -> bool:
    if isinstance(bound, datetime):
        now, bound = _wall_clock(now, bound)
        return now <= bound
    return now.date() <= bound


def tier_contains(tier: PriceTier, now: datetime) -> bool:
    """start_at <= now <= finish_at, a missing bound is unconstrained."""
    if tier.start_at is not None and not _not_before(now, tier.start_at):
        return False
    if tier.finish_at is not None and not _not_after(now, tier.finish_at):
        return False
    return True


def current_tier(product: Product, now: datetime) -> PriceTier | None:
    """First tier, in declaration order, whose window contains now."""
    for tier in product.product_price:
        if tier_contains(tier, now):
            return tier
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# select_price()
# ═══════════════════════════════════════════════════════════════════════════════


def select_price(
    product: Product,
    tier_id: str | None = None,
    *,
    now: datetime | date | None = None,
) -> Result[SelectedPrice, NotFoundError]:
    """
    Pick the price for a product.

    An explicit tier_id bypasses date matching (checkout links that pin an
    offer). Otherwise the current tier wins, falling back to product.price.

    Example:
        match select_price(product, now=datetime(2026, 10, 18)):
            case Ok(selected):
                print(selected.title, selected.price)
            case Error(not_found):
                ...
    """
    if tier_id is not None:
        tier = product.tier(tier_id)
        if tier is None:
            return Error(NotFoundError("price_tier", tier_id))
        return Ok(SelectedPrice.from_tier(tier))

    if now is None:
        now = datetime.now()
    elif not isinstance(now, datetime):
        now = datetime(now.year, now.month, now.day)

    tier = current_tier(product, now)
    if tier is None:
        return Ok(SelectedPrice.base(product))
    return Ok(SelectedPrice.from_tier(tier))


__all__ = ("SelectedPrice", "tier_contains", "current_tier", "select_price")
