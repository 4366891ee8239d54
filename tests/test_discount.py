from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from checkout.domain import Coupon, ValueType
from checkout.errors import CouponIgnored
from checkout.pricing import (
    CouponApplied,
    apply_discount,
    calculate_discount_percentage,
    price_after_discount,
)


def test_no_coupon_keeps_base():
    result = apply_discount(1_000_000)
    assert result.subtotal == Decimal(1_000_000)
    assert result.discount_amount == 0
    assert result.coupon is None


def test_percentage_coupon():
    result = apply_discount(1_000_000, Coupon("HEMAT10", 10, ValueType.PERCENTAGE))
    assert result.subtotal == Decimal(900_000)
    assert result.discount_amount == Decimal(100_000)
    assert result.coupon == CouponApplied("HEMAT10", ValueType.PERCENTAGE, Decimal(10))


def test_value_type_is_parsed_from_string():
    result = apply_discount(200, Coupon("x", "25", "percentage"))
    assert result.subtotal == Decimal(150)


def test_fixed_coupon():
    result = apply_discount(1_000_000, Coupon("POTONG", 250_000, ValueType.FIXED))
    assert result.subtotal == Decimal(750_000)


def test_fixed_coupon_larger_than_base_clamps_to_zero():
    result = apply_discount(100_000, Coupon("BIG", 250_000, "FIXED"))
    assert result.subtotal == 0
    assert result.discount_amount == Decimal(100_000)


@pytest.mark.parametrize(
    "coupon",
    [
        Coupon("BAD", 10, "BOGO"),
        Coupon("BAD", "sepuluh", ValueType.PERCENTAGE),
        Coupon("BAD", None, ValueType.FIXED),
        Coupon("BAD", 0, ValueType.FIXED),
        Coupon("BAD", -5, ValueType.PERCENTAGE),
        Coupon("BAD", 150, ValueType.PERCENTAGE),
        Coupon("BAD", Decimal("NaN"), ValueType.FIXED),
        Coupon("BAD", Decimal("Infinity"), ValueType.PERCENTAGE),
    ],
)
def test_unusable_coupon_is_ignored(coupon):
    result = apply_discount(1_000_000, coupon)
    assert result.subtotal == Decimal(1_000_000)
    assert result.discount_amount == 0
    assert isinstance(result.ignored, CouponIgnored)
    assert result.ignored.code == "BAD"


def test_percentage_helpers():
    assert calculate_discount_percentage(1_000_000, 10) == Decimal(100_000)
    assert price_after_discount(1_000_000, 10) == Decimal(900_000)


@given(
    base=st.integers(min_value=0, max_value=10**10),
    pct=st.integers(min_value=1, max_value=100),
)
def test_percentage_discount_stays_within_base(base, pct):
    result = apply_discount(base, Coupon("P", pct, ValueType.PERCENTAGE))
    assert 0 <= result.subtotal <= base
    assert result.subtotal + result.discount_amount == base


@given(
    base=st.integers(min_value=0, max_value=10**10),
    value=st.integers(min_value=1, max_value=10**11),
)
def test_fixed_discount_never_negative(base, value):
    result = apply_discount(base, Coupon("F", value, ValueType.FIXED))
    assert result.subtotal >= 0
    assert result.discount_amount == min(value, base)
