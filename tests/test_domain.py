from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from kungfu import Ok, Error

from checkout._types import to_money
from checkout.domain import (
    InstallmentPricingRow,
    PriceTier,
    Product,
    ValueType,
    coupon_from_payload,
    validate_product,
)
from checkout.pricing import format_date, format_rupiah, round_rupiah


def test_to_money_goes_through_str_for_floats():
    assert to_money(0.1) == Decimal("0.1")
    assert to_money(" 1500 ") == Decimal(1500)
    assert to_money(Decimal("2.5")) == Decimal("2.5")


@pytest.mark.parametrize(
    "bad", ["abc", "", True, float("inf"), "NaN", Decimal("NaN"), Decimal("-Infinity")]
)
def test_to_money_rejects_non_numbers(bad):
    with pytest.raises(ValueError):
        to_money(bad)


def test_valid_product_passes(product, tiered_product):
    assert validate_product(product) == Ok(product)
    assert validate_product(tiered_product) == Ok(tiered_product)


def test_product_errors_are_collected():
    product = Product.of(
        "p", "", -1, ppn=120,
        product_price=[
            PriceTier.of(-5, start_at=date(2026, 5, 1), finish_at=date(2026, 4, 1)),
        ],
        installment_price=[InstallmentPricingRow.of(0, [-1])],
    )
    match validate_product(product):
        case Error(errors):
            assert set(errors.fields) == {
                "name",
                "code",
                "price",
                "ppn",
                "image_url",
                "product_price.0.price",
                "product_price.0.finish_at",
                "installment_price.0.count",
                "installment_price.0.amounts",
            }
            assert errors.as_dict()["image_url"] == "Thumbnail is required"
        case Ok(_):
            raise AssertionError("invalid product accepted")


def test_mixed_naive_and_aware_bounds_are_validated():
    aware_start = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
    ok = Product.of(
        "p", "Mixed", 10, code="MX", image_url="https://cdn.example/mx.png",
        product_price=[PriceTier.of(5, start_at=aware_start, finish_at=date(2026, 5, 2))],
    )
    inverted = Product.of(
        "p", "Mixed", 10, code="MX", image_url="https://cdn.example/mx.png",
        product_price=[PriceTier.of(5, start_at=aware_start, finish_at=date(2026, 4, 30))],
    )

    assert validate_product(ok) == Ok(ok)
    assert validate_product(inverted).unwrap_err().fields == ("product_price.0.finish_at",)


def test_registration_product():
    product = Product.of("p", "Reg", 0, booking_fee=250_000)
    assert product.is_registration
    assert not Product.of("p", "Normal", 10).is_registration


def test_coupon_from_payload_keeps_raw_values():
    coupon = coupon_from_payload({"code": "HEMAT", "value": "10", "value_type": "PERCENTAGE", "id": 7})
    assert coupon.code == "HEMAT"
    assert coupon.value == "10"
    assert coupon.value_type == "PERCENTAGE"
    assert coupon.value_type != ValueType.PERCENTAGE


# ═══════════════════════════════════════════════════════════════════════════════
# Formatting
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (1_000_000, "Rp 1.000.000"),
        (0, "Rp 0"),
        (999, "Rp 999"),
        (Decimal("1110000.5"), "Rp 1.110.001"),
        (-25_000, "-Rp 25.000"),
    ],
)
def test_format_rupiah(amount, expected):
    assert format_rupiah(amount) == expected


def test_format_rupiah_custom_symbol():
    assert format_rupiah(1500, symbol="IDR") == "IDR 1.500"


def test_round_rupiah_is_half_up():
    assert round_rupiah(Decimal("10.5")) == Decimal(11)
    assert round_rupiah(Decimal("10.49")) == Decimal(10)


def test_format_date_in_indonesian():
    assert format_date(date(2026, 10, 18)) == "18 Oktober 2026"
    assert format_date(date(2026, 5, 1)) == "1 Mei 2026"
