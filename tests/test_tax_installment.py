from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given, strategies as st
from kungfu import Some, Nothing

from checkout.domain import (
    HistoryInstallment,
    InstallmentPaymentDetail,
    InstallmentPricingRow,
    PaymentStatus,
    Product,
)
from checkout.pricing import (
    InstallmentAmount,
    apply_tax,
    build_schedule,
    even_amount,
    next_pending_installment,
    offers_plan,
    tax_amount,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Tax
# ═══════════════════════════════════════════════════════════════════════════════


def test_ppn_is_added_to_subtotal():
    assert apply_tax(1_000_000, 11) == Decimal(1_110_000)
    assert tax_amount(1_000_000, 11) == Decimal(110_000)


@pytest.mark.parametrize("pct", [0, -1])
def test_non_positive_tax_is_a_no_op(pct):
    assert apply_tax(1_000_000, pct) == Decimal(1_000_000)
    assert tax_amount(1_000_000, pct) == 0


# ═══════════════════════════════════════════════════════════════════════════════
# Schedule
# ═══════════════════════════════════════════════════════════════════════════════


def test_even_division_floors_each_period():
    schedule = build_schedule(1_000_000, 3)
    assert [a.amount for a in schedule] == [Decimal(333_333)] * 3
    assert [a.number for a in schedule] == [1, 2, 3]
    assert sum(a.amount for a in schedule) == Decimal(999_999)


def test_authored_row_is_used_verbatim():
    rows = [InstallmentPricingRow.of(3, [500_000, 300_000, 200_000])]
    schedule = build_schedule(1_110_000, 3, rows)
    assert schedule == (
        InstallmentAmount(1, Decimal(500_000)),
        InstallmentAmount(2, Decimal(300_000)),
        InstallmentAmount(3, Decimal(200_000)),
    )


def test_authored_row_for_another_count_is_ignored():
    rows = [InstallmentPricingRow.of(6, [100] * 6)]
    assert [a.amount for a in build_schedule(900, 3, rows)] == [Decimal(300)] * 3


def test_malformed_authored_row_falls_back_to_even_division():
    rows = [InstallmentPricingRow.of(3, [100, 200])]
    assert [a.amount for a in build_schedule(900, 3, rows)] == [Decimal(300)] * 3


def test_count_below_one_is_rejected():
    with pytest.raises(ValueError):
        build_schedule(1000, 0)


@given(
    total=st.integers(min_value=0, max_value=10**10),
    count=st.integers(min_value=1, max_value=36),
)
def test_even_schedule_under_collects_by_less_than_count(total, count):
    schedule = build_schedule(total, count)
    collected = sum(a.amount for a in schedule)
    assert len(schedule) == count
    assert all(a.amount == even_amount(total, count) for a in schedule)
    assert 0 <= total - collected < count


def test_plan_requires_installment_product_and_more_than_one_period(tiered_product, product):
    assert offers_plan(tiered_product, 3)
    assert not offers_plan(tiered_product, 1)
    assert not offers_plan(tiered_product, 0)
    assert not offers_plan(product, 3)


def test_product_with_only_authored_rows_supports_installments():
    product = Product.of(
        "p", "Rows only", 900, code="RO",
        installment_price=[InstallmentPricingRow.of(2, [450, 450])],
    )
    assert product.supports_installments


# ═══════════════════════════════════════════════════════════════════════════════
# Pending installment
# ═══════════════════════════════════════════════════════════════════════════════


def _detail(number, status):
    return InstallmentPaymentDetail(number, status, Decimal(370_000), date(2026, 11, number))


def test_next_pending_picks_lowest_number():
    installment = HistoryInstallment(
        id="h-1",
        order_id="o-1",
        details=(
            _detail(3, PaymentStatus.PENDING),
            _detail(1, PaymentStatus.SUCCESS),
            _detail(2, PaymentStatus.PENDING),
        ),
    )
    assert next_pending_installment(installment) == Some(_detail(2, PaymentStatus.PENDING))


def test_no_pending_installment_is_nothing():
    installment = HistoryInstallment(
        id="h-1",
        order_id="o-1",
        details=(_detail(1, PaymentStatus.SUCCESS), _detail(2, PaymentStatus.EXPIRED)),
    )
    assert next_pending_installment(installment) is Nothing()
