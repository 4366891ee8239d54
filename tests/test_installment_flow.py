from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from kungfu import Ok, Error

from checkout.domain import (
    HistoryInstallment,
    InstallmentPaymentDetail,
    OrderItem,
    OrderPayload,
    PaymentStatus,
)
from checkout.errors import NetworkError, ValidationErrors
from checkout.flow import FlowState, PayInstallmentFlow, Redirect, with_order_id


def _installment(*statuses: PaymentStatus) -> HistoryInstallment:
    return HistoryInstallment(
        id="h-7",
        order_id="ord-42",
        details=tuple(
            InstallmentPaymentDetail(n, s, Decimal(370_000), date(2026, n, 28))
            for n, s in enumerate(statuses, start=1)
        ),
    )


@pytest.fixture
def installment() -> HistoryInstallment:
    return _installment(PaymentStatus.SUCCESS, PaymentStatus.PENDING, PaymentStatus.PENDING)


def test_label_names_next_pending(gateways, settings, installment):
    flow = PayInstallmentFlow(gateways, installment, settings=settings)
    assert flow.next_detail.number == 2
    assert flow.label == "Pay installment #2"


def test_with_order_id_points_items_at_order():
    payload = OrderPayload(items=(OrderItem("p-1"), OrderItem("p-2", order_id="ord-42")))
    payload = with_order_id(payload, "ord-42")
    assert [i.order_id for i in payload.items] == ["ord-42", "ord-42"]


async def test_pays_next_installment(gateways, backend, settings, installment, payload):
    flow = PayInstallmentFlow(gateways, installment, settings=settings)

    result = await flow.pay(payload)

    assert result == Ok(Redirect("https://pay.example/inv/2", "Pay installment #2"))
    assert flow.state is FlowState.REDIRECTING
    sent = backend.calls[0][1][0]
    assert sent.items[0].order_id == "ord-42"
    assert backend.called("sign_in") == 0
    assert backend.redirects == ["https://pay.example/inv/2"]


async def test_nothing_left_to_pay(gateways, backend, settings, payload):
    flow = PayInstallmentFlow(
        gateways, _installment(PaymentStatus.SUCCESS, PaymentStatus.SUCCESS), settings=settings
    )
    assert flow.label is None

    match await flow.pay(payload):
        case Error(ValidationErrors() as errors):
            assert errors.fields == ("installment",)
        case other:
            raise AssertionError(other)

    assert backend.calls == []
    assert flow.state is FlowState.FAILED


async def test_invalid_payer_blocks_payment(gateways, backend, settings, installment, payload):
    flow = PayInstallmentFlow(gateways, installment, settings=settings)
    bad = replace(payload, payer=replace(payload.payer, email="siti"))

    errors = (await flow.pay(bad)).unwrap_err()

    assert errors.fields == ("email",)
    assert backend.calls == []


async def test_gateway_failure_can_be_retried(gateways, backend, settings, installment, payload):
    backend.fail_create_installment = TimeoutError()
    flow = PayInstallmentFlow(gateways, installment, settings=settings)

    assert await flow.pay(payload) == Error(
        NetworkError("create_installment_payment", "TimeoutError")
    )
    assert flow.state is FlowState.FAILED

    backend.fail_create_installment = None
    assert isinstance(await flow.pay(payload), Ok)
    assert flow.state is FlowState.REDIRECTING
