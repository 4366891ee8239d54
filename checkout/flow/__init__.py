"""
Flow — the network side of checkout.

    from checkout import flow as F

    preview = (await F.prepare_checkout(gateways, "KELAS-01", coupon_code="HEMAT10")).unwrap()

    submission = F.OrderSubmissionFlow(gateways)
    result = await submission.submit(
        preview.product, preview.selected_price, preview.coupon, payload,
        authenticated=False,
    )

    installment = F.PayInstallmentFlow(gateways, history.installments[0])
    result = await installment.pay(payload)
"""

from checkout.flow._machine import (
    FlowState,
    Transition,
    StateMachine,
    ORDER_TRANSITIONS,
    INSTALLMENT_TRANSITIONS,
)
from checkout.flow._guard import RecordState, SubmissionGuard, submission_key
from checkout.flow._submit import Redirect, Submitted, OrderSubmissionFlow
from checkout.flow._installment import installment_label, with_order_id, PayInstallmentFlow
from checkout.flow._prepare import CheckoutPreview, prepare_checkout

__all__ = (
    # State machine
    "FlowState",
    "Transition",
    "StateMachine",
    "ORDER_TRANSITIONS",
    "INSTALLMENT_TRANSITIONS",
    # Guard
    "RecordState",
    "SubmissionGuard",
    "submission_key",
    # Flows
    "Redirect",
    "Submitted",
    "OrderSubmissionFlow",
    "installment_label",
    "with_order_id",
    "PayInstallmentFlow",
    # Preparation
    "CheckoutPreview",
    "prepare_checkout",
)
