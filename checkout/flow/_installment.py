"""
Pay installment — settle the next pending installment of an existing order.

    validate → create installment payment → redirect

No account resolution: the payer is signed in on this path.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from kungfu import Result, Ok, Error, Some, Nothing
from combinators import delay

from checkout.config import CheckoutSettings, get_settings
from checkout.domain import HistoryInstallment, InstallmentPaymentDetail, OrderPayload
from checkout.errors import SubmissionError, SubmissionInProgress, ValidationErrors
from checkout.flow import _steps as S
from checkout.flow._machine import INSTALLMENT_TRANSITIONS, FlowState, StateMachine, Transition
from checkout.flow._submit import Redirect
from checkout.gateways import Gateways
from checkout.lift import from_collaborator
from checkout.order import validate_order
from checkout.pricing import next_pending_installment

logger = logging.getLogger(__name__)


def installment_label(detail: InstallmentPaymentDetail) -> str:
    return f"Pay installment #{detail.number}"


def with_order_id(payload: OrderPayload, order_id: str) -> OrderPayload:
    """Point every item at the existing order."""
    items = tuple(
        item if item.order_id == order_id else replace(item, order_id=order_id)
        for item in payload.items
    )
    return replace(payload, items=items)


class PayInstallmentFlow:
    def __init__(
        self,
        gateways: Gateways,
        installment: HistoryInstallment,
        *,
        settings: CheckoutSettings | None = None,
    ) -> None:
        self._gateways = gateways
        self._installment = installment
        self._settings = settings or get_settings()
        self._machine = StateMachine(INSTALLMENT_TRANSITIONS, "installment")
        self._busy = False

    @property
    def state(self) -> FlowState:
        return self._machine.state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._machine.transitions

    @property
    def next_detail(self) -> InstallmentPaymentDetail | None:
        return next_pending_installment(self._installment).unwrap_or_none()

    @property
    def label(self) -> str | None:
        """Action label, None when nothing is left to pay."""
        detail = self.next_detail
        return installment_label(detail) if detail is not None else None

    async def pay(self, payload: OrderPayload) -> Result[Redirect, SubmissionError]:
        if self._busy or self.state is FlowState.REDIRECTING:
            return Error(SubmissionInProgress(f"installment:{self._installment.id}"))

        self._busy = True
        try:
            return await self._pay(payload)
        finally:
            self._busy = False

    async def _pay(self, payload: OrderPayload) -> Result[Redirect, SubmissionError]:
        self._machine.go(FlowState.VALIDATING)

        match next_pending_installment(self._installment):
            case Some(detail):
                pass
            case Nothing():
                self._machine.go(FlowState.FAILED)
                return Error(ValidationErrors.single("installment", "No pending installment"))

        match validate_order(payload, self._settings):
            case Error(errors):
                self._machine.go(FlowState.FAILED)
                return Error(errors)
            case Ok(valid):
                pass

        request = with_order_id(valid, self._installment.order_id)
        self._machine.go(FlowState.SUBMITTING)
        logger.info(
            f"Paying installment {detail.number} of order {self._installment.order_id}"
        )

        create = S.step(
            "create_installment_payment",
            from_collaborator(
                "create_installment_payment",
                lambda: self._gateways.orders.create_installment_payment(request),
            ),
        )
        match await S.run_chain(create):
            case Error(failed):
                self._machine.go(FlowState.FAILED)
                return Error(failed.error)
            case Ok(done):
                url = done.value.payment.url

        self._machine.go(FlowState.REDIRECTING)
        navigate = delay(
            from_collaborator("redirect", lambda: self._gateways.navigator.redirect(url)),
            seconds=self._settings.redirect_delay_seconds,
        )
        match await navigate:
            case Error(nav_error):
                return Error(nav_error)
            case Ok(_):
                return Ok(Redirect(url, installment_label(detail)))


__all__ = ("installment_label", "with_order_id", "PayInstallmentFlow")
