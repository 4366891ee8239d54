"""
Order submission flow.

    validate → create order → (sign in with provisional credentials) → redirect

The sign-in step runs only without an authenticated session. "Invalid
password" from sign-in is tolerated: the payer account may already exist
with another password, and the order is created either way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from kungfu import Result, Ok, Error, LazyCoroResult
from combinators import delay

from checkout._types import Lazy
from checkout.config import CheckoutSettings, get_settings
from checkout.domain import Coupon, OrderCreated, OrderPayload, Product
from checkout.errors import (
    FatalAuthError,
    NetworkError,
    SubmissionError,
    SubmissionInProgress,
)
from checkout.flow import _steps as S
from checkout.flow._guard import SubmissionGuard, submission_key
from checkout.flow._machine import ORDER_TRANSITIONS, FlowState, StateMachine, Transition
from checkout.gateways import Gateways
from checkout.lift import from_collaborator
from checkout.order import OrderSummary, compose
from checkout.pricing import SelectedPrice

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Redirect:
    """Where the user agent was sent."""

    url: str
    label: str | None = None


@dataclass(frozen=True, slots=True)
class Submitted:
    summary: OrderSummary
    redirect: Redirect
    signed_in: bool


@dataclass(frozen=True, slots=True)
class _Account:
    created: OrderCreated
    signed_in: bool


class OrderSubmissionFlow:
    """
    One checkout page's submission state machine.

    Example:
        flow = OrderSubmissionFlow(gateways)
        match await flow.submit(product, selected, coupon, payload, authenticated=False):
            case Ok(done):
                ...  # user agent is on done.redirect.url
            case Error(ValidationErrors() as errors):
                show(errors.as_dict())
            case Error(err):
                toast(err.user_message)
    """

    def __init__(
        self,
        gateways: Gateways,
        *,
        settings: CheckoutSettings | None = None,
        guard: SubmissionGuard | None = None,
    ) -> None:
        self._gateways = gateways
        self._settings = settings or get_settings()
        self._guard = guard or SubmissionGuard(
            timedelta(seconds=self._settings.submission_guard_ttl_seconds)
        )
        self._machine = StateMachine(ORDER_TRANSITIONS, "order")
        self._busy = False
        self.payment_url: str | None = None

    @property
    def state(self) -> FlowState:
        return self._machine.state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._machine.transitions

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(
        self,
        product: Product,
        selected: SelectedPrice,
        coupon: Coupon | None,
        payload: OrderPayload,
        *,
        authenticated: bool,
    ) -> Result[Submitted, SubmissionError]:
        if self._busy or self.state is FlowState.REDIRECTING:
            return Error(SubmissionInProgress("order"))

        self._busy = True
        try:
            return await self._submit(product, selected, coupon, payload, authenticated)
        finally:
            self._busy = False

    async def _submit(
        self,
        product: Product,
        selected: SelectedPrice,
        coupon: Coupon | None,
        payload: OrderPayload,
        authenticated: bool,
    ) -> Result[Submitted, SubmissionError]:
        self._machine.go(FlowState.VALIDATING)

        match compose(product, selected, coupon, payload, settings=self._settings):
            case Error(errors):
                logger.info(f"Order rejected by validation: {errors.fields}")
                self._machine.go(FlowState.FAILED)
                return Error(errors)
            case Ok(summary):
                pass

        key = submission_key(payload)
        match await self._guard.acquire(key):
            case Error(in_progress):
                logger.warning("Duplicate order submission rejected")
                self._machine.go(FlowState.FAILED)
                return Error(in_progress)
            case Ok(_):
                pass

        self._machine.go(FlowState.SUBMITTING)

        chain = (
            S.step(
                "create_order",
                from_collaborator(
                    "create_order",
                    lambda: self._gateways.orders.create_order(payload),
                ),
            )
            .then(lambda created: self._account_step(created, authenticated))
        )

        match await S.run_chain(chain):
            case Error(failed):
                await self._guard.release(key)
                self._machine.go(FlowState.FAILED)
                if isinstance(failed.error, FatalAuthError):
                    logger.error(f"Sign-in after order creation failed: {failed.error.message}")
                return Error(failed.error)
            case Ok(done):
                account: _Account = done.value
                created = account.created

        await self._guard.complete(key)
        self._machine.go(FlowState.REDIRECTING)
        self.payment_url = created.payment.url

        match await self._navigate(created.payment.url):
            case Error(nav_error):
                return Error(nav_error)
            case Ok(_):
                pass

        return Ok(Submitted(summary, Redirect(created.payment.url), account.signed_in))

    # ═══════════════════════════════════════════════════════════════════════════
    # Steps
    # ═══════════════════════════════════════════════════════════════════════════

    def _account_step(
        self, created: OrderCreated, authenticated: bool
    ) -> S.Step[_Account, FatalAuthError]:
        if authenticated:
            return S.pure("session_exists", _Account(created, signed_in=False))

        self._machine.go(FlowState.AWAITING_PAYER_ACCOUNT)
        return S.step("sign_in", self._sign_in(created))

    def _sign_in(self, created: OrderCreated) -> Lazy[_Account, FatalAuthError]:
        session = self._gateways.session
        settings = self._settings

        async def run() -> Result[_Account, FatalAuthError]:
            try:
                result = await session.sign_in(created.user.email, created.user.password)
            except Exception as exc:
                return Error(FatalAuthError(str(exc) or exc.__class__.__name__))

            match result:
                case Ok(_):
                    return Ok(_Account(created, signed_in=True))
                case Error(message) if (
                    settings.tolerate_invalid_password
                    and message == settings.tolerated_sign_in_error
                ):
                    logger.info(f"Sign-in returned {message!r}, continuing to payment")
                    return Ok(_Account(created, signed_in=False))
                case Error(message):
                    return Error(FatalAuthError(str(message)))

        return LazyCoroResult(run)

    def _navigate(self, url: str) -> Lazy[None, NetworkError]:
        # Short pause so the user sees the success state before leaving.
        return delay(
            from_collaborator("redirect", lambda: self._gateways.navigator.redirect(url)),
            seconds=self._settings.redirect_delay_seconds,
        )


__all__ = ("Redirect", "Submitted", "OrderSubmissionFlow")
