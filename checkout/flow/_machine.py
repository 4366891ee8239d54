"""
Flow states and the transition table.

    IDLE → VALIDATING → SUBMITTING → AWAITING_PAYER_ACCOUNT → REDIRECTING
              │             │  └──────────────────────────────▲
              ▼             ▼               │
            FAILED ◄────────┴───────────────┘

FAILED is re-entrant: the user corrects the form and submits again.
REDIRECTING is terminal success.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from checkout.errors import InvalidTransition

logger = logging.getLogger(__name__)


class FlowState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    AWAITING_PAYER_ACCOUNT = "awaiting_payer_account"
    REDIRECTING = "redirecting"
    FAILED = "failed"


type TransitionTable = Mapping[FlowState, frozenset[FlowState]]

ORDER_TRANSITIONS: TransitionTable = {
    FlowState.IDLE: frozenset({FlowState.VALIDATING}),
    FlowState.VALIDATING: frozenset({FlowState.SUBMITTING, FlowState.FAILED}),
    FlowState.SUBMITTING: frozenset({
        FlowState.AWAITING_PAYER_ACCOUNT,
        FlowState.REDIRECTING,
        FlowState.FAILED,
    }),
    FlowState.AWAITING_PAYER_ACCOUNT: frozenset({FlowState.REDIRECTING, FlowState.FAILED}),
    FlowState.REDIRECTING: frozenset(),
    FlowState.FAILED: frozenset({FlowState.VALIDATING}),
}

# Paying an installment: the payer is already signed in.
INSTALLMENT_TRANSITIONS: TransitionTable = {
    FlowState.IDLE: frozenset({FlowState.VALIDATING}),
    FlowState.VALIDATING: frozenset({FlowState.SUBMITTING, FlowState.FAILED}),
    FlowState.SUBMITTING: frozenset({FlowState.REDIRECTING, FlowState.FAILED}),
    FlowState.REDIRECTING: frozenset(),
    FlowState.FAILED: frozenset({FlowState.VALIDATING}),
}


@dataclass(frozen=True, slots=True)
class Transition:
    source: FlowState
    target: FlowState


class StateMachine:
    """Current state plus the log of transitions taken."""

    def __init__(self, table: TransitionTable, name: str) -> None:
        self._table = table
        self._name = name
        self._state = FlowState.IDLE
        self._transitions: list[Transition] = []

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._transitions)

    def can(self, target: FlowState) -> bool:
        return target in self._table.get(self._state, frozenset())

    def go(self, target: FlowState) -> None:
        if not self.can(target):
            raise InvalidTransition(self._state, target)
        logger.info(f"{self._name}: {self._state.value} -> {target.value}")
        self._transitions.append(Transition(self._state, target))
        self._state = target


__all__ = (
    "FlowState",
    "TransitionTable",
    "ORDER_TRANSITIONS",
    "INSTALLMENT_TRANSITIONS",
    "Transition",
    "StateMachine",
)
