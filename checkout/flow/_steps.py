"""
Steps — strictly sequential chains of async collaborator calls.

    from checkout.flow import _steps as S

    chain = (
        S.step("create_order", create)
        .then(lambda created: S.step("sign_in", sign_in(created)))
    )
    result = await S.run_chain(chain)

Each step starts only after the previous one succeeded; the first failure
stops the chain. Nothing runs in parallel.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never

from kungfu import Result, Ok, Error
from combinators import lift as L

from checkout._types import Lazy, Pure

# ═══════════════════════════════════════════════════════════════════════════════
# Step
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Step[T, E]:
    """A named lazy action."""

    name: str
    action: Lazy[T, E]

    def then[U, E2](self, f: Callable[[T], Step[U, E2]]) -> Chain[U, E | E2]:
        """Chain another step after this one."""
        return Chain(first=self, continuations=(f,))


@dataclass(frozen=True, slots=True)
class Chain[T, E]:
    """Sequential composition: first step, then each continuation in order."""

    first: Step[Any, Any]
    continuations: tuple[Callable[[Any], Step[Any, Any]], ...]

    def then[U, E2](self, f: Callable[[T], Step[U, E2]]) -> Chain[U, E | E2]:
        return Chain(first=self.first, continuations=(*self.continuations, f))


# ═══════════════════════════════════════════════════════════════════════════════
# Result Types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ChainResult[T]:
    value: T
    steps_executed: int
    step_names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StepError[E]:
    error: E
    step_failed: int  # 1-based
    step: str


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def step[T, E](name: str, action: Lazy[T, E]) -> Step[T, E]:
    return Step(name=name, action=action)


def pure[T](name: str, value: T) -> Step[T, Never]:
    """Step that succeeds with value without doing anything."""
    action: Pure[T] = L.pure(value)
    return Step(name=name, action=action)


# ═══════════════════════════════════════════════════════════════════════════════
# Execution
# ═══════════════════════════════════════════════════════════════════════════════


async def run_step[T, E](s: Step[T, E]) -> Result[ChainResult[T], StepError[E]]:
    match await s.action:
        case Ok(value):
            return Ok(ChainResult(value=value, steps_executed=1, step_names=(s.name,)))
        case Error(e):
            return Error(StepError(error=e, step_failed=1, step=s.name))


async def run_chain[T, E](chain: Chain[T, E] | Step[T, E]) -> Result[ChainResult[T], StepError[E]]:
    """
    Execute steps one after another.

    Continuations are called only with the previous step's value, so they
    may perform side effects (state transitions) before returning the
    next step.
    """
    if isinstance(chain, Step):
        return await run_step(chain)

    current: Step[Any, Any] = chain.first
    continuations = iter(chain.continuations)
    names: list[str] = []

    while True:
        names.append(current.name)
        match await current.action:
            case Error(e):
                return Error(StepError(error=e, step_failed=len(names), step=current.name))
            case Ok(value):
                f = next(continuations, None)
                if f is None:
                    return Ok(ChainResult(
                        value=value,
                        steps_executed=len(names),
                        step_names=tuple(names),
                    ))
                current = f(value)


__all__ = (
    "Step",
    "Chain",
    "ChainResult",
    "StepError",
    "step",
    "pure",
    "run_step",
    "run_chain",
)
