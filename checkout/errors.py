"""
Error taxonomy.

Errors are values carried in kungfu Results. Only InvalidTransition is
raised: it signals a bug in the caller, not a checkout outcome.

    ValidationError      field-scoped, user-correctable, blocks submission
    ValidationErrors     all ValidationErrors of one failing category
    NotFoundError        product / tier / institution missing, redirect away
    CouponIgnored        soft fail, pricing proceeds without discount
    NetworkError         collaborator call failed, retry by resubmitting
    FatalAuthError       sign-in failed with anything but the tolerated error
    SubmissionInProgress same submission already in flight or done
"""

from __future__ import annotations

from dataclasses import dataclass, field

GENERIC_RETRY_MESSAGE = "Something went wrong. Please try again."


# ═══════════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationErrors:
    """Collected validation failures of a single category."""

    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(e.field for e in self.errors)

    def for_field(self, name: str) -> tuple[ValidationError, ...]:
        return tuple(e for e in self.errors if e.field == name)

    def as_dict(self) -> dict[str, str]:
        """First message per field, for form display."""
        out: dict[str, str] = {}
        for e in self.errors:
            out.setdefault(e.field, e.message)
        return out

    @classmethod
    def single(cls, field_name: str, message: str) -> ValidationErrors:
        return cls((ValidationError(field_name, message),))


# ═══════════════════════════════════════════════════════════════════════════════
# Lookup
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class NotFoundError(Exception):
    entity: str
    id: str

    def __str__(self) -> str:
        return f"{self.entity}:{self.id} not found"


# ═══════════════════════════════════════════════════════════════════════════════
# Pricing
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CouponIgnored:
    """Coupon could not be applied; checkout continues at full price."""

    code: str
    reason: str


# ═══════════════════════════════════════════════════════════════════════════════
# Transport / Auth
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class NetworkError:
    operation: str
    message: str

    @property
    def user_message(self) -> str:
        return GENERIC_RETRY_MESSAGE


@dataclass(frozen=True, slots=True)
class FatalAuthError:
    message: str

    @property
    def user_message(self) -> str:
        return GENERIC_RETRY_MESSAGE


@dataclass(frozen=True, slots=True)
class SubmissionInProgress:
    key: str


type SubmissionError = (
    ValidationErrors | NetworkError | FatalAuthError | SubmissionInProgress
)


# ═══════════════════════════════════════════════════════════════════════════════
# Programming errors
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidTransition(Exception):
    def __init__(self, source: object, target: object) -> None:
        super().__init__(f"Illegal transition {source} -> {target}")
        self.source = source
        self.target = target


__all__ = (
    "GENERIC_RETRY_MESSAGE",
    "ValidationError",
    "ValidationErrors",
    "NotFoundError",
    "CouponIgnored",
    "NetworkError",
    "FatalAuthError",
    "SubmissionInProgress",
    "SubmissionError",
    "InvalidTransition",
)
