"""
Checkout settings loaded from environment variables.

    CHECKOUT_MIN_PHONE_LENGTH=10
    CHECKOUT_REDIRECT_DELAY_SECONDS=1.5
    CHECKOUT_TOLERATE_INVALID_PASSWORD=true
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckoutSettings(BaseSettings):
    """Tunables of the checkout engine."""

    model_config = SettingsConfigDict(env_prefix="CHECKOUT_", frozen=True)

    # Validation
    min_phone_length: int = Field(default=10, ge=1)

    # Submission flow
    redirect_delay_seconds: float = Field(default=1.5, ge=0)
    # Sign-in error that does not abort the redirect (account may already
    # exist with another password). Turn off to treat it as fatal.
    tolerate_invalid_password: bool = True
    tolerated_sign_in_error: str = "Invalid password"
    submission_guard_ttl_seconds: float = Field(default=900, ge=0)

    # Display
    currency_symbol: str = "Rp"


@lru_cache
def get_settings() -> CheckoutSettings:
    """Cached settings instance."""
    return CheckoutSettings()


__all__ = ("CheckoutSettings", "get_settings")
