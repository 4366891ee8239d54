"""
Lift — Helpers for lifting values and collaborator calls into LazyCoroResult.

Re-exports from combinators.lift with checkout-specific additions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Awaitable

# Re-export the parts of combinators.lift we build on
from combinators.lift import (
    pure,
    fail,
    from_result,
    catching_async,
)

from checkout._types import Lazy
from checkout.errors import NetworkError

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout-specific helpers
# ═══════════════════════════════════════════════════════════════════════════════

def from_collaborator[T](
    operation: str,
    call: Callable[[], Awaitable[T]],
) -> Lazy[T, NetworkError]:
    """
    Wrap a collaborator call so transport failures become NetworkError.

    Example:
        created = await from_collaborator(
            "create_order",
            lambda: gateways.orders.create_order(payload),
        )
    """
    def on_error(exc: Exception) -> NetworkError:
        logger.warning(f"{operation} failed: {exc!r}")
        return NetworkError(operation, str(exc) or exc.__class__.__name__)

    return catching_async(call, on_error=on_error)


__all__ = (
    # From combinators.lift
    "pure",
    "fail",
    "from_result",
    "catching_async",
    # Checkout additions
    "from_collaborator",
)
