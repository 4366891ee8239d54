"""
checkout — pricing and order composition for course checkout.

    from checkout import pricing as P   # Price tiers, coupons, PPN, installments
    from checkout import order as O     # Payload builder, validation, summary
    from checkout import flow as F      # Submission state machine
"""

from checkout import pricing
from checkout import order
from checkout import flow
from checkout import lift
from checkout._types import (
    Lazy,
    Pure,
    Money,
    to_money,
)
from checkout.config import CheckoutSettings, get_settings

__version__ = "0.1.0"

__all__ = (
    "pricing",
    "order",
    "flow",
    "lift",
    "Lazy",
    "Pure",
    "Money",
    "to_money",
    "CheckoutSettings",
    "get_settings",
)
