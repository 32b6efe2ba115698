"""Business rule predicates.

Exports HANDLERS (category -> predicate handler) and the individual handler
classes for direct use.
"""

from .amount import AmountHandler
from .base import CategoryHandler, RuleContext, action_severity
from .factors import DeviceHandler, LocationHandler, MerchantHandler, TimeHandler
from .global_checks import (
    BLOCKED_COUNTRY,
    BLOCKED_MERCHANT_CATEGORY,
    DAILY_LIMIT,
    GLOBAL_MAX_AMOUNT,
    check_global_settings,
)
from .velocity import VelocityHandler
from .window import parse_time_window

# One handler per category, keyed by category name
HANDLERS: dict[str, CategoryHandler] = {
    handler.category: handler
    for handler in (
        VelocityHandler(),
        AmountHandler(),
        LocationHandler(),
        MerchantHandler(),
        TimeHandler(),
        DeviceHandler(),
    )
}

__all__ = [
    "HANDLERS",
    "CategoryHandler",
    "RuleContext",
    "action_severity",
    "check_global_settings",
    "parse_time_window",
    # Handlers
    "AmountHandler",
    "DeviceHandler",
    "LocationHandler",
    "MerchantHandler",
    "TimeHandler",
    "VelocityHandler",
    # Global check names
    "BLOCKED_COUNTRY",
    "BLOCKED_MERCHANT_CATEGORY",
    "DAILY_LIMIT",
    "GLOBAL_MAX_AMOUNT",
]
