"""Seed business rules and global settings.

Each dict maps directly onto ``RuleCatalog.add`` fields.
"""

from .models import GlobalSettings, RuleAction, RuleCategory

DEFAULT_RULES = [
    {
        "name": "Large Amount",
        "description": "Single transaction at or above $5,000.",
        "condition": "amount >= threshold",
        "category": RuleCategory.AMOUNT,
        "action": RuleAction.FLAG,
        "threshold": 5_000,
        "priority": 80,
    },
    {
        "name": "Rapid Velocity",
        "description": "Three or more transactions by the same user within five minutes.",
        "condition": "count(user, 5m) >= threshold",
        "category": RuleCategory.VELOCITY,
        "action": RuleAction.FLAG,
        "threshold": 3,
        "priority": 90,
        "time_window": "5m",
    },
    {
        "name": "High-Risk Location",
        "description": "Transaction originates from a high-risk country.",
        "condition": "location_risk >= threshold",
        "category": RuleCategory.LOCATION,
        "action": RuleAction.FLAG,
        "threshold": 90,
        "priority": 70,
    },
    {
        "name": "High-Risk Merchant",
        "description": "Merchant category is on the high-risk list.",
        "condition": "merchant_risk >= threshold",
        "category": RuleCategory.MERCHANT,
        "action": RuleAction.LIMIT,
        "threshold": 75,
        "priority": 60,
    },
    {
        "name": "Night-Time Activity",
        "description": "Transaction placed in the night-time window.",
        "condition": "time_risk >= threshold",
        "category": RuleCategory.TIME,
        "action": RuleAction.FLAG,
        "threshold": 60,
        "priority": 20,
        "is_active": False,
    },
    {
        "name": "Suspicious Device",
        "description": "Device risk signal at or above 70.",
        "condition": "device_risk >= threshold",
        "category": RuleCategory.DEVICE,
        "action": RuleAction.FLAG,
        "threshold": 70,
        "priority": 50,
    },
]

DEFAULT_GLOBAL_SETTINGS = GlobalSettings(
    max_transaction_amount=50_000.0,
    max_daily_transactions=50,
    blocked_countries=(),
    blocked_merchant_categories=(),
    allow_test_mode=False,
)
