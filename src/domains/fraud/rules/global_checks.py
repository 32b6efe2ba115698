"""Global settings checks. Always evaluated, always BLOCK severity."""

from datetime import timedelta

from ..history import in_trailing_window
from ..models import GlobalSettings, Severity, TriggeredRule, TriggerSource
from .base import RuleContext

GLOBAL_MAX_AMOUNT = "Global Max Amount Exceeded"
BLOCKED_COUNTRY = "Blocked Country"
BLOCKED_MERCHANT_CATEGORY = "Blocked Merchant Category"
DAILY_LIMIT = "Daily Transaction Limit Exceeded"


def _block(name: str, details: str) -> TriggeredRule:
    return TriggeredRule(
        name=name,
        source=TriggerSource.GLOBAL,
        action="BLOCK",
        severity=Severity.BLOCK,
        details=details,
    )


def check_global_settings(settings: GlobalSettings, context: RuleContext) -> list[TriggeredRule]:
    """Run every global check in a fixed order and return the ones that fire."""
    txn = context.transaction
    triggered: list[TriggeredRule] = []

    amount = txn.amount_float
    if amount > settings.max_transaction_amount:
        triggered.append(
            _block(
                GLOBAL_MAX_AMOUNT,
                f"Amount ${amount:,.2f} exceeds ${settings.max_transaction_amount:,.2f}",
            )
        )

    if txn.location.country in settings.blocked_countries:
        triggered.append(_block(BLOCKED_COUNTRY, f"Country {txn.location.country} is blocked"))

    if txn.merchant.category in settings.blocked_merchant_categories:
        triggered.append(
            _block(BLOCKED_MERCHANT_CATEGORY, f"Category {txn.merchant.category} is blocked")
        )

    window = timedelta(hours=context.config.limits.daily_window_hours)
    daily_count = len(in_trailing_window(context.history, txn, window)) + 1
    if daily_count > settings.max_daily_transactions:
        triggered.append(
            _block(
                DAILY_LIMIT,
                f"{daily_count} transactions today (max: {settings.max_daily_transactions})",
            )
        )

    return triggered
