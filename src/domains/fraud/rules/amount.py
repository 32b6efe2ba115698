"""Amount-based rules."""

from ..models import BusinessRule, RuleCategory, TriggeredRule
from .base import CategoryHandler, RuleContext


class AmountHandler(CategoryHandler):
    """Fires for transactions at or above the rule threshold."""

    category = RuleCategory.AMOUNT

    def evaluate(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        amount = context.transaction.amount_float
        if amount < rule.threshold:
            return None
        return self._triggered(
            rule, f"Amount ${amount:,.2f} (threshold: ${rule.threshold:,.2f})"
        )
