"""Rate-based rules aggregated over a trailing time window."""

from ..exceptions import InvalidTimeWindowError
from ..history import in_trailing_window
from ..models import BusinessRule, RuleCategory, TriggeredRule
from .base import CategoryHandler, RuleContext
from .window import parse_time_window


class VelocityHandler(CategoryHandler):
    """Counts same-user history entries inside the rule's window.

    Fires when the count reaches the threshold. The window is mandatory.
    """

    category = RuleCategory.VELOCITY

    def evaluate(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        try:
            window = parse_time_window(rule.time_window)
        except ValueError as exc:
            raise InvalidTimeWindowError(rule.id, str(exc)) from exc

        count = len(in_trailing_window(context.history, context.transaction, window))
        if count < rule.threshold:
            return None
        return self._triggered(
            rule,
            f"{count} transactions in {rule.time_window} (threshold: {rule.threshold:g})",
        )
