"""Rules that compare a computed risk factor against the rule threshold."""

from ..models import BusinessRule, RuleCategory, TriggeredRule
from ..risk_factors import local_hour
from .base import FactorThresholdHandler, RuleContext


class LocationHandler(FactorThresholdHandler):
    category = RuleCategory.LOCATION
    factor = "location"


class MerchantHandler(FactorThresholdHandler):
    category = RuleCategory.MERCHANT
    factor = "merchant"


class DeviceHandler(FactorThresholdHandler):
    category = RuleCategory.DEVICE
    factor = "device"


class TimeHandler(FactorThresholdHandler):
    """Time factor threshold; night-time hours always qualify."""

    category = RuleCategory.TIME
    factor = "time"

    def evaluate(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        hour = local_hour(context.transaction.timestamp, context.config)
        night = context.config.time
        if night.night_start_hour <= hour <= night.night_end_hour:
            return self._triggered(rule, f"Transaction at night-time hour {hour}:00")
        return super().evaluate(rule, context)
