"""Abstract base class for category predicate handlers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from ..config import FraudConfig
from ..models import (
    BusinessRule,
    RiskFactors,
    RuleAction,
    Severity,
    Transaction,
    TriggeredRule,
    TriggerSource,
)

logger = structlog.get_logger()

_ACTION_SEVERITY = {
    RuleAction.BLOCK: Severity.BLOCK,
    RuleAction.FLAG: Severity.FLAG,
    RuleAction.LIMIT: Severity.FLAG,
}


def action_severity(rule: BusinessRule) -> Severity:
    """Map a rule action onto the severity lattice. Unknown actions count as FLAG."""
    severity = _ACTION_SEVERITY.get(rule.action)
    if severity is None:
        logger.warning("rule_unknown_action", rule_id=rule.id, action=str(rule.action))
        return Severity.FLAG
    return severity


@dataclass(frozen=True)
class RuleContext:
    """Everything a predicate may read. One instance per transaction evaluation."""

    transaction: Transaction
    factors: RiskFactors
    history: Sequence[Transaction]
    config: FraudConfig


class CategoryHandler(ABC):
    """Predicate for one rule category.

    Handlers raise ``MalformedRuleError`` when a rule cannot be evaluated as
    configured; the evaluator treats that as non-triggering.
    """

    category: str

    @abstractmethod
    def evaluate(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        """Return a TriggeredRule if the rule fires, else None."""
        ...

    def _triggered(self, rule: BusinessRule, details: str) -> TriggeredRule:
        return TriggeredRule(
            name=rule.name,
            source=TriggerSource.RULE,
            action=str(rule.action),
            severity=action_severity(rule),
            rule_id=rule.id,
            details=details,
        )


class FactorThresholdHandler(CategoryHandler):
    """Fires when a named risk factor reaches the rule threshold."""

    factor: str

    def evaluate(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        value = getattr(context.factors, self.factor)
        if value < rule.threshold:
            return None
        return self._triggered(rule, f"{self.factor} risk {value:g} >= {rule.threshold:g}")
