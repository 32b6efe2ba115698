"""Business rule evaluation with a severity lattice and global BLOCK checks."""

from collections.abc import Sequence

import structlog

from .catalog import CatalogSnapshot
from .config import FraudConfig, default_config
from .exceptions import MalformedRuleError
from .models import (
    BusinessRule,
    RiskFactors,
    RuleVerdict,
    Severity,
    Transaction,
    TriggeredRule,
)
from .rules import HANDLERS, CategoryHandler, RuleContext, check_global_settings

logger = structlog.get_logger()


def evaluation_order(rules: Sequence[BusinessRule]) -> list[BusinessRule]:
    """Active rules by descending priority; ties keep catalog insertion order."""
    return sorted((r for r in rules if r.is_active), key=lambda r: -r.priority)


class RuleEvaluator:
    """Evaluates a transaction against a catalog snapshot.

    1. Order active rules by priority (stable on insertion order)
    2. Dispatch each rule to its category handler; malformed rules never fire
    3. Run global settings checks (always BLOCK)
    4. Track the maximum severity reached

    The evaluator holds no catalog state of its own; the snapshot is passed in.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        handlers: dict[str, CategoryHandler] | None = None,
    ) -> None:
        self._config = config or default_config
        self._handlers = handlers if handlers is not None else HANDLERS

    def evaluate(
        self,
        transaction: Transaction,
        factors: RiskFactors,
        history: Sequence[Transaction],
        snapshot: CatalogSnapshot,
    ) -> RuleVerdict:
        cfg = self._config
        context = RuleContext(
            transaction=transaction, factors=factors, history=history, config=cfg
        )
        triggered: list[TriggeredRule] = []
        skipped: list[str] = []

        ordered = evaluation_order(snapshot.rules)
        budget = cfg.limits.max_rules_per_evaluation
        budget_exhausted = len(ordered) > budget
        if budget_exhausted:
            logger.warning(
                "rule_budget_exhausted",
                transaction_id=transaction.transaction_id,
                active_rules=len(ordered),
                budget=budget,
            )
            ordered = ordered[:budget]

        for rule in ordered:
            try:
                result = self._evaluate_rule(rule, context)
            except MalformedRuleError as exc:
                logger.warning(
                    "rule_malformed",
                    rule_id=rule.id,
                    rule_name=rule.name,
                    reason=exc.reason,
                    transaction_id=transaction.transaction_id,
                )
                skipped.append(rule.id)
                continue
            except Exception:
                logger.exception(
                    "rule_evaluation_error",
                    rule_id=rule.id,
                    transaction_id=transaction.transaction_id,
                )
                skipped.append(rule.id)
                continue
            if result is not None:
                triggered.append(result)

        try:
            triggered.extend(check_global_settings(snapshot.global_settings, context))
        except Exception:
            logger.exception("global_check_error", transaction_id=transaction.transaction_id)

        max_severity = max((t.severity for t in triggered), default=Severity.APPROVE)

        logger.debug(
            "rules_evaluated",
            transaction_id=transaction.transaction_id,
            catalog_version=snapshot.version,
            evaluated=len(ordered),
            triggered=[t.name for t in triggered],
            max_severity=max_severity.name,
            skipped=skipped,
        )

        return RuleVerdict(
            triggered=triggered,
            max_severity=max_severity,
            skipped_rule_ids=skipped,
            evaluated_count=len(ordered),
            budget_exhausted=budget_exhausted,
        )

    def _evaluate_rule(self, rule: BusinessRule, context: RuleContext) -> TriggeredRule | None:
        handler = self._handlers.get(rule.category)
        if handler is None:
            raise MalformedRuleError(rule.id, f"unknown category {rule.category!r}")
        return handler.evaluate(rule, context)
