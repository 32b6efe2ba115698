"""Escalate-only merge of the heuristic and rule stages into the final assessment."""

import structlog

from .config import FraudConfig, default_config
from .exceptions import InvalidStageTransition
from .models import (
    AssessmentStage,
    HeuristicResult,
    Recommendation,
    RiskAssessment,
    RiskFactors,
    RuleVerdict,
    Severity,
)
from .scorer import confidence_for

logger = structlog.get_logger()

_STAGE_ORDER = (
    AssessmentStage.NEW,
    AssessmentStage.SCORED,
    AssessmentStage.RULED,
    AssessmentStage.FINAL,
)


class AssessmentTracker:
    """Forward-only stage machine for one transaction: NEW -> SCORED -> RULED -> FINAL."""

    def __init__(self, transaction_id: str) -> None:
        self.transaction_id = transaction_id
        self.stage = AssessmentStage.NEW

    def advance(self, target: AssessmentStage) -> None:
        current = _STAGE_ORDER.index(self.stage)
        if _STAGE_ORDER.index(target) != current + 1:
            raise InvalidStageTransition(
                f"{self.transaction_id}: cannot move from {self.stage} to {target}"
            )
        self.stage = target


def merge_triggers(*groups: list[str]) -> list[str]:
    """Concatenate name lists, keeping the first occurrence of each name."""
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for name in group:
            if name not in seen:
                seen.add(name)
                merged.append(name)
    return merged


def escalate(heuristic: Recommendation, rule_severity: Severity) -> Recommendation:
    """Final recommendation is never lower than the heuristic one."""
    if rule_severity >= Severity.BLOCK:
        return Recommendation.DECLINE
    if rule_severity >= Severity.FLAG and heuristic == Recommendation.APPROVE:
        return Recommendation.REVIEW
    return heuristic


class DecisionCombiner:
    """Merges RiskScorer and RuleEvaluator outputs.

    Confidence is monotonic-additive: the per-trigger bonus is recomputed on
    the combined distinct trigger list, so rule triggers can raise confidence
    but never lower it below the heuristic value.
    """

    def __init__(self, config: FraudConfig | None = None) -> None:
        self._config = config or default_config

    def combine(
        self,
        transaction_id: str,
        factors: RiskFactors,
        heuristic: HeuristicResult,
        verdict: RuleVerdict,
        processing_time_ms: float = 0.0,
        catalog_version: int = 0,
        test_mode: bool = False,
    ) -> RiskAssessment:
        recommendation = escalate(heuristic.recommendation, verdict.max_severity)
        triggered = merge_triggers(heuristic.diagnostics, verdict.triggered_names)
        confidence = max(
            heuristic.confidence, confidence_for(factors, len(triggered), self._config)
        )

        if recommendation != heuristic.recommendation:
            logger.info(
                "recommendation_escalated",
                transaction_id=transaction_id,
                heuristic=heuristic.recommendation.value,
                final=recommendation.value,
                rule_severity=verdict.max_severity.name,
            )

        return RiskAssessment(
            transaction_id=transaction_id,
            overall_risk_score=heuristic.score,
            risk_factors=factors,
            triggered_rules=triggered,
            recommendation=recommendation,
            confidence=confidence,
            processing_time_ms=processing_time_ms,
            stage=AssessmentStage.FINAL,
            catalog_version=catalog_version,
            test_mode=test_mode,
        )
