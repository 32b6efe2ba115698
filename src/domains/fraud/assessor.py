"""Fraud assessment pipeline: factors -> heuristic -> rules -> combined verdict."""

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

import structlog

from .catalog import CatalogSnapshot, RuleCatalog
from .combiner import AssessmentTracker, DecisionCombiner
from .config import FraudConfig, default_config
from .device_risk import DeviceRiskProvider
from .history import RecentHistory
from .models import AssessmentStage, RiskAssessment, Transaction
from .risk_factors import RiskFactorCalculator
from .rules_engine import RuleEvaluator
from .scorer import RiskScorer

logger = structlog.get_logger()


class RiskAssessor:
    """Orchestrates the full assessment for a transaction.

    The catalog snapshot and history slice are taken once per transaction
    and shared by every stage.
    """

    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        history: RecentHistory | None = None,
        config: FraudConfig | None = None,
        device_risk: DeviceRiskProvider | None = None,
        clock: Callable[[], float] = time.perf_counter,
        max_workers: int = 4,
    ) -> None:
        self._config = config or default_config
        self._catalog = catalog if catalog is not None else RuleCatalog.with_defaults()
        self._history = history if history is not None else RecentHistory()
        self._calculator = RiskFactorCalculator(config=self._config, device_risk=device_risk)
        self._scorer = RiskScorer(config=self._config)
        self._evaluator = RuleEvaluator(config=self._config)
        self._combiner = DecisionCombiner(config=self._config)
        self._clock = clock
        self._max_workers = max_workers

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    @property
    def history(self) -> RecentHistory:
        return self._history

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def assess(
        self,
        transaction: Transaction,
        history: Sequence[Transaction] | None = None,
        snapshot: CatalogSnapshot | None = None,
    ) -> RiskAssessment:
        """Assess one transaction.

        ``history`` and ``snapshot`` default to the current contents of the
        assessor's buffer and catalog.
        """
        start = self._clock()
        history = self._history.snapshot() if history is None else tuple(history)
        snapshot = snapshot or self._catalog.snapshot()
        tracker = AssessmentTracker(transaction.transaction_id)

        factors = self._calculator.calculate(transaction, history)
        heuristic = self._scorer.score(transaction, factors)
        tracker.advance(AssessmentStage.SCORED)

        verdict = self._evaluator.evaluate(transaction, factors, history, snapshot)
        tracker.advance(AssessmentStage.RULED)

        processing_time_ms = round((self._clock() - start) * 1000, 3)
        assessment = self._combiner.combine(
            transaction_id=transaction.transaction_id,
            factors=factors,
            heuristic=heuristic,
            verdict=verdict,
            processing_time_ms=max(processing_time_ms, 0.0),
            catalog_version=snapshot.version,
            test_mode=snapshot.global_settings.allow_test_mode,
        )
        tracker.advance(AssessmentStage.FINAL)

        logger.info(
            "transaction_assessed",
            transaction_id=transaction.transaction_id,
            user_id=transaction.user_id,
            score=assessment.overall_risk_score,
            recommendation=assessment.recommendation.value,
            triggered_count=len(assessment.triggered_rules),
            confidence=assessment.confidence,
            processing_time_ms=assessment.processing_time_ms,
        )
        return assessment

    def observe(self, transaction: Transaction) -> RiskAssessment:
        """Assess a live transaction and then record it in the rolling history."""
        assessment = self.assess(transaction)
        self._history.push(transaction)
        return assessment

    def assess_many(
        self, transactions: Iterable[Transaction], max_workers: int | None = None
    ) -> list[RiskAssessment]:
        """Assess independent transactions in parallel against one shared snapshot.

        Results are returned in input order. ``max_workers`` defaults to the
        pool size given at construction.
        """
        history = self._history.snapshot()
        snapshot = self._catalog.snapshot()
        with ThreadPoolExecutor(max_workers=max_workers or self._max_workers) as pool:
            return list(pool.map(lambda t: self.assess(t, history, snapshot), transactions))
