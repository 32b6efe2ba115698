"""Tests for running system metrics."""

from datetime import timedelta

import pytest

from src.domains.fraud.metrics import MetricsAggregator
from src.domains.fraud.models import Recommendation, RiskAssessment, RiskFactors
from tests.conftest import NOW


def _assessment(score: float, recommendation: Recommendation, ms: float = 1.0) -> RiskAssessment:
    return RiskAssessment(
        transaction_id="txn",
        overall_risk_score=score,
        risk_factors=RiskFactors(),
        recommendation=recommendation,
        confidence=90.0,
        processing_time_ms=ms,
    )


class TestMetricsAggregator:
    def test_empty(self):
        metrics = MetricsAggregator().snapshot(NOW)
        assert metrics.total_transactions == 0
        assert metrics.average_risk_score == 0
        assert metrics.transactions_per_second == 0

    def test_counts_and_running_averages(self):
        aggregator = MetricsAggregator()
        aggregator.record(_assessment(10, Recommendation.APPROVE, ms=1.0), at=NOW)
        aggregator.record(_assessment(60, Recommendation.REVIEW, ms=2.0), at=NOW)
        aggregator.record(_assessment(95, Recommendation.DECLINE, ms=3.0), at=NOW)

        metrics = aggregator.snapshot(NOW)
        assert metrics.total_transactions == 3
        assert metrics.approved_transactions == 1
        assert metrics.reviewed_transactions == 1
        assert metrics.declined_transactions == 1
        assert metrics.average_risk_score == pytest.approx(55.0)
        assert metrics.average_processing_time_ms == pytest.approx(2.0)

    def test_tps_over_trailing_window(self):
        aggregator = MetricsAggregator(tps_window_seconds=10)
        aggregator.record(_assessment(10, Recommendation.APPROVE), at=NOW - timedelta(seconds=30))
        for i in range(5):
            aggregator.record(_assessment(10, Recommendation.APPROVE), at=NOW - timedelta(seconds=i))

        metrics = aggregator.snapshot(NOW)
        assert metrics.total_transactions == 6
        assert metrics.transactions_per_second == pytest.approx(0.5)

    def test_reset(self):
        aggregator = MetricsAggregator()
        aggregator.record(_assessment(50, Recommendation.REVIEW), at=NOW)
        aggregator.reset()
        assert aggregator.snapshot(NOW).total_transactions == 0
