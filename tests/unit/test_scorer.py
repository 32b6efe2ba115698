"""Unit tests for heuristic risk scoring."""

import statistics
from decimal import Decimal

import pytest

from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import Recommendation, RiskFactors
from src.domains.fraud.scorer import (
    HIGH_AMOUNT,
    HIGH_RISK_COUNTRY,
    HIGH_RISK_MERCHANT,
    HIGH_VELOCITY,
    NEW_DEVICE,
    UNUSUAL_TIME,
    RiskScorer,
    confidence_for,
)
from tests.conftest import make_transaction

CONFIG = FraudConfig()
BENIGN = RiskFactors(velocity=0, amount=10, location=10, device=0, time=15, merchant=20)


def _expected_confidence(factors: RiskFactors, flags: int) -> float:
    raw = 100 - statistics.pstdev(factors.values()) + min(flags * 10, 30)
    return round(max(0.0, min(100.0, raw)), 2)


class TestWeightedScore:
    def test_benign_transaction(self):
        result = RiskScorer(CONFIG).score(make_transaction(), BENIGN)
        assert result.score == pytest.approx(7.5)
        assert result.diagnostics == []
        assert result.recommendation == Recommendation.APPROVE

    def test_high_amount_adds_flag_bonus(self):
        txn = make_transaction(amount=Decimal("6000"))
        factors = BENIGN.model_copy(update={"amount": 80})
        result = RiskScorer(CONFIG).score(txn, factors)
        assert result.diagnostics == [HIGH_AMOUNT]
        assert result.score == pytest.approx(21.5 + 5)

    def test_score_capped_at_100(self):
        factors = RiskFactors(velocity=100, amount=100, location=100, device=100, time=100, merchant=100)
        result = RiskScorer(CONFIG).score(make_transaction(), factors)
        assert result.score == 100
        assert result.recommendation == Recommendation.DECLINE


class TestDiagnostics:
    def test_flag_order(self):
        txn = make_transaction(
            amount=Decimal("6000"), country="Nigeria", category="Gambling", hour=2
        )
        factors = RiskFactors(velocity=80, amount=80, location=90, device=70, time=60, merchant=75)
        flags = RiskScorer(CONFIG).diagnostics(txn, factors)
        assert flags == [
            HIGH_AMOUNT,
            HIGH_RISK_COUNTRY,
            HIGH_RISK_MERCHANT,
            UNUSUAL_TIME,
            HIGH_VELOCITY,
            NEW_DEVICE,
        ]

    def test_thresholds_are_strict(self):
        txn = make_transaction(amount=Decimal("5000"))
        factors = RiskFactors(velocity=60, amount=40, location=10, device=60, time=50, merchant=20)
        assert RiskScorer(CONFIG).diagnostics(txn, factors) == []


class TestRecommendation:
    def test_review_by_flag_count(self):
        txn = make_transaction(country="Nigeria", category="Gambling")
        factors = RiskFactors(velocity=0, amount=10, location=90, device=0, time=15, merchant=75)
        result = RiskScorer(CONFIG).score(txn, factors)
        assert result.flag_count == 2
        assert result.score == pytest.approx(39.0)
        assert result.recommendation == Recommendation.REVIEW

    def test_review_by_score(self):
        factors = RiskFactors(velocity=100, amount=40, location=30, device=60, time=15, merchant=20)
        result = RiskScorer(CONFIG).score(make_transaction(), factors)
        assert result.diagnostics == [HIGH_VELOCITY]
        assert result.score == pytest.approx(56.5)
        assert result.recommendation == Recommendation.REVIEW

    def test_decline_by_flag_count(self):
        txn = make_transaction(
            amount=Decimal("6000"), country="Nigeria", category="Gambling", hour=2
        )
        factors = RiskFactors(velocity=0, amount=80, location=90, device=0, time=60, merchant=75)
        result = RiskScorer(CONFIG).score(txn, factors)
        assert result.flag_count == 4
        assert result.recommendation == Recommendation.DECLINE

    @pytest.mark.parametrize(
        "score,flags,expected",
        [
            (79.99, 0, Recommendation.REVIEW),
            (80, 0, Recommendation.DECLINE),
            (49.99, 1, Recommendation.APPROVE),
            (50, 0, Recommendation.REVIEW),
            (10, 3, Recommendation.DECLINE),
            (10, 2, Recommendation.REVIEW),
        ],
    )
    def test_boundaries(self, score, flags, expected):
        assert RiskScorer(CONFIG).recommend(score, flags) == expected


class TestConfidence:
    def test_matches_population_stdev_formula(self):
        result = RiskScorer(CONFIG).score(make_transaction(), BENIGN)
        assert result.confidence == pytest.approx(_expected_confidence(BENIGN, 0))

    def test_agreeing_factors_give_full_confidence(self):
        factors = RiskFactors(velocity=40, amount=40, location=40, device=40, time=40, merchant=40)
        assert confidence_for(factors, 0, CONFIG) == 100

    def test_flag_bonus_capped(self):
        assert confidence_for(BENIGN, 10, CONFIG) == pytest.approx(_expected_confidence(BENIGN, 3))

    def test_bounds(self):
        extreme = RiskFactors(velocity=0, amount=100, location=0, device=100, time=0, merchant=100)
        for flags in range(0, 7):
            assert 0 <= confidence_for(extreme, flags, CONFIG) <= 100
