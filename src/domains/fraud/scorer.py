"""Heuristic risk scoring: weighted factor sum plus diagnostic flags."""

import numpy as np
import structlog

from .config import FraudConfig, default_config
from .models import HeuristicResult, Recommendation, RiskFactors, Transaction

logger = structlog.get_logger()

HIGH_AMOUNT = "High Amount Transaction"
HIGH_RISK_COUNTRY = "High Risk Country"
HIGH_RISK_MERCHANT = "High Risk Merchant"
UNUSUAL_TIME = "Unusual Time"
HIGH_VELOCITY = "High Velocity"
NEW_DEVICE = "New Device"


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def factor_dispersion(factors: RiskFactors) -> float:
    """Population standard deviation of the six factors."""
    return float(np.std(factors.values()))


def confidence_for(factors: RiskFactors, trigger_count: int, config: FraudConfig) -> float:
    """100 - dispersion + a capped per-trigger bonus, clamped to [0, 100].

    Factors that agree with each other indicate a more certain signal.
    """
    cfg = config.diagnostics
    bonus = min(trigger_count * cfg.confidence_per_flag, cfg.confidence_bonus_cap)
    return round(_clamp(100.0 - factor_dispersion(factors) + bonus), 2)


class RiskScorer:
    """Turns risk factors into the heuristic score, diagnostics and recommendation."""

    def __init__(self, config: FraudConfig | None = None) -> None:
        self._config = config or default_config

    def score(self, transaction: Transaction, factors: RiskFactors) -> HeuristicResult:
        cfg = self._config
        diagnostics = self.diagnostics(transaction, factors)

        w = cfg.weights
        weighted = (
            factors.velocity * w.velocity
            + factors.amount * w.amount
            + factors.location * w.location
            + factors.device * w.device
            + factors.time * w.time
            + factors.merchant * w.merchant
        )
        score = round(_clamp(weighted + len(diagnostics) * cfg.diagnostics.flag_bonus), 2)
        recommendation = self.recommend(score, len(diagnostics))
        confidence = confidence_for(factors, len(diagnostics), cfg)

        logger.debug(
            "heuristic_scored",
            transaction_id=transaction.transaction_id,
            score=score,
            flags=diagnostics,
            recommendation=recommendation.value,
            confidence=confidence,
        )

        return HeuristicResult(
            score=score,
            diagnostics=diagnostics,
            recommendation=recommendation,
            confidence=confidence,
        )

    def diagnostics(self, transaction: Transaction, factors: RiskFactors) -> list[str]:
        """Diagnostic flags, each firing independently of the weighted sum."""
        cfg = self._config
        d = cfg.diagnostics
        flags: list[str] = []
        if transaction.amount_float > d.high_amount_min:
            flags.append(HIGH_AMOUNT)
        if transaction.location.country in cfg.location.high_risk_countries:
            flags.append(HIGH_RISK_COUNTRY)
        if transaction.merchant.category in cfg.merchant.high_risk_categories:
            flags.append(HIGH_RISK_MERCHANT)
        if factors.time > d.unusual_time_min:
            flags.append(UNUSUAL_TIME)
        if factors.velocity > d.high_velocity_min:
            flags.append(HIGH_VELOCITY)
        if factors.device > d.new_device_min:
            flags.append(NEW_DEVICE)
        return flags

    def recommend(self, score: float, flag_count: int) -> Recommendation:
        t = self._config.recommendation
        if score >= t.decline_score or flag_count >= t.decline_flags:
            return Recommendation.DECLINE
        if score >= t.review_score or flag_count >= t.review_flags:
            return Recommendation.REVIEW
        return Recommendation.APPROVE
