"""Running system metrics over assessed transactions."""

import threading
from collections import deque
from datetime import UTC, datetime, timedelta

from .models import Recommendation, RiskAssessment, SystemMetrics


class MetricsAggregator:
    """Accumulates counts and running averages for the presentation layer."""

    def __init__(self, tps_window_seconds: int = 60) -> None:
        self._lock = threading.Lock()
        self._tps_window = timedelta(seconds=tps_window_seconds)
        self._arrivals: deque[datetime] = deque()
        self._total = 0
        self._counts = {r: 0 for r in Recommendation}
        self._avg_score = 0.0
        self._avg_processing_ms = 0.0

    def record(self, assessment: RiskAssessment, at: datetime | None = None) -> None:
        at = at or datetime.now(UTC)
        with self._lock:
            self._total += 1
            n = self._total
            self._counts[assessment.recommendation] += 1
            self._avg_score += (assessment.overall_risk_score - self._avg_score) / n
            self._avg_processing_ms += (
                assessment.processing_time_ms - self._avg_processing_ms
            ) / n
            self._arrivals.append(at)

    def snapshot(self, now: datetime | None = None) -> SystemMetrics:
        now = now or datetime.now(UTC)
        with self._lock:
            cutoff = now - self._tps_window
            while self._arrivals and self._arrivals[0] < cutoff:
                self._arrivals.popleft()
            tps = len(self._arrivals) / self._tps_window.total_seconds()
            return SystemMetrics(
                total_transactions=self._total,
                approved_transactions=self._counts[Recommendation.APPROVE],
                reviewed_transactions=self._counts[Recommendation.REVIEW],
                declined_transactions=self._counts[Recommendation.DECLINE],
                average_risk_score=round(self._avg_score, 2),
                transactions_per_second=round(tps, 3),
                average_processing_time_ms=round(self._avg_processing_ms, 3),
            )

    def reset(self) -> None:
        with self._lock:
            self._arrivals.clear()
            self._total = 0
            self._counts = {r: 0 for r in Recommendation}
            self._avg_score = 0.0
            self._avg_processing_ms = 0.0
