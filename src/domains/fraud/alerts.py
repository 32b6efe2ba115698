"""Pattern alerts over the most recent transactions, with suppression."""

import uuid
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import structlog

from .config import FraudConfig, default_config
from .models import PatternAlert, Transaction

logger = structlog.get_logger()

VELOCITY_BURST = "VELOCITY"
GEOGRAPHIC_SPREAD = "GEOGRAPHIC"


class PatternMonitor:
    """Scans the newest transactions for burst velocity and geographic spread.

    An alert type already raised within the suppression window is not raised
    again.
    """

    def __init__(self, config: FraudConfig | None = None) -> None:
        self._config = config or default_config
        self._last_raised: dict[str, datetime] = {}

    def scan(self, history: Sequence[Transaction], now: datetime | None = None) -> list[PatternAlert]:
        cfg = self._config.monitor
        now = now or datetime.now(UTC)
        recent = list(history[: cfg.recent_sample_size])
        alerts: list[PatternAlert] = []

        burst_start = now - timedelta(seconds=cfg.burst_window_seconds)
        burst_count = sum(1 for t in recent if burst_start <= t.timestamp <= now)
        if burst_count > cfg.burst_max_transactions:
            alerts.append(
                self._alert(
                    VELOCITY_BURST,
                    "HIGH",
                    f"High transaction velocity detected: {burst_count} transactions "
                    f"in {cfg.burst_window_seconds} seconds",
                    {"count": burst_count, "window_seconds": cfg.burst_window_seconds},
                    now,
                )
            )

        countries = sorted({t.location.country for t in recent})
        if len(countries) > cfg.max_distinct_countries:
            alerts.append(
                self._alert(
                    GEOGRAPHIC_SPREAD,
                    "MEDIUM",
                    f"Multiple countries detected in recent transactions: {', '.join(countries)}",
                    {"countries": countries},
                    now,
                )
            )

        return [a for a in alerts if self._should_raise(a, now)]

    def _should_raise(self, alert: PatternAlert, now: datetime) -> bool:
        window = timedelta(seconds=self._config.monitor.suppression_window_seconds)
        last = self._last_raised.get(alert.alert_type)
        if last is not None and now - last < window:
            logger.info("alert_suppressed", alert_type=alert.alert_type)
            return False
        self._last_raised[alert.alert_type] = now
        logger.info("pattern_alert_raised", alert_type=alert.alert_type, severity=alert.severity)
        return True

    @staticmethod
    def _alert(
        alert_type: str, severity: str, message: str, evidence: dict, now: datetime
    ) -> PatternAlert:
        return PatternAlert(
            alert_id=str(uuid.uuid4()),
            alert_type=alert_type,
            severity=severity,
            message=message,
            evidence=evidence,
            created_at=now,
        )


def count_suspicious_patterns(
    history: Sequence[Transaction], config: FraudConfig | None = None
) -> int:
    """Round-hundred amounts plus high-risk merchant categories among recent transactions."""
    cfg = config or default_config
    recent = history[: cfg.monitor.recent_sample_size]
    round_amounts = sum(1 for t in recent if t.amount % 100 == 0)
    risky_merchants = sum(
        1 for t in recent if t.merchant.category in cfg.merchant.high_risk_categories
    )
    return round_amounts + risky_merchants
