"""Compute the six per-transaction risk factors from the transaction and its recent history."""

from collections.abc import Sequence
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import structlog

from .config import FraudConfig, default_config
from .device_risk import DeviceRiskProvider, KnownDeviceRiskProvider
from .history import in_trailing_window
from .models import RiskFactors, Transaction

logger = structlog.get_logger()


def local_hour(timestamp: datetime, config: FraudConfig) -> int:
    return timestamp.astimezone(ZoneInfo(config.time.timezone)).hour


def is_unusual_hour(hour: int, config: FraudConfig) -> bool:
    t = config.time
    return t.night_start_hour <= hour <= t.night_end_hour or hour >= t.late_start_hour


class RiskFactorCalculator:
    """Pure calculator: (transaction, history) -> RiskFactors.

    History is a newest-first slice supplied by the caller; the calculator
    never fetches it.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        device_risk: DeviceRiskProvider | None = None,
    ) -> None:
        self._config = config or default_config
        self._device_risk = device_risk or KnownDeviceRiskProvider(self._config.device)

    def calculate(
        self, transaction: Transaction, history: Sequence[Transaction] = ()
    ) -> RiskFactors:
        return RiskFactors(
            velocity=self.velocity_risk(transaction, history),
            amount=self.amount_risk(transaction),
            location=self.location_risk(transaction),
            device=self._device_score(transaction, history),
            time=self.time_risk(transaction),
            merchant=self.merchant_risk(transaction),
        )

    def velocity_risk(self, transaction: Transaction, history: Sequence[Transaction]) -> float:
        cfg = self._config.velocity
        recent = in_trailing_window(history, transaction, timedelta(minutes=cfg.window_minutes))
        return min(len(recent) * cfg.score_per_transaction, 100.0)

    def amount_risk(self, transaction: Transaction) -> float:
        amount = transaction.amount_float
        for lower_bound, score in self._config.amount.tiers:
            if amount > lower_bound:
                return score
        return self._config.amount.base_score

    def location_risk(self, transaction: Transaction) -> float:
        cfg = self._config.location
        country = transaction.location.country
        if country in cfg.high_risk_countries:
            return cfg.high_risk_score
        if country != cfg.home_country:
            return cfg.foreign_score
        return cfg.home_score

    def time_risk(self, transaction: Transaction) -> float:
        cfg = self._config.time
        if is_unusual_hour(local_hour(transaction.timestamp, self._config), self._config):
            return cfg.unusual_score
        return cfg.base_score

    def merchant_risk(self, transaction: Transaction) -> float:
        cfg = self._config.merchant
        category = transaction.merchant.category
        if category in cfg.high_risk_categories:
            return cfg.high_risk_score
        if category == cfg.elevated_category:
            return cfg.elevated_score
        return cfg.base_score

    def _device_score(self, transaction: Transaction, history: Sequence[Transaction]) -> float | None:
        try:
            return self._device_risk.score(transaction, history)
        except Exception:
            logger.exception("device_risk_provider_error", transaction_id=transaction.transaction_id)
            return None
