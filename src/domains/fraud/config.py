"""Fraud risk configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class AmountTiers:
    # (exclusive lower bound, factor score), checked highest first
    tiers: tuple[tuple[float, float], ...] = ((5_000.0, 80.0), (1_000.0, 40.0), (500.0, 20.0))
    base_score: float = 10.0


@dataclass
class LocationSettings:
    home_country: str = "United States"
    high_risk_countries: tuple[str, ...] = ("Nigeria", "Russia", "China", "Iran")
    high_risk_score: float = 90.0
    foreign_score: float = 30.0
    home_score: float = 10.0


@dataclass
class MerchantSettings:
    # "Financial" is high-risk by default, so the elevated score applies only
    # once it is removed from high_risk_categories
    high_risk_categories: tuple[str, ...] = ("Gambling", "Cryptocurrency", "Financial")
    elevated_category: str = "Financial"
    high_risk_score: float = 75.0
    elevated_score: float = 50.0
    base_score: float = 20.0


@dataclass
class TimeSettings:
    """Hour-of-day thresholds, read in the configured IANA ``timezone``.

    The night window [night_start_hour, night_end_hour] is inclusive; hours
    from late_start_hour onwards are also unusual.
    """

    timezone: str = "UTC"
    night_start_hour: int = 0
    night_end_hour: int = 6
    late_start_hour: int = 23
    unusual_score: float = 60.0
    base_score: float = 15.0


@dataclass
class VelocitySettings:
    window_minutes: int = 60
    score_per_transaction: float = 20.0


@dataclass
class DeviceSettings:
    new_device_score: float = 70.0
    known_device_score: float = 10.0
    no_history_score: float = 10.0


@dataclass
class ScoringWeights:
    velocity: float = 0.25
    amount: float = 0.20
    location: float = 0.20
    device: float = 0.15
    time: float = 0.10
    merchant: float = 0.10

    def __post_init__(self) -> None:
        total = self.velocity + self.amount + self.location + self.device + self.time + self.merchant
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Risk factor weights must sum to 1.0, got {total:.4f}")


@dataclass
class DiagnosticSettings:
    flag_bonus: float = 5.0
    high_amount_min: float = 5_000.0
    unusual_time_min: float = 50.0
    high_velocity_min: float = 60.0
    new_device_min: float = 60.0
    confidence_per_flag: float = 10.0
    confidence_bonus_cap: float = 30.0


@dataclass
class RecommendationThresholds:
    decline_score: float = 80.0
    decline_flags: int = 3
    review_score: float = 50.0
    review_flags: int = 2


@dataclass
class EvaluationLimits:
    max_rules_per_evaluation: int = 200
    daily_window_hours: int = 24


@dataclass
class MonitorSettings:
    recent_sample_size: int = 5
    burst_window_seconds: int = 60
    burst_max_transactions: int = 3
    max_distinct_countries: int = 3
    suppression_window_seconds: int = 300
    tps_window_seconds: int = 60


@dataclass
class FraudConfig:
    amount: AmountTiers = field(default_factory=AmountTiers)
    location: LocationSettings = field(default_factory=LocationSettings)
    merchant: MerchantSettings = field(default_factory=MerchantSettings)
    time: TimeSettings = field(default_factory=TimeSettings)
    velocity: VelocitySettings = field(default_factory=VelocitySettings)
    device: DeviceSettings = field(default_factory=DeviceSettings)
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    diagnostics: DiagnosticSettings = field(default_factory=DiagnosticSettings)
    recommendation: RecommendationThresholds = field(default_factory=RecommendationThresholds)
    limits: EvaluationLimits = field(default_factory=EvaluationLimits)
    monitor: MonitorSettings = field(default_factory=MonitorSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Location overrides
        if v := os.getenv("FRAUD_HOME_COUNTRY"):
            config.location.home_country = v
        if v := os.getenv("FRAUD_HIGH_RISK_COUNTRIES"):
            config.location.high_risk_countries = _split_csv(v)

        # Merchant overrides
        if v := os.getenv("FRAUD_TIMEZONE"):
            config.time.timezone = v
        if v := os.getenv("FRAUD_HIGH_RISK_MERCHANTS"):
            config.merchant.high_risk_categories = _split_csv(v)

        # Velocity overrides
        if v := os.getenv("FRAUD_VELOCITY_WINDOW_MINUTES"):
            config.velocity.window_minutes = int(v)

        # Diagnostic / recommendation overrides
        if v := os.getenv("FRAUD_FLAG_BONUS"):
            config.diagnostics.flag_bonus = float(v)
        if v := os.getenv("FRAUD_DECLINE_SCORE"):
            config.recommendation.decline_score = float(v)
        if v := os.getenv("FRAUD_REVIEW_SCORE"):
            config.recommendation.review_score = float(v)

        # Evaluation budget
        if v := os.getenv("FRAUD_MAX_RULES_PER_EVALUATION"):
            config.limits.max_rules_per_evaluation = int(v)

        return config


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


# Module-level default instance
default_config = FraudConfig()
