"""Pydantic models for the fraud domain."""

import math
from datetime import datetime
from decimal import Decimal
from enum import IntEnum, StrEnum

import structlog
from pydantic import AwareDatetime, BaseModel, Field, field_validator

logger = structlog.get_logger()

FACTOR_NAMES = ("velocity", "amount", "location", "device", "time", "merchant")


class RuleCategory(StrEnum):
    VELOCITY = "VELOCITY"
    AMOUNT = "AMOUNT"
    LOCATION = "LOCATION"
    MERCHANT = "MERCHANT"
    TIME = "TIME"
    DEVICE = "DEVICE"


class RuleAction(StrEnum):
    BLOCK = "BLOCK"
    FLAG = "FLAG"
    LIMIT = "LIMIT"


class Severity(IntEnum):
    """Severity lattice: APPROVE < FLAG/LIMIT < BLOCK."""

    APPROVE = 0
    FLAG = 1
    BLOCK = 2


class Recommendation(StrEnum):
    APPROVE = "APPROVE"
    REVIEW = "REVIEW"
    DECLINE = "DECLINE"

    @property
    def rank(self) -> int:
        return _RECOMMENDATION_RANK[self]


_RECOMMENDATION_RANK = {
    Recommendation.APPROVE: 0,
    Recommendation.REVIEW: 1,
    Recommendation.DECLINE: 2,
}


class AssessmentStage(StrEnum):
    NEW = "NEW"
    SCORED = "SCORED"
    RULED = "RULED"
    FINAL = "FINAL"


class TriggerSource(StrEnum):
    RULE = "rule"
    GLOBAL = "global"


# --- Transaction ---


class Merchant(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    category: str


class Location(BaseModel):
    model_config = {"frozen": True}

    country: str
    city: str = ""
    coordinates: tuple[float, float] | None = None


class DeviceInfo(BaseModel):
    model_config = {"frozen": True}

    device_id: str
    ip_address: str = ""
    user_agent: str = ""


class Transaction(BaseModel):
    model_config = {"frozen": True}

    transaction_id: str
    user_id: str
    card_id: str = ""
    amount: Decimal = Field(ge=0)
    currency: str = "USD"
    merchant: Merchant
    timestamp: AwareDatetime
    location: Location
    device: DeviceInfo

    @property
    def amount_float(self) -> float:
        return float(self.amount)


# --- Risk factors & heuristic stage ---


class RiskFactors(BaseModel):
    """Six normalized sub-scores, each clamped to [0, 100]."""

    model_config = {"frozen": True}

    velocity: float = 0.0
    amount: float = 0.0
    location: float = 0.0
    device: float = 0.0
    time: float = 0.0
    merchant: float = 0.0

    @field_validator(*FACTOR_NAMES, mode="before")
    @classmethod
    def _clamp(cls, value, info):
        if value is None or (isinstance(value, float) and math.isnan(value)):
            logger.warning("risk_factor_missing", factor=info.field_name)
            return 0.0
        return max(0.0, min(100.0, float(value)))

    def values(self) -> list[float]:
        return [getattr(self, name) for name in FACTOR_NAMES]


class HeuristicResult(BaseModel):
    score: float = Field(ge=0, le=100)
    diagnostics: list[str] = []
    recommendation: Recommendation
    confidence: float = Field(ge=0, le=100)

    @property
    def flag_count(self) -> int:
        return len(self.diagnostics)


# --- Business rules ---


class GlobalSettings(BaseModel):
    model_config = {"frozen": True}

    max_transaction_amount: float = 50_000.0
    max_daily_transactions: int = 50
    blocked_countries: tuple[str, ...] = ()
    blocked_merchant_categories: tuple[str, ...] = ()
    allow_test_mode: bool = False


class BusinessRule(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    description: str = ""
    condition: str = ""
    # Unknown categories and actions are kept as plain strings
    category: RuleCategory | str = Field(union_mode="left_to_right")
    action: RuleAction | str = Field(default=RuleAction.FLAG, union_mode="left_to_right")
    threshold: float = 0.0
    is_active: bool = True
    priority: int = 0
    time_window: str | None = None
    created_at: datetime
    updated_at: datetime


class TriggeredRule(BaseModel):
    name: str
    source: TriggerSource
    action: str
    severity: Severity
    rule_id: str | None = None
    details: str = ""


class RuleVerdict(BaseModel):
    triggered: list[TriggeredRule] = []
    max_severity: Severity = Severity.APPROVE
    skipped_rule_ids: list[str] = []
    evaluated_count: int = 0
    budget_exhausted: bool = False

    @property
    def triggered_names(self) -> list[str]:
        return [t.name for t in self.triggered]


# --- Final record ---


class RiskAssessment(BaseModel):
    model_config = {"frozen": True}

    transaction_id: str
    overall_risk_score: float = Field(ge=0, le=100)
    risk_factors: RiskFactors
    triggered_rules: list[str] = []
    recommendation: Recommendation
    confidence: float = Field(ge=0, le=100)
    processing_time_ms: float = Field(default=0.0, ge=0)
    stage: AssessmentStage = AssessmentStage.FINAL
    catalog_version: int = 0
    test_mode: bool = False


class SystemMetrics(BaseModel):
    total_transactions: int = 0
    approved_transactions: int = 0
    reviewed_transactions: int = 0
    declined_transactions: int = 0
    average_risk_score: float = 0.0
    transactions_per_second: float = 0.0
    average_processing_time_ms: float = 0.0


class PatternAlert(BaseModel):
    alert_id: str
    alert_type: str
    severity: str
    message: str
    evidence: dict = Field(default_factory=dict)
    created_at: datetime
