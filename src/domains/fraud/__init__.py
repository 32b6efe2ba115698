"""Fraud risk assessment domain."""

from .alerts import PatternMonitor, count_suspicious_patterns
from .assessor import RiskAssessor
from .catalog import CatalogSnapshot, RuleCatalog
from .combiner import AssessmentTracker, DecisionCombiner
from .device_risk import DeviceRiskProvider, KnownDeviceRiskProvider, StaticDeviceRiskProvider
from .history import RecentHistory
from .metrics import MetricsAggregator
from .models import (
    AssessmentStage,
    BusinessRule,
    DeviceInfo,
    GlobalSettings,
    HeuristicResult,
    Location,
    Merchant,
    PatternAlert,
    Recommendation,
    RiskAssessment,
    RiskFactors,
    RuleAction,
    RuleCategory,
    RuleVerdict,
    Severity,
    SystemMetrics,
    Transaction,
)
from .risk_factors import RiskFactorCalculator
from .rules_engine import RuleEvaluator
from .scorer import RiskScorer

__all__ = [
    "AssessmentStage",
    "AssessmentTracker",
    "BusinessRule",
    "CatalogSnapshot",
    "DecisionCombiner",
    "DeviceInfo",
    "DeviceRiskProvider",
    "GlobalSettings",
    "HeuristicResult",
    "KnownDeviceRiskProvider",
    "Location",
    "Merchant",
    "MetricsAggregator",
    "PatternAlert",
    "PatternMonitor",
    "RecentHistory",
    "Recommendation",
    "RiskAssessment",
    "RiskAssessor",
    "RiskFactorCalculator",
    "RiskFactors",
    "RiskScorer",
    "RuleAction",
    "RuleCatalog",
    "RuleCategory",
    "RuleEvaluator",
    "RuleVerdict",
    "Severity",
    "StaticDeviceRiskProvider",
    "SystemMetrics",
    "Transaction",
    "count_suspicious_patterns",
]
