"""Fraud core exceptions."""


class FraudCoreError(Exception):
    """Base class for fraud core errors."""


class MalformedRuleError(FraudCoreError):
    """A business rule cannot be evaluated as configured."""

    def __init__(self, rule_id: str, reason: str) -> None:
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(f"Rule {rule_id} is malformed: {reason}")


class InvalidTimeWindowError(MalformedRuleError):
    """A velocity rule carries a missing or unparseable time window."""


class InvalidStageTransition(FraudCoreError):
    """An assessment attempted to move backwards or skip a stage."""
