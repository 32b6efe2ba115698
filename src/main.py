"""Headless transaction monitor.

Generates synthetic transactions, assesses each against the rolling history
and the default rule catalog, and prints one assessment per line followed by
the aggregate system metrics.

Usage:
    python -m src.main --count 200 --seed 7
"""

import argparse
import sys

import structlog

from generators.transaction_generator import TransactionGenerator
from src.config import settings
from src.domains.fraud.alerts import PatternMonitor
from src.domains.fraud.assessor import RiskAssessor
from src.domains.fraud.catalog import RuleCatalog
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.history import RecentHistory
from src.domains.fraud.metrics import MetricsAggregator
from src.shared.logging import setup_logging

logger = structlog.get_logger()


def build_assessor(config: FraudConfig) -> RiskAssessor:
    return RiskAssessor(
        catalog=RuleCatalog.with_defaults(),
        history=RecentHistory(capacity=settings.history_capacity),
        config=config,
        max_workers=settings.assessment_workers,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=f"{settings.app_name} transaction monitor")
    parser.add_argument("--count", type=int, default=100, help="Number of transactions")
    parser.add_argument("--seed", type=int, default=settings.simulation_seed)
    parser.add_argument(
        "--velocity-rate", type=float, default=0.05, help="Probability of a velocity burst"
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, json_output=settings.log_json)

    config = FraudConfig.from_env()
    config.limits.max_rules_per_evaluation = settings.max_rules_per_evaluation
    assessor = build_assessor(config)
    metrics = MetricsAggregator(tps_window_seconds=config.monitor.tps_window_seconds)
    monitor = PatternMonitor(config=config)
    generator = TransactionGenerator(
        config={"velocity_anomaly_rate": args.velocity_rate}, seed=args.seed
    )

    logger.info(
        "monitor_starting",
        app_name=settings.app_name,
        app_version=settings.app_version,
        count=args.count,
        seed=args.seed,
    )

    last_seen = None
    for txn in generator.stream(args.count):
        assessment = assessor.observe(txn)
        metrics.record(assessment, at=txn.timestamp)
        for alert in monitor.scan(assessor.history.snapshot(), now=txn.timestamp):
            logger.warning("pattern_alert", alert_type=alert.alert_type, message=alert.message)
        print(assessment.model_dump_json())
        last_seen = txn.timestamp

    summary = metrics.snapshot(now=last_seen)
    print(summary.model_dump_json(), file=sys.stderr)
    logger.info("monitor_finished", **summary.model_dump())


if __name__ == "__main__":
    main()
