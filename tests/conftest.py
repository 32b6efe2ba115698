"""Shared test fixtures for the fraud risk core."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from src.domains.fraud.catalog import RuleCatalog
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import DeviceInfo, Location, Merchant, Transaction

NOW = datetime(2026, 1, 15, 14, 0, 0, tzinfo=UTC)

_txn_counter = 0


def make_transaction(**kwargs) -> Transaction:
    """Build a transaction with safe defaults.

    Shortcut keys: ``country``, ``category``, ``device_id``, ``hour`` and
    ``seconds_ago`` (relative to NOW).
    """
    global _txn_counter
    _txn_counter += 1

    country = kwargs.pop("country", "United States")
    category = kwargs.pop("category", "E-commerce")
    device_id = kwargs.pop("device_id", "device_abc123")
    timestamp = kwargs.pop("timestamp", NOW)
    if "hour" in kwargs:
        timestamp = timestamp.replace(hour=kwargs.pop("hour"))
    if "seconds_ago" in kwargs:
        timestamp = timestamp - timedelta(seconds=kwargs.pop("seconds_ago"))

    defaults = {
        "transaction_id": f"txn-{_txn_counter}",
        "user_id": "user_001",
        "card_id": "card_user_001_1",
        "amount": Decimal("100.00"),
        "currency": "USD",
        "merchant": Merchant(id="merchant_001", name="Amazon", category=category),
        "timestamp": timestamp,
        "location": Location(country=country, city="", coordinates=None),
        "device": DeviceInfo(device_id=device_id, ip_address="10.0.1.50", user_agent="pytest"),
    }
    defaults.update(kwargs)
    return Transaction(**defaults)


def make_history(count: int, spacing_seconds: int = 10, **kwargs) -> tuple[Transaction, ...]:
    """Newest-first history of ``count`` transactions before NOW."""
    return tuple(
        make_transaction(seconds_ago=(i + 1) * spacing_seconds, **kwargs) for i in range(count)
    )


@pytest.fixture
def config() -> FraudConfig:
    return FraudConfig()


@pytest.fixture
def empty_catalog() -> RuleCatalog:
    return RuleCatalog()


@pytest.fixture
def default_catalog() -> RuleCatalog:
    return RuleCatalog.with_defaults()


@pytest.fixture
def fixed_clock():
    return lambda: 0.0
