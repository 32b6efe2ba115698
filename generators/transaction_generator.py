"""Card transaction generator with suspicious-amount and velocity injection."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

from src.domains.fraud.models import DeviceInfo, Location, Merchant, Transaction

from .base import BaseGenerator
from .utils.distributions import (
    USER_AGENTS,
    generate_device_id,
    generate_ip_address,
    uniform_amount,
)

MERCHANTS = (
    Merchant(id="merchant_001", name="Amazon", category="E-commerce"),
    Merchant(id="merchant_002", name="Starbucks", category="Food & Beverage"),
    Merchant(id="merchant_003", name="Shell Gas Station", category="Gas Station"),
    Merchant(id="merchant_004", name="Best Buy", category="Electronics"),
    Merchant(id="merchant_005", name="Walmart", category="Retail"),
    Merchant(id="merchant_006", name="Netflix", category="Entertainment"),
    Merchant(id="merchant_007", name="Uber", category="Transportation"),
    Merchant(id="merchant_008", name="Casino Royal", category="Gambling"),
    Merchant(id="merchant_009", name="Money Transfer Co", category="Financial"),
    Merchant(id="merchant_010", name="Crypto Exchange", category="Cryptocurrency"),
)

LOCATIONS = (
    Location(country="United States", city="New York", coordinates=(40.7128, -74.0060)),
    Location(country="United States", city="Los Angeles", coordinates=(34.0522, -118.2437)),
    Location(country="United Kingdom", city="London", coordinates=(51.5074, -0.1278)),
    Location(country="Canada", city="Toronto", coordinates=(43.6532, -79.3832)),
    Location(country="Germany", city="Berlin", coordinates=(52.5200, 13.4050)),
    Location(country="Japan", city="Tokyo", coordinates=(35.6762, 139.6503)),
    Location(country="Nigeria", city="Lagos", coordinates=(6.5244, 3.3792)),
    Location(country="Russia", city="Moscow", coordinates=(55.7558, 37.6173)),
)

AMOUNT_RANGES = {
    "E-commerce": (20, 500),
    "Food & Beverage": (5, 150),
    "Gas Station": (25, 100),
    "Electronics": (100, 2000),
    "Retail": (15, 300),
    "Entertainment": (10, 50),
    "Transportation": (8, 75),
    "Gambling": (50, 5000),
    "Financial": (100, 10000),
    "Cryptocurrency": (500, 50000),
}
DEFAULT_AMOUNT_RANGE = (10, 100)


class TransactionGenerator(BaseGenerator):
    """Produces chronologically ordered ``Transaction`` records.

    Config keys (all optional): ``num_users``, ``start_time`` (ISO string),
    ``interval_seconds`` ([min, max] gap between transactions),
    ``suspicious_amount_rate``, ``suspicious_amount_range``,
    ``velocity_anomaly_rate``, ``velocity_burst_size``, ``device_change_rate``.
    """

    def __init__(self, config: dict[str, Any] | None = None, seed: int = 42):
        super().__init__(config or {}, seed=seed)
        num_users = self.config.get("num_users", 10)
        self._users = [f"user_{i:03d}" for i in range(1, num_users + 1)]
        self._devices = {user: generate_device_id(self.rng) for user in self._users}
        self._ips = {user: generate_ip_address(self.rng) for user in self._users}
        start = self.config.get("start_time")
        self._clock = datetime.fromisoformat(start) if start else datetime(2026, 1, 15, 9, 0, tzinfo=UTC)
        if self._clock.tzinfo is None:
            self._clock = self._clock.replace(tzinfo=UTC)

    def generate(self, num_transactions: int = 100) -> list[Transaction]:
        return list(self.stream(num_transactions))

    def stream(self, num_transactions: int) -> Iterator[Transaction]:
        config = self.config
        gap_min, gap_max = config.get("interval_seconds", [1, 4])
        produced = 0
        while produced < num_transactions:
            self._clock += timedelta(seconds=self.rng.uniform(gap_min, gap_max))
            user = self.rng.choice(self._users)

            # Velocity injection: a short burst from one user
            if self.rng.random() < config.get("velocity_anomaly_rate", 0.0):
                burst = min(config.get("velocity_burst_size", 5), num_transactions - produced)
                for _ in range(burst):
                    self._clock += timedelta(seconds=self.rng.uniform(1, 8))
                    yield self._make_transaction(user, self._clock)
                    produced += 1
                continue

            yield self._make_transaction(user, self._clock)
            produced += 1

    def _make_transaction(self, user: str, timestamp: datetime) -> Transaction:
        config = self.config
        merchant = self.rng.choice(MERCHANTS)
        location = self.rng.choice(LOCATIONS)

        low, high = AMOUNT_RANGES.get(merchant.category, DEFAULT_AMOUNT_RANGE)
        amount = uniform_amount(self.rng, low, high)

        # Suspicious amount injection
        if self.rng.random() < config.get("suspicious_amount_rate", 0.1):
            s_low, s_high = config.get("suspicious_amount_range", [10_000, 60_000])
            amount = uniform_amount(self.rng, s_low, s_high)

        if self.rng.random() < config.get("device_change_rate", 0.05):
            self._devices[user] = generate_device_id(self.rng)

        return Transaction(
            transaction_id=f"tx_{int(timestamp.timestamp() * 1000)}_{self._short_id()}",
            user_id=user,
            card_id=f"card_{user}_{self.rng.randint(1, 3)}",
            amount=Decimal(f"{amount:.2f}"),
            currency="USD",
            merchant=merchant,
            timestamp=timestamp,
            location=location,
            device=DeviceInfo(
                device_id=self._devices[user],
                ip_address=self._ips[user],
                user_agent=self.rng.choice(USER_AGENTS),
            ),
        )
