"""Device risk signal contract.

The device factor is supplied by an external fingerprint-risk source. Any
object with a ``score(transaction, history) -> float`` method returning a
value in [0, 100] can be injected into the calculator. Values outside the
range are clamped by ``RiskFactors``.
"""

from collections.abc import Sequence
from typing import Protocol

from .config import DeviceSettings
from .models import Transaction


class DeviceRiskProvider(Protocol):
    def score(self, transaction: Transaction, history: Sequence[Transaction]) -> float: ...


class StaticDeviceRiskProvider:
    """Returns a fixed device risk. Useful for tests and for disabling the signal."""

    def __init__(self, value: float = 0.0) -> None:
        self._value = value

    def score(self, transaction: Transaction, history: Sequence[Transaction]) -> float:
        return self._value


class KnownDeviceRiskProvider:
    """First-seen-device signal derived from the user's recent history.

    A device not previously used by a user with recent activity scores high;
    a device already seen, or a user with no recent activity, scores low.
    """

    def __init__(self, settings: DeviceSettings | None = None) -> None:
        self._settings = settings or DeviceSettings()

    def score(self, transaction: Transaction, history: Sequence[Transaction]) -> float:
        user_history = [
            t
            for t in history
            if t.user_id == transaction.user_id and t.transaction_id != transaction.transaction_id
        ]
        if not user_history:
            return self._settings.no_history_score
        known_devices = {t.device.device_id for t in user_history}
        if transaction.device.device_id in known_devices:
            return self._settings.known_device_score
        return self._settings.new_device_score
