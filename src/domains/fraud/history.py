"""Bounded, newest-first buffer of recently observed transactions."""

import threading
from collections import deque
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from .models import Transaction


class RecentHistory:
    """Thread-safe rolling window of the most recent transactions.

    Readers take ``snapshot()`` once per assessment so that the risk factor
    calculator and the rule evaluator see the same slice.
    """

    def __init__(self, capacity: int = 50, transactions: Iterable[Transaction] = ()) -> None:
        if capacity <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._items: deque[Transaction] = deque(maxlen=capacity)
        # Seed is newest-first; keep the newest entries when it overflows
        self._items.extend(list(transactions)[:capacity])

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def push(self, transaction: Transaction) -> None:
        """Record a transaction as the newest entry, evicting the oldest if full."""
        with self._lock:
            self._items.appendleft(transaction)

    def snapshot(self) -> tuple[Transaction, ...]:
        """Immutable newest-first copy of the buffer."""
        with self._lock:
            return tuple(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


def in_trailing_window(
    history: Sequence[Transaction],
    transaction: Transaction,
    window: timedelta,
) -> list[Transaction]:
    """Same-user history entries inside the window ending at the transaction's timestamp."""
    end: datetime = transaction.timestamp
    start = end - window
    return [
        t
        for t in history
        if t.user_id == transaction.user_id
        and t.transaction_id != transaction.transaction_id
        and start <= t.timestamp <= end
    ]
