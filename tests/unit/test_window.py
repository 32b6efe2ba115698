"""Tests for time window parsing."""

from datetime import timedelta

import pytest

from src.domains.fraud.rules import parse_time_window


class TestParseTimeWindow:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("5m", timedelta(minutes=5)),
            ("1h", timedelta(hours=1)),
            ("24h", timedelta(hours=24)),
            ("7d", timedelta(days=7)),
            (" 15M ", timedelta(minutes=15)),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_time_window(value) == expected

    @pytest.mark.parametrize("value", [None, "", "h", "5", "5w", "-5m", "1.5h", "0d"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_time_window(value)
