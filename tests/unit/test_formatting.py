"""
Unit tests for formatting helpers.
"""

import threading
import pytest
from datetime import date, datetime

from finance_api.src.utils import (
    debounce,
    deep_clone,
    format_currency,
    format_date,
    format_datetime,
    generate_id,
    is_empty,
)


class TestFormatCurrency:

    @pytest.mark.parametrize("amount,currency,expected", [
        (1234.5, "USD", "$1,234.50"),
        (0, "USD", "$0.00"),
        (-5, "USD", "-$5.00"),
        (1000000, "eur", "€1,000,000.00"),
        (1234.4, "JPY", "¥1,234"),
        (12, "CHF", "CHF 12.00"),
    ])
    def test_format(self, amount, currency, expected):
        assert format_currency(amount, currency) == expected

    def test_default_currency(self):
        assert format_currency(9.99) == "$9.99"


class TestFormatDate:

    @pytest.mark.parametrize("value", [
        date(2024, 1, 5),
        datetime(2024, 1, 5, 23, 59),
        "2024-01-05",
        "2024-01-05T10:00:00",
    ])
    def test_format_date(self, value):
        assert format_date(value) == "Jan 5, 2024"

    def test_utc_suffix(self):
        assert format_datetime("2024-01-05T15:04:00Z") == "Jan 5, 2024, 03:04 PM"
        assert format_date("2024-01-05T00:00:00.000Z") == "Jan 5, 2024"

    def test_format_datetime(self):
        assert format_datetime(datetime(2024, 1, 5, 15, 4)) == "Jan 5, 2024, 03:04 PM"

    def test_format_datetime_from_date(self):
        assert format_datetime(date(2024, 12, 25)) == "Dec 25, 2024, 12:00 AM"

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            format_date("05/01/2024")


class TestHelpers:

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, (), set()])
    def test_is_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, False, "a", [0], {"a": 1}])
    def test_is_not_empty(self, value):
        assert not is_empty(value)

    def test_deep_clone(self):
        original = {"tags": ["a"], "nested": {"amount": 1}}

        clone = deep_clone(original)
        clone["tags"].append("b")
        clone["nested"]["amount"] = 2

        assert original == {"tags": ["a"], "nested": {"amount": 1}}

    def test_generate_id_unique(self):
        ids = {generate_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(ids)


class TestDebounce:

    def test_only_last_call_runs(self):
        calls = []
        done = threading.Event()

        def record(value):
            calls.append(value)
            done.set()

        debounced = debounce(record, 0.05)
        debounced(1)
        debounced(2)
        debounced(3)

        assert done.wait(2)
        assert calls == [3]

    def test_cancel(self):
        calls = []
        debounced = debounce(calls.append, 0.05)

        debounced("x")
        debounced.cancel()

        assert not threading.Event().wait(0.15)
        assert calls == []

    def test_preserves_name(self):
        def save_settings():
            pass

        assert debounce(save_settings, 1).__name__ == "save_settings"
