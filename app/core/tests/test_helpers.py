"""
Tests for core helper functions.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from core.helpers import ID_ALPHABET, generate_id, quantize_money


class TestGenerateId:
    def test_format(self):
        value = generate_id("bet")

        prefix, body = value.split("_")
        assert prefix == "bet"
        assert len(body) == 17
        assert set(body) <= set(ID_ALPHABET)

    def test_timestamp_is_nine_zero_padded_base36_digits(self):
        with patch("core.helpers.time.time_ns", return_value=36 * 10**6):
            value = generate_id("acc")

        assert value[len("acc_") : len("acc_") + 9] == "000000010"

    def test_later_ids_sort_after_earlier_ones(self):
        with patch("core.helpers.time.time_ns", return_value=1_700_000_000_000 * 10**6):
            earlier = generate_id("txn")
        with patch("core.helpers.time.time_ns", return_value=1_700_000_000_001 * 10**6):
            later = generate_id("txn")

        assert earlier < later

    def test_ids_are_unique(self):
        assert len({generate_id("acc") for _ in range(1000)}) == 1000


class TestQuantizeMoney:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1.005", "1.01"),
            ("1.004", "1.00"),
            ("25500", "25500.00"),
            ("-2.345", "-2.35"),
        ],
    )
    def test_rounds_half_up_to_cents(self, value, expected):
        assert quantize_money(Decimal(value)) == Decimal(expected)

    def test_keeps_two_places(self):
        assert str(quantize_money(Decimal("7"))) == "7.00"
