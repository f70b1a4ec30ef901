"""Tests for monetary reconciliation: line totals, order totals and money formatting."""

import random

import pytest
from invoicing.invoice.totals import CURRENCY_SUFFIX, format_money, line_total, order_total
from invoicing.order.order import OrderItem

NBSP = "\u00a0"


class TestLineTotal:
    @pytest.mark.parametrize(
        "qty, unit_price, expected",
        [
            (2, 500, 1000),
            (None, 500, 0),
            (2, None, 0),
            (None, None, 0),
            (0, 500, 0),
            (1.5, 10, 15),
        ],
    )
    def test_computed_from_unit_price_and_quantity(self, qty, unit_price, expected):
        item = OrderItem(qty=qty, unit_price=unit_price)
        assert line_total(item) == expected

    @pytest.mark.parametrize("qty, unit_price", [(2, 500), (None, 500), (2, None), (None, None)])
    def test_explicit_line_total_wins(self, qty, unit_price):
        item = OrderItem(qty=qty, unit_price=unit_price, line_total=900)
        assert line_total(item) == 900

    def test_explicit_zero_line_total_is_kept(self):
        item = OrderItem(qty=2, unit_price=500, line_total=0)
        assert line_total(item) == 0

    def test_nan_line_total_falls_back_to_computed(self):
        item = OrderItem(qty=2, unit_price=500, line_total=float("nan"))
        assert line_total(item) == 1000

    def test_never_returns_nan(self):
        item = OrderItem(qty=float("inf"), unit_price=0)
        assert line_total(item) == 0


class TestOrderTotal:
    def test_empty_collection_is_zero(self):
        assert order_total([]) == 0

    def test_none_collection_is_zero(self):
        assert order_total(None) == 0

    def test_sums_reconciled_line_totals(self):
        items = [
            OrderItem(qty=2, unit_price=500),
            OrderItem(qty=1, unit_price=250, line_total=200),
            OrderItem(qty=None, unit_price=999),
        ]
        assert order_total(items) == sum(line_total(item) for item in items) == 1200

    def test_invariant_under_reordering(self):
        items = [OrderItem(qty=q, unit_price=p) for q, p in [(3, 0.1), (7, 0.2), (1, 1e6), (2, 0.3), (5, 12.75)]]
        expected = order_total(items)

        rng = random.Random(7)
        for _ in range(20):
            shuffled = items[:]
            rng.shuffle(shuffled)
            assert order_total(shuffled) == expected


class TestFormatMoney:
    def test_none_is_empty(self):
        assert format_money(None) == ""

    @pytest.mark.parametrize("value", ["1234", float("nan"), float("inf"), True, object()])
    def test_non_numeric_is_empty(self, value):
        assert format_money(value) == ""

    def test_grouped_with_currency_suffix(self):
        result = format_money(1234)
        assert result == f"1{NBSP}234{NBSP}{CURRENCY_SUFFIX}"
        assert result.endswith(CURRENCY_SUFFIX)

    def test_zero(self):
        assert format_money(0) == f"0{NBSP}{CURRENCY_SUFFIX}"

    def test_fraction_uses_comma_and_drops_trailing_zeros(self):
        assert format_money(1234.5) == f"1{NBSP}234,5{NBSP}{CURRENCY_SUFFIX}"

    def test_at_most_three_fraction_digits(self):
        assert format_money(1234567.891) == f"1{NBSP}234{NBSP}567,891{NBSP}{CURRENCY_SUFFIX}"
        assert format_money(1.23456) == f"1,235{NBSP}{CURRENCY_SUFFIX}"

    def test_float_noise_is_rounded_away(self):
        assert format_money(0.1 + 0.2) == f"0,3{NBSP}{CURRENCY_SUFFIX}"

    def test_negative_amount(self):
        assert format_money(-1500) == f"-1{NBSP}500{NBSP}{CURRENCY_SUFFIX}"

    def test_never_prints_nan(self):
        assert "NaN" not in format_money(float("nan"))
