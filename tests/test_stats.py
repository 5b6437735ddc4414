"""Tests for the statistics aggregator and currency formatting."""

import pytest

from whiskey_dash.expressions import group_by_expression
from whiskey_dash.models import Bottle, CollectionStats
from whiskey_dash.stats import average_age, compute_stats, format_currency, format_percentage


class TestComputeStats:
    """Test portfolio totals."""

    def test_investment_value_and_gain(self):
        bottles = [
            Bottle(name="A", quantity=2, purchase_price=10, current_value=30),
            Bottle(name="B", quantity=1, purchase_price=5, current_value=5),
        ]

        stats = compute_stats(bottles)

        assert stats.total_investment == 25
        assert stats.total_value == 35
        assert stats.total_gain_loss == 10
        assert stats.total_bottles == 3

    def test_empty_collection(self):
        stats = compute_stats([])

        assert stats == CollectionStats()
        assert stats.average_age == 0
        assert stats.gain_loss_percentage == 0
        assert stats.country_breakdown == {}
        assert stats.type_breakdown == {}
        assert stats.distillery_breakdown == {}

    def test_replacement_cost_is_per_bottle(self):
        stats = compute_stats([Bottle(name="A", quantity=3, current_value=150, replacement_cost=60)])
        assert stats.total_replacement_cost == 180

    def test_replacement_cost_falls_back_to_value_times_quantity(self):
        stats = compute_stats([Bottle(name="A", quantity=2, current_value=100)])
        assert stats.total_replacement_cost == 200

    def test_quantity_matches_expression_totals(self, collection):
        stats = compute_stats(collection)
        assert stats.total_bottles == sum(group.total_quantity for group in group_by_expression(collection))

    def test_gain_loss_percentage(self):
        stats = compute_stats([Bottle(name="A", quantity=2, purchase_price=50, current_value=150)])
        assert stats.gain_loss_percentage == pytest.approx(50.0)

    def test_accepts_generators(self, collection):
        assert compute_stats(bottle for bottle in collection) == compute_stats(collection)


class TestBreakdowns:
    """Test category breakdowns."""

    def test_country_and_type_weighted_by_quantity(self, collection):
        stats = compute_stats(collection)
        assert stats.country_breakdown == {"US": 4, "Scotland": 3}
        assert stats.type_breakdown == {"Bourbon": 4, "Scotch": 3}

    def test_distillery_placeholder_excluded(self, collection):
        stats = compute_stats(collection)
        assert "-" not in stats.distillery_breakdown
        assert stats.distillery_breakdown["Heaven Hill"] == 3
        assert sum(stats.distillery_breakdown.values()) == stats.total_bottles - 1
        assert stats.country_breakdown["Scotland"] == 3

    def test_empty_category_is_a_key(self):
        stats = compute_stats([Bottle(name="A", quantity=2, country="", type="")])
        assert stats.country_breakdown == {"": 2}
        assert stats.type_breakdown == {"": 2}


class TestAverageAge:
    """Test average age parsing."""

    def test_mean_of_numeric_ages(self):
        bottles = [Bottle(name="A", age="10 years"), Bottle(name="B", age="18yr")]
        assert average_age(bottles) == 14

    def test_empty_and_placeholder_excluded(self):
        bottles = [Bottle(name="A", age="12"), Bottle(name="B", age=""), Bottle(name="C", age="-")]
        assert average_age(bottles) == 12

    def test_non_numeric_age_counts_as_zero(self):
        bottles = [Bottle(name="A", age="12"), Bottle(name="B", age="NAS")]
        assert average_age(bottles) == 6

    def test_first_number_is_used(self):
        assert average_age([Bottle(name="A", age="Aged 8 to 10 years")]) == 8

    def test_no_qualifying_bottles(self):
        assert average_age([Bottle(name="A", age="-")]) == 0

    def test_collection_fixture(self, collection):
        # 12, 12, 10, 19 and NAS (0); Blanton's has no age.
        assert compute_stats(collection).average_age == pytest.approx(53 / 5)


class TestFormatting:
    """Test currency and percentage formatting."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (0, "$0"),
            (1234.5, "$1,235"),
            (1234.49, "$1,234"),
            (1000000, "$1,000,000"),
            (-50, "-$50"),
            (-1234.5, "-$1,235"),
            (-0.4, "-$0"),
        ],
    )
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_percentage(self):
        assert format_percentage(12.345) == "+12.3%"
        assert format_percentage(0) == "+0.0%"
        assert format_percentage(-3) == "-3.0%"
