"""Tests for collection filtering and sorting."""

from whiskey_dash.filters import FilterState, apply_filters, filter_options
from whiskey_dash.models import Bottle, SortField, SortOrder


class TestApplyFilters:
    """Test search and category filters."""

    def test_default_sorts_by_name(self, collection):
        names = [bottle.name for bottle in apply_filters(collection)]
        assert names == sorted(names, key=str.lower)

    def test_search_is_case_insensitive(self, collection):
        result = apply_filters(collection, FilterState(search="craig"))
        assert {bottle.name for bottle in result} == {"Elijah Craig Barrel Proof"}

    def test_search_matches_distillery_and_batch(self):
        bottles = [
            Bottle(name="Stagg", distillery="Buffalo Trace"),
            Bottle(name="Larceny Barrel Proof", batch="B524"),
            Bottle(name="Mellow Corn"),
        ]
        assert [bottle.name for bottle in apply_filters(bottles, FilterState(search="buffalo"))] == ["Stagg"]
        assert [bottle.name for bottle in apply_filters(bottles, FilterState(search="b524"))] == ["Larceny Barrel Proof"]

    def test_category_filters_are_exact(self, collection):
        result = apply_filters(collection, FilterState(country="Scotland", distillery="Ardbeg"))
        assert [bottle.name for bottle in result] == ["Ardbeg Traigh Bhan"]

    def test_type_filter(self, collection):
        result = apply_filters(collection, FilterState(type="Bourbon"))
        assert all(bottle.type == "Bourbon" for bottle in result)
        assert len(result) == 3

    def test_input_untouched(self, collection):
        snapshot = list(collection)
        apply_filters(collection, FilterState(sort_order=SortOrder.DESC))
        assert collection == snapshot


class TestSorting:
    """Test sort fields and directions."""

    def test_sort_by_price_descending(self, collection):
        result = apply_filters(collection, FilterState(sort_by=SortField.PURCHASE_PRICE, sort_order=SortOrder.DESC))
        prices = [bottle.purchase_price for bottle in result]
        assert prices == sorted(prices, reverse=True)

    def test_sort_by_purchase_date(self):
        bottles = [
            Bottle(name="A", purchase_date="3/5/2023"),
            Bottle(name="B", purchase_date="11/2/2022"),
            Bottle(name="C", purchase_date="unknown"),
        ]
        result = apply_filters(bottles, FilterState(sort_by=SortField.PURCHASE_DATE))
        assert [bottle.name for bottle in result] == ["C", "B", "A"]

    def test_sort_by_replacement_cost_puts_missing_first(self):
        bottles = [
            Bottle(name="A", replacement_cost=90),
            Bottle(name="B"),
            Bottle(name="C", replacement_cost=40),
        ]
        result = apply_filters(bottles, FilterState(sort_by=SortField.REPLACEMENT_COST))
        assert [bottle.name for bottle in result] == ["B", "C", "A"]


class TestFilterOptions:
    """Test picker values."""

    def test_distinct_sorted_values(self, collection):
        options = filter_options(collection)
        assert options["countries"] == ["Scotland", "US"]
        assert options["types"] == ["Bourbon", "Scotch"]
        assert options["distilleries"] == ["Ardbeg", "Buffalo Trace", "Heaven Hill", "Laphroaig"]

    def test_blank_distillery_excluded(self):
        options = filter_options([Bottle(name="A", distillery=""), Bottle(name="B", distillery="-")])
        assert options["distilleries"] == []
