"""Tests for the collection service."""

import pytest

from whiskey_dash.exceptions import DataSourceError, UnknownSourceError
from whiskey_dash.filters import FilterState
from whiskey_dash.models import Bottle
from whiskey_dash.services import build_service


class TestLoading:
    """Test source selection."""

    def test_default_source_is_static(self, service, collection):
        assert service.load_bottles() == collection

    def test_sheets_source(self, service, collection):
        assert service.load_bottles("sheets") == collection[:2]

    def test_database_source(self, service, repository):
        repository.append_bottle(Bottle(name="Stagg", distillery="Buffalo Trace"))
        assert [bottle.name for bottle in service.load_bottles("database")] == ["Stagg"]

    def test_source_name_is_case_insensitive(self, service, collection):
        assert service.load_bottles("SHEETS") == collection[:2]

    def test_unknown_source(self, service):
        with pytest.raises(UnknownSourceError):
            service.load_bottles("postgres")

    def test_sheets_failure_propagates(self, failing_service):
        with pytest.raises(DataSourceError):
            failing_service.load_bottles("sheets")


class TestViews:
    """Test derived views."""

    def test_bottles_filtered(self, service):
        bottles = service.bottles(FilterState(country="Scotland"))
        assert {bottle.country for bottle in bottles} == {"Scotland"}

    def test_stats(self, service, collection):
        assert service.stats().total_bottles == sum(bottle.quantity for bottle in collection)

    def test_brands(self, service):
        assert [group.brand for group in service.brands("sheets")] == ["Blanton's", "Elijah Craig"]

    def test_brand_detail(self, service):
        detail = service.brand_detail("Elijah Craig")

        assert detail.group.total_bottles == 3
        assert [group.expression_name for group in detail.expressions] == ["Elijah Craig Barrel Proof"]
        assert detail.expressions[0].total_quantity == 3

    def test_brand_detail_unknown(self, service):
        assert service.brand_detail("Pappy") is None

    def test_expressions(self, service, collection):
        assert len(service.expressions()) == len({bottle.name for bottle in collection})


class TestWrites:
    """Test the append path and sync workflows."""

    def test_add_to_static(self, service, dataset):
        assert service.add_bottle(Bottle(name="Stagg", distillery="Buffalo Trace")) == "static"
        assert dataset.load()[-1].name == "Stagg"

    def test_add_to_sheets(self, service, sheets_client):
        service.add_bottle(Bottle(name="Stagg"), "sheets")
        assert [bottle.name for bottle in sheets_client.appended] == ["Stagg"]

    def test_add_to_database(self, service, repository):
        service.add_bottle(Bottle(name="Stagg"), "database")
        assert [bottle.name for bottle in repository.list_bottles()] == ["Stagg"]

    def test_sync_from_sheets_overwrites_dataset(self, service, dataset, collection):
        assert service.sync_from_sheets() == 2
        assert dataset.load() == collection[:2]

    def test_sync_from_database(self, service, dataset, repository):
        repository.append_bottle(Bottle(name="Stagg", purchase_price=60))
        assert service.sync_from_database() == 1
        assert [bottle.name for bottle in dataset.load()] == ["Stagg"]

    def test_failed_sync_keeps_dataset(self, failing_service, dataset, collection):
        with pytest.raises(DataSourceError):
            failing_service.sync_from_sheets()
        assert dataset.load() == collection


class TestBuildService:
    """Test wiring from configuration."""

    def test_uses_brand_rules_file(self, config_factory, tmp_path):
        rules = tmp_path / "brands.json"
        rules.write_text('{"single_word_brands": ["Eagle"]}', encoding="utf-8")
        service, repository = build_service(config_factory(brand_rules_file=rules))
        try:
            service.add_bottle(Bottle(name="Eagle Rare 10"))
            assert [group.brand for group in service.brands()] == ["Eagle"]
        finally:
            repository.close()
