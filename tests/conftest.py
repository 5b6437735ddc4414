"""Shared fixtures for whiskey_dash tests."""

from pathlib import Path

import pytest

from whiskey_dash.config import AppConfig
from whiskey_dash.database import SQLiteRepository
from whiskey_dash.dataset import StaticDataset
from whiskey_dash.exceptions import DataSourceError
from whiskey_dash.models import Bottle
from whiskey_dash.services import CollectionService


class FakeSheetsClient:
    """Stands in for Google Sheets; records appended bottles."""

    source_name = "sheets"

    def __init__(self, bottles=None, fail=False):
        self.bottles = list(bottles or [])
        self.appended = []
        self.fail = fail

    def fetch_bottles(self):
        if self.fail:
            raise DataSourceError("sheets", "CSV download failed: 503 Service Unavailable")
        return list(self.bottles)

    def append_bottle(self, bottle):
        if self.fail:
            raise DataSourceError("sheets", "Append failed")
        self.appended.append(bottle)


def make_config(tmp_path: Path, **overrides) -> AppConfig:
    values = dict(
        project_root=tmp_path,
        data_file=tmp_path / "whiskey_collection.json",
        database_file=tmp_path / "whiskey_dash.db",
        brand_rules_file=None,
        default_source="static",
        collection_password="whiskey2024",
        sheets_id="sheet-123",
        sheets_gid="0",
        sheets_range="Sheet1!A:P",
        sheets_access_token="token-abc",
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def collection():
    """A small collection covering the brand rules and the value semantics."""
    return [
        Bottle(name="Blanton's Gold", quantity=1, country="US", type="Bourbon", region="Kentucky",
               distillery="Buffalo Trace", age="", size="700ml", purchase_price=120, current_value=180),
        Bottle(name="Elijah Craig Barrel Proof", quantity=2, country="US", type="Bourbon", region="Kentucky",
               distillery="Heaven Hill", age="12 years", size="750ml", purchase_price=70, current_value=180,
               replacement_cost=90),
        Bottle(name="Elijah Craig Barrel Proof", quantity=1, country="US", type="Bourbon", region="Kentucky",
               distillery="Heaven Hill", age="12 years", size="375ml", purchase_price=40, current_value=50),
        Bottle(name="Laphroaig 10 Cask Strength", quantity=1, country="Scotland", type="Scotch", region="Islay",
               distillery="Laphroaig", age="10 years", size="750ml", purchase_price=85, current_value=110),
        Bottle(name="Ardbeg Traigh Bhan", quantity=1, country="Scotland", type="Scotch", region="Islay",
               distillery="Ardbeg", age="19 years", size="700ml", purchase_price=280, current_value=320),
        Bottle(name="Johnnie Walker White Walker", quantity=1, country="Scotland", type="Scotch", region="Speyside",
               distillery="-", age="NAS", size="750ml", purchase_price=36, current_value=50),
    ]


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)


@pytest.fixture
def dataset(config, collection):
    dataset = StaticDataset(config.data_file)
    dataset.save(collection)
    return dataset


@pytest.fixture
def repository(config):
    repository = SQLiteRepository(config.database_file)
    repository.initialise_schema()
    yield repository
    repository.close()


@pytest.fixture
def sheets_client(collection):
    return FakeSheetsClient(collection[:2])


@pytest.fixture
def service(config, dataset, repository, sheets_client):
    return CollectionService(config, dataset, repository, sheets_client)


@pytest.fixture
def config_factory(tmp_path):
    """Build an AppConfig rooted in tmp_path with selected overrides."""
    return lambda **overrides: make_config(tmp_path, **overrides)


@pytest.fixture
def failing_service(config, dataset, repository):
    """A service whose spreadsheet source is unreachable."""
    return CollectionService(config, dataset, repository, FakeSheetsClient(fail=True))
