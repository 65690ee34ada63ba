from __future__ import annotations

import os
import sys
from pathlib import Path

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from pyspark.sql import Row

from lakemeta.catalog.models import PhysicalColumn, PhysicalTableSnapshot
from lakemeta.catalog.store import InMemoryMetadataStore
from lakemeta.core.exceptions import EngineUnavailableError, TableNotFoundError


class FakeEngine:
    """In-memory stand-in for the Spark engine session."""

    def __init__(self):
        self.tables: dict[tuple[str, str], PhysicalTableSnapshot] = {}
        self.queries: list[str] = []
        self.query_results: dict[str, list[Row]] = {}
        self.views: dict[str, object] = {}
        self.read_paths: list[str] = []
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise EngineUnavailableError("Spark session not initialized")

    def run_query(self, sql: str) -> list[Row]:
        self._check()
        self.queries.append(sql)
        return self.query_results.get(sql, [])

    def describe_physical_table(self, database: str, table: str) -> PhysicalTableSnapshot:
        self._check()
        try:
            return self.tables[(database, table)]
        except KeyError:
            raise TableNotFoundError(database, table) from None

    def read_delimited(self, path: str) -> object:
        self._check()
        self.read_paths.append(path)
        return {"path": path}

    def create_temp_view(self, df: object, view_name: str) -> None:
        self._check()
        self.views[view_name] = df

    def is_initialized(self) -> bool:
        return self.available


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest.fixture
def orders_snapshot() -> PhysicalTableSnapshot:
    return PhysicalTableSnapshot(
        table_type="EXTERNAL",
        columns=(
            PhysicalColumn("id", "int"),
            PhysicalColumn("amt", "float", "amount paid"),
        ),
        partition_columns=(),
        storage_location="/data/sales/orders",
        owner="etl",
        create_time="Mon Oct 19 10:00:00 UTC 2026",
        last_access_time="UNKNOWN",
        file_size_bytes=1024,
        file_count=2,
        input_format="org.apache.hadoop.mapred.TextInputFormat",
        output_format="org.apache.hadoop.hive.ql.io.HiveIgnoreKeyTextOutputFormat",
    )
