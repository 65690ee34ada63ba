"""
Sample environment bootstrapping.

Creates demo databases and tables in the engine and exposes sample CSV files
as temporary views.
"""

from typing import List, Optional

from lakemeta.catalog.models import TableDescriptor
from lakemeta.core.config import get_settings
from lakemeta.core.exceptions import UnsupportedOperationError
from lakemeta.core.logging import get_logger

logger = get_logger(__name__)


def generate_create_schema_sql(schema_name: str) -> str:
    return f"CREATE DATABASE IF NOT EXISTS {schema_name}"


def generate_create_table_sql(descriptor: TableDescriptor, storage_format: str) -> List[str]:
    """
    Build the statements that (re)create a table from its descriptor.

    Returns:
        [drop statement, create statement]
    """
    drop_sql = f"DROP TABLE IF EXISTS {descriptor.identity}"

    column_defs = ",".join(f"{col.name} {col.datatype}\n" for col in descriptor.columns)
    create_sql = (
        f"CREATE TABLE {descriptor.identity}\n"
        f"(\n"
        f"{column_defs}"
        f")\n"
        f"USING {storage_format}"
    )
    return [drop_sql, create_sql]


class SampleDataDeployer:
    """Provisions sample schemas, tables and data through an engine session."""

    def __init__(self, engine, storage_format: Optional[str] = None):
        self.engine = engine
        self.storage_format = storage_format or get_settings().sample_table_format

    def create_sample_database(self, database: str) -> None:
        """Create a schema if it does not exist yet."""
        self.engine.run_query(generate_create_schema_sql(database))
        logger.info(f"Created sample database {database}")

    def create_sample_table(self, descriptor: TableDescriptor) -> None:
        """Drop and recreate a table from its descriptor."""
        for sql in generate_create_table_sql(descriptor, self.storage_format):
            self.engine.run_query(sql)
        logger.info(f"Created sample table {descriptor.identity}")

    def load_sample_data(self, table_name: str, table_file_dir: Optional[str] = None) -> None:
        """
        Expose ``<table_file_dir>/<table_name>.csv`` as a temporary view.

        The view is named after the table with any schema qualifier dropped.
        The directory defaults to the configured sample data directory.
        """
        table_file_dir = table_file_dir or get_settings().sample_data_dir
        df = self.engine.read_delimited(f"{table_file_dir}/{table_name}.csv")
        view_name = table_name
        if table_name.find(".") > 0:
            view_name = table_name[table_name.find(".") + 1:]
        self.engine.create_temp_view(df, view_name)
        logger.info(f"Loaded sample data for {table_name}", view=view_name)

    def create_wrapper_view(self, orig_table_name: str, view_name: str) -> None:
        raise UnsupportedOperationError("unsupported operation: create wrapper view")
