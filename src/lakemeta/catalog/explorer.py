"""
Source metadata explorer for the Spark engine.

Lists databases and tables from the engine, loads table metadata into
platform descriptors and provisions sample environments.
"""

from typing import List, Optional, Tuple

from lakemeta.catalog.models import (
    SourceType,
    TableDescriptor,
    TableExtensionDescriptor,
)
from lakemeta.catalog.reconciler import reconcile
from lakemeta.catalog.sample_deployer import SampleDataDeployer
from lakemeta.catalog.store import MetadataStore
from lakemeta.core.logging import LogContext, get_logger, log_performance

logger = get_logger(__name__)


class SparkMetadataExplorer:
    """
    Metadata explorer for tables living in a Spark session catalog.

    Args:
        engine: Query engine session (run_query, describe_physical_table,
            read_delimited, create_temp_view)
        store: Metadata store holding previously registered descriptors
        sample_deployer: Optional deployer; built from the engine if omitted
    """

    source_type = SourceType.SPARK

    def __init__(self, engine, store: MetadataStore,
                 sample_deployer: Optional[SampleDataDeployer] = None):
        self.engine = engine
        self.store = store
        self.sample_deployer = sample_deployer or SampleDataDeployer(engine)

    def get_table_meta_explorer(self):
        """Engine collaborator used to describe physical tables."""
        return self.engine

    def list_databases(self) -> List[str]:
        """List database names visible to the engine."""
        rows = self.engine.run_query("show databases")
        return [row[0] for row in rows]

    def list_tables(self, database: Optional[str] = None) -> List[str]:
        """
        List table names, optionally within one database.

        A blank database lists the engine's current database.
        """
        sql = "show tables"
        if database and database.strip():
            sql = f"{sql} in {database}"
        rows = self.engine.run_query(sql)
        return [row["tableName"] for row in rows]

    @log_performance("load table metadata")
    def load_table_metadata(
        self, database: str, table: str, project: Optional[str]
    ) -> Tuple[TableDescriptor, TableExtensionDescriptor]:
        """
        Describe a table and reconcile it with its registered descriptor.

        Args:
            database: Database name, used as supplied for lookups
            table: Table name, used as supplied for lookups
            project: Project the descriptors are loaded for

        Returns:
            (TableDescriptor, TableExtensionDescriptor), not persisted

        Raises:
            TableNotFoundError: The engine has no such table
            EngineUnavailableError: The engine session failed
        """
        with LogContext(database=database, table=table, project=project):
            physical = self.get_table_meta_explorer().describe_physical_table(database, table)
            existing = self.store.get(f"{database}.{table}")
            return reconcile(
                database,
                table,
                project,
                physical,
                existing,
                source_type=self.source_type,
            )

    def get_related_resources(self, descriptor: TableDescriptor) -> List[str]:
        return []

    def create_sample_database(self, database: str) -> None:
        self.sample_deployer.create_sample_database(database)

    def create_sample_table(self, descriptor: TableDescriptor) -> None:
        self.sample_deployer.create_sample_table(descriptor)

    def load_sample_data(self, table_name: str, table_file_dir: Optional[str] = None) -> None:
        self.sample_deployer.load_sample_data(table_name, table_file_dir)

    def create_wrapper_view(self, orig_table_name: str, view_name: str) -> None:
        self.sample_deployer.create_wrapper_view(orig_table_name, view_name)
