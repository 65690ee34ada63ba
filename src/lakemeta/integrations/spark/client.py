"""
Spark engine session for the catalog bridge.

Wraps a SparkSession and exposes the few catalog operations the bridge needs:
running catalog SQL, describing a table's physical layout and reading
delimited files. Engine failures are translated into bridge errors here and
nowhere else.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from pyspark.conf import SparkConf
from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, Row, SparkSession

from lakemeta.catalog.models import PhysicalColumn, PhysicalTableSnapshot
from lakemeta.core.config import Settings, get_settings
from lakemeta.core.exceptions import (
    EngineUnavailableError,
    MetadataBridgeError,
    TableNotFoundError,
)
from lakemeta.core.logging import get_logger

from .config import SparkConfig

logger = get_logger(__name__)

DETAILED_INFO_MARKER = "# Detailed Table Information"

# DESCRIBE TABLE EXTENDED row names -> PhysicalTableSnapshot fields
_DETAIL_FIELDS = {
    "Type": "table_type",
    "Location": "storage_location",
    "Owner": "owner",
    "Created Time": "create_time",
    "Last Access": "last_access_time",
    "InputFormat": "input_format",
    "OutputFormat": "output_format",
}


def parse_table_details(rows: List[Row]) -> Dict[str, str]:
    """
    Extract the detailed table information section of DESCRIBE TABLE EXTENDED.

    Args:
        rows: Collected rows with col_name / data_type / comment

    Returns:
        Snapshot field name -> value for every recognised detail row
    """
    details: Dict[str, str] = {}
    in_details = False
    for row in rows:
        col_name = (row["col_name"] or "").strip()
        if col_name == DETAILED_INFO_MARKER:
            in_details = True
            continue
        if not in_details:
            continue
        if col_name.startswith("#"):
            # next section, e.g. "# Storage Information"
            continue
        field_name = _DETAIL_FIELDS.get(col_name)
        if field_name and row["data_type"] is not None:
            details[field_name] = row["data_type"].strip()
    return details


class SparkEngineSession:
    """
    Query engine collaborator backed by a SparkSession.

    The session is created lazily from settings unless one is passed in.
    If it cannot be created every operation raises EngineUnavailableError.
    """

    def __init__(self, spark: Optional[SparkSession] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.spark: Optional[SparkSession] = spark
        if self.spark is None:
            self._initialize_spark()

    def _initialize_spark(self):
        """Initialize the Spark session used for catalog access."""
        try:
            spark_settings = SparkConfig.get_spark_conf(
                self.settings.spark_app_name, self.settings.spark_master_url
            )
            conf = SparkConf()
            conf.setAll(list(spark_settings.items()))

            self.spark = SparkSession.builder.config(conf=conf).getOrCreate()
            self.spark.sparkContext.setLogLevel(self.settings.spark_log_level)

            logger.info(
                "Spark session initialized",
                master=spark_settings["spark.master"],
                version=self.spark.version,
            )
        except Exception as e:
            logger.warning(f"Failed to initialize Spark (catalog calls will fail): {e}")
            self.spark = None

    def _require_session(self) -> SparkSession:
        if self.spark is None:
            raise EngineUnavailableError("Spark session not initialized")
        return self.spark

    @contextmanager
    def _engine_errors(self, action: str, database: Optional[str] = None,
                       table: Optional[str] = None) -> Iterator[None]:
        """Translate Spark failures raised inside the block into bridge errors."""
        try:
            yield
        except MetadataBridgeError:
            raise
        except AnalysisException as e:
            if database is not None:
                raise TableNotFoundError(database, table) from e
            raise EngineUnavailableError(f"{action} failed: {e}") from e
        except Exception as e:
            raise EngineUnavailableError(f"{action} failed: {e}") from e

    def run_query(self, sql: str) -> List[Row]:
        """
        Execute a SQL statement and collect its rows.

        Args:
            sql: Statement to run

        Returns:
            Collected result rows
        """
        spark = self._require_session()
        with self._engine_errors("query"):
            logger.debug("Running query", sql=sql)
            return spark.sql(sql).collect()

    def table_exists(self, database: str, table: str) -> bool:
        """Check whether the engine catalog knows the table."""
        spark = self._require_session()
        with self._engine_errors("table lookup"):
            return spark.catalog.tableExists(table, database)

    def describe_physical_table(self, database: str, table: str) -> PhysicalTableSnapshot:
        """
        Describe a table's physical schema and storage facts.

        Args:
            database: Database name
            table: Table name

        Returns:
            PhysicalTableSnapshot for the table

        Raises:
            TableNotFoundError: The table is not in the engine catalog
            EngineUnavailableError: The session failed to answer
        """
        spark = self._require_session()
        if not self.table_exists(database, table):
            raise TableNotFoundError(database, table)

        with self._engine_errors("describe table", database, table):
            catalog_columns = spark.catalog.listColumns(table, database)
            detail_rows = spark.sql(f"DESCRIBE TABLE EXTENDED {database}.{table}").collect()

        columns = tuple(
            PhysicalColumn(name=c.name, data_type=c.dataType, comment=c.description or None)
            for c in catalog_columns
        )
        partition_columns = tuple(
            PhysicalColumn(name=c.name, data_type=c.dataType, comment=c.description or None)
            for c in catalog_columns
            if c.isPartition
        )
        details = parse_table_details(detail_rows)
        location = details.get("storage_location", "")
        file_size, file_count = self._content_summary(location)

        return PhysicalTableSnapshot(
            table_type=details.get("table_type"),
            columns=columns,
            partition_columns=partition_columns,
            storage_location=location,
            owner=details.get("owner", ""),
            create_time=details.get("create_time", ""),
            last_access_time=details.get("last_access_time", ""),
            file_size_bytes=file_size,
            file_count=file_count,
            input_format=details.get("input_format", ""),
            output_format=details.get("output_format", ""),
        )

    def _content_summary(self, location: str) -> Tuple[int, int]:
        """Total bytes and file count under a storage location.

        A location that is unset or no longer exists reports ``(0, 0)``.
        """
        if not location:
            return 0, 0
        spark = self._require_session()
        with self._engine_errors("content summary"):
            hadoop_conf = spark.sparkContext._jsc.hadoopConfiguration()
            path = spark.sparkContext._jvm.org.apache.hadoop.fs.Path(location)
            fs = path.getFileSystem(hadoop_conf)
            if not fs.exists(path):
                logger.warning("Table location does not exist", location=location)
                return 0, 0
            summary = fs.getContentSummary(path)
            return int(summary.getLength()), int(summary.getFileCount())

    def read_delimited(self, path: str) -> DataFrame:
        """Read a delimited (CSV) file or directory into a DataFrame."""
        spark = self._require_session()
        with self._engine_errors("read delimited"):
            return spark.read.csv(path)

    def create_temp_view(self, df: DataFrame, view_name: str) -> None:
        """
        Create a temporary view from a DataFrame.

        Args:
            df: Spark DataFrame
            view_name: Name for the temporary view
        """
        with self._engine_errors("create temp view"):
            df.createOrReplaceTempView(view_name)

    def is_initialized(self) -> bool:
        """Check if Spark session is initialized and active."""
        return self.spark is not None

    def stop(self):
        """Stop the Spark session."""
        if self.spark:
            self.spark.stop()
            logger.info("Spark session stopped")
            self.spark = None
