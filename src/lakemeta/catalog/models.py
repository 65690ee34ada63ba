"""
Metadata Catalog data models.

Physical models describe a table as the query engine reports it right now.
Descriptor models are the platform's registered view of that table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class SourceType(Enum):
    """Engines a table descriptor can be imported from."""
    HIVE = "hive"
    SPARK = "spark"


# Keys of TableExtensionDescriptor.data_source_properties
PROP_LOCATION = "location"
PROP_OWNER = "owner"
PROP_CREATE_TIME = "create_time"
PROP_LAST_ACCESS_TIME = "last_access_time"
PROP_PARTITION_COLUMN = "partition_column"
PROP_TOTAL_FILE_SIZE = "total_file_size"
PROP_TOTAL_FILE_NUMBER = "total_file_number"
PROP_INPUT_FORMAT = "hive_inputFormat"
PROP_OUTPUT_FORMAT = "hive_outputFormat"

DATA_SOURCE_PROPERTY_KEYS = (
    PROP_LOCATION,
    PROP_OWNER,
    PROP_CREATE_TIME,
    PROP_LAST_ACCESS_TIME,
    PROP_PARTITION_COLUMN,
    PROP_TOTAL_FILE_SIZE,
    PROP_TOTAL_FILE_NUMBER,
    PROP_INPUT_FORMAT,
    PROP_OUTPUT_FORMAT,
)


@dataclass(frozen=True)
class PhysicalColumn:
    """A column as reported by the engine."""
    name: str
    data_type: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class PhysicalTableSnapshot:
    """Point-in-time physical facts about one engine table."""
    columns: Tuple[PhysicalColumn, ...] = ()
    partition_columns: Tuple[PhysicalColumn, ...] = ()
    table_type: Optional[str] = None
    storage_location: str = ""
    owner: str = ""
    create_time: str = ""
    last_access_time: str = ""
    file_size_bytes: int = 0
    file_count: int = 0
    input_format: str = ""
    output_format: str = ""


@dataclass(frozen=True)
class ColumnDescriptor:
    """Represents a registered table column."""
    id: str
    name: str
    datatype: str
    comment: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "datatype": self.datatype,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ColumnDescriptor":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            datatype=data["datatype"],
            comment=data.get("comment"),
        )


@dataclass(frozen=True)
class TableDescriptor:
    """The platform's registered schema and identity of a table."""
    uuid: str
    database: str
    name: str
    source_type: Optional[SourceType] = None
    table_type: Optional[str] = None
    columns: Tuple[ColumnDescriptor, ...] = ()
    last_modified: int = 0

    @property
    def identity(self) -> str:
        """Qualified name, ``DATABASE.NAME``."""
        return f"{self.database}.{self.name}"

    def get_column(self, name: str) -> Optional[ColumnDescriptor]:
        """Get column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "uuid": self.uuid,
            "database": self.database,
            "name": self.name,
            "source_type": self.source_type.value if self.source_type else None,
            "table_type": self.table_type,
            "columns": [col.to_dict() for col in self.columns],
            "last_modified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "TableDescriptor":
        """Create from dictionary."""
        return cls(
            uuid=data["uuid"],
            database=data["database"],
            name=data["name"],
            source_type=SourceType(data["source_type"]) if data.get("source_type") else None,
            table_type=data.get("table_type"),
            columns=tuple(ColumnDescriptor.from_dict(col) for col in data.get("columns", [])),
            last_modified=data.get("last_modified", 0),
        )


@dataclass(frozen=True)
class TableExtensionDescriptor:
    """Storage statistics and physical layout captured at import time."""
    identity: str
    uuid: str
    last_modified: int = 0
    project: Optional[str] = None
    data_source_properties: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "identity": self.identity,
            "uuid": self.uuid,
            "last_modified": self.last_modified,
            "project": self.project,
            "data_source_properties": dict(self.data_source_properties),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "TableExtensionDescriptor":
        """Create from dictionary."""
        return cls(
            identity=data["identity"],
            uuid=data["uuid"],
            last_modified=data.get("last_modified", 0),
            project=data.get("project"),
            data_source_properties=dict(data.get("data_source_properties", {})),
        )
