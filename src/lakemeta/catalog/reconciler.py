"""
Table descriptor reconciliation.

Turns a physical snapshot from the engine into a registered TableDescriptor
and a TableExtensionDescriptor, keeping the identity of any previously
registered descriptor for the same table.
"""

import copy
import uuid
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from lakemeta.catalog.models import (
    PROP_CREATE_TIME,
    PROP_INPUT_FORMAT,
    PROP_LAST_ACCESS_TIME,
    PROP_LOCATION,
    PROP_OUTPUT_FORMAT,
    PROP_OWNER,
    PROP_PARTITION_COLUMN,
    PROP_TOTAL_FILE_NUMBER,
    PROP_TOTAL_FILE_SIZE,
    ColumnDescriptor,
    PhysicalColumn,
    PhysicalTableSnapshot,
    SourceType,
    TableDescriptor,
    TableExtensionDescriptor,
)
from lakemeta.catalog.type_mapper import map_type
from lakemeta.core.logging import get_logger

logger = get_logger(__name__)


def build_columns(physical_columns: Sequence[PhysicalColumn]) -> Tuple[ColumnDescriptor, ...]:
    """Build registered columns in physical order, ids starting at 1."""
    return tuple(
        ColumnDescriptor(
            id=str(position),
            name=column.name.upper(),
            datatype=map_type(column.data_type),
            comment=column.comment,
        )
        for position, column in enumerate(physical_columns, start=1)
    )


def format_partition_columns(partition_columns: Sequence[PhysicalColumn]) -> str:
    """Join upper-cased partition column names with ``", "``."""
    return ", ".join(column.name.upper() for column in partition_columns)


def reconcile(
    database: str,
    table: str,
    project: Optional[str],
    physical: PhysicalTableSnapshot,
    existing: Optional[TableDescriptor] = None,
    source_type: SourceType = SourceType.SPARK,
) -> Tuple[TableDescriptor, TableExtensionDescriptor]:
    """
    Merge a physical snapshot with the registered descriptor of the same table.

    Args:
        database: Database name as supplied by the caller
        table: Table name as supplied by the caller
        project: Project the extension descriptor belongs to
        physical: Snapshot reported by the engine
        existing: Previously registered descriptor, if any
        source_type: Engine the snapshot came from

    Returns:
        Tuple of (TableDescriptor, TableExtensionDescriptor). Both are new
        objects and neither is persisted.
    """
    if existing is None:
        descriptor = TableDescriptor(
            uuid=str(uuid.uuid4()),
            database=database.upper(),
            name=table.upper(),
            last_modified=0,
        )
    else:
        # make a new descriptor, don't touch the one in use
        descriptor = copy.deepcopy(existing)

    table_type = physical.table_type if physical.table_type is not None else descriptor.table_type
    descriptor = replace(
        descriptor,
        table_type=table_type,
        source_type=source_type,
        columns=build_columns(physical.columns),
    )

    extension = TableExtensionDescriptor(
        identity=descriptor.identity,
        uuid=str(uuid.uuid4()),
        last_modified=0,
        project=project,
        data_source_properties={
            PROP_LOCATION: physical.storage_location,
            PROP_OWNER: physical.owner,
            PROP_CREATE_TIME: physical.create_time,
            PROP_LAST_ACCESS_TIME: physical.last_access_time,
            PROP_PARTITION_COLUMN: format_partition_columns(physical.partition_columns),
            PROP_TOTAL_FILE_SIZE: str(physical.file_size_bytes),
            PROP_TOTAL_FILE_NUMBER: str(physical.file_count),
            PROP_INPUT_FORMAT: physical.input_format,
            PROP_OUTPUT_FORMAT: physical.output_format,
        },
    )

    logger.debug(
        "Reconciled table descriptor",
        identity=descriptor.identity,
        uuid=descriptor.uuid,
        registered=existing is not None,
        columns=len(descriptor.columns),
    )
    return descriptor, extension
