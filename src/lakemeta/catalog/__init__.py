"""
Metadata Catalog bridge.

Translates engine tables into registered platform descriptors.
"""

from .explorer import SparkMetadataExplorer
from .models import (
    ColumnDescriptor,
    PhysicalColumn,
    PhysicalTableSnapshot,
    SourceType,
    TableDescriptor,
    TableExtensionDescriptor,
)
from .reconciler import reconcile
from .sample_deployer import SampleDataDeployer
from .store import InMemoryMetadataStore, JsonFileMetadataStore, MetadataStore
from .type_mapper import map_type

__all__ = [
    "SparkMetadataExplorer",
    "SampleDataDeployer",
    "ColumnDescriptor",
    "PhysicalColumn",
    "PhysicalTableSnapshot",
    "SourceType",
    "TableDescriptor",
    "TableExtensionDescriptor",
    "InMemoryMetadataStore",
    "JsonFileMetadataStore",
    "MetadataStore",
    "reconcile",
    "map_type",
]
