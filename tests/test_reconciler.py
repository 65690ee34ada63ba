import copy
from dataclasses import replace

from lakemeta.catalog.models import (
    DATA_SOURCE_PROPERTY_KEYS,
    ColumnDescriptor,
    PhysicalColumn,
    PhysicalTableSnapshot,
    SourceType,
    TableDescriptor,
)
from lakemeta.catalog.reconciler import (
    build_columns,
    format_partition_columns,
    reconcile,
)


def _registered() -> TableDescriptor:
    return TableDescriptor(
        uuid="9d1c6f0e-0000-4000-8000-000000000001",
        database="SALES",
        name="ORDERS",
        source_type=SourceType.HIVE,
        table_type="MANAGED",
        columns=(ColumnDescriptor("1", "OLD_COL", "string"),),
        last_modified=1700000000000,
    )


def test_reconcile_orders_without_registration(orders_snapshot):
    descriptor, extension = reconcile("sales", "orders", "demo", orders_snapshot, None)

    assert descriptor.database == "SALES"
    assert descriptor.name == "ORDERS"
    assert descriptor.uuid
    assert descriptor.last_modified == 0
    assert descriptor.source_type is SourceType.SPARK
    assert descriptor.table_type == "EXTERNAL"
    assert descriptor.columns == (
        ColumnDescriptor(id="1", name="ID", datatype="int", comment=None),
        ColumnDescriptor(id="2", name="AMT", datatype="double", comment="amount paid"),
    )

    assert extension.identity == "SALES.ORDERS"
    assert extension.uuid and extension.uuid != descriptor.uuid
    assert extension.last_modified == 0
    assert extension.project == "demo"
    props = extension.data_source_properties
    assert props["total_file_size"] == "1024"
    assert props["total_file_number"] == "2"
    assert props["partition_column"] == ""
    assert props["location"] == "/data/sales/orders"
    assert props["owner"] == "etl"
    assert props["last_access_time"] == "UNKNOWN"
    assert props["hive_inputFormat"] == "org.apache.hadoop.mapred.TextInputFormat"
    assert set(props) == {
        "location",
        "owner",
        "create_time",
        "last_access_time",
        "partition_column",
        "total_file_size",
        "total_file_number",
        "hive_inputFormat",
        "hive_outputFormat",
    }
    assert tuple(props) == DATA_SOURCE_PROPERTY_KEYS


def test_reconcile_keeps_registered_uuid(orders_snapshot):
    existing = _registered()

    descriptor, _ = reconcile("sales", "orders", "demo", orders_snapshot, existing)

    assert descriptor.uuid == existing.uuid
    assert descriptor.identity == "SALES.ORDERS"
    assert descriptor.last_modified == existing.last_modified


def test_reconcile_mints_distinct_uuids_for_new_tables(orders_snapshot):
    first, _ = reconcile("sales", "orders", None, orders_snapshot, None)
    second, _ = reconcile("sales", "orders", None, orders_snapshot, None)

    assert first.uuid != second.uuid


def test_reconcile_does_not_mutate_registered_descriptor(orders_snapshot):
    existing = _registered()
    before = copy.deepcopy(existing)

    descriptor, _ = reconcile("sales", "orders", "demo", orders_snapshot, existing)

    assert existing == before
    assert descriptor is not existing
    assert existing.columns == (ColumnDescriptor("1", "OLD_COL", "string"),)
    assert existing.source_type is SourceType.HIVE


def test_reconcile_keeps_table_type_when_snapshot_has_none(orders_snapshot):
    snapshot = replace(orders_snapshot, table_type=None)

    registered, _ = reconcile("sales", "orders", None, snapshot, _registered())
    fresh, _ = reconcile("sales", "orders", None, snapshot, None)

    assert registered.table_type == "MANAGED"
    assert fresh.table_type is None


def test_reconcile_restamps_source_type(orders_snapshot):
    descriptor, _ = reconcile("sales", "orders", None, orders_snapshot, _registered())

    assert descriptor.source_type is SourceType.SPARK


def test_reconcile_replaces_whole_column_list(orders_snapshot):
    descriptor, _ = reconcile("sales", "orders", None, orders_snapshot, _registered())

    assert [c.name for c in descriptor.columns] == ["ID", "AMT"]
    assert descriptor.get_column("OLD_COL") is None


def test_reconcile_table_without_columns():
    descriptor, extension = reconcile("db", "empty", None, PhysicalTableSnapshot(), None)

    assert descriptor.columns == ()
    assert extension.data_source_properties["partition_column"] == ""
    assert extension.data_source_properties["total_file_size"] == "0"


def test_build_columns_numbers_from_one_and_maps_types():
    columns = build_columns([PhysicalColumn("a", "float"), PhysicalColumn("b", "int")])

    assert [(c.id, c.name, c.datatype) for c in columns] == [
        ("1", "A", "double"),
        ("2", "B", "int"),
    ]


def test_format_partition_columns():
    assert format_partition_columns([PhysicalColumn("p1", "string"), PhysicalColumn("p2", "int")]) == "P1, P2"
    assert format_partition_columns([]) == ""


def test_partition_columns_are_not_cross_checked(orders_snapshot):
    snapshot = replace(orders_snapshot, partition_columns=(PhysicalColumn("dt", "string"),))

    descriptor, extension = reconcile("sales", "orders", None, snapshot, None)

    assert extension.data_source_properties["partition_column"] == "DT"
    assert descriptor.get_column("DT") is None


def test_reimport_is_idempotent(orders_snapshot):
    snapshot = replace(
        orders_snapshot,
        partition_columns=(PhysicalColumn("p1", "string"), PhysicalColumn("p2", "int")),
    )

    first, first_ext = reconcile("sales", "orders", "demo", snapshot, None)
    second, second_ext = reconcile("sales", "orders", "demo", snapshot, first)

    assert second.uuid == first.uuid
    assert second.columns == first.columns
    assert second == replace(first, last_modified=second.last_modified)
    assert second_ext.uuid != first_ext.uuid
    assert (
        second_ext.data_source_properties["partition_column"]
        == first_ext.data_source_properties["partition_column"]
        == "P1, P2"
    )
