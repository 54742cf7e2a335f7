"""Unit tests for Arrow table encoding."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pyarrow as pa

from core.types import UNKNOWN
from store.table_encoding import encode_table

_CHICAGO = ZoneInfo("America/Chicago")


def test_encode_table_dictionary_encodes_strings() -> None:
    """String columns should be stored as categorical levels."""
    table = encode_table([{"kind": "Dog"}, {"kind": "Dog"}], ("kind",))

    assert pa.types.is_dictionary(table.schema.field("kind").type)


def test_encode_table_maps_unknown_to_null() -> None:
    """Unknown values should become nulls."""
    table = encode_table([{"name": UNKNOWN}, {"name": "Rex"}], ("name",))

    assert table.column("name").null_count == 1


def test_encode_table_stores_timestamps_in_utc() -> None:
    """Aware timestamps should be converted to UTC microseconds."""
    table = encode_table(
        [{"intake_date": datetime(2024, 1, 5, 10, 0, tzinfo=_CHICAGO)}],
        ("intake_date",),
    )

    stored = table.column("intake_date")[0].as_py()
    assert (str(table.schema.field("intake_date").type), stored.hour) == (
        "timestamp[us, tz=UTC]",
        16,
    )


def test_encode_table_stores_ages_as_int64() -> None:
    """Integer columns should be int64 with nulls for unknown."""
    table = encode_table([{"intake_age": 600}, {"intake_age": UNKNOWN}], ("intake_age",))

    assert (table.schema.field("intake_age").type, table.column("intake_age").to_pylist()) == (
        pa.int64(),
        [600, None],
    )
