"""Arrow encoding for assembled output rows.

String columns are dictionary-encoded (categorical levels), timestamps
are stored in UTC, and every ``UNKNOWN`` becomes a null.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import pyarrow as pa

from core.constants import INTEGER_COLUMNS, TIMESTAMP_COLUMNS
from core.types import known_or_none

_TIMESTAMP_TYPE = pa.timestamp("us", tz="UTC")


def encode_table(rows: Sequence[dict[str, object]], columns: Sequence[str]) -> pa.Table:
    """Encode assembled rows as an Arrow table.

    Args:
        rows: Assembled output rows.
        columns: Column names in output order.

    Returns:
        Arrow table with one array per column.
    """
    arrays = [
        _encode_column(column, [known_or_none(row.get(column)) for row in rows])
        for column in columns
    ]
    return pa.table(arrays, names=list(columns))


def _encode_column(column: str, values: list[object]) -> pa.Array:
    if column in TIMESTAMP_COLUMNS:
        return pa.array([_to_utc(value) for value in values], type=_TIMESTAMP_TYPE)
    if column in INTEGER_COLUMNS:
        return pa.array(values, type=pa.int64())
    strings = [None if value is None else str(value) for value in values]
    return pa.array(strings, type=pa.string()).dictionary_encode()


def _to_utc(value: object) -> datetime | None:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
