"""Build payload persistence helpers.

This module writes encoded output tables as Parquet files and anomaly
warnings as a JSONL sidecar, and reads both back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from core.constants import ANOMALIES_FILE_NAME
from core.errors import ImpoundStoreError
from core.types import PairingAnomaly


def write_table(table_path: Path, table: pa.Table) -> None:
    """Persist one encoded table as Parquet.

    Args:
        table_path: Destination Parquet path.
        table: Encoded output table.

    Raises:
        ImpoundStoreError: If the write fails.
    """
    try:
        pq.write_table(table, table_path)
    except (OSError, pa.ArrowException) as error:
        raise ImpoundStoreError(
            f"Failed to write table at {table_path}: {error}. "
            "Check write permissions and available disk space."
        ) from error


def read_table(table_path: Path) -> pa.Table:
    """Load one Parquet table.

    Raises:
        ImpoundStoreError: If the file is missing or unreadable.
    """
    if not table_path.exists():
        raise ImpoundStoreError(
            f"Failed to load build table at {table_path}: file is missing. "
            "Rerun the build to regenerate its tables."
        )
    try:
        return pq.read_table(table_path)
    except (OSError, pa.ArrowException) as error:
        raise ImpoundStoreError(
            f"Failed to read build table at {table_path}: {error}. "
            "Rerun the build to regenerate its tables."
        ) from error


def write_anomalies(build_dir: Path, anomalies: Sequence[PairingAnomaly]) -> None:
    """Write pairing warnings to the JSONL sidecar.

    Args:
        build_dir: Build directory.
        anomalies: Warnings in emission order.

    Raises:
        ImpoundStoreError: If the write fails.
    """
    anomalies_path = build_dir / ANOMALIES_FILE_NAME
    lines = [json.dumps(_payload_from_anomaly(anomaly), sort_keys=True) for anomaly in anomalies]
    try:
        anomalies_path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    except OSError as error:
        raise ImpoundStoreError(
            f"Failed to persist anomalies at {anomalies_path}: {error}. "
            "Check write permissions and available disk space."
        ) from error


def read_anomalies(build_dir: Path) -> list[dict[str, Any]]:
    """Load pairing warnings from the JSONL sidecar.

    Args:
        build_dir: Build directory.

    Returns:
        Warning payloads in emission order.

    Raises:
        ImpoundStoreError: If the sidecar is missing or invalid.
    """
    anomalies_path = build_dir / ANOMALIES_FILE_NAME
    if not anomalies_path.exists():
        raise ImpoundStoreError(
            f"Failed to load anomalies at {build_dir}: missing {ANOMALIES_FILE_NAME}."
        )
    payloads: list[dict[str, Any]] = []
    lines = anomalies_path.read_text(encoding="utf-8").splitlines()
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            payloads.append(json.loads(line))
        except json.JSONDecodeError as error:
            raise ImpoundStoreError(
                f"Failed to parse {anomalies_path} line {line_number}: {error.msg}. "
                "Rerun the build to regenerate the anomaly log."
            ) from error
    return payloads


def _payload_from_anomaly(anomaly: PairingAnomaly) -> dict[str, Any]:
    return {
        "animal_id": anomaly.animal_id,
        "anomaly": anomaly.kind.name,
        "message": anomaly.message,
        "dropped_count": anomaly.dropped_count,
    }
