"""Source CSV readers for ingestion.

This module loads shelter CSV tables from local paths, S3 objects, or
open-data portal exports cached under the data root.
Every column is read as text so identifiers keep leading zeros and
wrangling sees the raw values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.csv as pa_csv

from core.config import ImpoundConfig
from core.constants import SUPPORTED_SOURCE_EXTENSIONS
from core.errors import ImpoundDependencyError, ImpoundIngestError
from core.logging_config import get_logger
from core.s3_uri import S3Location, parse_s3_uri
from ingest.portal_fetch import fetch_portal_csv, is_portal_uri

_LOGGER = get_logger(__name__)
_NULL_VALUES = ["", "NA"]

SourceRows = list[dict[str, Any]]


def read_csv_rows(
    source_uri: str,
    config: ImpoundConfig,
    refresh: bool = False,
) -> SourceRows:
    """Load CSV rows from a local file, S3 object, or portal data set.

    Args:
        source_uri: Local CSV path, ``s3://bucket/key`` URI, or a
            ``socrata://`` / ``junar://`` portal reference.
        config: Runtime configuration for S3 and portal access.
        refresh: Re-download portal sources even when cached.

    Returns:
        Rows in file order, each a column-name to text mapping with
        ``None`` for blank or ``NA`` cells.

    Raises:
        ImpoundIngestError: If the source cannot be read or parsed.
    """
    if is_portal_uri(source_uri):
        payload = _read_local_file(fetch_portal_csv(source_uri, config, refresh=refresh))
    elif source_uri.startswith("s3://"):
        payload = _read_s3_object(parse_s3_uri(source_uri), config)
    else:
        payload = _read_local_file(Path(source_uri).expanduser())
    rows = _parse_csv_payload(source_uri, payload)
    _LOGGER.info("source_loaded", source_uri=source_uri, row_count=len(rows))
    return rows


def _read_local_file(source_path: Path) -> bytes:
    """Read a local CSV file.

    Raises:
        ImpoundIngestError: If path is missing or not a CSV file.
    """
    if not source_path.is_file():
        raise ImpoundIngestError(
            f"Failed to read source at {source_path}: file does not exist. "
            "Provide an existing CSV file."
        )
    if source_path.suffix.lower() not in SUPPORTED_SOURCE_EXTENSIONS:
        raise ImpoundIngestError(
            f"Unsupported source file {source_path}. "
            f"Supported extensions: {SUPPORTED_SOURCE_EXTENSIONS}."
        )
    return source_path.read_bytes()


def _parse_csv_payload(source_uri: str, payload: bytes) -> SourceRows:
    """Parse CSV bytes with every column typed as string.

    Raises:
        ImpoundIngestError: If the payload is not valid CSV.
    """
    try:
        column_names = pa_csv.open_csv(pa.BufferReader(payload)).schema.names
        table = pa_csv.read_csv(
            pa.BufferReader(payload),
            convert_options=pa_csv.ConvertOptions(
                column_types={name: pa.string() for name in column_names},
                null_values=_NULL_VALUES,
                strings_can_be_null=True,
            ),
        )
    except (pa.ArrowInvalid, StopIteration) as error:
        raise ImpoundIngestError(
            f"Failed to parse CSV source {source_uri}: {error}. "
            "Fix the CSV syntax and retry the build."
        ) from error
    return table.to_pylist()


def _read_s3_object(location: S3Location, config: ImpoundConfig) -> bytes:
    """Download one CSV object from S3.

    Raises:
        ImpoundIngestError: If the object cannot be fetched.
    """
    s3_client = _create_s3_client(config)
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
    except Exception as error:
        raise ImpoundIngestError(
            f"Failed to download s3://{location.bucket}/{location.key}: {error}. "
            "Check the object key and AWS credentials."
        ) from error
    return response["Body"].read()


def _create_s3_client(config: ImpoundConfig) -> Any:
    """Create a boto3 S3 client.

    Raises:
        ImpoundDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise ImpoundDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to read s3:// sources."
        ) from error
    session_kwargs = _build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _build_boto3_session_kwargs(config: ImpoundConfig) -> dict[str, str]:
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
