"""Unit tests for the source CSV reader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from core.config import ImpoundConfig
from core.errors import ImpoundIngestError
from ingest import csv_reader
from ingest.csv_reader import read_csv_rows
from tests.fixture_paths import fixture_path


class _FakeS3Client:
    def __init__(self, payload: bytes) -> None:
        self._payload = payload
        self.requests: list[tuple[str, str]] = []

    def get_object(self, Bucket: str, Key: str) -> dict[str, object]:
        self.requests.append((Bucket, Key))
        return {"Body": io.BytesIO(self._payload)}


def test_read_csv_rows_reads_every_row() -> None:
    """Reader should return one mapping per CSV data row."""
    rows = read_csv_rows(str(fixture_path("atx/intakes.csv")), ImpoundConfig.from_env())

    assert len(rows) == 5


def test_read_csv_rows_keeps_values_as_text(tmp_path: Path) -> None:
    """Numeric-looking identifiers should keep their leading zeros."""
    source = tmp_path / "ids.csv"
    source.write_text("animal_id,flag\n00123,1\n", encoding="utf-8")

    rows = read_csv_rows(str(source), ImpoundConfig.from_env())

    assert rows == [{"animal_id": "00123", "flag": "1"}]


def test_read_csv_rows_maps_blank_and_na_to_none(tmp_path: Path) -> None:
    """Blank and NA cells should read as missing values."""
    source = tmp_path / "blanks.csv"
    source.write_text("animal_id,name,outcome_date\nA1,,NA\n", encoding="utf-8")

    rows = read_csv_rows(str(source), ImpoundConfig.from_env())

    assert (rows[0]["name"], rows[0]["outcome_date"]) == (None, None)


def test_read_csv_rows_raises_for_missing_path(tmp_path: Path) -> None:
    """Reader should fail when the source file is missing."""
    missing_path = tmp_path / "does-not-exist.csv"

    with pytest.raises(ImpoundIngestError):
        read_csv_rows(str(missing_path), ImpoundConfig.from_env())

    assert missing_path.exists() is False


def test_read_csv_rows_rejects_unsupported_extension(tmp_path: Path) -> None:
    """Reader should only accept CSV files."""
    source = tmp_path / "rows.jsonl"
    source.write_text('{"animal_id": "A1"}\n', encoding="utf-8")

    with pytest.raises(ImpoundIngestError):
        read_csv_rows(str(source), ImpoundConfig.from_env())


def test_read_csv_rows_raises_for_ragged_rows(tmp_path: Path) -> None:
    """Rows with extra cells should fail to parse."""
    source = tmp_path / "ragged.csv"
    source.write_text("animal_id,name\nA1,Rex,extra\n", encoding="utf-8")

    with pytest.raises(ImpoundIngestError):
        read_csv_rows(str(source), ImpoundConfig.from_env())


def test_read_csv_rows_downloads_s3_object(monkeypatch: pytest.MonkeyPatch) -> None:
    """S3 URIs should be fetched through the boto3 client."""
    fake_client = _FakeS3Client(b"animal_id,name\nA1,Rex\n")
    monkeypatch.setattr(csv_reader, "_create_s3_client", lambda config: fake_client)

    rows = read_csv_rows("s3://shelter-data/atx/intakes.csv", ImpoundConfig.from_env())

    assert (rows, fake_client.requests) == (
        [{"animal_id": "A1", "name": "Rex"}],
        [("shelter-data", "atx/intakes.csv")],
    )


def test_read_csv_rows_rejects_s3_prefix() -> None:
    """S3 URIs must name one object, not a prefix."""
    with pytest.raises(ImpoundIngestError):
        read_csv_rows("s3://shelter-data/atx/", ImpoundConfig.from_env())
