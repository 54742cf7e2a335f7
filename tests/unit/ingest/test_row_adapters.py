"""Unit tests for row adapters."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.errors import ImpoundIngestError
from core.types import UNKNOWN
from ingest.row_adapters import (
    adapt_atx_intake_row,
    adapt_atx_outcome_row,
    adapt_rows,
    adapt_sac_cpra_row,
    adapt_sac_open_row,
)

_STAMP = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)


def test_adapt_atx_intake_row_builds_candidate_and_intake() -> None:
    """Austin intake rows should yield a candidate stamped with the intake time."""
    row = {"animal_id": "A1", "name": "Rex", "intake_date": _STAMP, "intake_age": 600}

    adapted = adapt_atx_intake_row(row, 1)

    assert (adapted.candidate.timestamp, adapted.intake.age, adapted.outcome) == (
        _STAMP,
        600,
        None,
    )


def test_adapt_atx_outcome_row_marks_absent_columns_unknown() -> None:
    """Columns missing from the row should become unknown."""
    adapted = adapt_atx_outcome_row({"animal_id": "A1", "outcome_date": _STAMP}, 1)

    assert (adapted.candidate.name, adapted.outcome.outcome_condition) == (UNKNOWN, UNKNOWN)


def test_adapt_atx_outcome_row_maps_none_to_unknown() -> None:
    """Explicit None values should also become unknown."""
    adapted = adapt_atx_outcome_row(
        {"animal_id": "A1", "outcome_date": _STAMP, "outcome_subtype": None},
        1,
    )

    assert adapted.outcome.outcome_subtype is UNKNOWN


def test_adapt_sac_open_row_only_describes_kind_and_name() -> None:
    """Open-data candidates should leave gender, colors and breeds unknown."""
    row = {"animal_id": "S1", "kind": "DOG", "name": "BUDDY", "intake_date": _STAMP}

    adapted = adapt_sac_open_row(row, 1)

    assert (adapted.candidate.kind, adapted.candidate.gender, adapted.outcome) == (
        "DOG",
        UNKNOWN,
        None,
    )


def test_adapt_sac_cpra_row_creates_outcome_with_date() -> None:
    """CPRA rows with an outcome date should carry an outcome event."""
    row = {
        "animal_id": "C1",
        "intake_date": _STAMP,
        "outcome_date": _STAMP,
        "outcome_condition": "HEALTHY",
        "spay_neuter": "Altered",
    }

    adapted = adapt_sac_cpra_row(row, 1)

    assert (adapted.intake.spay_neuter, adapted.outcome.outcome_condition) == (
        "Altered",
        "HEALTHY",
    )


def test_adapt_row_without_key_raises() -> None:
    """Rows without an identity key should be rejected."""
    with pytest.raises(ImpoundIngestError):
        adapt_atx_intake_row({"animal_id": None, "intake_date": _STAMP}, 3)


def test_adapt_row_without_timestamp_raises() -> None:
    """Rows without their required date should be rejected."""
    with pytest.raises(ImpoundIngestError):
        adapt_atx_intake_row({"animal_id": "A1", "intake_date": UNKNOWN}, 3)


def test_adapt_rows_validates_required_columns() -> None:
    """Tables missing a required column should fail before adapting."""
    adapted = adapt_rows([{"animal_id": "A1"}], adapt_atx_intake_row, ("intake_date",), "atx")

    with pytest.raises(ImpoundIngestError):
        list(adapted)
