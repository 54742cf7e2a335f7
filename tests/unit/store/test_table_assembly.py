"""Unit tests for output row assembly."""

from __future__ import annotations

from datetime import datetime, timezone

from core.constants import IMPOUND_COLUMNS, INDIVIDUAL_COLUMNS
from core.types import UNKNOWN, ImpoundRecord, Individual, IntakeEvent, outcome_placeholder
from store.table_assembly import impound_rows, individual_rows, joined_impound_rows

_STAMP = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)


def test_individual_rows_follow_column_order() -> None:
    """Individual rows should expose exactly the individual columns."""
    rows = individual_rows([Individual(animal_id="A1", timestamp=_STAMP, kind="Dog")])

    assert tuple(rows[0]) == INDIVIDUAL_COLUMNS


def test_impound_rows_project_placeholder_as_unknown() -> None:
    """Open stays should carry unknown outcome fields."""
    record = ImpoundRecord(
        animal_id="A1",
        intake=IntakeEvent(timestamp=_STAMP, kennel="K1"),
        outcome=outcome_placeholder(),
    )

    row = impound_rows([record])[0]

    assert (tuple(row), row["kennel"], row["outcome_date"]) == (IMPOUND_COLUMNS, "K1", UNKNOWN)


def test_joined_impound_rows_inner_joins_on_animal_id() -> None:
    """Joined rows should add animal columns and drop shape-specific ones."""
    impounds = [
        {"animal_id": "A1", "intake_date": _STAMP, "kennel": "K1"},
        {"animal_id": "Z9", "intake_date": _STAMP, "kennel": "K2"},
    ]
    individuals = [dict.fromkeys(INDIVIDUAL_COLUMNS, None) | {"animal_id": "A1", "name": "Rex"}]

    joined = joined_impound_rows(impounds, individuals)

    assert [(row["animal_id"], row["name"], "kennel" in row) for row in joined] == [
        ("A1", "Rex", False)
    ]
