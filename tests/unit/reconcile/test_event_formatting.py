"""Unit tests for event history rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import Individual, IntakeEvent, OutcomeEvent
from reconcile.event_formatting import format_history, format_intake, format_timestamp


def test_format_timestamp_renders_missing_as_na() -> None:
    """Unknown timestamps should render as NA."""
    assert format_timestamp(IntakeEvent().timestamp) == "NA"


def test_format_intake_renders_known_and_unknown_fields() -> None:
    """Intake lines should show known values and NA for the rest."""
    intake = IntakeEvent(
        timestamp=datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc),
        intake_type="Stray",
    )

    line = format_intake(intake)

    assert line.startswith("Intake 01/05/2024 10:00 type(Stray) subtype(NA)")


def test_format_history_interleaves_events() -> None:
    """History should start with the animal and alternate intakes and outcomes."""
    stamp = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)
    individual = Individual(
        animal_id="A1",
        timestamp=stamp,
        kind="Dog",
        intakes=[IntakeEvent(timestamp=stamp), IntakeEvent(timestamp=stamp)],
        outcomes=[OutcomeEvent(timestamp=stamp)],
    )

    lines = format_history(individual)

    assert [line.split(" ")[0] for line in lines] == ["Animal", "Intake", "Outcome", "Intake"]
