"""Unit tests for per-individual event ordering."""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import Individual, IntakeEvent, OutcomeEvent
from reconcile.event_ordering import order_events, sort_by_timestamp


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)


def test_order_events_sorts_both_lists() -> None:
    """Intakes and outcomes should each be sorted ascending by time."""
    individual = Individual(
        animal_id="A1",
        timestamp=_at(1),
        intakes=[IntakeEvent(timestamp=_at(9)), IntakeEvent(timestamp=_at(2))],
        outcomes=[OutcomeEvent(timestamp=_at(5)), OutcomeEvent(timestamp=_at(3))],
    )

    order_events(individual)

    assert [event.timestamp.day for event in individual.intakes + individual.outcomes] == [
        2,
        9,
        3,
        5,
    ]


def test_sort_by_timestamp_is_stable_for_ties() -> None:
    """Events sharing a timestamp should keep their arrival order."""
    first = IntakeEvent(timestamp=_at(4), intake_type="Stray")
    second = IntakeEvent(timestamp=_at(4), intake_type="Owner Surrender")

    ordered = sort_by_timestamp([first, second])

    assert ordered == [first, second]
