"""Per-individual chronological event ordering.

Pairing walks each event list front to back, so both lists are sorted
by timestamp once ingestion for the animal is complete.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence, TypeVar, cast

from core.types import Individual, IntakeEvent, OutcomeEvent

_EventT = TypeVar("_EventT", IntakeEvent, OutcomeEvent)


def order_events(individual: Individual) -> None:
    """Sort an individual's intakes and outcomes ascending by time.

    The sort is stable, so events sharing a timestamp keep their
    arrival order.

    Args:
        individual: Individual whose event lists are reordered in place.
    """
    individual.intakes = sort_by_timestamp(individual.intakes)
    individual.outcomes = sort_by_timestamp(individual.outcomes)


def sort_by_timestamp(events: Sequence[_EventT]) -> list[_EventT]:
    """Return events sorted by timestamp, ties in input order."""
    return sorted(events, key=_timestamp_key)


def _timestamp_key(event: IntakeEvent | OutcomeEvent) -> datetime:
    return cast(datetime, event.timestamp)
