"""Temporal pairing of intake and outcome events.

This module walks one animal's ordered intakes and outcomes with two
forward-only cursors, pairing each intake with the outcome that ends
its stay. Discrepancies are returned as anomalies and never raised.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Sequence, cast

from core.types import (
    AnomalyKind,
    ImpoundRecord,
    Individual,
    IntakeEvent,
    OutcomeEvent,
    PairingAnomaly,
    PairingResult,
    intake_placeholder,
    outcome_placeholder,
)


class DayRelation(Enum):
    """Calendar-day ordering of one timestamp relative to another."""

    EARLIER = "earlier"
    SAME = "same"
    LATER = "later"


def compare_by_day(first: datetime, second: datetime) -> DayRelation:
    """Compare two timestamps by calendar date, ignoring time of day.

    Each timestamp is read in its own zone, so aware values compare by
    their local shelter date.

    Args:
        first: Timestamp being classified.
        second: Reference timestamp.

    Returns:
        Whether ``first`` falls on an earlier, the same, or a later day.
    """
    first_day = first.date()
    second_day = second.date()
    if first_day < second_day:
        return DayRelation.EARLIER
    if first_day > second_day:
        return DayRelation.LATER
    return DayRelation.SAME


def pair_individual(individual: Individual) -> PairingResult:
    """Pair the already-ordered events of one individual."""
    return pair_events(individual.animal_id, individual.intakes, individual.outcomes)


def pair_events(
    animal_id: str,
    intakes: Sequence[IntakeEvent],
    outcomes: Sequence[OutcomeEvent],
) -> PairingResult:
    """Pair chronologically ordered intakes with outcomes.

    Rules, applied while intakes remain:

    * No outcomes left: the last remaining intake is emitted alone as an
      open stay. Earlier leftover intakes are dropped under a single
      ``UNMATCHED_INTAKE`` warning.
    * The next outcome is always consumed. If it falls on a day before
      the current intake it is emitted alone when no intake has been
      paired yet (the stay began before the data window), otherwise it
      is dropped with ``OUTCOME_OUT_OF_ORDER``. Either way the same
      intake is tried against the following outcome.
    * Otherwise intake and outcome are emitted as one completed stay.

    Outcomes left after the last intake are emitted alone when the
    animal has no intakes at all, else dropped under one
    ``EXTRA_OUTCOMES`` warning.

    Args:
        animal_id: Identity key stamped on every record.
        intakes: Intakes sorted ascending by timestamp.
        outcomes: Outcomes sorted ascending by timestamp.

    Returns:
        Emitted impound records in order plus any anomalies.
    """
    records: list[ImpoundRecord] = []
    anomalies: list[PairingAnomaly] = []
    intake_count = len(intakes)
    next_intake = 0
    next_outcome = 0

    while next_intake < intake_count:
        intake = intakes[next_intake]
        if next_outcome >= len(outcomes):
            remaining_intakes = intake_count - next_intake
            if remaining_intakes > 1:
                anomalies.append(
                    PairingAnomaly(
                        animal_id=animal_id,
                        kind=AnomalyKind.UNMATCHED_INTAKE,
                        dropped_count=remaining_intakes - 1,
                    )
                )
                intake = intakes[-1]
            records.append(_solitary_intake(animal_id, intake))
            next_intake = intake_count
            continue

        outcome = outcomes[next_outcome]
        next_outcome += 1
        relation = compare_by_day(
            cast(datetime, outcome.timestamp), cast(datetime, intake.timestamp)
        )
        if relation is DayRelation.EARLIER:
            if next_intake == 0:
                records.append(_solitary_outcome(animal_id, outcome))
            else:
                anomalies.append(
                    PairingAnomaly(
                        animal_id=animal_id,
                        kind=AnomalyKind.OUTCOME_OUT_OF_ORDER,
                        dropped_count=1,
                    )
                )
            continue

        records.append(ImpoundRecord(animal_id=animal_id, intake=intake, outcome=outcome))
        next_intake += 1

    leftover_outcomes = outcomes[next_outcome:]
    if leftover_outcomes:
        if intake_count == 0:
            records.extend(_solitary_outcome(animal_id, item) for item in leftover_outcomes)
        else:
            anomalies.append(
                PairingAnomaly(
                    animal_id=animal_id,
                    kind=AnomalyKind.EXTRA_OUTCOMES,
                    dropped_count=len(leftover_outcomes),
                )
            )
    return PairingResult(records=tuple(records), anomalies=tuple(anomalies))


def _solitary_intake(animal_id: str, intake: IntakeEvent) -> ImpoundRecord:
    """Build an open-stay record for an animal still in custody."""
    return ImpoundRecord(animal_id=animal_id, intake=intake, outcome=outcome_placeholder())


def _solitary_outcome(animal_id: str, outcome: OutcomeEvent) -> ImpoundRecord:
    """Build a record for a stay that began before the data window."""
    return ImpoundRecord(animal_id=animal_id, intake=intake_placeholder(), outcome=outcome)
