"""Unit tests for temporal pairing of intakes and outcomes."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from core.types import AnomalyKind, IntakeEvent, OutcomeEvent
from reconcile.temporal_pairing import DayRelation, compare_by_day, pair_events

_ZONE = ZoneInfo("America/Chicago")


def _at(day: str, hour: int = 12) -> datetime:
    return datetime.fromisoformat(day).replace(hour=hour, tzinfo=_ZONE)


def _intake(day: str, hour: int = 12) -> IntakeEvent:
    return IntakeEvent(timestamp=_at(day, hour), intake_type="Stray")


def _outcome(day: str, hour: int = 12) -> OutcomeEvent:
    return OutcomeEvent(timestamp=_at(day, hour), outcome_type="Adoption")


def test_compare_by_day_ignores_time_of_day() -> None:
    """Timestamps on the same date should compare as the same day."""
    relation = compare_by_day(_at("2024-01-05", 23), _at("2024-01-05", 1))

    assert relation is DayRelation.SAME


def test_compare_by_day_detects_earlier_day() -> None:
    """A late time on a previous date should still be an earlier day."""
    relation = compare_by_day(_at("2024-01-04", 23), _at("2024-01-05", 1))

    assert relation is DayRelation.EARLIER


def test_compare_by_day_detects_later_day() -> None:
    """A following date should compare as a later day."""
    relation = compare_by_day(_at("2024-01-06", 0), _at("2024-01-05", 23))

    assert relation is DayRelation.LATER


def test_pair_events_pairs_intake_with_later_outcome() -> None:
    """One intake and a later outcome should form one completed stay."""
    intake = _intake("2024-01-01")
    outcome = _outcome("2024-01-05")

    result = pair_events("A1", [intake], [outcome])

    assert [(r.intake, r.outcome) for r in result.records] == [(intake, outcome)]
    assert result.anomalies == ()


def test_pair_events_pairs_same_day_outcome_before_intake_time() -> None:
    """Same-day outcome should pair even when its clock time is earlier."""
    result = pair_events("A1", [_intake("2024-01-05", 15)], [_outcome("2024-01-05", 9)])

    assert result.records[0].is_paired


def test_pair_events_unmatched_intakes_keep_only_last() -> None:
    """Leftover intakes should collapse into the last one with one warning."""
    late_intake = _intake("2024-01-10")

    result = pair_events("A1", [_intake("2024-01-01"), late_intake], [])

    assert [(r.intake, r.is_open) for r in result.records] == [(late_intake, True)]
    assert [(a.kind, a.dropped_count) for a in result.anomalies] == [
        (AnomalyKind.UNMATCHED_INTAKE, 1)
    ]


def test_pair_events_unmatched_intakes_after_pair_keep_only_last() -> None:
    """Intakes left over after a completed stay should collapse into the last one."""
    first_intake = _intake("2024-01-01")
    outcome = _outcome("2024-01-02")
    late_intake = _intake("2024-01-10")

    result = pair_events("A1", [first_intake, _intake("2024-01-05"), late_intake], [outcome])

    assert [(r.intake, r.is_open) for r in result.records] == [
        (first_intake, False),
        (late_intake, True),
    ]
    assert result.records[0].outcome == outcome
    assert [(a.kind, a.dropped_count) for a in result.anomalies] == [
        (AnomalyKind.UNMATCHED_INTAKE, 1)
    ]


def test_pair_events_zero_intakes_emit_outcome_only_record() -> None:
    """An animal with only an outcome should yield a pre-window stay."""
    outcome = _outcome("2024-02-01")

    result = pair_events("A1", [], [outcome])

    assert [(r.outcome, r.is_pre_window) for r in result.records] == [(outcome, True)]
    assert result.anomalies == ()


def test_pair_events_zero_intakes_emit_every_outcome() -> None:
    """Every outcome should be kept when the animal has no intakes."""
    outcomes = [_outcome("2024-02-01"), _outcome("2024-03-01")]

    result = pair_events("A1", [], outcomes)

    assert [r.outcome for r in result.records] == outcomes


def test_pair_events_first_outcome_before_first_intake_is_pre_window() -> None:
    """Outcome before the first intake should be emitted alone, then the open intake."""
    intake = _intake("2024-03-05")
    outcome = _outcome("2024-03-01")

    result = pair_events("A1", [intake], [outcome])

    assert [(r.is_pre_window, r.is_open) for r in result.records] == [
        (True, False),
        (False, True),
    ]
    assert result.anomalies == ()


def test_pair_events_discards_out_of_order_outcome_after_first_pair() -> None:
    """An outcome earlier than a later intake should be dropped with a warning."""
    first_intake = _intake("2024-01-01")
    second_intake = _intake("2024-01-10")
    first_outcome = _outcome("2024-01-03")
    stray_outcome = _outcome("2024-01-05")
    final_outcome = _outcome("2024-01-12")

    result = pair_events(
        "A1",
        [first_intake, second_intake],
        [first_outcome, stray_outcome, final_outcome],
    )

    assert [(r.intake, r.outcome) for r in result.records] == [
        (first_intake, first_outcome),
        (second_intake, final_outcome),
    ]
    assert [a.kind for a in result.anomalies] == [AnomalyKind.OUTCOME_OUT_OF_ORDER]


def test_pair_events_reports_extra_outcomes_once() -> None:
    """Outcomes left after the last intake should raise one warning."""
    result = pair_events(
        "A1",
        [_intake("2024-01-01")],
        [_outcome("2024-01-02"), _outcome("2024-01-03"), _outcome("2024-01-04")],
    )

    assert len(result.records) == 1
    assert [(a.kind, a.dropped_count) for a in result.anomalies] == [
        (AnomalyKind.EXTRA_OUTCOMES, 2)
    ]


def test_pair_events_paired_outcomes_never_precede_intakes() -> None:
    """No completed stay should end on a day before it began."""
    intakes = [_intake("2024-01-01"), _intake("2024-01-08"), _intake("2024-02-01")]
    outcomes = [_outcome("2023-12-20"), _outcome("2024-01-09"), _outcome("2024-01-20")]

    result = pair_events("A1", intakes, outcomes)

    paired = [record for record in result.records if record.is_paired]
    assert all(
        compare_by_day(r.outcome.timestamp, r.intake.timestamp) is not DayRelation.EARLIER
        for r in paired
    )


def test_pair_events_stamps_animal_id_on_anomalies() -> None:
    """Anomalies should carry the identity key and warning text."""
    result = pair_events("A42", [_intake("2024-01-01"), _intake("2024-01-02")], [])

    assert (result.anomalies[0].animal_id, result.anomalies[0].message) == (
        "A42",
        "Intake not matched with outcome.",
    )
