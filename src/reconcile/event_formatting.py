"""Printable renderings of animals and their events.

Used to attach an animal's full event history to anomaly log lines.
"""

from __future__ import annotations

from datetime import datetime
from itertools import zip_longest

from core.types import Individual, IntakeEvent, OutcomeEvent, is_known

_MISSING_TEXT = "NA"


def format_timestamp(value: object) -> str:
    """Render a timestamp as ``mm/dd/yyyy hh:mm``."""
    if isinstance(value, datetime):
        return value.strftime("%m/%d/%Y %H:%M")
    return _MISSING_TEXT


def format_intake(intake: IntakeEvent) -> str:
    return (
        f"Intake {format_timestamp(intake.timestamp)}"
        f" type({_text(intake.intake_type)})"
        f" subtype({_text(intake.intake_subtype)})"
        f" condition({_text(intake.intake_condition)})"
        f" spayNeuter({_text(intake.spay_neuter)})"
        f" ageCount({_text(intake.age_count)})"
        f" ageUnits({_text(intake.age_units)})"
        f" age({_text(intake.age)})"
        f" location({_text(intake.intake_location)})"
        f" kennel({_text(intake.kennel)})"
    )


def format_outcome(outcome: OutcomeEvent) -> str:
    return (
        f"Outcome {format_timestamp(outcome.timestamp)}"
        f" type({_text(outcome.outcome_type)})"
        f" subtype({_text(outcome.outcome_subtype)})"
        f" condition({_text(outcome.outcome_condition)})"
        f" spayNeuter({_text(outcome.spay_neuter)})"
    )


def format_individual(individual: Individual) -> str:
    return (
        f"Animal {individual.animal_id}"
        f" kind({_text(individual.kind)})"
        f" gender({_text(individual.gender)})"
        f" name({_text(individual.name)})"
        f" color({_text(individual.color_1)},{_text(individual.color_2)})"
        f" breed({_text(individual.breed_1)},{_text(individual.breed_2)})"
    )


def format_history(individual: Individual) -> list[str]:
    """Render an animal followed by its intakes and outcomes.

    Events alternate intake, outcome, intake, ... in list order; once one
    list runs out the rest of the other follows.

    Args:
        individual: Animal to render.

    Returns:
        One line per animal or event.
    """
    lines = [format_individual(individual)]
    for intake, outcome in zip_longest(individual.intakes, individual.outcomes):
        if intake is not None:
            lines.append(format_intake(intake))
        if outcome is not None:
            lines.append(format_outcome(outcome))
    return lines


def _text(value: object) -> str:
    if not is_known(value):
        return _MISSING_TEXT
    return str(value)
