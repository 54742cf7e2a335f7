"""Output row assembly for individual and impound tables.

This module projects canonical individuals and impound records onto the
flat column layout of the two output tables. No values are computed;
``UNKNOWN`` is carried through for the encoder to null out.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import (
    COL_ANIMAL_ID,
    COL_BREED_1,
    COL_BREED_2,
    COL_COLOR_1,
    COL_COLOR_2,
    COL_GENDER,
    COL_INTAKE_AGE,
    COL_INTAKE_AGE_COUNT,
    COL_INTAKE_AGE_UNITS,
    COL_INTAKE_CONDITION,
    COL_INTAKE_DATE,
    COL_INTAKE_LOCATION,
    COL_INTAKE_SPAY_NEUTER,
    COL_INTAKE_SUBTYPE,
    COL_INTAKE_TYPE,
    COL_KENNEL,
    COL_KIND,
    COL_NAME,
    COL_OUTCOME_CONDITION,
    COL_OUTCOME_DATE,
    COL_OUTCOME_SPAY_NEUTER,
    COL_OUTCOME_SUBTYPE,
    COL_OUTCOME_TYPE,
    INDIVIDUAL_COLUMNS,
    JOIN_DROPPED_COLUMNS,
)
from core.types import ImpoundRecord, Individual

OutputRow = dict[str, object]


def individual_rows(individuals: Iterable[Individual]) -> list[OutputRow]:
    """Project individuals onto individual-table rows.

    Args:
        individuals: Canonical individuals in output order.

    Returns:
        One row per individual.
    """
    return [
        {
            COL_ANIMAL_ID: individual.animal_id,
            COL_KIND: individual.kind,
            COL_NAME: individual.name,
            COL_GENDER: individual.gender,
            COL_COLOR_1: individual.color_1,
            COL_COLOR_2: individual.color_2,
            COL_BREED_1: individual.breed_1,
            COL_BREED_2: individual.breed_2,
        }
        for individual in individuals
    ]


def impound_rows(records: Iterable[ImpoundRecord]) -> list[OutputRow]:
    """Project impound records onto impound-table rows.

    Args:
        records: Impound records in emission order.

    Returns:
        One row per record with placeholder events as unknown fields.
    """
    rows: list[OutputRow] = []
    for record in records:
        intake = record.intake
        outcome = record.outcome
        rows.append(
            {
                COL_ANIMAL_ID: record.animal_id,
                COL_INTAKE_DATE: intake.timestamp,
                COL_INTAKE_TYPE: intake.intake_type,
                COL_INTAKE_SUBTYPE: intake.intake_subtype,
                COL_INTAKE_CONDITION: intake.intake_condition,
                COL_INTAKE_LOCATION: intake.intake_location,
                COL_INTAKE_AGE_COUNT: intake.age_count,
                COL_INTAKE_AGE_UNITS: intake.age_units,
                COL_INTAKE_AGE: intake.age,
                COL_INTAKE_SPAY_NEUTER: intake.spay_neuter,
                COL_KENNEL: intake.kennel,
                COL_OUTCOME_DATE: outcome.timestamp,
                COL_OUTCOME_TYPE: outcome.outcome_type,
                COL_OUTCOME_SUBTYPE: outcome.outcome_subtype,
                COL_OUTCOME_CONDITION: outcome.outcome_condition,
                COL_OUTCOME_SPAY_NEUTER: outcome.spay_neuter,
            }
        )
    return rows


def joined_impound_rows(
    impounds: Iterable[OutputRow],
    individuals: Iterable[OutputRow],
) -> list[OutputRow]:
    """Inner-join impound rows with individual rows on ``animal_id``.

    Columns that only some row shapes populate (intake subtype, outcome
    condition, kennel) are dropped from the joined view.

    Args:
        impounds: Impound-table rows.
        individuals: Individual-table rows.

    Returns:
        Impound rows augmented with the animal's descriptive columns.
    """
    by_animal = {row[COL_ANIMAL_ID]: row for row in individuals}
    joined: list[OutputRow] = []
    for impound in impounds:
        individual = by_animal.get(impound[COL_ANIMAL_ID])
        if individual is None:
            continue
        row = {
            column: value
            for column, value in impound.items()
            if column not in JOIN_DROPPED_COLUMNS
        }
        for column in INDIVIDUAL_COLUMNS:
            if column != COL_ANIMAL_ID:
                row[column] = individual[column]
        joined.append(row)
    return joined
