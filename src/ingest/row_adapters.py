"""Row adapters from wrangled columns to canonical field tuples.

Each adapter turns one wrangled row into a candidate individual plus the
intake and outcome events that row carries. Columns a row shape does not
supply become ``UNKNOWN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Iterator, Sequence

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
    COL_SPAY_NEUTER,
)
from core.errors import ImpoundIngestError
from core.types import UNKNOWN, Individual, IntakeEvent, OutcomeEvent, SourceRow, is_known


@dataclass(frozen=True)
class AdaptedRow:
    """Canonical field tuple extracted from one source row.

    Attributes:
        candidate: Individual described by the row, timestamped by it.
        intake: Intake event carried by the row, if any.
        outcome: Outcome event carried by the row, if any.
    """

    candidate: Individual
    intake: IntakeEvent | None = None
    outcome: OutcomeEvent | None = None


RowAdapter = Callable[[SourceRow, int], AdaptedRow]


def adapt_atx_intake_row(row: SourceRow, row_number: int) -> AdaptedRow:
    """Adapt a wrangled Austin intake row."""
    intake_date = _required_timestamp(row, COL_INTAKE_DATE, row_number)
    candidate = _candidate(row, intake_date, row_number)
    intake = IntakeEvent(
        timestamp=intake_date,
        intake_type=_field(row, COL_INTAKE_TYPE),
        intake_condition=_field(row, COL_INTAKE_CONDITION),
        intake_location=_field(row, COL_INTAKE_LOCATION),
        age_count=_field(row, COL_INTAKE_AGE_COUNT),
        age_units=_field(row, COL_INTAKE_AGE_UNITS),
        age=_field(row, COL_INTAKE_AGE),
        spay_neuter=_field(row, COL_INTAKE_SPAY_NEUTER),
    )
    return AdaptedRow(candidate=candidate, intake=intake)


def adapt_atx_outcome_row(row: SourceRow, row_number: int) -> AdaptedRow:
    """Adapt a wrangled Austin outcome row."""
    outcome_date = _required_timestamp(row, COL_OUTCOME_DATE, row_number)
    candidate = _candidate(row, outcome_date, row_number)
    outcome = OutcomeEvent(
        timestamp=outcome_date,
        outcome_type=_field(row, COL_OUTCOME_TYPE),
        outcome_subtype=_field(row, COL_OUTCOME_SUBTYPE),
        spay_neuter=_field(row, COL_OUTCOME_SPAY_NEUTER),
    )
    return AdaptedRow(candidate=candidate, outcome=outcome)


def adapt_sac_open_row(row: SourceRow, row_number: int) -> AdaptedRow:
    """Adapt a wrangled Sacramento open-data impound row.

    Open data only describes kind and name. A blank outcome date means
    the animal was still in custody, so no outcome is produced.
    """
    intake_date = _required_timestamp(row, COL_INTAKE_DATE, row_number)
    candidate = Individual(
        animal_id=_required_key(row, row_number),
        timestamp=intake_date,
        kind=_field(row, COL_KIND),
        name=_field(row, COL_NAME),
    )
    intake = IntakeEvent(
        timestamp=intake_date,
        intake_type=_field(row, COL_INTAKE_TYPE),
        intake_location=_field(row, COL_INTAKE_LOCATION),
    )
    outcome = _optional_outcome(
        row,
        outcome_type=_field(row, COL_OUTCOME_TYPE),
    )
    return AdaptedRow(candidate=candidate, intake=intake, outcome=outcome)


def adapt_sac_cpra_row(row: SourceRow, row_number: int) -> AdaptedRow:
    """Adapt a wrangled Sacramento CPRA impound row."""
    intake_date = _required_timestamp(row, COL_INTAKE_DATE, row_number)
    candidate = _candidate(row, intake_date, row_number)
    intake = IntakeEvent(
        timestamp=intake_date,
        intake_type=_field(row, COL_INTAKE_TYPE),
        intake_subtype=_field(row, COL_INTAKE_SUBTYPE),
        intake_condition=_field(row, COL_INTAKE_CONDITION),
        intake_location=_field(row, COL_INTAKE_LOCATION),
        spay_neuter=_field(row, COL_SPAY_NEUTER),
        kennel=_field(row, COL_KENNEL),
    )
    outcome = _optional_outcome(
        row,
        outcome_type=_field(row, COL_OUTCOME_TYPE),
        outcome_subtype=_field(row, COL_OUTCOME_SUBTYPE),
        outcome_condition=_field(row, COL_OUTCOME_CONDITION),
    )
    return AdaptedRow(candidate=candidate, intake=intake, outcome=outcome)


def adapt_rows(
    rows: Sequence[SourceRow],
    adapter: RowAdapter,
    required_columns: Iterable[str],
    table_name: str,
) -> Iterator[AdaptedRow]:
    """Validate a wrangled table and adapt each row in order.

    Args:
        rows: Wrangled rows sharing one shape.
        adapter: Row adapter for that shape.
        required_columns: Columns every row must expose.
        table_name: Table label for error messages.

    Yields:
        Adapted rows in input order.

    Raises:
        ImpoundIngestError: If a required column is missing.
    """
    if rows:
        missing = [column for column in required_columns if column not in rows[0]]
        if missing:
            raise ImpoundIngestError(
                f"{table_name}: missing required column(s) {missing}. "
                "Provide the identity key and date columns for this row shape."
            )
    for row_number, row in enumerate(rows, 1):
        yield adapter(row, row_number)


def _candidate(row: SourceRow, timestamp: datetime, row_number: int) -> Individual:
    return Individual(
        animal_id=_required_key(row, row_number),
        timestamp=timestamp,
        kind=_field(row, COL_KIND),
        gender=_field(row, COL_GENDER),
        name=_field(row, COL_NAME),
        color_1=_field(row, COL_COLOR_1),
        color_2=_field(row, COL_COLOR_2),
        breed_1=_field(row, COL_BREED_1),
        breed_2=_field(row, COL_BREED_2),
    )


def _optional_outcome(row: SourceRow, **fields: object) -> OutcomeEvent | None:
    """Build an outcome for combined rows that carry an outcome date."""
    outcome_date = _field(row, COL_OUTCOME_DATE)
    if not is_known(outcome_date):
        return None
    return OutcomeEvent(timestamp=outcome_date, **fields)  # type: ignore[arg-type]


def _field(row: SourceRow, column: str) -> object:
    value = row.get(column, UNKNOWN)
    if value is None:
        return UNKNOWN
    return value


def _required_key(row: SourceRow, row_number: int) -> str:
    animal_id = _field(row, COL_ANIMAL_ID)
    if not is_known(animal_id) or not str(animal_id):
        raise ImpoundIngestError(
            f"Row {row_number} has no {COL_ANIMAL_ID}. "
            "Every source row must identify the animal it describes."
        )
    return str(animal_id)


def _required_timestamp(row: SourceRow, column: str, row_number: int) -> datetime:
    value = _field(row, column)
    if not isinstance(value, datetime):
        raise ImpoundIngestError(
            f"Row {row_number} has no valid {column}. "
            "Parse the date column into timestamps before adapting rows."
        )
    return value
