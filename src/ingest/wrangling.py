"""Raw column wrangling for published shelter CSV files.

This module turns the raw Austin and Sacramento open-data columns into
the wrangled column set consumed by the row adapters. Blank values,
``NULL`` markers and unparsable fragments become ``UNKNOWN``.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import Mapping

from core.constants import (
    AGE_UNIT_ALIASES,
    AGE_UNIT_DAYS,
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
    COL_REC_SOURCE,
    COL_SPAY_NEUTER,
    CPRA_SPAY_NEUTER_FLAGS,
    NULL_MARKERS,
    SAC_CPRA_DATE_FORMAT,
    SAC_OPEN_DATE_FORMAT,
    SECONDS_PER_DAY,
    STERILIZED_ALIASES,
)
from core.errors import ImpoundIngestError
from core.types import UNKNOWN, MaybeDatetime, MaybeInt, MaybeStr, SourceRow, is_known

_BLACK_TAN_PATTERN = re.compile("Black/Tan", re.IGNORECASE)
_MIX_SUFFIX_PATTERN = re.compile(" Mix", re.IGNORECASE)

WrangledRow = dict[str, object]


def wrangle_string(value: object) -> MaybeStr:
    """Trim a raw value, mapping missing or blank text to ``UNKNOWN``."""
    if value is None or value is UNKNOWN:
        return UNKNOWN
    text = str(value).strip()
    if not text:
        return UNKNOWN
    return text


def wrangle_name(value: object) -> MaybeStr:
    """Strip Austin's asterisk markers from an animal name."""
    if value is None or value is UNKNOWN:
        return UNKNOWN
    return wrangle_string(str(value).replace("*", ""))


def wrangle_gender_spay_neuter(value: object) -> tuple[MaybeStr, MaybeStr]:
    """Split Austin's combined sex column.

    ``"Spayed Female"`` becomes ``("Altered", "Female")`` and
    ``"Intact Male"`` becomes ``("Intact", "Male")``. ``Unknown`` and
    ``NULL`` map to unknown.

    Args:
        value: Raw ``sex_upon_intake`` or ``sex_upon_outcome`` value.

    Returns:
        Pair of sterilization status and gender.
    """
    spay_neuter, gender = _split_pair(value, " ")
    if is_known(spay_neuter):
        if spay_neuter in NULL_MARKERS:
            spay_neuter = UNKNOWN
        else:
            spay_neuter = STERILIZED_ALIASES.get(str(spay_neuter), spay_neuter)
    return spay_neuter, gender


def wrangle_age(value: object) -> tuple[MaybeInt, MaybeStr, MaybeInt]:
    """Split an Austin age such as ``"2 years"`` into count, units, seconds.

    Units collapse to ``dy``, ``wk``, ``mo`` and ``yr``. The total uses
    30.436875-day months and 365.25-day years. A zero-year age keeps its
    count and units but has no total.

    Args:
        value: Raw ``age_upon_intake`` value.

    Returns:
        Tuple of age count, age units, and age in whole seconds.
    """
    count_text, units_text = _split_pair(value, " ")
    if count_text in NULL_MARKERS:
        return UNKNOWN, UNKNOWN, UNKNOWN
    age_count = _parse_int(count_text)
    age_units: MaybeStr = units_text
    if is_known(units_text):
        age_units = AGE_UNIT_ALIASES.get(str(units_text).lower(), str(units_text))
    return age_count, age_units, _age_seconds(age_count, age_units)


def wrangle_colors(value: object) -> tuple[MaybeStr, MaybeStr]:
    """Split ``"Black/White"`` into primary and secondary colors."""
    return _split_pair(value, "/")


def wrangle_breeds(value: object) -> tuple[MaybeStr, MaybeStr]:
    """Split a breed description into primary and secondary breeds.

    ``"Beagle Mix"`` becomes ``("Beagle", "Mix")`` and
    ``"Bull Terrier/Boxer"`` becomes ``("Bull Terrier", "Boxer")``.
    The ``Black/Tan`` coat name is protected from the split.

    Args:
        value: Raw breed description.

    Returns:
        Pair of breed designations.
    """
    text = wrangle_string(value)
    if not is_known(text):
        return UNKNOWN, UNKNOWN
    text = _BLACK_TAN_PATTERN.sub("Black-Tan", str(text), count=1)
    text = _MIX_SUFFIX_PATTERN.sub("/Mix", text, count=1)
    return _split_pair(text, "/")


def wrangle_cpra_spay_neuter(value: object) -> MaybeStr:
    """Map the Sacramento CPRA ``0``/``1`` flag to Intact/Altered."""
    flag = wrangle_string(value)
    if not is_known(flag):
        return UNKNOWN
    return CPRA_SPAY_NEUTER_FLAGS.get(str(flag), UNKNOWN)


def parse_timestamp(value: object, zone: tzinfo, date_format: str | None = None) -> MaybeDatetime:
    """Parse a raw date-time and localize it to the shelter's zone.

    Args:
        value: Raw date text.
        zone: Shelter time zone applied to naive values.
        date_format: ``strptime`` format; ISO 8601 when omitted.

    Returns:
        Aware timestamp, or ``UNKNOWN`` for blank input.

    Raises:
        ImpoundIngestError: If the text is not a valid date-time.
    """
    text = wrangle_string(value)
    if not is_known(text):
        return UNKNOWN
    try:
        if date_format is None:
            parsed = datetime.fromisoformat(str(text))
        else:
            parsed = datetime.strptime(str(text), date_format)
    except ValueError as error:
        expected = date_format or "ISO 8601"
        raise ImpoundIngestError(
            f"Failed to parse timestamp '{text}': expected {expected}. "
            "Fix the date column and retry the build."
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def wrangle_atx_intake_row(raw: SourceRow, zone: tzinfo) -> WrangledRow:
    """Wrangle one row of the Austin intake data set."""
    spay_neuter, gender = wrangle_gender_spay_neuter(raw.get("sex_upon_intake"))
    age_count, age_units, age = wrangle_age(raw.get("age_upon_intake"))
    color_1, color_2 = wrangle_colors(raw.get("color"))
    breed_1, breed_2 = wrangle_breeds(raw.get("breed"))
    return {
        COL_ANIMAL_ID: wrangle_string(raw.get("animal_id")),
        COL_KIND: wrangle_string(raw.get("animal_type")),
        COL_GENDER: gender,
        COL_NAME: wrangle_name(raw.get("name")),
        COL_COLOR_1: color_1,
        COL_COLOR_2: color_2,
        COL_BREED_1: breed_1,
        COL_BREED_2: breed_2,
        COL_INTAKE_DATE: parse_timestamp(raw.get("datetime"), zone),
        COL_INTAKE_TYPE: wrangle_string(raw.get("intake_type")),
        COL_INTAKE_CONDITION: wrangle_string(raw.get("intake_condition")),
        COL_INTAKE_LOCATION: wrangle_string(raw.get("found_location")),
        COL_INTAKE_AGE_COUNT: age_count,
        COL_INTAKE_AGE_UNITS: age_units,
        COL_INTAKE_AGE: age,
        COL_INTAKE_SPAY_NEUTER: spay_neuter,
    }


def wrangle_atx_outcome_row(raw: SourceRow, zone: tzinfo) -> WrangledRow:
    """Wrangle one row of the Austin outcome data set."""
    spay_neuter, gender = wrangle_gender_spay_neuter(raw.get("sex_upon_outcome"))
    color_1, color_2 = wrangle_colors(raw.get("color"))
    breed_1, breed_2 = wrangle_breeds(raw.get("breed"))
    return {
        COL_ANIMAL_ID: wrangle_string(raw.get("animal_id")),
        COL_KIND: wrangle_string(raw.get("animal_type")),
        COL_GENDER: gender,
        COL_NAME: wrangle_name(raw.get("name")),
        COL_COLOR_1: color_1,
        COL_COLOR_2: color_2,
        COL_BREED_1: breed_1,
        COL_BREED_2: breed_2,
        COL_OUTCOME_DATE: parse_timestamp(raw.get("datetime"), zone),
        COL_OUTCOME_TYPE: wrangle_string(raw.get("outcome_type")),
        COL_OUTCOME_SUBTYPE: wrangle_string(raw.get("outcome_subtype")),
        COL_OUTCOME_SPAY_NEUTER: spay_neuter,
    }


def wrangle_sac_open_row(raw: SourceRow, zone: tzinfo) -> WrangledRow:
    """Wrangle one row of the Sacramento open-data impound set."""
    return {
        COL_ANIMAL_ID: wrangle_string(raw.get("Animal_Id")),
        COL_KIND: wrangle_string(raw.get("Animal_Type")),
        COL_NAME: wrangle_string(raw.get("Animal_Name")),
        COL_INTAKE_DATE: parse_timestamp(raw.get("Intake_Date"), zone, SAC_OPEN_DATE_FORMAT),
        COL_INTAKE_TYPE: wrangle_string(raw.get("Intake_Type")),
        COL_INTAKE_LOCATION: wrangle_string(raw.get("Picked_up_Location")),
        COL_OUTCOME_DATE: parse_timestamp(raw.get("Outcome_Date"), zone, SAC_OPEN_DATE_FORMAT),
        COL_OUTCOME_TYPE: wrangle_string(raw.get("Outcome_Type")),
    }


def wrangle_sac_cpra_row(raw: SourceRow, zone: tzinfo) -> WrangledRow:
    """Wrangle one row of the Sacramento CPRA impound set."""
    color_1, color_2 = wrangle_colors(raw.get("color"))
    breed_1, breed_2 = wrangle_breeds(raw.get("breed"))
    return {
        COL_ANIMAL_ID: wrangle_string(raw.get("animal_id")),
        COL_KIND: wrangle_string(raw.get("kind")),
        COL_NAME: wrangle_string(raw.get("name")),
        COL_GENDER: wrangle_string(raw.get("gender")),
        COL_SPAY_NEUTER: wrangle_cpra_spay_neuter(raw.get("spay_neuter")),
        COL_BREED_1: breed_1,
        COL_BREED_2: breed_2,
        COL_COLOR_1: color_1,
        COL_COLOR_2: color_2,
        COL_REC_SOURCE: wrangle_string(raw.get("rec_source")),
        COL_INTAKE_DATE: parse_timestamp(raw.get("intake_date"), zone, SAC_CPRA_DATE_FORMAT),
        COL_INTAKE_TYPE: wrangle_string(raw.get("intake_type")),
        COL_INTAKE_SUBTYPE: wrangle_string(raw.get("intake_subtype")),
        COL_INTAKE_CONDITION: wrangle_string(raw.get("intake_condition")),
        COL_INTAKE_LOCATION: wrangle_string(raw.get("intake_location")),
        COL_OUTCOME_DATE: parse_timestamp(raw.get("outcome_date"), zone, SAC_CPRA_DATE_FORMAT),
        COL_OUTCOME_TYPE: wrangle_string(raw.get("outcome_type")),
        COL_OUTCOME_SUBTYPE: wrangle_string(raw.get("outcome_subtype")),
        COL_OUTCOME_CONDITION: wrangle_string(raw.get("outcome_condition")),
        COL_KENNEL: wrangle_string(raw.get("kennel")),
    }


def is_cpra_table(rows: list[Mapping[str, object]]) -> bool:
    """Return whether raw Sacramento rows carry the CPRA record source."""
    return bool(rows) and COL_REC_SOURCE in rows[0]


def _split_pair(value: object, delimiter: str) -> tuple[MaybeStr, MaybeStr]:
    """Split text on a delimiter into exactly two wrangled parts."""
    text = wrangle_string(value)
    if not is_known(text):
        return UNKNOWN, UNKNOWN
    parts = str(text).split(delimiter)
    first = wrangle_string(parts[0])
    second = wrangle_string(parts[1]) if len(parts) > 1 else UNKNOWN
    return first, second


def _parse_int(value: object) -> MaybeInt:
    if not is_known(value):
        return UNKNOWN
    try:
        return int(str(value))
    except ValueError:
        return UNKNOWN


def _age_seconds(age_count: MaybeInt, age_units: MaybeStr) -> MaybeInt:
    """Convert an age count in known units to whole seconds."""
    if not is_known(age_count) or not is_known(age_units):
        return UNKNOWN
    unit_days = AGE_UNIT_DAYS.get(str(age_units))
    if unit_days is None:
        return UNKNOWN
    if age_units == "yr" and age_count == 0:
        return UNKNOWN
    return round(int(age_count) * unit_days * SECONDS_PER_DAY)
