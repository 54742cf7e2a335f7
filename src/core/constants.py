"""Core constants used across Impound modules.

This module centralizes column names, file names, and unit factors.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".impound")
BUILDS_DIR_NAME = "builds"
CATALOG_FILE_NAME = "catalog.json"
MANIFEST_FILE_NAME = "manifest.json"
INDIVIDUALS_FILE_NAME = "individuals.parquet"
IMPOUNDS_FILE_NAME = "impounds.parquet"
ANOMALIES_FILE_NAME = "anomalies.jsonl"
DEFAULT_ATX_TIMEZONE = "America/Chicago"
DEFAULT_SAC_TIMEZONE = "America/Los_Angeles"
SUPPORTED_SOURCE_EXTENSIONS = (".csv",)
CACHE_DIR_NAME = "cache"

# Open-data portal endpoints and source URI schemes.
SOCRATA_SCHEME = "socrata://"
JUNAR_SCHEME = "junar://"
SOCRATA_BASE_URL = "https://data.austintexas.gov/resource/"
JUNAR_BASE_URL = "http://api.data.cityofsacramento.org/api/v2/datastreams/"
PORTAL_ROW_LIMIT = 50000
PORTAL_TIMEOUT_SECONDS = 60

# Wrangled column names shared by adapters and output tables.
COL_REC_SOURCE = "rec_source"
COL_ANIMAL_ID = "animal_id"
COL_GENDER = "gender"
COL_NAME = "name"
COL_KIND = "kind"
COL_COLOR_1 = "color_1"
COL_COLOR_2 = "color_2"
COL_BREED_1 = "breed_1"
COL_BREED_2 = "breed_2"
COL_KENNEL = "kennel"
COL_INTAKE_DATE = "intake_date"
COL_INTAKE_TYPE = "intake_type"
COL_INTAKE_SUBTYPE = "intake_subtype"
COL_INTAKE_CONDITION = "intake_condition"
COL_INTAKE_LOCATION = "intake_location"
COL_INTAKE_AGE_COUNT = "intake_age_count"
COL_INTAKE_AGE_UNITS = "intake_age_units"
COL_INTAKE_AGE = "intake_age"
COL_SPAY_NEUTER = "spay_neuter"
COL_INTAKE_SPAY_NEUTER = "intake_spay_neuter"
COL_OUTCOME_DATE = "outcome_date"
COL_OUTCOME_TYPE = "outcome_type"
COL_OUTCOME_SUBTYPE = "outcome_subtype"
COL_OUTCOME_CONDITION = "outcome_condition"
COL_OUTCOME_SPAY_NEUTER = "outcome_spay_neuter"

INDIVIDUAL_COLUMNS = (
    COL_ANIMAL_ID,
    COL_KIND,
    COL_NAME,
    COL_GENDER,
    COL_COLOR_1,
    COL_COLOR_2,
    COL_BREED_1,
    COL_BREED_2,
)
IMPOUND_COLUMNS = (
    COL_ANIMAL_ID,
    COL_INTAKE_DATE,
    COL_INTAKE_TYPE,
    COL_INTAKE_SUBTYPE,
    COL_INTAKE_CONDITION,
    COL_INTAKE_LOCATION,
    COL_INTAKE_AGE_COUNT,
    COL_INTAKE_AGE_UNITS,
    COL_INTAKE_AGE,
    COL_INTAKE_SPAY_NEUTER,
    COL_KENNEL,
    COL_OUTCOME_DATE,
    COL_OUTCOME_TYPE,
    COL_OUTCOME_SUBTYPE,
    COL_OUTCOME_CONDITION,
    COL_OUTCOME_SPAY_NEUTER,
)
JOIN_DROPPED_COLUMNS = (COL_INTAKE_SUBTYPE, COL_OUTCOME_CONDITION, COL_KENNEL)
JOINED_IMPOUND_COLUMNS = tuple(
    column for column in IMPOUND_COLUMNS if column not in JOIN_DROPPED_COLUMNS
) + INDIVIDUAL_COLUMNS[1:]
TIMESTAMP_COLUMNS = (COL_INTAKE_DATE, COL_OUTCOME_DATE)
INTEGER_COLUMNS = (COL_INTAKE_AGE_COUNT, COL_INTAKE_AGE)

SECONDS_PER_DAY = 86400
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30.436875
DAYS_PER_YEAR = 365.25
AGE_UNIT_ALIASES = {
    "day": "dy",
    "days": "dy",
    "week": "wk",
    "weeks": "wk",
    "month": "mo",
    "months": "mo",
    "year": "yr",
    "years": "yr",
}
AGE_UNIT_DAYS = {
    "dy": 1.0,
    "wk": float(DAYS_PER_WEEK),
    "mo": DAYS_PER_MONTH,
    "yr": DAYS_PER_YEAR,
}
STERILIZED_ALIASES = {"Spayed": "Altered", "Neutered": "Altered"}
NULL_MARKERS = ("Unknown", "NULL")
CPRA_SPAY_NEUTER_FLAGS = {"0": "Intact", "1": "Altered"}
SAC_OPEN_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SAC_CPRA_DATE_FORMAT = "%Y-%m-%d"
