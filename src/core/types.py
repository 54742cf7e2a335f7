"""Shared typed models.

This module defines the event and identity model used by ingest,
reconcile, and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, TypeVar, Union

_T = TypeVar("_T")


class Unknown(Enum):
    """Marker type for a field not supplied by a source row."""

    UNKNOWN = "UNKNOWN"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown.UNKNOWN

MaybeStr = Union[str, Unknown]
MaybeInt = Union[int, Unknown]
MaybeDatetime = Union[datetime, Unknown]
SourceRow = Mapping[str, object]

INDIVIDUAL_ATTRIBUTES = (
    "kind",
    "gender",
    "name",
    "color_1",
    "color_2",
    "breed_1",
    "breed_2",
)


def is_known(value: object) -> bool:
    """Return whether a field holds a concrete value."""
    return value is not UNKNOWN


def known_or_none(value: _T | Unknown) -> _T | None:
    """Map the unknown marker to ``None`` for encoders."""
    if value is UNKNOWN:
        return None
    return value


@dataclass(frozen=True)
class IntakeEvent:
    """Animal intake event.

    Every field defaults to ``UNKNOWN``; an instance with every field
    unknown is the placeholder used for outcome-only impounds.

    Attributes:
        timestamp: Intake date-time.
        intake_type: Type of intake (e.g. Stray, Owner Surrender).
        intake_subtype: Sub-type of the intake type (e.g. Stray/Field).
        intake_condition: Condition at intake (e.g. Normal, Injured).
        intake_location: Place where the animal was found or surrendered.
        age_count: Integer age in ``age_units``.
        age_units: Age units (``dy``, ``wk``, ``mo``, ``yr``).
        age: Denormalized age in whole seconds.
        spay_neuter: Sterilization status (e.g. Intact, Altered).
        kennel: Housing assignment.
    """

    timestamp: MaybeDatetime = UNKNOWN
    intake_type: MaybeStr = UNKNOWN
    intake_subtype: MaybeStr = UNKNOWN
    intake_condition: MaybeStr = UNKNOWN
    intake_location: MaybeStr = UNKNOWN
    age_count: MaybeInt = UNKNOWN
    age_units: MaybeStr = UNKNOWN
    age: MaybeInt = UNKNOWN
    spay_neuter: MaybeStr = UNKNOWN
    kennel: MaybeStr = UNKNOWN

    @property
    def is_placeholder(self) -> bool:
        """Whether this intake stands in for a missing event."""
        return self == _INTAKE_PLACEHOLDER


@dataclass(frozen=True)
class OutcomeEvent:
    """Animal outcome event.

    Attributes:
        timestamp: Outcome date-time.
        outcome_type: Type of outcome (e.g. Adoption, Transfer).
        outcome_subtype: Sub-type of the outcome type (e.g. Partner).
        outcome_condition: Condition at discharge.
        spay_neuter: Sterilization status when discharged.
    """

    timestamp: MaybeDatetime = UNKNOWN
    outcome_type: MaybeStr = UNKNOWN
    outcome_subtype: MaybeStr = UNKNOWN
    outcome_condition: MaybeStr = UNKNOWN
    spay_neuter: MaybeStr = UNKNOWN

    @property
    def is_placeholder(self) -> bool:
        """Whether this outcome stands in for a missing event."""
        return self == _OUTCOME_PLACEHOLDER


_INTAKE_PLACEHOLDER = IntakeEvent()
_OUTCOME_PLACEHOLDER = OutcomeEvent()


def intake_placeholder() -> IntakeEvent:
    """Return the all-unknown intake used by outcome-only impounds."""
    return _INTAKE_PLACEHOLDER


def outcome_placeholder() -> OutcomeEvent:
    """Return the all-unknown outcome used by intake-only impounds."""
    return _OUTCOME_PLACEHOLDER


@dataclass
class Individual:
    """Canonical merged record for one animal.

    Only the identity registry mutates an individual, and only while
    source rows are being ingested.

    Attributes:
        animal_id: Stable external identity key.
        timestamp: Most recent source-row time merged into this record.
        kind: Species kind (e.g. Dog, Cat).
        gender: Sex (e.g. Male, Female).
        name: Display name.
        color_1: Primary color.
        color_2: Secondary color.
        breed_1: Primary breed designation.
        breed_2: Secondary breed designation.
        intakes: Intake events in arrival order until ordered.
        outcomes: Outcome events in arrival order until ordered.
    """

    animal_id: str
    timestamp: datetime
    kind: MaybeStr = UNKNOWN
    gender: MaybeStr = UNKNOWN
    name: MaybeStr = UNKNOWN
    color_1: MaybeStr = UNKNOWN
    color_2: MaybeStr = UNKNOWN
    breed_1: MaybeStr = UNKNOWN
    breed_2: MaybeStr = UNKNOWN
    intakes: list[IntakeEvent] = field(default_factory=list)
    outcomes: list[OutcomeEvent] = field(default_factory=list)


@dataclass(frozen=True)
class ImpoundRecord:
    """One custody episode for an animal.

    Attributes:
        animal_id: Identity key of the impounded animal.
        intake: Intake event or the intake placeholder.
        outcome: Outcome event or the outcome placeholder.
    """

    animal_id: str
    intake: IntakeEvent
    outcome: OutcomeEvent

    def __post_init__(self) -> None:
        if self.intake.is_placeholder and self.outcome.is_placeholder:
            raise ValueError(
                f"Impound record for {self.animal_id} needs an intake or an outcome."
            )

    @property
    def is_paired(self) -> bool:
        """Whether both events are present (a completed stay)."""
        return not self.intake.is_placeholder and not self.outcome.is_placeholder

    @property
    def is_open(self) -> bool:
        """Whether the animal is still in custody (intake only)."""
        return self.outcome.is_placeholder

    @property
    def is_pre_window(self) -> bool:
        """Whether the stay began before the observed data (outcome only)."""
        return self.intake.is_placeholder


class AnomalyKind(Enum):
    """Non-fatal pairing discrepancies, valued by their warning text."""

    UNMATCHED_INTAKE = "Intake not matched with outcome."
    OUTCOME_OUT_OF_ORDER = "Outcome out of order. Discarded."
    EXTRA_OUTCOMES = "Extra outcomes remaining at end."


@dataclass(frozen=True)
class PairingAnomaly:
    """Warning emitted while pairing one animal's events.

    Attributes:
        animal_id: Identity key the warning applies to.
        kind: Discrepancy category.
        dropped_count: Number of events discarded because of it.
    """

    animal_id: str
    kind: AnomalyKind
    dropped_count: int

    @property
    def message(self) -> str:
        """Human-readable warning text."""
        return self.kind.value


@dataclass(frozen=True)
class PairingResult:
    """Output of pairing one animal's ordered events."""

    records: tuple[ImpoundRecord, ...]
    anomalies: tuple[PairingAnomaly, ...]


@dataclass(frozen=True)
class ImpoundTables:
    """Normalized build output before encoding.

    Attributes:
        individuals: One canonical record per animal in key order.
        impounds: Emitted impound records in emission order.
        anomalies: Every pairing warning raised during the build.
    """

    individuals: tuple[Individual, ...]
    impounds: tuple[ImpoundRecord, ...]
    anomalies: tuple[PairingAnomaly, ...]


@dataclass(frozen=True)
class AtxBuildOptions:
    """Austin build command options.

    Attributes:
        build_name: Logical name the build is stored under.
        intake_uri: Austin intake CSV path, ``s3://`` URI, or ``socrata://`` data set.
        outcome_uri: Austin outcome CSV path, ``s3://`` URI, or ``socrata://`` data set.
        refresh: Re-download portal sources even when cached.
    """

    build_name: str
    intake_uri: str
    outcome_uri: str
    refresh: bool = False


@dataclass(frozen=True)
class SacBuildOptions:
    """Sacramento build command options.

    Attributes:
        build_name: Logical name the build is stored under.
        impounds_uri: Open-data or CPRA impound CSV path, ``s3://`` URI,
            or ``junar://`` data set.
        refresh: Re-download portal sources even when cached.
    """

    build_name: str
    impounds_uri: str
    refresh: bool = False


@dataclass(frozen=True)
class BuildManifest:
    """Immutable metadata for one stored build.

    Attributes:
        build_name: Logical build name.
        build_id: Immutable build identifier.
        created_at: UTC creation timestamp.
        source_format: Row shape the build was made from.
        source_uris: Input locations in read order.
        individual_count: Rows in the individual table.
        impound_count: Rows in the impound table.
        anomaly_counts: Warning totals keyed by anomaly name.
    """

    build_name: str
    build_id: str
    created_at: datetime
    source_format: str
    source_uris: tuple[str, ...]
    individual_count: int
    impound_count: int
    anomaly_counts: Mapping[str, int] = field(default_factory=dict)
