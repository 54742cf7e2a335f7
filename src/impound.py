"""Public SDK surface for Impound.

This module provides a stable import path for build users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import ImpoundConfig
from core.types import (
    UNKNOWN,
    AnomalyKind,
    AtxBuildOptions,
    BuildManifest,
    ImpoundRecord,
    ImpoundTables,
    Individual,
    IntakeEvent,
    OutcomeEvent,
    PairingAnomaly,
    SacBuildOptions,
)
from reconcile.impound_builder import ImpoundTableBuilder
from reconcile.temporal_pairing import pair_events
from store.impound_sdk import ImpoundClient

__all__ = [
    "UNKNOWN",
    "AnomalyKind",
    "AtxBuildOptions",
    "BuildManifest",
    "ImpoundClient",
    "ImpoundConfig",
    "ImpoundRecord",
    "ImpoundTableBuilder",
    "ImpoundTables",
    "Individual",
    "IntakeEvent",
    "OutcomeEvent",
    "PairingAnomaly",
    "SacBuildOptions",
    "pair_events",
]
