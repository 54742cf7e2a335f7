"""Impound table builder.

This module drives a build end to end: adapted rows are merged into the
identity registry, each animal's events are ordered and paired, and
anomalies are reported as structured warnings.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.constants import COL_ANIMAL_ID, COL_INTAKE_DATE, COL_OUTCOME_DATE, COL_REC_SOURCE
from core.logging_config import get_logger
from core.types import ImpoundRecord, ImpoundTables, Individual, PairingAnomaly, SourceRow
from ingest.row_adapters import (
    AdaptedRow,
    adapt_atx_intake_row,
    adapt_atx_outcome_row,
    adapt_rows,
    adapt_sac_cpra_row,
    adapt_sac_open_row,
)
from reconcile.event_formatting import format_history
from reconcile.event_ordering import order_events
from reconcile.identity_registry import IdentityRegistry, add_intake, add_outcome
from reconcile.temporal_pairing import pair_individual

_LOGGER = get_logger(__name__)


class ImpoundTableBuilder:
    """Builds normalized individual and impound tables from wrangled rows.

    Each ``build_*`` call starts from an empty registry, so one builder
    can be reused for several independent builds.
    """

    def __init__(self) -> None:
        self._registry = IdentityRegistry()

    def build_from_atx(
        self,
        intake_rows: Sequence[SourceRow],
        outcome_rows: Sequence[SourceRow],
    ) -> ImpoundTables:
        """Build tables from Austin intake and outcome rows."""
        self._registry.clear()
        self._ingest(
            adapt_rows(
                intake_rows,
                adapt_atx_intake_row,
                (COL_ANIMAL_ID, COL_INTAKE_DATE),
                "atx_intake",
            )
        )
        self._ingest(
            adapt_rows(
                outcome_rows,
                adapt_atx_outcome_row,
                (COL_ANIMAL_ID, COL_OUTCOME_DATE),
                "atx_outcome",
            )
        )
        return self._pair_all()

    def build_from_sac_open(self, impound_rows: Sequence[SourceRow]) -> ImpoundTables:
        """Build tables from Sacramento open-data impound rows."""
        self._registry.clear()
        self._ingest(
            adapt_rows(
                impound_rows,
                adapt_sac_open_row,
                (COL_ANIMAL_ID, COL_INTAKE_DATE),
                "sac_open_impound",
            )
        )
        return self._pair_all()

    def build_from_sac_cpra(self, impound_rows: Sequence[SourceRow]) -> ImpoundTables:
        """Build tables from Sacramento CPRA impound rows."""
        self._registry.clear()
        self._ingest(
            adapt_rows(
                impound_rows,
                adapt_sac_cpra_row,
                (COL_ANIMAL_ID, COL_INTAKE_DATE),
                "sac_cpra_impound",
            )
        )
        return self._pair_all()

    def build_from_sac(self, impound_rows: Sequence[SourceRow]) -> ImpoundTables:
        """Build Sacramento tables, choosing the CPRA shape by ``rec_source``."""
        if impound_rows and COL_REC_SOURCE in impound_rows[0]:
            return self.build_from_sac_cpra(impound_rows)
        return self.build_from_sac_open(impound_rows)

    def _ingest(self, adapted_rows: Iterable[AdaptedRow]) -> None:
        for adapted in adapted_rows:
            individual = self._registry.resolve(adapted.candidate)
            if adapted.intake is not None:
                add_intake(individual, adapted.intake)
            if adapted.outcome is not None:
                add_outcome(individual, adapted.outcome)

    def _pair_all(self) -> ImpoundTables:
        individuals: list[Individual] = []
        impounds: list[ImpoundRecord] = []
        anomalies: list[PairingAnomaly] = []
        for individual in self._registry:
            order_events(individual)
            result = pair_individual(individual)
            impounds.extend(result.records)
            if result.anomalies:
                _log_anomalies(individual, result.anomalies)
                anomalies.extend(result.anomalies)
            individuals.append(individual)
        _LOGGER.info(
            "impound_build_completed",
            individual_count=len(individuals),
            impound_count=len(impounds),
            anomaly_count=len(anomalies),
        )
        return ImpoundTables(
            individuals=tuple(individuals),
            impounds=tuple(impounds),
            anomalies=tuple(anomalies),
        )


def _log_anomalies(individual: Individual, anomalies: Sequence[PairingAnomaly]) -> None:
    for anomaly in anomalies:
        _LOGGER.warning(
            "pairing_anomaly",
            animal_id=anomaly.animal_id,
            anomaly=anomaly.kind.name,
            message=anomaly.message,
            dropped_count=anomaly.dropped_count,
        )
    _LOGGER.debug(
        "individual_history",
        animal_id=individual.animal_id,
        history=format_history(individual),
    )
