"""Build orchestration for shelter data sets.

This module coordinates source loading, wrangling, reconciliation,
and build store writes for the Austin and Sacramento pipelines.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Sequence

from core.config import ImpoundConfig
from core.logging_config import get_logger
from core.types import AtxBuildOptions, BuildManifest, ImpoundTables, SacBuildOptions, SourceRow
from ingest.csv_reader import read_csv_rows
from ingest.wrangling import (
    WrangledRow,
    is_cpra_table,
    wrangle_atx_intake_row,
    wrangle_atx_outcome_row,
    wrangle_sac_cpra_row,
    wrangle_sac_open_row,
)
from reconcile.impound_builder import ImpoundTableBuilder
from store.build_store import BuildStore

_LOGGER = get_logger(__name__)

SOURCE_FORMAT_ATX = "atx"
SOURCE_FORMAT_SAC_OPEN = "sac_open"
SOURCE_FORMAT_SAC_CPRA = "sac_cpra"

RowWrangler = Callable[[SourceRow, tzinfo], WrangledRow]


def build_atx(options: AtxBuildOptions, config: ImpoundConfig) -> BuildManifest:
    """Run the Austin pipeline and persist a build.

    Args:
        options: Austin build options.
        config: Runtime configuration.

    Returns:
        Persisted build manifest.

    Raises:
        ImpoundIngestError: If sources cannot be read or adapted.
        ImpoundStoreError: If build persistence fails.
    """
    intake_rows = _wrangle_rows(
        read_csv_rows(options.intake_uri, config, refresh=options.refresh),
        wrangle_atx_intake_row,
        config.atx_timezone,
    )
    outcome_rows = _wrangle_rows(
        read_csv_rows(options.outcome_uri, config, refresh=options.refresh),
        wrangle_atx_outcome_row,
        config.atx_timezone,
    )
    tables = ImpoundTableBuilder().build_from_atx(intake_rows, outcome_rows)
    return _save(
        config,
        options.build_name,
        SOURCE_FORMAT_ATX,
        (options.intake_uri, options.outcome_uri),
        tables,
    )


def build_sac(options: SacBuildOptions, config: ImpoundConfig) -> BuildManifest:
    """Run the Sacramento pipeline and persist a build.

    The CPRA row shape is chosen when the source has a ``rec_source``
    column; otherwise the open-data shape is used.

    Args:
        options: Sacramento build options.
        config: Runtime configuration.

    Returns:
        Persisted build manifest.
    """
    raw_rows = read_csv_rows(options.impounds_uri, config, refresh=options.refresh)
    if is_cpra_table(raw_rows):
        source_format = SOURCE_FORMAT_SAC_CPRA
        wrangler: RowWrangler = wrangle_sac_cpra_row
    else:
        source_format = SOURCE_FORMAT_SAC_OPEN
        wrangler = wrangle_sac_open_row
    impound_rows = _wrangle_rows(raw_rows, wrangler, config.sac_timezone)
    tables = ImpoundTableBuilder().build_from_sac(impound_rows)
    return _save(config, options.build_name, source_format, (options.impounds_uri,), tables)


def _wrangle_rows(
    raw_rows: Sequence[SourceRow],
    wrangler: RowWrangler,
    zone: tzinfo,
) -> list[WrangledRow]:
    return [wrangler(raw_row, zone) for raw_row in raw_rows]


def _save(
    config: ImpoundConfig,
    build_name: str,
    source_format: str,
    source_uris: Sequence[str],
    tables: ImpoundTables,
) -> BuildManifest:
    manifest = BuildStore(config).save_build(build_name, source_format, source_uris, tables)
    _LOGGER.info(
        "build_completed",
        build_name=build_name,
        build_id=manifest.build_id,
        source_format=source_format,
        source_uris=list(source_uris),
        anomaly_counts=dict(manifest.anomaly_counts),
    )
    return manifest
