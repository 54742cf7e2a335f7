"""Build store and build catalog.

This module persists immutable build outputs with their manifests.
It provides save, list, and load operations for the SDK.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence, cast

import pyarrow as pa

from core.config import ImpoundConfig
from core.constants import (
    BUILDS_DIR_NAME,
    CATALOG_FILE_NAME,
    IMPOUND_COLUMNS,
    IMPOUNDS_FILE_NAME,
    INDIVIDUAL_COLUMNS,
    INDIVIDUALS_FILE_NAME,
    JOINED_IMPOUND_COLUMNS,
)
from core.errors import ImpoundStoreError
from core.logging_config import get_logger
from core.types import BuildManifest, ImpoundTables
from store.build_payload import read_anomalies, read_table, write_anomalies, write_table
from store.catalog_io import (
    build_build_id,
    manifest_from_dict,
    read_catalog_file,
    update_catalog,
    write_manifest_file,
)
from store.table_assembly import impound_rows, individual_rows, joined_impound_rows
from store.table_encoding import encode_table

_LOGGER = get_logger(__name__)


class BuildStore:
    """Immutable build store implementation.

    This class owns build directories, per-build manifests,
    and catalog updates for every named build.
    """

    def __init__(self, config: ImpoundConfig) -> None:
        """Initialize build store from config.

        Args:
            config: Runtime configuration.
        """
        self._config = config
        self._builds_root = config.data_root / BUILDS_DIR_NAME
        self._builds_root.mkdir(parents=True, exist_ok=True)

    def save_build(
        self,
        build_name: str,
        source_format: str,
        source_uris: Sequence[str],
        tables: ImpoundTables,
    ) -> BuildManifest:
        """Persist a finished build.

        Args:
            build_name: Logical build name.
            source_format: Row shape the build was made from.
            source_uris: Input locations in read order.
            tables: Normalized build output.

        Returns:
            Persisted build manifest.

        Raises:
            ImpoundStoreError: If persistence fails.
        """
        _validate_build_name(build_name)
        name_root = self._name_root(build_name)
        animal_ids = (individual.animal_id for individual in tables.individuals)
        build_id = build_build_id(build_name, animal_ids)
        build_dir = name_root / build_id
        build_dir.mkdir(parents=True, exist_ok=False)
        write_table(
            build_dir / INDIVIDUALS_FILE_NAME,
            encode_table(individual_rows(tables.individuals), INDIVIDUAL_COLUMNS),
        )
        write_table(
            build_dir / IMPOUNDS_FILE_NAME,
            encode_table(impound_rows(tables.impounds), IMPOUND_COLUMNS),
        )
        write_anomalies(build_dir, tables.anomalies)
        manifest = BuildManifest(
            build_name=build_name,
            build_id=build_id,
            created_at=datetime.now(timezone.utc),
            source_format=source_format,
            source_uris=tuple(source_uris),
            individual_count=len(tables.individuals),
            impound_count=len(tables.impounds),
            anomaly_counts=dict(Counter(anomaly.kind.name for anomaly in tables.anomalies)),
        )
        write_manifest_file(build_dir, manifest)
        update_catalog(name_root / CATALOG_FILE_NAME, manifest)
        _LOGGER.info(
            "build_saved",
            build_name=build_name,
            build_id=build_id,
            individual_count=manifest.individual_count,
            impound_count=manifest.impound_count,
            anomaly_count=len(tables.anomalies),
        )
        return manifest

    def list_builds(self, build_name: str) -> list[BuildManifest]:
        """List manifests for a build name sorted by creation time.

        Args:
            build_name: Logical build name.

        Returns:
            Ordered manifest list.

        Raises:
            ImpoundStoreError: If the build catalog does not exist.
        """
        _validate_build_name(build_name)
        catalog = read_catalog_file(self._builds_root / build_name / CATALOG_FILE_NAME)
        build_payloads = cast(list[dict[str, Any]], catalog["builds"])
        manifests = [manifest_from_dict(item) for item in build_payloads]
        return sorted(manifests, key=lambda item: item.created_at)

    def load_tables(
        self,
        build_name: str,
        build_id: str | None = None,
    ) -> tuple[BuildManifest, pa.Table, pa.Table]:
        """Load the individual and impound tables of one build.

        Args:
            build_name: Logical build name.
            build_id: Optional build id; latest when omitted.

        Returns:
            Manifest, individual table, and impound table.

        Raises:
            ImpoundStoreError: If the build is missing.
        """
        manifest = self._resolve_manifest(build_name, build_id)
        build_dir = self._build_dir(build_name, manifest.build_id)
        individuals = read_table(build_dir / INDIVIDUALS_FILE_NAME)
        impounds = read_table(build_dir / IMPOUNDS_FILE_NAME)
        return manifest, individuals, impounds

    def load_joined_table(self, build_name: str, build_id: str | None = None) -> pa.Table:
        """Load impounds inner-joined with their individuals.

        Args:
            build_name: Logical build name.
            build_id: Optional build id; latest when omitted.

        Returns:
            Joined table in ``JOINED_IMPOUND_COLUMNS`` order.
        """
        _, individuals, impounds = self.load_tables(build_name, build_id)
        rows = joined_impound_rows(impounds.to_pylist(), individuals.to_pylist())
        return encode_table(rows, JOINED_IMPOUND_COLUMNS)

    def load_anomalies(
        self,
        build_name: str,
        build_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Load the pairing warnings recorded for one build."""
        manifest = self._resolve_manifest(build_name, build_id)
        return read_anomalies(self._build_dir(build_name, manifest.build_id))

    def _name_root(self, build_name: str) -> Path:
        name_root = self._builds_root / build_name
        name_root.mkdir(parents=True, exist_ok=True)
        return name_root

    def _resolve_manifest(self, build_name: str, build_id: str | None) -> BuildManifest:
        """Resolve a target manifest.

        Raises:
            ImpoundStoreError: If catalog or target build is missing.
        """
        manifests = self.list_builds(build_name)
        if not manifests:
            raise ImpoundStoreError(
                f"No builds exist for '{build_name}'. Run a build before loading tables."
            )
        if build_id is None:
            return manifests[-1]
        for manifest in manifests:
            if manifest.build_id == build_id:
                return manifest
        raise ImpoundStoreError(
            f"Build '{build_id}' not found for '{build_name}'. "
            "Use list_builds to discover valid build ids."
        )

    def _build_dir(self, build_name: str, build_id: str) -> Path:
        build_dir = self._builds_root / build_name / build_id
        if not build_dir.exists():
            raise ImpoundStoreError(
                f"Missing build directory for {build_name}:{build_id} at {build_dir}. "
                "Rerun the build before loading it."
            )
        return build_dir


def _validate_build_name(build_name: str) -> None:
    if not build_name or "/" in build_name or build_name in {".", ".."}:
        raise ImpoundStoreError(
            f"Invalid build name '{build_name}'. "
            "Use a non-empty name without path separators."
        )
