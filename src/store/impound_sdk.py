"""Python SDK for build operations.

This module exposes high-level APIs for running builds and reading
stored build tables back from the build store.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import pyarrow as pa

from core.config import ImpoundConfig
from core.types import AtxBuildOptions, BuildManifest, SacBuildOptions
from ingest.pipeline import build_atx, build_sac
from store.build_store import BuildStore


class ImpoundClient:
    """Primary SDK entry point for build workflows."""

    def __init__(self, config: ImpoundConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ImpoundConfig.from_env()
        self._store = BuildStore(self._config)

    @property
    def config(self) -> ImpoundConfig:
        """Return the runtime configuration in use."""
        return self._config

    def build_atx(self, options: AtxBuildOptions) -> BuildManifest:
        """Build Austin tables from intake and outcome sources.

        Args:
            options: Austin build options.

        Returns:
            Persisted build manifest.

        Raises:
            ImpoundIngestError: If sources cannot be read or adapted.
            ImpoundStoreError: If build persistence fails.
        """
        return build_atx(options, self._config)

    def build_sac(self, options: SacBuildOptions) -> BuildManifest:
        """Build Sacramento tables from an impound source.

        Args:
            options: Sacramento build options.

        Returns:
            Persisted build manifest.
        """
        return build_sac(options, self._config)

    def list_builds(self, build_name: str) -> list[BuildManifest]:
        """List stored builds for a name, oldest first."""
        return self._store.list_builds(build_name)

    def load_tables(
        self,
        build_name: str,
        build_id: str | None = None,
    ) -> tuple[BuildManifest, pa.Table, pa.Table]:
        """Load individual and impound tables for latest or target build.

        Args:
            build_name: Logical build name.
            build_id: Optional specific build id.

        Returns:
            Manifest, individual table, and impound table.
        """
        return self._store.load_tables(build_name, build_id)

    def load_joined_table(self, build_name: str, build_id: str | None = None) -> pa.Table:
        """Load impounds joined with their individuals' descriptive columns."""
        return self._store.load_joined_table(build_name, build_id)

    def load_anomalies(
        self,
        build_name: str,
        build_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Load the pairing warnings recorded for a build."""
        return self._store.load_anomalies(build_name, build_id)

    def with_data_root(self, data_root: str) -> "ImpoundClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return ImpoundClient(updated_config)
