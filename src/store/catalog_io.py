"""Catalog and manifest persistence helpers.

This module isolates JSON catalog IO and build id generation.
It keeps build store orchestration focused on the write flow.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, cast

from core.constants import MANIFEST_FILE_NAME
from core.errors import ImpoundStoreError
from core.types import BuildManifest


def build_build_id(build_name: str, animal_ids: Iterable[str]) -> str:
    """Build a unique build id from name, clock and animal keys.

    Args:
        build_name: Logical build name.
        animal_ids: Identity keys of the individuals in the build.

    Returns:
        Build id string.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    digest_seed = "|".join(animal_ids)
    digest = hashlib.sha256(digest_seed.encode("utf-8")).hexdigest()[:10]
    return f"{build_name}-{timestamp}-{digest}"


def write_manifest_file(build_dir: Path, manifest: BuildManifest) -> None:
    """Write the per-build manifest file.

    Args:
        build_dir: Build directory.
        manifest: Manifest payload.
    """
    manifest_path = build_dir / MANIFEST_FILE_NAME
    manifest_path.write_text(
        json.dumps(manifest_to_dict(manifest), indent=2) + "\n",
        encoding="utf-8",
    )


def update_catalog(catalog_path: Path, manifest: BuildManifest) -> None:
    """Append a manifest entry to the build-name catalog.

    Args:
        catalog_path: Catalog JSON path.
        manifest: Manifest to append.
    """
    if catalog_path.exists():
        catalog = read_catalog_file(catalog_path)
    else:
        catalog = {"latest_build": None, "builds": []}
    builds = cast(list[dict[str, Any]], catalog["builds"])
    builds.append(manifest_to_dict(manifest))
    catalog["latest_build"] = manifest.build_id
    catalog_path.write_text(json.dumps(catalog, indent=2) + "\n", encoding="utf-8")


def read_catalog_file(catalog_path: Path) -> dict[str, Any]:
    """Read and validate a build-name catalog.

    Args:
        catalog_path: Catalog JSON path.

    Returns:
        Parsed catalog object.

    Raises:
        ImpoundStoreError: If catalog is missing or invalid.
    """
    if not catalog_path.exists():
        raise ImpoundStoreError(
            f"Build catalog not found at {catalog_path}. "
            "Run a build before listing or loading builds."
        )
    try:
        payload = json.loads(catalog_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise ImpoundStoreError(
            f"Failed to parse build catalog at {catalog_path}: {error.msg}. "
            "Remove the catalog and rerun the builds it listed."
        ) from error
    if not isinstance(payload, dict) or not isinstance(payload.get("builds"), list):
        raise ImpoundStoreError(
            f"Failed to parse build catalog at {catalog_path}: "
            "expected a JSON object with a 'builds' list. Recreate the catalog."
        )
    return payload


def manifest_to_dict(manifest: BuildManifest) -> dict[str, Any]:
    """Serialize a manifest into JSON-compatible values."""
    manifest_dict = asdict(manifest)
    manifest_dict["created_at"] = manifest.created_at.isoformat()
    manifest_dict["source_uris"] = list(manifest.source_uris)
    manifest_dict["anomaly_counts"] = dict(manifest.anomaly_counts)
    return manifest_dict


def manifest_from_dict(payload: dict[str, Any]) -> BuildManifest:
    """Deserialize manifest payload from dictionary.

    Args:
        payload: Manifest dictionary.

    Returns:
        Typed build manifest.
    """
    return BuildManifest(
        build_name=str(payload["build_name"]),
        build_id=str(payload["build_id"]),
        created_at=datetime.fromisoformat(str(payload["created_at"])),
        source_format=str(payload["source_format"]),
        source_uris=tuple(str(uri) for uri in payload["source_uris"]),
        individual_count=int(payload["individual_count"]),
        impound_count=int(payload["impound_count"]),
        anomaly_counts={
            str(name): int(count)
            for name, count in dict(payload.get("anomaly_counts") or {}).items()
        },
    )
