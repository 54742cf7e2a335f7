"""Open-data portal downloads through a local file cache.

Austin publishes its shelter data through a Socrata portal and Sacramento
through a Junar portal. Sources named ``socrata://<data set id>`` or
``junar://<datastream id>`` are downloaded once into ``<data_root>/cache``
and reused from there until a refresh is requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from core.config import ImpoundConfig
from core.constants import (
    CACHE_DIR_NAME,
    JUNAR_BASE_URL,
    JUNAR_SCHEME,
    PORTAL_ROW_LIMIT,
    PORTAL_TIMEOUT_SECONDS,
    SOCRATA_BASE_URL,
    SOCRATA_SCHEME,
)
from core.errors import ImpoundConfigError, ImpoundIngestError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_PORTAL_SCHEMES = {SOCRATA_SCHEME: "socrata", JUNAR_SCHEME: "junar"}


@dataclass(frozen=True)
class PortalSource:
    """Parsed portal source reference.

    Attributes:
        portal: Portal kind, ``socrata`` or ``junar``.
        dataset_id: Data set or datastream identifier on the portal.
    """

    portal: str
    dataset_id: str


def is_portal_uri(source_uri: str) -> bool:
    """Return whether a source names an open-data portal data set."""
    return source_uri.startswith(tuple(_PORTAL_SCHEMES))


def parse_portal_uri(source_uri: str) -> PortalSource:
    """Parse ``socrata://`` or ``junar://`` source references.

    Raises:
        ImpoundIngestError: If the scheme or data set id is invalid.
    """
    for scheme, portal in _PORTAL_SCHEMES.items():
        if source_uri.startswith(scheme):
            dataset_id = source_uri[len(scheme) :]
            if not dataset_id or "/" in dataset_id:
                raise ImpoundIngestError(
                    f"Invalid portal source '{source_uri}': expected {scheme}<data set id>."
                )
            return PortalSource(portal=portal, dataset_id=dataset_id)
    raise ImpoundIngestError(
        f"Invalid portal source '{source_uri}': expected a socrata:// or junar:// reference."
    )


def make_socrata_url(dataset_id: str, app_key: str, limit: int = PORTAL_ROW_LIMIT) -> str:
    """Build the Socrata CSV export URL for an Austin data set."""
    return f"{SOCRATA_BASE_URL}{dataset_id}.csv?$$app_token={app_key}&$limit={limit}"


def make_junar_url(dataset_id: str, app_key: str, limit: int = PORTAL_ROW_LIMIT) -> str:
    """Build the Junar v2 CSV export URL for a Sacramento datastream."""
    return f"{JUNAR_BASE_URL}{dataset_id}/data.csv/?auth_key={app_key}&limit={limit}"


def portal_cache_path(source: PortalSource, config: ImpoundConfig) -> Path:
    """Return the cache file location for a portal source."""
    return config.data_root / CACHE_DIR_NAME / f"{source.portal}-{source.dataset_id}.csv"


def fetch_portal_csv(source_uri: str, config: ImpoundConfig, refresh: bool = False) -> Path:
    """Fetch a portal CSV through the local cache.

    Args:
        source_uri: ``socrata://`` or ``junar://`` source reference.
        config: Runtime configuration with data root and portal keys.
        refresh: Download even when a cached copy exists.

    Returns:
        Path of the cached CSV file.

    Raises:
        ImpoundConfigError: If the portal app key is not configured.
        ImpoundIngestError: If the download fails.
    """
    source = parse_portal_uri(source_uri)
    cache_path = portal_cache_path(source, config)
    if cache_path.is_file() and not refresh:
        _LOGGER.info("portal_cache_hit", source_uri=source_uri, cache_path=str(cache_path))
        return cache_path
    payload = _download(source_uri, _make_portal_url(source, config))
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = cache_path.with_name(cache_path.name + ".partial")
    partial_path.write_bytes(payload)
    partial_path.replace(cache_path)
    _LOGGER.info(
        "portal_downloaded",
        source_uri=source_uri,
        cache_path=str(cache_path),
        byte_count=len(payload),
    )
    return cache_path


def _make_portal_url(source: PortalSource, config: ImpoundConfig) -> str:
    if source.portal == "socrata":
        return make_socrata_url(
            source.dataset_id,
            _require_key(config.socrata_app_key, "IMPOUND_SOCRATA_APP_KEY", source),
        )
    return make_junar_url(
        source.dataset_id,
        _require_key(config.junar_app_key, "IMPOUND_JUNAR_APP_KEY", source),
    )


def _require_key(app_key: str | None, variable_name: str, source: PortalSource) -> str:
    if not app_key:
        raise ImpoundConfigError(
            f"Fetching {source.portal} data set '{source.dataset_id}' requires an app key. "
            f"Set {variable_name} and retry."
        )
    return app_key


def _download(source_uri: str, url: str) -> bytes:
    """Download one portal export.

    The request URL carries the app key, so errors name the source instead.

    Raises:
        ImpoundIngestError: If the request fails or returns an error status.
    """
    with _create_session() as session:
        try:
            response = session.get(url, timeout=PORTAL_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as error:
            raise ImpoundIngestError(
                f"Failed to download {source_uri}: {type(error).__name__}. "
                "Check the data set id, app key, and network access, then retry."
            ) from error
        return response.content


def _create_session() -> Any:
    session = requests.Session()
    session.headers.update({"Accept": "text/csv"})
    return session
