"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import ImpoundConfig
from core.errors import ImpoundConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("IMPOUND_DATA_ROOT", "./.tmp-impound")

    config = ImpoundConfig.from_env()

    assert config.data_root.name == ".tmp-impound"


def test_from_env_defaults_shelter_time_zones(monkeypatch: pytest.MonkeyPatch) -> None:
    """Austin and Sacramento zones should default to their local zones."""
    monkeypatch.delenv("IMPOUND_ATX_TIMEZONE", raising=False)
    monkeypatch.delenv("IMPOUND_SAC_TIMEZONE", raising=False)

    config = ImpoundConfig.from_env()

    assert (config.atx_timezone.key, config.sac_timezone.key) == (
        "America/Chicago",
        "America/Los_Angeles",
    )


def test_from_env_reads_s3_session_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """S3 region and profile should come from environment."""
    monkeypatch.setenv("IMPOUND_S3_REGION", "us-west-2")
    monkeypatch.setenv("IMPOUND_S3_PROFILE", "shelter")

    config = ImpoundConfig.from_env()

    assert (config.s3_region, config.s3_profile) == ("us-west-2", "shelter")


def test_from_env_raises_for_invalid_time_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for an unknown zone name."""
    monkeypatch.setenv("IMPOUND_ATX_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ImpoundConfigError):
        ImpoundConfig.from_env()


def test_from_env_reads_portal_app_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Portal app keys should come from environment."""
    monkeypatch.setenv("IMPOUND_SOCRATA_APP_KEY", "atx-token")
    monkeypatch.setenv("IMPOUND_JUNAR_APP_KEY", "sac-key")

    config = ImpoundConfig.from_env()

    assert (config.socrata_app_key, config.junar_app_key) == ("atx-token", "sac-key")
