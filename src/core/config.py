"""Runtime configuration model for Impound.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.constants import DEFAULT_ATX_TIMEZONE, DEFAULT_DATA_ROOT, DEFAULT_SAC_TIMEZONE
from core.errors import ImpoundConfigError


@dataclass(frozen=True)
class ImpoundConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the build store.
        s3_region: Optional default AWS region for S3 reads.
        s3_profile: Optional AWS profile for boto3 session initialization.
        atx_timezone: Zone used to localize Austin timestamps.
        sac_timezone: Zone used to localize Sacramento timestamps.
        socrata_app_key: Optional Austin open-data portal app token.
        junar_app_key: Optional Sacramento open-data portal auth key.
    """

    data_root: Path
    s3_region: str | None
    s3_profile: str | None
    atx_timezone: ZoneInfo
    sac_timezone: ZoneInfo
    socrata_app_key: str | None = None
    junar_app_key: str | None = None

    @classmethod
    def from_env(cls) -> "ImpoundConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ImpoundConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("IMPOUND_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        s3_region = os.getenv("IMPOUND_S3_REGION")
        s3_profile = os.getenv("IMPOUND_S3_PROFILE")
        atx_timezone = _parse_timezone(
            "IMPOUND_ATX_TIMEZONE", os.getenv("IMPOUND_ATX_TIMEZONE", DEFAULT_ATX_TIMEZONE)
        )
        sac_timezone = _parse_timezone(
            "IMPOUND_SAC_TIMEZONE", os.getenv("IMPOUND_SAC_TIMEZONE", DEFAULT_SAC_TIMEZONE)
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            s3_region=s3_region,
            s3_profile=s3_profile,
            atx_timezone=atx_timezone,
            sac_timezone=sac_timezone,
            socrata_app_key=os.getenv("IMPOUND_SOCRATA_APP_KEY"),
            junar_app_key=os.getenv("IMPOUND_JUNAR_APP_KEY"),
        )


def _parse_timezone(variable_name: str, raw_value: str) -> ZoneInfo:
    """Parse a time zone environment value.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Resolved IANA time zone.

    Raises:
        ImpoundConfigError: If value is not a known zone name.
    """
    try:
        return ZoneInfo(raw_value)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise ImpoundConfigError(
            f"Invalid {variable_name} value: "
            f"expected an IANA time zone name, got '{raw_value}'. "
            f"Set {variable_name} to a zone such as 'America/Chicago'."
        ) from error
