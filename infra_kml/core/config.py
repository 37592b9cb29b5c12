"""Interchange configuration loaded from environment variables.

All configuration values have sensible defaults matching the reference
India deployment.  ``from_env()`` raises ``ConfigValidationError`` if a
value is out of its valid range, so bad configuration is caught at
startup rather than on the first export.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from infra_kml.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class InterchangeConfig:
    """Immutable interchange configuration.

    Attributes:
        default_region: Registered region name used when callers omit one.
        strict_mode: Enforce a region's precise boundary polygon when present.
        show_warnings: Emit soft warnings for points far from the region centre.
        allow_near_border: Accept points just outside the region rectangle.
        border_tolerance_km: Distance outside the rectangle still accepted
            when ``allow_near_border`` is set.
        export_document_name: Default base filename / KML document name.
        export_batch_size: Records per artifact for batched exports.
        kmz_compression_level: zlib level (0-9) for KMZ archives.
        fetch_timeout_s: Timeout for remote KML document retrieval.
    """

    default_region: str = "india"
    strict_mode: bool = True
    show_warnings: bool = True
    allow_near_border: bool = False
    border_tolerance_km: float = 10.0
    export_document_name: str = "infrastructure_export"
    export_batch_size: int = 500
    kmz_compression_level: int = 6
    fetch_timeout_s: float = 30.0

    @classmethod
    def from_env(cls) -> InterchangeConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range, a boolean
                flag is unrecognised, or a required string is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``EXPORT_BATCH_SIZE=abc``).
        """
        config = cls(
            default_region=os.getenv("GEOFENCE_REGION", "india"),
            strict_mode=_env_bool("GEOFENCE_STRICT_MODE", default=True),
            show_warnings=_env_bool("GEOFENCE_SHOW_WARNINGS", default=True),
            allow_near_border=_env_bool("GEOFENCE_ALLOW_NEAR_BORDER", default=False),
            border_tolerance_km=float(os.getenv("GEOFENCE_BORDER_TOLERANCE_KM", "10")),
            export_document_name=os.getenv("EXPORT_DOCUMENT_NAME", "infrastructure_export"),
            export_batch_size=int(os.getenv("EXPORT_BATCH_SIZE", "500")),
            kmz_compression_level=int(os.getenv("KMZ_COMPRESSION_LEVEL", "6")),
            fetch_timeout_s=float(os.getenv("KML_FETCH_TIMEOUT_S", "30")),
        )
        _validate(config)
        return config


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false, 1/0, yes/no, on/off)")


def _validate(config: InterchangeConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    from infra_kml.models.region import REGIONS

    if config.default_region.strip().lower() not in REGIONS:
        raise ConfigValidationError(
            "GEOFENCE_REGION",
            config.default_region,
            f"must be one of {sorted(REGIONS)}",
        )

    if config.border_tolerance_km < 0:
        raise ConfigValidationError(
            "GEOFENCE_BORDER_TOLERANCE_KM",
            config.border_tolerance_km,
            "must be >= 0 (kilometres)",
        )

    if not config.export_document_name.strip():
        raise ConfigValidationError(
            "EXPORT_DOCUMENT_NAME",
            config.export_document_name,
            "must not be empty",
        )

    if config.export_batch_size < 1:
        raise ConfigValidationError(
            "EXPORT_BATCH_SIZE",
            config.export_batch_size,
            "must be >= 1 (records)",
        )

    if not 0 <= config.kmz_compression_level <= 9:
        raise ConfigValidationError(
            "KMZ_COMPRESSION_LEVEL",
            config.kmz_compression_level,
            "must be between 0 and 9",
        )

    if config.fetch_timeout_s <= 0:
        raise ConfigValidationError(
            "KML_FETCH_TIMEOUT_S",
            config.fetch_timeout_s,
            "must be > 0 (seconds)",
        )
