"""Configured entry point tying the interchange activities together.

``GeodataInterchange`` holds an ``InterchangeConfig`` and the resolved
default region, and exposes the ingest → validate → export flow used by
the dashboard's collaborators::

    interchange = GeodataInterchange.from_env()
    outcome = interchange.parse(kml_text, PlacemarkKind.POP)
    verdict = interchange.validate_all(outcome.placemarks)
    artifact = interchange.export(outcome.placemarks, "kmz")

The object holds no mutable state; every call is independent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from infra_kml.activities.export import ExportArtifact, ExportFormat, export_data, export_in_batches
from infra_kml.activities.parse_kml import parse_kml_string, parse_kml_url
from infra_kml.activities.validate_region import (
    PointLike,
    RegionLike,
    resolve_region,
    validate_in_region,
    validate_sequence_in_region,
)
from infra_kml.core.config import InterchangeConfig
from infra_kml.models.region import GeofenceOptions, Region, ValidationVerdict, get_region

if TYPE_CHECKING:
    from infra_kml.models.placemark import ParseOutcome, PlacemarkKind, PlacemarkRecord

logger = logging.getLogger("infra_kml.interchange")


class GeodataInterchange:
    """Config-bound facade over parsing, region validation and export."""

    def __init__(self, config: InterchangeConfig | None = None, region: Region | None = None) -> None:
        self.config = config or InterchangeConfig()
        self.region = region or get_region(self.config.default_region)
        self.options = GeofenceOptions.from_config(self.config)

    @classmethod
    def from_env(cls) -> GeodataInterchange:
        """Build from environment configuration.

        Raises:
            ConfigValidationError: If the environment holds invalid values.
        """
        config = InterchangeConfig.from_env()
        logger.info(
            "Interchange configured | region=%s | strict=%s | warnings=%s | batch_size=%d",
            config.default_region,
            config.strict_mode,
            config.show_warnings,
            config.export_batch_size,
        )
        return cls(config)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def parse(self, document: str | bytes, kind: PlacemarkKind | str) -> ParseOutcome:
        return parse_kml_string(document, kind)

    def parse_url(self, url: str, kind: PlacemarkKind | str) -> ParseOutcome:
        return parse_kml_url(url, kind, timeout_s=self.config.fetch_timeout_s)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, point: PointLike, region: RegionLike | None = None) -> ValidationVerdict:
        return validate_in_region(point, self._region(region), self.options)

    def validate_all(
        self, points: Iterable[PointLike], region: RegionLike | None = None
    ) -> ValidationVerdict:
        return validate_sequence_in_region(points, self._region(region), self.options)

    def partition(
        self, records: Iterable[PlacemarkRecord], region: RegionLike | None = None
    ) -> tuple[list[PlacemarkRecord], list[tuple[PlacemarkRecord, ValidationVerdict]]]:
        """Split records into those inside the region and rejected ones with verdicts.

        Soft warnings count as inside.  Input order is preserved in both lists.
        """
        resolved = self._region(region)
        accepted: list[PlacemarkRecord] = []
        rejected: list[tuple[PlacemarkRecord, ValidationVerdict]] = []
        for record in records:
            verdict = validate_in_region(record, resolved, self.options)
            if verdict.is_valid:
                accepted.append(record)
            else:
                rejected.append((record, verdict))
        if rejected:
            logger.warning(
                "%d of %d record(s) outside %s",
                len(rejected),
                len(accepted) + len(rejected),
                resolved.name,
            )
        return accepted, rejected

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(
        self,
        records: Sequence[PlacemarkRecord],
        fmt: ExportFormat | str,
        filename: str | None = None,
    ) -> ExportArtifact:
        return export_data(
            records,
            fmt,
            filename or self.config.export_document_name,
            compression_level=self.config.kmz_compression_level,
        )

    def export_batches(
        self,
        records: Sequence[PlacemarkRecord],
        fmt: ExportFormat | str,
        filename: str | None = None,
    ) -> list[ExportArtifact]:
        return export_in_batches(
            records,
            fmt,
            batch_size=self.config.export_batch_size,
            filename=filename or self.config.export_document_name,
            compression_level=self.config.kmz_compression_level,
        )

    def _region(self, region: RegionLike | None) -> Region:
        return self.region if region is None else resolve_region(region)
