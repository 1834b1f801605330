"""GeoJSON boundary provider.

Country datasets disagree on where the display name lives (``name``,
``NAME``, ``ADMIN``...). That loose matching happens here so the
aggregation code only ever sees normalized ``RegionBoundary`` objects.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from app.core.errors import ValidationAppError
from app.schemas.region import BoundaryGeometry, RegionBoundary

logger = logging.getLogger(__name__)

NAME_PROPERTY_KEYS = ("name", "NAME", "ADMIN", "admin", "name_long", "NAME_LONG")


def resolve_feature_name(feature: Mapping[str, Any]) -> str | None:
    """Pick a display name from a feature's properties (or its ``id``)."""
    properties = feature.get("properties") or {}
    if isinstance(properties, Mapping):
        for key in NAME_PROPERTY_KEYS:
            value = properties.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    feature_id = feature.get("id")
    if isinstance(feature_id, str) and feature_id.strip():
        return feature_id.strip()
    return None


def feature_to_boundary(feature: Mapping[str, Any]) -> RegionBoundary | None:
    """Normalize one GeoJSON feature; None if it has no usable name."""
    name = resolve_feature_name(feature)
    if name is None:
        return None

    geometry = feature.get("geometry")
    if not isinstance(geometry, Mapping):
        return RegionBoundary(name=name, geometry=None)

    geometry_type = geometry.get("type")
    return RegionBoundary(
        name=name,
        geometry=BoundaryGeometry(
            type=geometry_type if isinstance(geometry_type, str) else None,
            coordinates=geometry.get("coordinates"),
        ),
    )


def parse_feature_collection(data: Mapping[str, Any]) -> list[RegionBoundary]:
    """Convert a FeatureCollection mapping into boundaries.

    Raises:
        ValidationAppError: If ``data`` is not a FeatureCollection.
    """
    if data.get("type") != "FeatureCollection" or not isinstance(data.get("features"), list):
        raise ValidationAppError(
            code="boundaries_invalid_geojson",
            message="Boundary data must be a GeoJSON FeatureCollection",
        )

    boundaries: list[RegionBoundary] = []
    skipped = 0
    for feature in data["features"]:
        boundary = feature_to_boundary(feature) if isinstance(feature, Mapping) else None
        if boundary is None:
            skipped += 1
            continue
        boundaries.append(boundary)

    if skipped:
        logger.warning("boundaries.features_skipped", extra={"skipped": skipped})
    return boundaries


def load_boundaries(path: str | Path) -> list[RegionBoundary]:
    """Read and normalize a GeoJSON FeatureCollection file.

    Raises:
        ValidationAppError: If the file is missing or not valid GeoJSON.
    """
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValidationAppError(
            code="boundaries_file_not_found",
            message=f"Boundary file not found: {file_path}",
        ) from exc
    except json.JSONDecodeError as exc:
        raise ValidationAppError(
            code="boundaries_invalid_json",
            message=f"Boundary file is not valid JSON: {exc}",
        ) from exc

    if not isinstance(data, Mapping):
        raise ValidationAppError(
            code="boundaries_invalid_geojson",
            message="Boundary data must be a GeoJSON FeatureCollection",
        )

    boundaries = parse_feature_collection(data)
    logger.info(
        "boundaries.loaded",
        extra={"path": str(file_path), "regions": len(boundaries)},
    )
    return boundaries


class BoundaryRegistry:
    """Name-indexed collection of region boundaries.

    Lookup is case-insensitive. When two features share a name the first
    one wins.
    """

    def __init__(self, boundaries: Iterable[RegionBoundary] = ()) -> None:
        self._boundaries: dict[str, RegionBoundary] = {}
        for boundary in boundaries:
            self._boundaries.setdefault(boundary.name.casefold(), boundary)

    @classmethod
    def from_file(cls, path: str | Path | None) -> "BoundaryRegistry":
        if not path:
            logger.info("boundaries.not_configured")
            return cls()
        return cls(load_boundaries(path))

    def __len__(self) -> int:
        return len(self._boundaries)

    def __iter__(self) -> Iterator[RegionBoundary]:
        return iter(self._boundaries.values())

    def get(self, name: str) -> RegionBoundary | None:
        return self._boundaries.get(name.strip().casefold())

    def names(self) -> list[str]:
        return sorted(b.name for b in self._boundaries.values())
