"""Point-in-region containment for GeoJSON-style boundaries.

Vertices follow GeoJSON axis order, ``[lng, lat]``. Containment uses the
even-odd ray casting rule with exact floating point comparison; a point
lying exactly on an edge may resolve either way.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from app.schemas.region import RegionBoundary

logger = logging.getLogger(__name__)

POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"


def is_point_in_ring(lng: float, lat: float, ring: Sequence[Sequence[float]]) -> bool:
    """Ray-cast a point against a single closed ring.

    The closing edge from the last vertex back to the first is implicit, so
    rings may or may not repeat their first vertex.

    Args:
        lng: Point longitude.
        lat: Point latitude.
        ring: Ordered ``[lng, lat]`` vertices.

    Returns:
        True if the horizontal ray from the point crosses an odd number of edges.
    """
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        # (yi > lat) != (yj > lat) guarantees yi != yj, so no division by zero
        if (yi > lat) != (yj > lat) and lng < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def _is_point_in_polygon(lng: float, lat: float, rings: Any, honor_holes: bool) -> bool:
    if not isinstance(rings, Sequence) or not rings:
        return False
    if not honor_holes:
        return is_point_in_ring(lng, lat, rings[0])
    # Even-odd across every ring: a point inside the outer ring and one hole is outside.
    inside = False
    for ring in rings:
        if is_point_in_ring(lng, lat, ring):
            inside = not inside
    return inside


def is_point_in_region(
    lat: float,
    lng: float,
    boundary: RegionBoundary,
    *,
    honor_holes: bool = False,
) -> bool:
    """Check whether a point falls inside a Polygon or MultiPolygon boundary.

    Only outer rings are evaluated unless ``honor_holes`` is set. A
    MultiPolygon contains the point if any member polygon does.

    Missing geometry, an unknown geometry type, or malformed coordinates
    yield False rather than raising, so one bad boundary never aborts an
    aggregation over many regions.

    Args:
        lat: Point latitude in [-90, 90].
        lng: Point longitude in [-180, 180].
        boundary: Normalized region boundary.
        honor_holes: Apply the even-odd rule across interior rings too.

    Returns:
        True if the point is contained.
    """
    geometry = boundary.geometry
    if geometry is None or not geometry.coordinates:
        return False

    try:
        if geometry.type == POLYGON:
            return _is_point_in_polygon(lng, lat, geometry.coordinates, honor_holes)
        if geometry.type == MULTI_POLYGON:
            return any(
                _is_point_in_polygon(lng, lat, polygon, honor_holes)
                for polygon in geometry.coordinates
            )
    except (LookupError, TypeError, ValueError, ArithmeticError) as exc:
        logger.debug(
            "geometry.malformed_coordinates",
            extra={
                "region": boundary.name,
                "geometry_type": geometry.type,
                "error_type": type(exc).__name__,
            },
        )
        return False

    return False
