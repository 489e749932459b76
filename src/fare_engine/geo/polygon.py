"""Planar point-in-polygon primitives over (lng, lat) rings.

Zones are city-scale, so coordinates are treated as a flat plane; no
geodesic correction is applied.

Boundary policy: a point lying on any ring of the polygon (an edge or a
vertex of the outer ring or of a hole) counts as inside.
"""

import math
from collections.abc import Sequence

from shapely.geometry import GeometryCollection, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.validation import make_valid

from fare_engine.core.exceptions import InvalidGeometryError

Coordinate = tuple[float, float]
Ring = Sequence[Sequence[float]]

MIN_RING_POSITIONS = 4  # three distinct corners plus the repeated closing point
MIN_DISTINCT_POSITIONS = 3

KM_PER_DEGREE_LAT = 110.574
KM_PER_DEGREE_LON_AT_EQUATOR = 111.320


def validate_ring(ring: Ring, index: int = 0) -> list[Coordinate]:
    """Check a single ring and return it as a list of float (lng, lat) pairs.

    Raises:
        InvalidGeometryError: if the ring is unclosed, too short, has fewer
            than three distinct positions, or holds non-numeric values.
    """
    try:
        positions = [(float(position[0]), float(position[1])) for position in ring]
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidGeometryError(
            f"Ring {index} contains malformed positions", details={"ring": index}
        ) from e

    if not all(math.isfinite(lng) and math.isfinite(lat) for lng, lat in positions):
        raise InvalidGeometryError(
            f"Ring {index} contains non-finite coordinates", details={"ring": index}
        )

    if len(positions) < MIN_RING_POSITIONS:
        raise InvalidGeometryError(
            f"Ring {index} has {len(positions)} positions, need at least {MIN_RING_POSITIONS}",
            details={"ring": index, "positions": len(positions)},
        )

    if positions[0] != positions[-1]:
        raise InvalidGeometryError(
            f"Ring {index} is not closed", details={"ring": index}
        )

    distinct = len(set(positions[:-1]))
    if distinct < MIN_DISTINCT_POSITIONS:
        raise InvalidGeometryError(
            f"Ring {index} has only {distinct} distinct positions",
            details={"ring": index, "distinct_positions": distinct},
        )

    return positions


def _polygonal_part(geometry: BaseGeometry) -> Polygon | MultiPolygon | None:
    if isinstance(geometry, Polygon | MultiPolygon):
        return geometry
    if isinstance(geometry, GeometryCollection):
        parts = [g for g in geometry.geoms if isinstance(g, Polygon | MultiPolygon)]
        if parts:
            merged = unary_union(parts)
            if isinstance(merged, Polygon | MultiPolygon):
                return merged
    return None


def build_polygon(rings: Sequence[Ring]) -> Polygon | MultiPolygon:
    """Build a shapely geometry from an outer ring plus optional hole rings.

    Self-intersecting rings are repaired with ``make_valid``; only the
    polygonal part of the repair is kept.
    """
    if not rings:
        raise InvalidGeometryError("Polygon has no rings")

    validated = [validate_ring(ring, index) for index, ring in enumerate(rings)]
    polygon = Polygon(validated[0], validated[1:])

    if polygon.is_valid:
        return polygon

    repaired = _polygonal_part(make_valid(polygon))
    if repaired is None or repaired.is_empty:
        raise InvalidGeometryError("Polygon has no area after repair")
    return repaired


def covers_point(geometry: Polygon | MultiPolygon, point: Coordinate) -> bool:
    """Containment test against a prebuilt geometry (boundary inclusive)."""
    lng, lat = point
    return bool(geometry.covers(Point(lng, lat)))


def point_in_polygon(point: Coordinate, rings: Sequence[Ring]) -> bool:
    """Return True if ``point`` is inside the outer ring and outside every hole.

    Raises:
        InvalidGeometryError: if the polygon is degenerate.
    """
    return covers_point(build_polygon(rings), point)


def polygon_area_km2(rings: Sequence[Ring]) -> float:
    """Approximate polygon area in km² using a local equirectangular projection."""
    geometry = build_polygon(rings)
    origin_lat = geometry.centroid.y
    kx = KM_PER_DEGREE_LON_AT_EQUATOR * math.cos(math.radians(origin_lat))
    ky = KM_PER_DEGREE_LAT

    return float(geometry.area * kx * ky)
