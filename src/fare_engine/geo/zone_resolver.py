import logging
from collections.abc import Iterable

from shapely.geometry import MultiPolygon, Polygon

from fare_engine.core.exceptions import InvalidGeometryError

from .polygon import Coordinate, build_polygon, covers_point
from .zones import Zone

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Classifies coordinates into at most one active zone.

    Polygons are built once per instance from the zones it was given.
    Overlapping zones are resolved by input order: the first match wins.
    Zones with malformed geometry never match and are listed in
    ``invalid_zone_ids`` so callers can flag them.
    """

    def __init__(self, zones: Iterable[Zone]):
        self._entries: list[tuple[Zone, Polygon | MultiPolygon]] = []
        self.invalid_zone_ids: list[str] = []
        self._build_polygons(zones)

    def _build_polygons(self, zones: Iterable[Zone]) -> None:
        for zone in zones:
            if not zone.is_active:
                continue
            try:
                polygon = build_polygon(zone.coordinates)
            except InvalidGeometryError as e:
                self.invalid_zone_ids.append(zone.id)
                logger.warning(
                    f"Skipping zone {zone.id} with invalid geometry: {e.message}",
                    extra={"zone_id": zone.id},
                )
                continue
            self._entries.append((zone, polygon))

    @property
    def active_zones(self) -> list[Zone]:
        return [zone for zone, _ in self._entries]

    def resolve(self, point: Coordinate) -> Zone | None:
        """Return the first zone containing ``point``, or None if outside all zones."""
        for zone, polygon in self._entries:
            if covers_point(polygon, point):
                return zone
        return None


def resolve_zone(point: Coordinate, zones: Iterable[Zone]) -> Zone | None:
    """Find the enclosing active zone for a single (lng, lat) point."""
    return ZoneResolver(zones).resolve(point)
