import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


def planar_rings(rings: Any) -> list[list[tuple[float, float]]]:
    """Drop altitude (or any extra values) from GeoJSON positions, keeping (lng, lat)."""
    return [[(lng, lat) for lng, lat, *_ in ring] for ring in rings]


class Zone(BaseModel):
    """A named polygon used to scope fare rules and surcharges.

    ``coordinates`` holds the outer ring followed by any hole rings, each a
    closed sequence of (lng, lat) pairs. Geometric validity is checked at
    resolution time so a malformed zone can be loaded and then skipped.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    description: str = ""
    coordinates: list[list[tuple[float, float]]]
    is_active: bool = True
    color: str | None = None
    area_km2: float | None = Field(default=None, ge=0.0)
    surcharge: float = Field(default=1.0, gt=0.0)


class ZoneLoader:
    """Loads zones from a GeoJSON FeatureCollection, preserving file order."""

    def __init__(self, geojson_path: Path | str):
        self.geojson_path = Path(geojson_path)
        self._zones: list[Zone] = []
        self._load_zones()

    def _load_zones(self) -> None:
        with open(self.geojson_path) as f:
            geojson = json.load(f)

        if geojson.get("type") != "FeatureCollection":
            logger.warning(f"Expected FeatureCollection, got {geojson.get('type')}")
            return

        for feature in geojson.get("features", []):
            zone = self.parse_feature(feature)
            if zone:
                self._zones.append(zone)

        logger.info(f"Loaded {len(self._zones)} zones from {self.geojson_path}")

    @staticmethod
    def parse_feature(feature: dict[str, Any]) -> Zone | None:
        """Convert one GeoJSON feature into a Zone, or None if unusable."""
        try:
            properties = feature.get("properties") or {}
            geometry = feature.get("geometry") or {}

            zone_id = properties.get("id") or feature.get("id")
            if not zone_id:
                logger.warning("Skipping feature with missing zone id")
                return None

            if geometry.get("type") != "Polygon":
                logger.warning(
                    f"Skipping zone {zone_id}: unsupported geometry type {geometry.get('type')}"
                )
                return None

            coordinates = geometry.get("coordinates") or []
            if not coordinates or not coordinates[0]:
                logger.warning(f"Skipping zone {zone_id}: empty coordinates")
                return None

            return Zone(
                id=str(zone_id),
                name=properties.get("name", zone_id),
                description=properties.get("description", ""),
                coordinates=planar_rings(coordinates),
                is_active=properties.get("isActive", True),
                color=properties.get("color"),
                area_km2=properties.get("areaKm2"),
                surcharge=properties.get("surcharge", 1.0),
            )

        except (ValueError, TypeError) as e:
            logger.warning(f"Error parsing feature: {e}")
            return None

    def get_zone(self, zone_id: str) -> Zone | None:
        return next((zone for zone in self._zones if zone.id == zone_id), None)

    def get_all_zones(self) -> list[Zone]:
        return list(self._zones)
