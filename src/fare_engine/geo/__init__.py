from .distance import haversine_distance_km, haversine_distance_m
from .polygon import (
    Coordinate,
    build_polygon,
    covers_point,
    point_in_polygon,
    polygon_area_km2,
)
from .zone_resolver import ZoneResolver, resolve_zone
from .zones import Zone, ZoneLoader

__all__ = [
    "Coordinate",
    "Zone",
    "ZoneLoader",
    "ZoneResolver",
    "resolve_zone",
    "build_polygon",
    "covers_point",
    "point_in_polygon",
    "polygon_area_km2",
    "haversine_distance_km",
    "haversine_distance_m",
]
