import math

from fare_engine.geo.distance import haversine_distance_km
from fare_engine.geo.polygon import Coordinate

from .base import RouteEstimate

DEFAULT_AVERAGE_SPEED_KMH = 30.0


class StraightLineRoutingProvider:
    """Offline estimate: great-circle distance at an assumed city speed.

    Duration is rounded up to whole minutes.
    """

    def __init__(self, average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH):
        if average_speed_kmh <= 0:
            raise ValueError("Average speed must be positive")
        self.average_speed_kmh = average_speed_kmh

    def get_route(self, pickup: Coordinate, dropoff: Coordinate) -> RouteEstimate:
        pickup_lng, pickup_lat = pickup
        dropoff_lng, dropoff_lat = dropoff
        distance_km = haversine_distance_km(pickup_lat, pickup_lng, dropoff_lat, dropoff_lng)
        duration_minutes = math.ceil(distance_km / self.average_speed_kmh * 60)
        return RouteEstimate(distance_km=distance_km, duration_minutes=duration_minutes)
