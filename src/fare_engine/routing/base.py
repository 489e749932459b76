from typing import Protocol

from pydantic import BaseModel, Field

from fare_engine.geo.polygon import Coordinate


class RouteEstimate(BaseModel):
    distance_km: float = Field(ge=0.0)
    duration_minutes: float = Field(ge=0.0)


class RoutingProvider(Protocol):
    """Maps a (lng, lat) pickup/dropoff pair to a distance and duration."""

    def get_route(self, pickup: Coordinate, dropoff: Coordinate) -> RouteEstimate: ...
