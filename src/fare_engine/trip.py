from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fare_engine.geo.polygon import Coordinate


class TripContext(BaseModel):
    """Inputs for one fare computation.

    Coordinates are (lng, lat). Distance and duration come from a routing
    provider. Peak-hour status is taken from ``is_peak_hour`` when set,
    otherwise derived from ``requested_at``, otherwise from the estimator's
    clock.
    """

    model_config = ConfigDict(frozen=True)

    pickup: Coordinate
    dropoff: Coordinate
    distance_km: float = Field(ge=0.0)
    duration_minutes: float = Field(ge=0.0)
    vehicle_class_id: str = Field(min_length=1)
    requested_at: datetime | None = None
    is_peak_hour: bool | None = None
    trip_id: str | None = None
