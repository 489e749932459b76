"""Zone-aware fare calculation for ride bookings."""

from .core.exceptions import (
    ConfigurationError,
    FareEngineError,
    InvalidGeometryError,
    InvalidInputError,
    NoApplicableFareRuleError,
)
from .estimator import FareEstimator, estimate_fare
from .geo import Zone, ZoneLoader, ZoneResolver, point_in_polygon, resolve_zone
from .pricing import (
    FareBreakdown,
    FareCalculator,
    FareRule,
    PeakHourClassifier,
    compose_zone_surcharge,
    is_peak_hour,
    require_fare_rule,
    resolve_fare_rule,
)
from .trip import TripContext

__version__ = "0.1.0"

__all__ = [
    "FareEngineError",
    "ConfigurationError",
    "InvalidGeometryError",
    "InvalidInputError",
    "NoApplicableFareRuleError",
    "FareEstimator",
    "estimate_fare",
    "Zone",
    "ZoneLoader",
    "ZoneResolver",
    "point_in_polygon",
    "resolve_zone",
    "FareBreakdown",
    "FareCalculator",
    "FareRule",
    "PeakHourClassifier",
    "compose_zone_surcharge",
    "is_peak_hour",
    "require_fare_rule",
    "resolve_fare_rule",
    "TripContext",
]
