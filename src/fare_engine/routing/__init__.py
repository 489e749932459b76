from .base import RouteEstimate, RoutingProvider
from .osrm import NoRouteFoundError, OSRMRoutingProvider, RoutingServiceError, RoutingTimeoutError
from .straight_line import StraightLineRoutingProvider

__all__ = [
    "RouteEstimate",
    "RoutingProvider",
    "StraightLineRoutingProvider",
    "OSRMRoutingProvider",
    "NoRouteFoundError",
    "RoutingServiceError",
    "RoutingTimeoutError",
]
