import httpx

from fare_engine.core.exceptions import (
    InvalidInputError,
    NetworkError,
    ServiceUnavailableError,
)
from fare_engine.geo.polygon import Coordinate

from .base import RouteEstimate


class NoRouteFoundError(InvalidInputError):
    """No route found between coordinates. Inherits from InvalidInputError (non-retryable)."""

    pass


class RoutingServiceError(ServiceUnavailableError):
    """OSRM service error (5xx). Inherits from ServiceUnavailableError (retryable)."""

    pass


class RoutingTimeoutError(NetworkError):
    """OSRM request timeout. Inherits from NetworkError (retryable)."""

    pass


class OSRMRoutingProvider:
    """Routing provider backed by an OSRM ``/route/v1/driving`` endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _route_url(self, pickup: Coordinate, dropoff: Coordinate) -> str:
        pickup_lng, pickup_lat = pickup
        dropoff_lng, dropoff_lat = dropoff
        return (
            f"{self.base_url}/route/v1/driving/"
            f"{pickup_lng},{pickup_lat};{dropoff_lng},{dropoff_lat}"
        )

    def get_route(self, pickup: Coordinate, dropoff: Coordinate) -> RouteEstimate:
        """Fetch driving distance and duration between two (lng, lat) points."""
        url = self._route_url(pickup, dropoff)
        params = {"overview": "false"}

        try:
            if self._client is not None:
                response = self._client.get(url, params=params, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise RoutingTimeoutError(f"Request timed out after {self.timeout}s") from e
        except httpx.NetworkError as e:
            raise RoutingServiceError(f"Network error: {e}") from e

        if response.status_code >= 500:
            raise RoutingServiceError(f"OSRM server error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingServiceError("OSRM returned a non-JSON response") from e

        if data.get("code") == "NoRoute" or not data.get("routes"):
            raise NoRouteFoundError(
                "No route found between coordinates",
                details={"pickup": pickup, "dropoff": dropoff},
            )

        route = data["routes"][0]
        return RouteEstimate(
            distance_km=float(route["distance"]) / 1000.0,
            duration_minutes=float(route["duration"]) / 60.0,
        )
