"""Normalization boundary between stored documents and the engine's models.

Stored rule, zone and booking documents have drifted over time (camelCase
keys, GeoJSON-wrapped polygons, several spellings of the pickup location).
Every such variation is handled here so the pricing and geometry code only
ever sees strict ``FareRule``, ``Zone`` and ``TripContext`` instances.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fare_engine.core.exceptions import InvalidInputError
from fare_engine.geo.polygon import Coordinate
from fare_engine.geo.zones import Zone, ZoneLoader, planar_rings
from fare_engine.pricing.rules import FareRule
from fare_engine.trip import TripContext

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


def _validation_failure(kind: str, doc_id: Any, error: ValidationError) -> InvalidInputError:
    return InvalidInputError(
        f"Invalid {kind} document {doc_id!r}: {error.error_count()} validation error(s)",
        details={"id": doc_id, "errors": error.errors(include_url=False)},
    )


def _document_id(doc: Mapping[str, Any]) -> Any:
    return doc.get("id", doc.get("_id"))


def normalize_fare_rule(doc: Mapping[str, Any]) -> FareRule:
    """Build a FareRule from a stored document.

    Older rule documents carry ``perHourPrice`` instead of a per-minute
    rate; it is converted to minutes.
    """
    data = dict(doc)
    if "id" not in data and "_id" in data:
        data["id"] = str(data.pop("_id"))

    has_minute_rate = "perMinutePrice" in data or "per_minute_price" in data
    if not has_minute_rate and data.get("perHourPrice") is not None:
        data["perMinutePrice"] = float(data["perHourPrice"]) / MINUTES_PER_HOUR

    try:
        return FareRule.model_validate(data)
    except ValidationError as e:
        raise _validation_failure("fare rule", _document_id(doc), e) from e


def normalize_zone(doc: Mapping[str, Any]) -> Zone:
    """Build a Zone from a stored document.

    ``coordinates`` may be the bare ring list or a GeoJSON Polygon object;
    positions are reduced to (lng, lat).
    """
    data = dict(doc)
    if "id" not in data and "_id" in data:
        data["id"] = str(data.pop("_id"))

    coordinates = data.get("coordinates")
    if isinstance(coordinates, Mapping):
        if coordinates.get("type") != "Polygon":
            raise InvalidInputError(
                f"Zone {_document_id(doc)!r} has unsupported geometry type "
                f"{coordinates.get('type')!r}",
                details={"id": _document_id(doc)},
            )
        coordinates = coordinates.get("coordinates")

    if isinstance(coordinates, list):
        try:
            data["coordinates"] = planar_rings(coordinates)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Zone {_document_id(doc)!r} has malformed coordinates",
                details={"id": _document_id(doc)},
            ) from e

    try:
        return Zone.model_validate(data)
    except ValidationError as e:
        raise _validation_failure("zone", _document_id(doc), e) from e


def _location_coordinate(location: Any) -> Coordinate | None:
    """Read a (lng, lat) pair from a location in any of its stored shapes."""
    if location is None:
        return None
    if isinstance(location, list | tuple) and len(location) == 2:
        return float(location[0]), float(location[1])
    if isinstance(location, Mapping):
        if "coordinates" in location:
            return _location_coordinate(location["coordinates"])
        lat = location.get("lat", location.get("latitude"))
        lng = location.get("lng", location.get("lon", location.get("longitude")))
        if lat is not None and lng is not None:
            return float(lng), float(lat)
    return None


def _first_present(doc: Mapping[str, Any], *keys: str) -> Any:
    return next((doc[key] for key in keys if doc.get(key) is not None), None)


def normalize_trip(doc: Mapping[str, Any]) -> TripContext:
    """Build a TripContext from a booking or fare-estimate request document."""
    try:
        pickup = _location_coordinate(_first_present(doc, "pickupLocation", "pickup"))
        dropoff = _location_coordinate(_first_present(doc, "dropoffLocation", "dropoff"))
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            "Trip document has malformed coordinates", details={"id": _document_id(doc)}
        ) from e

    if pickup is None or dropoff is None:
        raise InvalidInputError(
            "Trip document is missing pickup or dropoff coordinates",
            details={"id": _document_id(doc)},
        )

    trip_id = _first_present(doc, "tripId", "trip_id", "id")
    data = {
        "pickup": pickup,
        "dropoff": dropoff,
        "distance_km": _first_present(doc, "distanceKm", "distance_km", "distance"),
        "duration_minutes": _first_present(
            doc, "durationMinutes", "duration_minutes", "duration"
        ),
        "vehicle_class_id": _first_present(
            doc, "vehicleClassId", "vehicle_class_id", "taxiTypeId", "vehicleType"
        ),
        "requested_at": _first_present(doc, "requestedAt", "requested_at", "pickupDateTime"),
        "is_peak_hour": _first_present(doc, "isPeakHour", "is_peak_hour"),
        "trip_id": str(trip_id) if trip_id is not None else None,
    }

    try:
        return TripContext.model_validate(data)
    except ValidationError as e:
        raise _validation_failure("trip", _document_id(doc), e) from e


def _read_json(path: Path | str) -> Any:
    with open(path) as f:
        return json.load(f)


def load_fare_rules(path: Path | str) -> list[FareRule]:
    """Load fare rules from a JSON array of rule documents, keeping file order."""
    documents = _read_json(path)
    if not isinstance(documents, list):
        raise InvalidInputError(f"Expected a JSON array of fare rules in {path}")

    rules = [normalize_fare_rule(doc) for doc in documents]
    logger.info(f"Loaded {len(rules)} fare rules from {path}")
    return rules


def load_zones(path: Path | str) -> list[Zone]:
    """Load zones from a GeoJSON FeatureCollection or a JSON array of zone documents.

    Unusable zone documents are logged and skipped, as ZoneLoader does for
    features.
    """
    documents = _read_json(path)
    if isinstance(documents, Mapping) and documents.get("type") == "FeatureCollection":
        return ZoneLoader(path).get_all_zones()
    if not isinstance(documents, list):
        raise InvalidInputError(f"Expected a FeatureCollection or JSON array of zones in {path}")

    zones = []
    for doc in documents:
        try:
            zones.append(normalize_zone(doc))
        except InvalidInputError as e:
            zone_id = e.details.get("id")
            logger.warning(f"Skipping zone {zone_id}: {e.message}", extra={"zone_id": zone_id})
    logger.info(f"Loaded {len(zones)} zones from {path}")
    return zones
