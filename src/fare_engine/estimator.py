"""Entry point tying zone resolution, rule resolution and fare calculation together."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from uuid import uuid4

from fare_engine.core.exceptions import NoApplicableFareRuleError
from fare_engine.fare_logging import log_trip_context
from fare_engine.geo.polygon import Coordinate
from fare_engine.geo.zone_resolver import ZoneResolver
from fare_engine.geo.zones import Zone
from fare_engine.pricing.calculator import UNKNOWN_ZONE_NAME, FareBreakdown, FareCalculator
from fare_engine.pricing.peak_hours import PeakHourClassifier
from fare_engine.pricing.rule_resolver import require_fare_rule
from fare_engine.pricing.rules import FareRule
from fare_engine.pricing.special_conditions import special_condition_multiplier
from fare_engine.pricing.surcharge import compose_zone_surcharge
from fare_engine.routing.base import RoutingProvider
from fare_engine.settings import EngineSettings
from fare_engine.trip import TripContext

logger = logging.getLogger(__name__)


class FareEstimator:
    """Computes fares for trips against caller-supplied rules and zones.

    Holds only configuration; rules and zones are passed in on every call.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        calculator: FareCalculator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings or EngineSettings()
        self.calculator = calculator or FareCalculator()
        self.peak_classifier = PeakHourClassifier(self.settings.timezone, clock)

    def estimate(
        self,
        trip: TripContext,
        rules: Sequence[FareRule],
        zones: Sequence[Zone],
    ) -> FareBreakdown:
        """Resolve zones and rule for ``trip`` and return its fare breakdown.

        Raises:
            NoApplicableFareRuleError: if no rule matches the trip.
            InvalidInputError: if the calculator rejects the inputs.
        """
        trip_id = trip.trip_id or str(uuid4())
        with log_trip_context(trip_id, vehicle_class_id=trip.vehicle_class_id):
            resolver = ZoneResolver(zones)
            pickup_zone = resolver.resolve(trip.pickup)
            dropoff_zone = resolver.resolve(trip.dropoff)

            try:
                rule = require_fare_rule(
                    trip.vehicle_class_id,
                    pickup_zone.id if pickup_zone else None,
                    dropoff_zone.id if dropoff_zone else None,
                    rules,
                )
            except NoApplicableFareRuleError as e:
                logger.error(f"Fare not computed: {e.message}")
                raise

            instant = trip.requested_at or self.peak_classifier.now()
            if trip.is_peak_hour is not None:
                is_peak = trip.is_peak_hour
            else:
                is_peak = self.peak_classifier.is_peak(instant)

            zone_surcharge = compose_zone_surcharge(
                pickup_zone, dropoff_zone, self.settings.cross_zone_multiplier
            )
            special_multiplier = 1.0
            if self.settings.apply_special_conditions:
                special_multiplier = special_condition_multiplier(
                    rule, instant, self.peak_classifier.tz
                )

            breakdown = self.calculator.calculate(
                rule,
                trip.distance_km,
                trip.duration_minutes,
                is_peak_hour=is_peak,
                zone_surcharge=zone_surcharge,
                special_multiplier=special_multiplier,
            )
            breakdown = breakdown.model_copy(
                update={
                    "pickup_zone_id": pickup_zone.id if pickup_zone else None,
                    "pickup_zone_name": pickup_zone.name if pickup_zone else UNKNOWN_ZONE_NAME,
                    "dropoff_zone_id": dropoff_zone.id if dropoff_zone else None,
                    "dropoff_zone_name": dropoff_zone.name if dropoff_zone else UNKNOWN_ZONE_NAME,
                }
            )

            logger.info(
                f"Fare {breakdown.total_fare:.2f} via rule {rule.id} "
                f"({breakdown.pickup_zone_name} -> {breakdown.dropoff_zone_name}, "
                f"peak={is_peak})",
                extra={"rule_id": rule.id},
            )
            return breakdown

    def quote(
        self,
        pickup: Coordinate,
        dropoff: Coordinate,
        vehicle_class_id: str,
        rules: Sequence[FareRule],
        zones: Sequence[Zone],
        routing_provider: RoutingProvider,
        requested_at: datetime | None = None,
        is_peak_hour: bool | None = None,
    ) -> FareBreakdown:
        """Fetch distance/duration from ``routing_provider`` and estimate the fare."""
        route = routing_provider.get_route(pickup, dropoff)
        trip = TripContext(
            pickup=pickup,
            dropoff=dropoff,
            distance_km=route.distance_km,
            duration_minutes=route.duration_minutes,
            vehicle_class_id=vehicle_class_id,
            requested_at=requested_at,
            is_peak_hour=is_peak_hour,
        )
        return self.estimate(trip, rules, zones)


def estimate_fare(
    trip: TripContext,
    rules: Sequence[FareRule],
    zones: Sequence[Zone],
    settings: EngineSettings | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FareBreakdown:
    """Functional wrapper around FareEstimator.estimate."""
    return FareEstimator(settings=settings, clock=clock).estimate(trip, rules, zones)
