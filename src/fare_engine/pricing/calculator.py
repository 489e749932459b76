import logging
import math

from pydantic import BaseModel, Field

from fare_engine.core.exceptions import InvalidInputError

from .rules import FareRule

logger = logging.getLogger(__name__)

UNKNOWN_ZONE_NAME = "Unknown"


def round_currency(amount: float) -> float:
    """Round to 2 decimals, halves away from zero for non-negative amounts."""
    return math.floor(amount * 100 + 0.5) / 100


def round_up_currency(amount: float) -> float:
    """Round up to whole cents; 20.003 becomes 20.01."""
    return math.ceil(round(amount * 100, 6)) / 100


class FareBreakdown(BaseModel):
    """Detailed breakdown of fare components."""

    base_fare: float = Field(ge=0)
    distance_fare: float = Field(ge=0)
    time_fare: float = Field(ge=0)
    subtotal: float = Field(ge=0)
    surge_multiplier: float = Field(ge=1.0)
    zone_surcharge: float = Field(gt=0)
    special_multiplier: float = Field(default=1.0, gt=0)
    minimum_fare: float = Field(ge=0)
    minimum_fare_applied: bool
    applied_rule_id: str
    applied_rule_name: str
    pickup_zone_id: str | None = None
    pickup_zone_name: str = UNKNOWN_ZONE_NAME
    dropoff_zone_id: str | None = None
    dropoff_zone_name: str = UNKNOWN_ZONE_NAME
    total_fare: float = Field(ge=0)


def _require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be non-negative", details={name: value})


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be positive", details={name: value})


class FareCalculator:
    """Applies a fare rule to a trip's distance and duration."""

    def calculate(
        self,
        rule: FareRule,
        distance_km: float,
        duration_minutes: float,
        is_peak_hour: bool,
        zone_surcharge: float = 1.0,
        special_multiplier: float = 1.0,
    ) -> FareBreakdown:
        """
        Calculate the fare for a trip under ``rule``.

        Evaluation order is fixed: components are summed, then the surge
        multiplier (peak hours only), the zone surcharge and any special
        multiplier are applied in that order, then the minimum fare floor,
        then rounding. A minimum fare finer than a cent is rounded up so
        the total never ends below it.

        Raises:
            InvalidInputError: for a missing rule, negative distance or
                duration, or a non-positive multiplier.
        """
        if rule is None:
            raise InvalidInputError("A fare rule is required to calculate a fare")
        _require_non_negative("distance_km", distance_km)
        _require_non_negative("duration_minutes", duration_minutes)
        _require_positive("zone_surcharge", zone_surcharge)
        _require_positive("special_multiplier", special_multiplier)

        base_fare = rule.base_price
        distance_fare = distance_km * rule.per_km_price
        time_fare = duration_minutes * rule.per_minute_price
        subtotal = base_fare + distance_fare + time_fare

        surge_multiplier = rule.surge_multiplier if is_peak_hour else 1.0
        total = subtotal * surge_multiplier
        total *= zone_surcharge
        total *= special_multiplier

        minimum_fare_applied = total < rule.min_fare
        if minimum_fare_applied:
            total = rule.min_fare

        total_fare = round_currency(total)
        if total_fare < rule.min_fare:
            # Sub-cent minimum fares can round below themselves
            total_fare = round_up_currency(rule.min_fare)
            minimum_fare_applied = True

        logger.debug(
            f"Rule {rule.id}: subtotal={subtotal:.4f} surge={surge_multiplier} "
            f"zone={zone_surcharge:.4f} total={total_fare:.2f}",
            extra={"rule_id": rule.id},
        )

        return FareBreakdown(
            base_fare=base_fare,
            distance_fare=distance_fare,
            time_fare=time_fare,
            subtotal=subtotal,
            surge_multiplier=surge_multiplier,
            zone_surcharge=zone_surcharge,
            special_multiplier=special_multiplier,
            minimum_fare=rule.min_fare,
            minimum_fare_applied=minimum_fare_applied,
            applied_rule_id=rule.id,
            applied_rule_name=rule.name,
            total_fare=total_fare,
        )
