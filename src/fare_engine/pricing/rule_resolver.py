"""Selects the most specific fare rule for a trip.

Tiers are tried in order and the first tier with a match wins; within a
tier the first qualifying rule in input order is returned:

1. rule for the vehicle class covering both pickup and dropoff zones
2. rule for the vehicle class covering the pickup zone (or the dropoff
   zone when there is no pickup zone)
3. default rule for the vehicle class
4. any default rule
"""

import logging
from collections.abc import Callable, Sequence

from fare_engine.core.exceptions import NoApplicableFareRuleError

from .rules import FareRule

logger = logging.getLogger(__name__)


def _first(rules: Sequence[FareRule], predicate: Callable[[FareRule], bool]) -> FareRule | None:
    return next((rule for rule in rules if predicate(rule)), None)


def resolve_fare_rule(
    vehicle_class_id: str,
    pickup_zone_id: str | None,
    dropoff_zone_id: str | None,
    rules: Sequence[FareRule],
) -> FareRule | None:
    """Return the applicable fare rule, or None when no tier matches."""
    if pickup_zone_id and dropoff_zone_id:
        rule = _first(
            rules,
            lambda r: r.applies_to_vehicle_class(vehicle_class_id)
            and r.covers_zone(pickup_zone_id)
            and r.covers_zone(dropoff_zone_id),
        )
        if rule:
            logger.debug(f"Rule {rule.id} matched both zones", extra={"rule_id": rule.id})
            return rule

    zone_id = pickup_zone_id or dropoff_zone_id
    if zone_id:
        rule = _first(
            rules,
            lambda r: r.applies_to_vehicle_class(vehicle_class_id) and r.covers_zone(zone_id),
        )
        if rule:
            logger.debug(f"Rule {rule.id} matched zone {zone_id}", extra={"rule_id": rule.id})
            return rule

    rule = _first(
        rules, lambda r: r.applies_to_vehicle_class(vehicle_class_id) and r.is_default
    )
    if rule:
        logger.debug(
            f"Rule {rule.id} is the default for {vehicle_class_id}", extra={"rule_id": rule.id}
        )
        return rule

    rule = _first(rules, lambda r: r.is_default)
    if rule:
        logger.debug(f"Falling back to global default rule {rule.id}", extra={"rule_id": rule.id})
    return rule


def require_fare_rule(
    vehicle_class_id: str,
    pickup_zone_id: str | None,
    dropoff_zone_id: str | None,
    rules: Sequence[FareRule],
) -> FareRule:
    """Like resolve_fare_rule, but a miss is a configuration error."""
    rule = resolve_fare_rule(vehicle_class_id, pickup_zone_id, dropoff_zone_id, rules)
    if rule is None:
        raise NoApplicableFareRuleError(
            f"No applicable fare rule for vehicle class {vehicle_class_id}",
            details={
                "vehicle_class_id": vehicle_class_id,
                "pickup_zone_id": pickup_zone_id,
                "dropoff_zone_id": dropoff_zone_id,
                "rule_count": len(rules),
            },
        )
    return rule
