from fare_engine.geo.zones import Zone

CROSS_ZONE_MULTIPLIER = 1.10


def compose_zone_surcharge(
    pickup_zone: Zone | None,
    dropoff_zone: Zone | None,
    cross_zone_multiplier: float = CROSS_ZONE_MULTIPLIER,
) -> float:
    """Multiply per-zone surcharges, adding the cross-zone premium for trips between two zones."""
    surcharge = 1.0
    if pickup_zone is not None:
        surcharge *= pickup_zone.surcharge
    if dropoff_zone is not None:
        surcharge *= dropoff_zone.surcharge
    if pickup_zone is not None and dropoff_zone is not None and pickup_zone.id != dropoff_zone.id:
        surcharge *= cross_zone_multiplier
    return surcharge
