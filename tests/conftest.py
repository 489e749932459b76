from pathlib import Path

import pytest

from fare_engine.fare_logging import LogContext
from fare_engine.geo.zones import Zone
from fare_engine.pricing.rules import FareRule

SQUARE = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_zones_path(fixtures_dir: Path) -> Path:
    """GeoJSON with downtown, marina, airport (with hole), an inactive and a broken zone."""
    return fixtures_dir / "sample_zones.geojson"


@pytest.fixture
def sample_rules_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample_rules.json"


@pytest.fixture
def square_rings() -> list[list[tuple[float, float]]]:
    return [list(SQUARE)]


@pytest.fixture
def make_rule():
    """Factory for fare rules with neutral defaults."""

    def _make_rule(rule_id: str = "rule", **overrides) -> FareRule:
        data = {
            "id": rule_id,
            "name": rule_id.replace("-", " ").title(),
            "base_price": 10.0,
            "per_km_price": 2.0,
            "per_minute_price": 0.5,
            "min_fare": 0.0,
            "surge_multiplier": 1.2,
            "is_default": False,
            "applicable_zone_ids": [],
            "taxi_type_ids": ["sedan"],
        }
        data.update(overrides)
        return FareRule(**data)

    return _make_rule


@pytest.fixture
def make_zone():
    """Factory for zones; defaults to the 10x10 square at the origin."""

    def _make_zone(zone_id: str = "zone", **overrides) -> Zone:
        data = {
            "id": zone_id,
            "name": zone_id.replace("_", " ").title(),
            "coordinates": [list(SQUARE)],
            "is_active": True,
        }
        data.update(overrides)
        return Zone(**data)

    return _make_zone


@pytest.fixture(autouse=True)
def reset_log_context():
    LogContext.clear()
    yield
    LogContext.clear()
