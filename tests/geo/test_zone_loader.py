import json

import pytest
from pydantic import ValidationError

from fare_engine.geo.zones import Zone, ZoneLoader, planar_rings


@pytest.fixture
def invalid_zones_path(fixtures_dir):
    return fixtures_dir / "invalid_zones.geojson"


@pytest.mark.unit
class TestZoneModel:
    def test_zone_model_valid(self, square_rings):
        zone = Zone(id="dt", name="Downtown", coordinates=square_rings)

        assert zone.id == "dt"
        assert zone.is_active is True
        assert zone.surcharge == 1.0
        assert zone.area_km2 is None
        assert zone.coordinates[0][0] == (0.0, 0.0)

    def test_zone_accepts_camel_case_keys(self, square_rings):
        zone = Zone.model_validate(
            {
                "id": "dt",
                "name": "Downtown",
                "coordinates": square_rings,
                "isActive": False,
                "areaKm2": 12.5,
            }
        )

        assert zone.is_active is False
        assert zone.area_km2 == 12.5

    def test_zone_surcharge_must_be_positive(self, square_rings):
        with pytest.raises(ValidationError):
            Zone(id="dt", name="Downtown", coordinates=square_rings, surcharge=0.0)

    def test_zone_is_frozen(self, square_rings):
        zone = Zone(id="dt", name="Downtown", coordinates=square_rings)
        with pytest.raises(ValidationError):
            zone.name = "Other"


@pytest.mark.unit
class TestZoneLoader:
    def test_loads_all_polygon_features_in_order(self, sample_zones_path):
        loader = ZoneLoader(sample_zones_path)

        ids = [zone.id for zone in loader.get_all_zones()]
        assert ids == ["downtown", "marina", "airport", "old_town", "broken"]

    def test_properties_are_mapped(self, sample_zones_path):
        loader = ZoneLoader(sample_zones_path)

        airport = loader.get_zone("airport")
        assert airport is not None
        assert airport.name == "Airport"
        assert airport.surcharge == 1.2
        assert len(airport.coordinates) == 2

        downtown = loader.get_zone("downtown")
        assert downtown.description == "Central business district"
        assert downtown.color == "#3b82f6"

        assert loader.get_zone("old_town").is_active is False

    def test_missing_zone_returns_none(self, sample_zones_path):
        loader = ZoneLoader(sample_zones_path)
        assert loader.get_zone("nowhere") is None

    def test_invalid_features_are_skipped(self, invalid_zones_path):
        loader = ZoneLoader(invalid_zones_path)

        zones = loader.get_all_zones()
        assert [zone.id for zone in zones] == ["valid_zone"]

    def test_non_feature_collection_loads_nothing(self, tmp_path):
        path = tmp_path / "zones.geojson"
        path.write_text(json.dumps({"type": "Feature", "properties": {}}))

        loader = ZoneLoader(path)
        assert loader.get_all_zones() == []

    def test_feature_id_fallback_and_altitude_dropped(self):
        feature = {
            "type": "Feature",
            "id": "harbour",
            "properties": {"name": "Harbour"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[0, 0, 5], [1, 0, 5], [1, 1, 5], [0, 0, 5]]],
            },
        }

        zone = ZoneLoader.parse_feature(feature)
        assert zone is not None
        assert zone.id == "harbour"
        assert zone.coordinates[0][1] == (1.0, 0.0)


@pytest.mark.unit
class TestPlanarRings:
    def test_drops_altitude(self):
        rings = [[[0, 0, 10], [1, 0, 10], [1, 1, 12], [0, 0, 10]]]
        assert planar_rings(rings) == [[(0, 0), (1, 0), (1, 1), (0, 0)]]

    def test_two_value_positions_unchanged(self):
        assert planar_rings([[[55.2, 25.1], [55.3, 25.1]]]) == [[(55.2, 25.1), (55.3, 25.1)]]

    def test_short_position_rejected(self):
        with pytest.raises(ValueError):
            planar_rings([[[55.2]]])
