import pytest

from fare_engine.pricing.surcharge import CROSS_ZONE_MULTIPLIER, compose_zone_surcharge


@pytest.mark.unit
class TestComposeZoneSurcharge:
    def test_no_zones(self):
        assert compose_zone_surcharge(None, None) == 1.0

    def test_same_zone_has_no_cross_zone_premium(self, make_zone):
        zone = make_zone("a")
        assert compose_zone_surcharge(zone, zone) == 1.0

    def test_different_zones_add_cross_zone_premium(self, make_zone):
        surcharge = compose_zone_surcharge(make_zone("a"), make_zone("b"))
        assert surcharge == pytest.approx(1.10)
        assert CROSS_ZONE_MULTIPLIER == 1.10

    def test_single_zone_surcharge(self, make_zone):
        airport = make_zone("airport", surcharge=1.2)

        assert compose_zone_surcharge(airport, None) == pytest.approx(1.2)
        assert compose_zone_surcharge(None, airport) == pytest.approx(1.2)

    def test_same_zone_surcharge_applies_twice(self, make_zone):
        airport = make_zone("airport", surcharge=1.2)
        assert compose_zone_surcharge(airport, airport) == pytest.approx(1.44)

    def test_all_factors_compose(self, make_zone):
        airport = make_zone("airport", surcharge=1.2)
        marina = make_zone("marina", surcharge=1.05)

        assert compose_zone_surcharge(airport, marina) == pytest.approx(1.2 * 1.05 * 1.10)

    def test_custom_cross_zone_multiplier(self, make_zone):
        surcharge = compose_zone_surcharge(make_zone("a"), make_zone("b"), 1.25)
        assert surcharge == pytest.approx(1.25)
