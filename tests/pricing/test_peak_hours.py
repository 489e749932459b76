from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from fare_engine.pricing.peak_hours import PeakHourClassifier, is_peak_hour, to_local

# 2024-03-04 is a Monday
MONDAY = datetime(2024, 3, 4)
SATURDAY = datetime(2024, 3, 9)
SUNDAY = datetime(2024, 3, 10)
FRIDAY = datetime(2024, 3, 8)


@pytest.mark.unit
class TestIsPeakHour:
    @pytest.mark.parametrize("hour", [7, 8, 9, 17, 18, 19])
    def test_weekday_peak_hours(self, hour):
        assert is_peak_hour(MONDAY.replace(hour=hour)) is True

    @pytest.mark.parametrize("hour", [0, 6, 10, 12, 16, 20, 23])
    def test_weekday_off_peak_hours(self, hour):
        assert is_peak_hour(MONDAY.replace(hour=hour)) is False

    def test_window_edges_are_inclusive_by_hour(self):
        assert is_peak_hour(MONDAY.replace(hour=9, minute=59)) is True
        assert is_peak_hour(MONDAY.replace(hour=6, minute=59)) is False
        assert is_peak_hour(FRIDAY.replace(hour=19, minute=30)) is True

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_weekend_never_peak(self, day):
        assert is_peak_hour(day.replace(hour=8)) is False
        assert is_peak_hour(day.replace(hour=18)) is False

    def test_aware_instant_converted_to_local_timezone(self):
        # 04:30 UTC on a Monday is 08:30 in Dubai
        instant = datetime(2024, 3, 4, 4, 30, tzinfo=UTC)

        assert is_peak_hour(instant, "Asia/Dubai") is True
        assert is_peak_hour(instant, "UTC") is False

    def test_timezone_can_shift_the_day(self):
        # Sunday 23:30 UTC is Monday 08:30 in Tokyo
        instant = datetime(2024, 3, 10, 23, 30, tzinfo=UTC)

        assert is_peak_hour(instant, ZoneInfo("Asia/Tokyo")) is True
        assert is_peak_hour(instant, "UTC") is False

    def test_naive_instant_is_taken_as_local(self):
        assert is_peak_hour(MONDAY.replace(hour=8), "Asia/Tokyo") is True

    def test_to_local_leaves_naive_untouched(self):
        naive = MONDAY.replace(hour=8)
        assert to_local(naive, "Asia/Dubai") is naive


@pytest.mark.unit
class TestPeakHourClassifier:
    def test_uses_injected_clock(self):
        classifier = PeakHourClassifier(
            "Asia/Dubai", clock=lambda: datetime(2024, 3, 4, 14, 0, tzinfo=UTC)
        )

        assert classifier.now() == datetime(2024, 3, 4, 14, 0, tzinfo=UTC)
        assert classifier.is_peak_now() is True

    def test_off_peak_clock(self):
        classifier = PeakHourClassifier(clock=lambda: datetime(2024, 3, 9, 8, 0, tzinfo=UTC))
        assert classifier.is_peak_now() is False

    def test_default_clock_is_aware(self):
        assert PeakHourClassifier().now().tzinfo is not None
