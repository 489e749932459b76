"""Fixed weekday rush-hour policy used to decide whether surge applies."""

from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo

# Inclusive hour-of-day ranges
MORNING_PEAK = (7, 9)
EVENING_PEAK = (17, 19)
PEAK_WINDOWS = (MORNING_PEAK, EVENING_PEAK)


def _as_tzinfo(tz: str | tzinfo) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def to_local(instant: datetime, tz: str | tzinfo = "UTC") -> datetime:
    """Convert an aware instant to ``tz``; naive instants are taken as already local."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(_as_tzinfo(tz))


def is_peak_hour(instant: datetime, tz: str | tzinfo = "UTC") -> bool:
    """Monday-Friday, 07:00-09:59 or 17:00-19:59 local time."""
    local = to_local(instant, tz)
    if local.weekday() > 4:
        return False
    return any(start <= local.hour <= end for start, end in PEAK_WINDOWS)


class PeakHourClassifier:
    """Peak-hour check bound to a deployment timezone and an injectable clock."""

    def __init__(
        self,
        tz: str | tzinfo = "UTC",
        clock: Callable[[], datetime] | None = None,
    ):
        self.tz = _as_tzinfo(tz)
        self._clock = clock or (lambda: datetime.now(UTC))

    def now(self) -> datetime:
        return self._clock()

    def is_peak(self, instant: datetime) -> bool:
        return is_peak_hour(instant, self.tz)

    def is_peak_now(self) -> bool:
        return self.is_peak(self.now())
