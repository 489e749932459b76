"""Optional time-of-day, day-of-week and holiday multipliers from a rule."""

import logging
from datetime import datetime, time, tzinfo

from .peak_hours import to_local
from .rules import FareRule, TimeOfDayCondition

logger = logging.getLogger(__name__)


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _in_window(condition: TimeOfDayCondition, moment: time) -> bool:
    start = _parse_hhmm(condition.start)
    end = _parse_hhmm(condition.end)
    if start < end:
        return start <= moment < end
    if start > end:
        # Window wraps midnight, e.g. 22:00-05:00
        return moment >= start or moment < end
    return False


def special_condition_multiplier(
    rule: FareRule, instant: datetime, tz: str | tzinfo = "UTC"
) -> float:
    """Product of every special-condition multiplier matching ``instant``.

    Days are numbered 0 = Sunday through 6 = Saturday. Returns 1.0 when the
    rule has no special conditions or none match.
    """
    conditions = rule.special_conditions
    if conditions is None:
        return 1.0

    local = to_local(instant, tz)
    moment = local.time().replace(second=0, microsecond=0)
    day = (local.weekday() + 1) % 7
    date_key = local.date().isoformat()

    multiplier = 1.0
    for window in conditions.time_of_day:
        if _in_window(window, moment):
            multiplier *= window.multiplier
    for entry in conditions.days_of_week:
        if day in entry.days:
            multiplier *= entry.multiplier
    for holiday in conditions.holidays:
        if holiday.date[:10] == date_key:
            multiplier *= holiday.multiplier

    if multiplier != 1.0:
        logger.debug(
            f"Special conditions on rule {rule.id} give multiplier {multiplier:.4f}",
            extra={"rule_id": rule.id},
        )
    return multiplier
