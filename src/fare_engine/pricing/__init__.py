from .calculator import (
    UNKNOWN_ZONE_NAME,
    FareBreakdown,
    FareCalculator,
    round_currency,
    round_up_currency,
)
from .peak_hours import PEAK_WINDOWS, PeakHourClassifier, is_peak_hour
from .rule_resolver import require_fare_rule, resolve_fare_rule
from .rules import (
    DaysOfWeekCondition,
    FareRule,
    HolidayCondition,
    SpecialConditions,
    TimeOfDayCondition,
)
from .special_conditions import special_condition_multiplier
from .surcharge import CROSS_ZONE_MULTIPLIER, compose_zone_surcharge

__all__ = [
    "FareRule",
    "SpecialConditions",
    "TimeOfDayCondition",
    "DaysOfWeekCondition",
    "HolidayCondition",
    "FareBreakdown",
    "FareCalculator",
    "UNKNOWN_ZONE_NAME",
    "round_currency",
    "round_up_currency",
    "PEAK_WINDOWS",
    "PeakHourClassifier",
    "is_peak_hour",
    "resolve_fare_rule",
    "require_fare_rule",
    "special_condition_multiplier",
    "CROSS_ZONE_MULTIPLIER",
    "compose_zone_surcharge",
]
