import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class _DocumentModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TimeOfDayCondition(_DocumentModel):
    start: str
    end: str
    multiplier: float = Field(gt=0.0)

    @field_validator("start", "end")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        if not _HHMM.match(v):
            raise ValueError(f"Expected HH:MM, got {v!r}")
        return v


class DaysOfWeekCondition(_DocumentModel):
    days: list[int] = Field(min_length=1)
    multiplier: float = Field(gt=0.0)

    @field_validator("days")
    @classmethod
    def validate_days(cls, v: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("Days must be in 0-6 (0 = Sunday)")
        return v


class HolidayCondition(_DocumentModel):
    date: str
    multiplier: float = Field(gt=0.0)


class SpecialConditions(_DocumentModel):
    """Optional time-based overrides carried on a fare rule."""

    time_of_day: list[TimeOfDayCondition] = Field(default_factory=list)
    days_of_week: list[DaysOfWeekCondition] = Field(default_factory=list)
    holidays: list[HolidayCondition] = Field(default_factory=list)


class FareRule(_DocumentModel):
    """Pricing template scoped to vehicle classes and, optionally, zones."""

    id: str
    name: str
    description: str = ""
    base_price: float = Field(ge=0.0)
    per_km_price: float = Field(ge=0.0)
    per_minute_price: float = Field(ge=0.0)
    min_fare: float = Field(ge=0.0)
    surge_multiplier: float = Field(default=1.0, ge=1.0)
    is_default: bool = False
    applicable_zone_ids: list[str] = Field(default_factory=list)
    taxi_type_ids: list[str] = Field(default_factory=list)
    special_conditions: SpecialConditions | None = None

    def applies_to_vehicle_class(self, vehicle_class_id: str) -> bool:
        return vehicle_class_id in self.taxi_type_ids

    def covers_zone(self, zone_id: str) -> bool:
        return zone_id in self.applicable_zone_ids
