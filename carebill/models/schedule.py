from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, TypeAdapter, field_validator

from carebill.constants import WEEKDAYS
from carebill.models import format_number

DEFAULT_HOURS_PER_DAY = 12
DEFAULT_HOURS_PER_WEEK = 84
DEFAULT_HOURS_PER_MONTH = 360
DEFAULT_DAYS_PER_WEEK = 7


class DailySchedule(BaseModel):
    """Fixed hours on every calendar day.

    ``days_per_week`` only appears in the invoice notes; the hours are billed
    on all seven days regardless.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["daily"] = "daily"
    hours_per_day: NonNegativeFloat = DEFAULT_HOURS_PER_DAY
    days_per_week: int = Field(default=DEFAULT_DAYS_PER_WEEK, ge=1, le=7)

    def hours_for(self, weekday: str, total_days: int) -> float:
        return self.hours_per_day

    def summary(self) -> str:
        return f"Billing: {format_number(self.hours_per_day)} hours/day, {self.days_per_week} days/week"


class WeeklySchedule(BaseModel):
    """Weekly hours spread evenly over ``days_per_week``, billed every day."""

    model_config = ConfigDict(frozen=True)

    type: Literal["weekly"] = "weekly"
    hours_per_week: NonNegativeFloat = DEFAULT_HOURS_PER_WEEK
    days_per_week: int = Field(default=DEFAULT_DAYS_PER_WEEK, ge=1, le=7)

    def hours_for(self, weekday: str, total_days: int) -> float:
        return self.hours_per_week / self.days_per_week

    def summary(self) -> str:
        return f"Billing: {format_number(self.hours_per_week)} hours/week"


class MonthlySchedule(BaseModel):
    """A fixed block of hours spread evenly over the days of the billing period."""

    model_config = ConfigDict(frozen=True)

    type: Literal["monthly"] = "monthly"
    hours_per_month: NonNegativeFloat = DEFAULT_HOURS_PER_MONTH

    def hours_for(self, weekday: str, total_days: int) -> float:
        return self.hours_per_month / total_days

    def summary(self) -> str:
        return f"Billing: {format_number(self.hours_per_month)} hours/month (fixed)"


class CustomSchedule(BaseModel):
    """Hours per weekday name; weekdays without an entry are not billed."""

    model_config = ConfigDict(frozen=True)

    type: Literal["custom"] = "custom"
    hours_by_weekday: dict[str, NonNegativeFloat] = {}

    @field_validator("hours_by_weekday", mode="before")
    @classmethod
    def _normalize_weekdays(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        normalized: dict[str, object] = {}
        for name, hours in value.items():
            key = str(name).strip().capitalize()
            if key not in WEEKDAYS:
                raise ValueError(f"Unknown weekday: {name!r}")
            if key in normalized:
                raise ValueError(f"Duplicate weekday: {name!r}")
            normalized[key] = hours
        return normalized

    def hours_for(self, weekday: str, total_days: int) -> float:
        return self.hours_by_weekday.get(weekday, 0)

    def summary(self) -> str:
        return "Billing: Custom schedule"


BillingSchedule = Annotated[
    Union[DailySchedule, WeeklySchedule, MonthlySchedule, CustomSchedule],
    Field(discriminator="type"),
]

_schedule_adapter: TypeAdapter[BillingSchedule] = TypeAdapter(BillingSchedule)


def parse_schedule(data: dict) -> BillingSchedule:
    """Validate a raw mapping (e.g. from JSON) into the matching schedule model."""
    return _schedule_adapter.validate_python(data)
