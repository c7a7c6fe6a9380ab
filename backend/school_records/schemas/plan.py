"""
School Records - Teaching Plan Schemas
"""
import calendar
from datetime import date, datetime, timedelta
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from school_records.models.enums import ClassLevel, PlanType

DATE_ORDER_ERROR = "Start date must be on or before end date"


def add_months(start: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def default_end_date(plan_type: PlanType, start: date) -> date:
    """
    Conventional end date for a plan starting on ``start``.

    Weekly plans cover 7 inclusive days, Monthly plans run to the day before
    the same date next month, Annual plans to the day before next year.
    """
    if plan_type == PlanType.WEEKLY:
        return start + timedelta(days=6)
    if plan_type == PlanType.MONTHLY:
        return add_months(start, 1) - timedelta(days=1)
    return add_months(start, 12) - timedelta(days=1)


class PlanBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: PlanType
    class_name: ClassLevel = Field(alias="class")
    title: Annotated[str, Field(min_length=1, max_length=255)]
    description: Annotated[str, Field(min_length=1)]
    activities: Annotated[str, Field(min_length=1)]
    goals: Annotated[str, Field(min_length=1)]
    start_date: date


class PlanCreate(PlanBase):
    """Schema for creating a teaching plan; end_date defaults from the type."""
    end_date: date | None = None
    created_by: int | None = None

    @model_validator(mode="after")
    def fill_and_check_dates(self) -> "PlanCreate":
        if self.end_date is None:
            self.end_date = default_end_date(self.type, self.start_date)
        if self.start_date > self.end_date:
            raise ValueError(DATE_ORDER_ERROR)
        return self


class PlanUpdate(BaseModel):
    """Partial update; date order is re-checked on the merged record."""
    model_config = ConfigDict(populate_by_name=True)

    type: PlanType | None = None
    class_name: ClassLevel | None = Field(default=None, alias="class")
    title: Annotated[str, Field(min_length=1, max_length=255)] | None = None
    description: Annotated[str, Field(min_length=1)] | None = None
    activities: Annotated[str, Field(min_length=1)] | None = None
    goals: Annotated[str, Field(min_length=1)] | None = None
    start_date: date | None = None
    end_date: date | None = None


class PlanResponse(PlanBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    end_date: date
    created_by: int | None = None
    created_at: datetime | None = None
