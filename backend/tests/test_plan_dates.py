"""
School Records - Teaching Plan Date Tests
"""
from datetime import date

import pytest
from pydantic import ValidationError

from school_records.models import PlanType
from school_records.schemas.plan import PlanCreate, add_months, default_end_date


@pytest.mark.parametrize(
    "plan_type, start, expected",
    [
        (PlanType.WEEKLY, date(2024, 3, 1), date(2024, 3, 7)),
        (PlanType.WEEKLY, date(2024, 12, 28), date(2025, 1, 3)),
        (PlanType.MONTHLY, date(2024, 3, 1), date(2024, 3, 31)),
        (PlanType.MONTHLY, date(2024, 1, 31), date(2024, 2, 28)),
        (PlanType.ANNUAL, date(2024, 4, 1), date(2025, 3, 31)),
        (PlanType.ANNUAL, date(2024, 2, 29), date(2025, 2, 27)),
    ],
)
def test_default_end_date(plan_type, start, expected):
    assert default_end_date(plan_type, start) == expected


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


def _payload(**overrides):
    payload = {
        "type": "Weekly",
        "class": "LKG",
        "title": "Colours week",
        "description": "Primary colours",
        "activities": "Painting",
        "goals": "Name three colours",
        "start_date": "2024-03-01",
    }
    payload.update(overrides)
    return payload


def test_plan_create_fills_end_date():
    plan = PlanCreate.model_validate(_payload())
    assert plan.end_date == date(2024, 3, 7)


def test_plan_create_keeps_explicit_end_date():
    plan = PlanCreate.model_validate(_payload(end_date="2024-03-05"))
    assert plan.end_date == date(2024, 3, 5)


def test_plan_create_rejects_reversed_dates():
    with pytest.raises(ValidationError, match="Start date must be on or before end date"):
        PlanCreate.model_validate(_payload(end_date="2024-02-01"))
