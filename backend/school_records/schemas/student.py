"""
School Records - Student Schemas
Pydantic schemas for the roster and progress entries
"""
import datetime as dt
from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from school_records.models.enums import (
    ClassLevel,
    LearningAbility,
    ProgressRating,
    WritingSpeed,
)

NURSERY_WRITING_SPEED_ERROR = "Writing speed must be N/A for Nursery students"


def check_writing_speed(class_name: ClassLevel | None, writing_speed: WritingSpeed | None) -> None:
    """Nursery students are too young for a writing speed assessment."""
    if class_name == ClassLevel.NURSERY and writing_speed not in (None, WritingSpeed.NOT_APPLICABLE):
        raise ValueError(NURSERY_WRITING_SPEED_ERROR)


# ============================================================================
# Students
# ============================================================================

class StudentBase(BaseModel):
    """Base student schema."""
    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, Field(min_length=1, max_length=200)]
    age: Annotated[int, Field(ge=3, le=5)]
    class_name: ClassLevel = Field(alias="class")
    learning_ability: LearningAbility
    writing_speed: WritingSpeed = WritingSpeed.NOT_APPLICABLE
    parent_contact: Annotated[str, Field(max_length=100)] | None = None
    notes: str | None = None
    photo_url: Annotated[str, Field(max_length=500)] | None = None


class StudentCreate(StudentBase):
    """Schema for creating a student. Teachers default to owning it."""
    teacher_id: int | None = None

    @model_validator(mode="after")
    def validate_writing_speed(self) -> "StudentCreate":
        check_writing_speed(self.class_name, self.writing_speed)
        return self


class StudentUpdate(BaseModel):
    """Partial update; the Nursery rule is re-checked on the merged record."""
    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, Field(min_length=1, max_length=200)] | None = None
    age: Annotated[int, Field(ge=3, le=5)] | None = None
    class_name: ClassLevel | None = Field(default=None, alias="class")
    learning_ability: LearningAbility | None = None
    writing_speed: WritingSpeed | None = None
    parent_contact: Annotated[str, Field(max_length=100)] | None = None
    notes: str | None = None
    photo_url: Annotated[str, Field(max_length=500)] | None = None


class StudentResponse(StudentBase):
    """Schema for student response."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    teacher_id: int
    created_at: datetime | None = None


class StudentAssign(BaseModel):
    """Move a student to another teacher."""
    teacher_id: int


# ============================================================================
# Progress entries
# ============================================================================

class ProgressRatings(BaseModel):
    social_skills: ProgressRating
    pre_literacy: ProgressRating
    pre_numeracy: ProgressRating
    motor_skills: ProgressRating
    emotional_development: ProgressRating


class ProgressCreate(ProgressRatings):
    """Schema for recording a progress entry."""
    student_id: int
    date: dt.date = Field(default_factory=dt.date.today)
    comments: str | None = None


class ProgressUpdate(BaseModel):
    date: dt.date | None = None
    social_skills: ProgressRating | None = None
    pre_literacy: ProgressRating | None = None
    pre_numeracy: ProgressRating | None = None
    motor_skills: ProgressRating | None = None
    emotional_development: ProgressRating | None = None
    comments: str | None = None


class ProgressResponse(ProgressRatings):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    date: date
    comments: str | None = None
