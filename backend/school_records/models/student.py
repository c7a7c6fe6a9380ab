"""
School Records - Student Models
SQLAlchemy models for the student roster and developmental progress entries
"""
import datetime as dt
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_records.core.database import Base
from school_records.models.enums import (
    ClassLevel,
    LearningAbility,
    ProgressRating,
    WritingSpeed,
)

if TYPE_CHECKING:
    from school_records.models.user import User


class Student(Base):
    """A pre-primary student owned by one teacher."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    age: Mapped[int] = mapped_column(Integer)  # 3-5 years
    class_name: Mapped[ClassLevel] = mapped_column("class", String(20), index=True)
    learning_ability: Mapped[LearningAbility] = mapped_column(String(50))
    writing_speed: Mapped[WritingSpeed] = mapped_column(String(50), default=WritingSpeed.NOT_APPLICABLE)
    parent_contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    teacher_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    # Relationships
    teacher: Mapped["User"] = relationship("User", back_populates="students")
    progress_entries: Mapped[list["ProgressEntry"]] = relationship(
        "ProgressEntry",
        back_populates="student",
        passive_deletes=True,
    )


class ProgressEntry(Base):
    """A dated snapshot of a student's ratings across five categories."""

    __tablename__ = "progress_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, default=dt.date.today, index=True)

    social_skills: Mapped[ProgressRating] = mapped_column(String(50))
    pre_literacy: Mapped[ProgressRating] = mapped_column(String(50))
    pre_numeracy: Mapped[ProgressRating] = mapped_column(String(50))
    motor_skills: Mapped[ProgressRating] = mapped_column(String(50))
    emotional_development: Mapped[ProgressRating] = mapped_column(String(50))
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    student: Mapped["Student"] = relationship("Student", back_populates="progress_entries")
