"""
School Records - Teaching Plan Models
"""
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from school_records.core.database import Base
from school_records.models.enums import ClassLevel, PlanType


class TeachingPlan(Base):
    """A dated curriculum document targeting one class."""

    __tablename__ = "teaching_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[PlanType] = mapped_column(String(20), index=True)
    class_name: Mapped[ClassLevel] = mapped_column("class", String(20), index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    activities: Mapped[str] = mapped_column(Text)
    goals: Mapped[str] = mapped_column(Text)
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    created_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
