"""School Records - Models initialization."""
from school_records.models.enums import (
    ClassLevel,
    LearningAbility,
    PlanType,
    ProgressRating,
    UserRole,
    WritingSpeed,
)
from school_records.models.user import User, RefreshToken
from school_records.models.student import Student, ProgressEntry
from school_records.models.plan import TeachingPlan


__all__ = [
    # Enums
    "ClassLevel",
    "LearningAbility",
    "PlanType",
    "ProgressRating",
    "UserRole",
    "WritingSpeed",
    # User models
    "User",
    "RefreshToken",
    # Roster models
    "Student",
    "ProgressEntry",
    # Planning models
    "TeachingPlan",
]
