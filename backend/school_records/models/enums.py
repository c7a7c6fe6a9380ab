"""
School Records - Domain Enumerations
Values are stored and serialized as their display strings.
"""
from enum import Enum


class UserRole(str, Enum):
    """User roles for RBAC."""
    TEACHER = "teacher"
    ADMIN = "admin"


class ClassLevel(str, Enum):
    """Pre-primary age cohorts."""
    NURSERY = "Nursery"
    LKG = "LKG"
    UKG = "UKG"


class LearningAbility(str, Enum):
    TALENTED = "Talented"
    AVERAGE = "Average"
    SLOW_LEARNER = "Slow Learner"


class WritingSpeed(str, Enum):
    SPEED_WRITING = "Speed Writing"
    SLOW_WRITING = "Slow Writing"
    NOT_APPLICABLE = "N/A"


class ProgressRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class PlanType(str, Enum):
    ANNUAL = "Annual"
    MONTHLY = "Monthly"
    WEEKLY = "Weekly"
