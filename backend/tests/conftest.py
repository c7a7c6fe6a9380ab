"""
School Records - Test Configuration
Pytest fixtures and configuration for testing
"""
from collections.abc import AsyncGenerator
from datetime import date
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import school_records.models  # noqa: F401
from school_records.core.database import Base, get_db
from school_records.core.security import create_access_token, get_password_hash
from school_records.main import app
from school_records.models import (
    ClassLevel,
    LearningAbility,
    PlanType,
    ProgressEntry,
    ProgressRating,
    Student,
    TeachingPlan,
    User,
    UserRole,
    WritingSpeed,
)
from school_records.services.auth import UserSession

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEACHER_PASSWORD = "lkg123"
ADMIN_PASSWORD = "admin123"


@pytest_asyncio.fixture(scope="function")
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================================
# Accounts
# ============================================================================

async def make_user(
    db: AsyncSession,
    email: str,
    name: str,
    role: UserRole = UserRole.TEACHER,
    password: str = TEACHER_PASSWORD,
    assigned_classes: list[str] | None = None,
) -> User:
    user = User(
        email=email,
        name=name,
        hashed_password=get_password_hash(password),
        role=role.value,
        assigned_classes=assigned_classes or [],
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "admin@school.test", "Head Teacher", UserRole.ADMIN, ADMIN_PASSWORD)


@pytest_asyncio.fixture
async def teacher(db_session: AsyncSession) -> User:
    return await make_user(db_session, "asha@school.test", "Asha Rai", assigned_classes=["LKG"])


@pytest_asyncio.fixture
async def other_teacher(db_session: AsyncSession) -> User:
    return await make_user(db_session, "bina@school.test", "Bina Shrestha", assigned_classes=["UKG"])


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(subject=user.id, additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def teacher_headers(teacher: User) -> dict[str, str]:
    return auth_headers(teacher)


@pytest.fixture
def admin_session(admin: User) -> UserSession:
    return UserSession.from_user(admin)


@pytest.fixture
def teacher_session(teacher: User) -> UserSession:
    return UserSession.from_user(teacher)


# ============================================================================
# Records
# ============================================================================

def ratings(value: ProgressRating = ProgressRating.GOOD) -> dict[str, str]:
    return {
        "social_skills": value.value,
        "pre_literacy": value.value,
        "pre_numeracy": value.value,
        "motor_skills": value.value,
        "emotional_development": value.value,
    }


async def make_student(
    db: AsyncSession,
    teacher: User,
    name: str,
    class_name: ClassLevel = ClassLevel.LKG,
    writing_speed: WritingSpeed = WritingSpeed.SPEED_WRITING,
    **extra: Any,
) -> Student:
    student = Student(
        name=name,
        age=extra.pop("age", 4),
        class_name=class_name.value,
        learning_ability=extra.pop("learning_ability", LearningAbility.AVERAGE.value),
        writing_speed=writing_speed.value,
        teacher_id=teacher.id,
        **extra,
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)
    return student


async def make_progress(
    db: AsyncSession,
    student: Student,
    on: date,
    value: ProgressRating = ProgressRating.GOOD,
    comments: str | None = None,
) -> ProgressEntry:
    entry = ProgressEntry(student_id=student.id, date=on, comments=comments, **ratings(value))
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


async def make_plan(
    db: AsyncSession,
    creator: User | None,
    title: str,
    plan_type: PlanType = PlanType.WEEKLY,
    class_name: ClassLevel = ClassLevel.LKG,
    start: date = date(2024, 3, 1),
    end: date = date(2024, 3, 7),
) -> TeachingPlan:
    plan = TeachingPlan(
        type=plan_type.value,
        class_name=class_name.value,
        title=title,
        description=f"{title} description",
        activities="Story time\nColouring",
        goals="Recognise colours",
        start_date=start,
        end_date=end,
        created_by=creator.id if creator else None,
    )
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    return plan


@pytest.fixture
def student_payload() -> dict[str, Any]:
    return {
        "name": "Aarav Sharma",
        "age": 4,
        "class": "LKG",
        "learning_ability": "Average",
        "writing_speed": "Speed Writing",
        "parent_contact": "9800000000",
    }
