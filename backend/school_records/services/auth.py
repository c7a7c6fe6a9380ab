"""
School Records - Authentication Service
Login, token management and the per-request user session
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from hashlib import sha256

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.core.config import settings
from school_records.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from school_records.models.enums import ClassLevel, UserRole
from school_records.models.user import RefreshToken, User
from school_records.schemas.user import TokenResponse

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base authentication error."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Invalid email or password."""
    pass


class AccountDisabledError(AuthenticationError):
    """Account was deactivated by an admin."""
    pass


class TokenError(AuthenticationError):
    """Token validation error."""
    pass


@dataclass(frozen=True)
class UserSession:
    """
    The authenticated caller, resolved once per request from the bearer token
    and handed explicitly to every service that needs it.
    """
    user_id: int
    name: str
    role: UserRole
    assigned_classes: tuple[ClassLevel, ...] = field(default_factory=tuple)

    @classmethod
    def from_user(cls, user: User) -> "UserSession":
        return cls(
            user_id=user.id,
            name=user.name,
            role=UserRole(user.role),
            assigned_classes=tuple(ClassLevel(c) for c in (user.assigned_classes or [])),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def owner_scope(self) -> int | None:
        """Owner ID every query is restricted to; None for admins."""
        return None if self.is_admin else self.user_id

    def owns(self, owner_id: int | None) -> bool:
        """Admins own everything; teachers only their own records."""
        return self.is_admin or owner_id == self.user_id


def _hash_token(token: str) -> str:
    return sha256(token.encode()).hexdigest()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
            AccountDisabledError: If the account is deactivated
        """
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        user = result.scalar_one_or_none()

        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %s", email)
            raise InvalidCredentialsError("Invalid email or password")

        if not user.is_active:
            raise AccountDisabledError("Account is deactivated")

        user.last_login = datetime.now(timezone.utc)
        await self.db.flush()

        return user

    async def create_tokens(self, user: User) -> TokenResponse:
        """Create access and refresh tokens for a user."""
        access_token = create_access_token(
            subject=user.id,
            additional_claims={"role": UserRole(user.role).value}
        )
        refresh_token = create_refresh_token(subject=user.id)

        # Only the hash is stored
        self.db.add(RefreshToken(
            user_id=user.id,
            token_hash=_hash_token(refresh_token),
            expires_at=datetime.now(timezone.utc) + timedelta(
                days=settings.REFRESH_TOKEN_EXPIRE_DAYS
            )
        ))
        await self.db.flush()

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenResponse:
        """
        Rotate a refresh token into a new token pair.

        Raises:
            TokenError: If refresh token is invalid, expired or revoked
        """
        user_id = verify_token(refresh_token, token_type=REFRESH_TOKEN)
        if not user_id:
            raise TokenError("Invalid refresh token")

        result = await self.db.execute(
            select(RefreshToken).where(
                RefreshToken.token_hash == _hash_token(refresh_token),
                RefreshToken.revoked_at.is_(None)
            )
        )
        token_record = result.scalar_one_or_none()

        if not token_record or token_record.is_expired:
            raise TokenError("Refresh token expired or revoked")

        user = await self.get_user_by_id(user_id)
        if not user or not user.is_active:
            raise TokenError("User not found or inactive")

        token_record.revoked_at = datetime.now(timezone.utc)

        return await self.create_tokens(user)

    async def logout(self, refresh_token: str) -> None:
        """End the session by revoking its refresh token."""
        result = await self.db.execute(
            select(RefreshToken).where(RefreshToken.token_hash == _hash_token(refresh_token))
        )
        token_record = result.scalar_one_or_none()

        if token_record:
            token_record.revoked_at = datetime.now(timezone.utc)
            await self.db.flush()

    async def get_user_by_id(self, user_id: str | int) -> User | None:
        """Get user by ID; malformed IDs resolve to None."""
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return None
        return await self.db.get(User, user_id)

    async def ensure_default_admin(self) -> User | None:
        """Create the configured admin account if no admin exists yet."""
        if not settings.DEFAULT_ADMIN_PASSWORD:
            return None

        result = await self.db.execute(
            select(User).where(User.role == UserRole.ADMIN.value).limit(1)
        )
        if result.scalar_one_or_none():
            return None

        admin = User(
            email=settings.DEFAULT_ADMIN_EMAIL.lower(),
            hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
            name=settings.DEFAULT_ADMIN_NAME,
            role=UserRole.ADMIN.value,
            assigned_classes=[],
        )
        self.db.add(admin)
        await self.db.flush()
        logger.info("Seeded default admin account %s", admin.email)
        return admin
