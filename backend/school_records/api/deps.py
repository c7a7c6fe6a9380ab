"""
School Records - API Dependencies
FastAPI dependencies for authentication and authorization
"""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.core.database import get_db
from school_records.core.security import ACCESS_TOKEN, verify_token
from school_records.models.enums import UserRole
from school_records.models.user import User
from school_records.services.auth import AuthService, UserSession

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        HTTPException: If token is missing, invalid or the user is gone
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = verify_token(credentials.credentials, token_type=ACCESS_TOKEN)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth_service = AuthService(db)
    user = await auth_service.get_user_by_id(user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    return user


async def get_user_session(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserSession:
    """The caller's identity and role, as handed to services."""
    return UserSession.from_user(current_user)


def require_role(*roles: UserRole):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/teachers")
        async def admin_only(session: UserSession = Depends(require_role(UserRole.ADMIN))):
            ...
    """
    async def role_checker(
        session: Annotated[UserSession, Depends(get_user_session)],
    ) -> UserSession:
        if session.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return session

    return role_checker


# Type aliases for common dependencies
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentSession = Annotated[UserSession, Depends(get_user_session)]
AdminSession = Annotated[UserSession, Depends(require_role(UserRole.ADMIN))]
DbSession = Annotated[AsyncSession, Depends(get_db)]
