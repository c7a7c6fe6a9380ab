"""
School Records - Authentication API Routes
Endpoints for login, token refresh, logout and the current account
"""
from fastapi import APIRouter, HTTPException, status

from school_records.api.deps import CurrentUser, DbSession
from school_records.schemas.user import (
    TeacherResponse,
    TokenRefresh,
    TokenResponse,
    UserLogin,
)
from school_records.services.auth import (
    AccountDisabledError,
    AuthService,
    InvalidCredentialsError,
    TokenError,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate user",
    description="Login with email and password to receive access and refresh tokens.",
)
async def login(
    credentials: UserLogin,
    db: DbSession,
) -> TokenResponse:
    """Authenticate user and return tokens."""
    auth_service = AuthService(db)

    try:
        user = await auth_service.authenticate(
            email=credentials.email,
            password=credentials.password,
        )
        return await auth_service.create_tokens(user)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except AccountDisabledError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Use a valid refresh token to obtain new access and refresh tokens.",
)
async def refresh_token(
    token_data: TokenRefresh,
    db: DbSession,
) -> TokenResponse:
    """Rotate the refresh token into a new pair."""
    auth_service = AuthService(db)

    try:
        return await auth_service.refresh_tokens(token_data.refresh_token)
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout user",
    description="Revoke the refresh token to end the session.",
)
async def logout(
    token_data: TokenRefresh,
    db: DbSession,
) -> None:
    auth_service = AuthService(db)
    await auth_service.logout(token_data.refresh_token)


@router.get(
    "/me",
    response_model=TeacherResponse,
    summary="Get current user",
    description="Get the currently authenticated account.",
)
async def get_current_user_profile(
    current_user: CurrentUser,
) -> TeacherResponse:
    return TeacherResponse.model_validate(current_user)
