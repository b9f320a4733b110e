from fastapi import APIRouter, HTTPException, status, Depends
from pydantic import BaseModel, EmailStr, Field

from nightout.core.auth import get_current_session
from nightout.core.session import (
    SessionContext,
    refresh,
    request_password_reset,
    sign_in,
    sign_out,
    sign_up,
)
from nightout.services.logger import logger

router = APIRouter(
    redirect_slashes=False
)  # Disable redirects to preserve Authorization header


# Pydantic models
class UserSignup(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenRefresh(BaseModel):
    refresh_token: str


class PasswordReset(BaseModel):
    email: EmailStr


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserSignup):
    """Create new user account"""
    try:
        session = await sign_up(user_data.email, user_data.password)
    except Exception as e:
        logger.warning("Signup failed", {"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create account",
        )

    if session is None:
        return {
            "requires_confirmation": True,
            "message": "Check your email to confirm your account",
        }

    return session.to_token_response()


@router.post("/login")
async def login(credentials: UserLogin):
    """Authenticate user with email/password"""
    try:
        session = await sign_in(credentials.email, credentials.password)
    except Exception as e:
        logger.info("Login rejected", {"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
        )

    return session.to_token_response()


@router.post("/refresh")
async def refresh_token(token_data: TokenRefresh):
    """Refresh access token"""
    try:
        session = await refresh(token_data.refresh_token)
    except Exception as e:
        logger.info("Token refresh rejected", {"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token"
        )

    return session.to_token_response()


@router.post("/logout")
async def logout(session: SessionContext = Depends(get_current_session)):
    """Revoke the session's refresh tokens (client should discard its tokens)"""
    try:
        await sign_out(session)
    except Exception as e:
        logger.error(
            f"Failed to sign out user {session.user_id}",
            {"error": str(e), "user_id": session.user_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sign out",
        )

    return {"message": "Successfully logged out"}


@router.post("/forgot-password")
async def forgot_password(reset_data: PasswordReset):
    """Send a password reset email. Always succeeds to avoid leaking accounts."""
    try:
        await request_password_reset(reset_data.email)
    except Exception as e:
        logger.error("Failed to send password reset email", {"error": str(e)})

    return {"message": "If an account exists, a reset link has been sent"}
