"""
Session lifecycle.

A SessionContext is created when a user signs up or signs in, replaced when
the access token is refreshed and torn down on sign-out. Request handlers
receive it explicitly (see nightout.core.auth.get_current_session) instead of
reading process-wide auth state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from nightout.core.config import settings
from nightout.core.database import get_auth_client, get_supabase_client
from nightout.services.logger import logger


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    email: Optional[str]
    access_token: str
    expires_at: Optional[int] = None
    refresh_token: Optional[str] = None

    @classmethod
    def from_auth_session(cls, session: Any) -> "SessionContext":
        """Build a context from a GoTrue Session object."""
        user = session.user
        return cls(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            access_token=session.access_token,
            expires_at=getattr(session, "expires_at", None),
            refresh_token=getattr(session, "refresh_token", None),
        )

    def to_token_response(self) -> Dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
            "user": {"id": self.user_id, "email": self.email},
        }


async def sign_up(email: str, password: str) -> Optional[SessionContext]:
    """
    Register a new account.

    Returns None when the project requires email confirmation, in which case
    GoTrue creates the user but opens no session.
    """
    client = get_auth_client()
    response = client.auth.sign_up({"email": email, "password": password})

    if response.session is None:
        logger.info(
            "Signup pending email confirmation",
            {"user_id": getattr(response.user, "id", None)},
        )
        return None

    return SessionContext.from_auth_session(response.session)


async def sign_in(email: str, password: str) -> SessionContext:
    client = get_auth_client()
    response = client.auth.sign_in_with_password({"email": email, "password": password})
    if response.session is None:
        raise ValueError("Sign-in did not return a session")
    return SessionContext.from_auth_session(response.session)


async def refresh(refresh_token: str) -> SessionContext:
    """Exchange a refresh token for a new session (token rotation)."""
    client = get_auth_client()
    response = client.auth.refresh_session(refresh_token)
    if response.session is None:
        raise ValueError("Refresh did not return a session")
    return SessionContext.from_auth_session(response.session)


async def sign_out(session: SessionContext) -> None:
    """Revoke every refresh token issued for this user's session family."""
    supabase = get_supabase_client()
    supabase.auth.admin.sign_out(session.access_token)
    logger.info("User signed out", {"user_id": session.user_id})


async def request_password_reset(email: str) -> None:
    client = get_auth_client()
    client.auth.reset_password_for_email(
        email, {"redirect_to": settings.PASSWORD_RESET_REDIRECT_URL}
    )
