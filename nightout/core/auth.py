"""
Request authentication.

Access tokens are Supabase-issued JWTs signed with the project JWT secret.
They are verified locally so a request does not cost a round trip to GoTrue.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from jose import JWTError, jwt

from nightout.core.config import settings
from nightout.core.session import SessionContext


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode JWT token"""
    if not settings.SUPABASE_JWT_SECRET:
        return None
    try:
        # Supabase sets aud="authenticated"; role is checked below instead
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        return payload
    except JWTError:
        return None


def session_from_token(token: str) -> SessionContext:
    payload = verify_token(token)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    # anon and service_role keys are JWTs too
    if payload.get("role") != "authenticated":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload"
        )

    return SessionContext(
        user_id=user_id,
        email=payload.get("email"),
        access_token=token,
        expires_at=payload.get("exp"),
    )


async def get_current_session(request: Request) -> SessionContext:
    """
    FastAPI dependency returning the caller's SessionContext.

    Expects: Authorization: Bearer <supabase_access_token>
    """
    authorization = request.headers.get("authorization")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization format. Use 'Bearer <token>'",
        )

    token = authorization.replace("Bearer ", "").strip()

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token required"
        )

    return session_from_token(token)
