"""
Database Configuration

Supabase client for REST API access (already pooled via PostgREST).

The client is created on first use so the app can boot (and report
NOT_CONFIGURED on /health) before SUPABASE_URL is set. Table queries,
storage uploads and admin auth calls share this service-role client.
"""

from typing import Optional

from postgrest.exceptions import APIError
from supabase import create_client, Client, ClientOptions
from nightout.core.config import settings


# Postgres SQLSTATE for a value that does not parse as the column type
INVALID_TEXT_REPRESENTATION = "22P02"

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client instance.

    This uses the REST API which is already connection-pooled via PostgREST.
    """
    global _supabase_client
    if _supabase_client is None:
        if not settings.supabase_configured:
            raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
        _supabase_client = create_client(
            settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY
        )
    return _supabase_client


def get_auth_client() -> Client:
    """
    Fresh client for GoTrue sign-in flows.

    supabase-py swaps the client's Authorization header to the user token on
    SIGNED_IN/TOKEN_REFRESHED, so user sessions must never be opened on the
    shared service-role client.
    """
    if not settings.supabase_configured:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_KEY,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


def is_invalid_id_error(error: APIError) -> bool:
    """True when PostgREST rejected a filter value, e.g. a malformed uuid."""
    return error.code == INVALID_TEXT_REPRESENTATION
