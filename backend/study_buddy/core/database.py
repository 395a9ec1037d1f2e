"""
Database connections: Supabase client setup.
"""

from datetime import datetime, timezone
from functools import lru_cache
from supabase import create_client, Client

from study_buddy.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get the Supabase client (singleton).

    Uses the anon key for standard table operations.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def get_supabase_admin_client() -> Client:
    """Get the Supabase admin client (service_role key, bypasses RLS).

    Storage uploads go through this client. Falls back to the anon client
    when no service key is configured (local development).
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_KEY:
        return get_supabase_client()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the format stored in timestamp columns."""
    return datetime.now(timezone.utc).isoformat()
