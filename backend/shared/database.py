"""
Database client factory for Supabase.

Provides two async clients:
- the service-role client (admin auth API and table writes, bypasses RLS)
- the public client (anon key, carries the visitor's auth session)
"""

from typing import Optional
from supabase import acreate_client, AsyncClient

from .config import get_settings

# Module-level client cache
_service_client: Optional[AsyncClient] = None
_public_client: Optional[AsyncClient] = None


async def get_supabase_client() -> AsyncClient:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full access, such as
    upserting onboarding records and reading users through the admin API.

    Returns:
        Async Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


async def get_supabase_public_client() -> AsyncClient:
    """
    Get Supabase client with the anon key.

    Sign-up, sign-in and sign-out go through this client so the auth
    session it holds belongs to the visitor, not the service role.

    Returns:
        Async Supabase client configured with the anon key
    """
    global _public_client

    if _public_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _public_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _public_client


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _public_client
    _service_client = None
    _public_client = None
