"""Supabase client construction."""

from supabase import Client, ClientOptions, create_client

from tablegen.core.config import Settings


def create_service_client(settings: Settings) -> Client:
    """Client used by the table store; the service_role key bypasses RLS."""
    key = settings.supabase_service_role_key or settings.supabase_key
    return create_client(settings.supabase_url, key)


def create_auth_client(settings: Settings) -> Client:
    """Client for one request's auth calls.

    Sessions are not persisted or refreshed, so nothing leaks between
    requests.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )
