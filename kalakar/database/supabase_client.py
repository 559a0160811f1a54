from supabase import create_client, Client, ClientOptions
from kalakar.config.settings import settings
from typing import Callable, Optional


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anon client. Only for public reads and token checks; it never signs in."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Optional[Client]:
        """Client with service_role key; bypasses RLS. None when no key is configured."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def create_session_client(cls, access_token: Optional[str] = None) -> Client:
        """
        New client with no shared session state.

        With an access token every table and storage request carries the
        user's JWT, so row level security evaluates auth.uid() as that user.
        Without one it is a throwaway client for sign-in and sign-up.
        """
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(
                headers=headers,
                auto_refresh_token=False,
                persist_session=False,
            ),
        )

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Optional[Client]:
    return SupabaseClient.get_service_client()


def get_client_factory() -> Callable[[Optional[str]], Client]:
    return SupabaseClient.create_session_client
