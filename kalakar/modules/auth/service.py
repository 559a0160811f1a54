import hashlib
import time
from supabase import Client
from kalakar.core.session import SessionContext, USER_TYPE_CREATOR
from kalakar.database.supabase_client import SupabaseClient
from kalakar.modules.auth.schemas import (
    LoginRequest, SignUpRequest, TokenResponse, SignUpResponse, redirect_after_signup
)
from fastapi import HTTPException
from typing import Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    """
    Account operations.

    `supabase` is the shared anon client and is only used to verify tokens.
    Sign-up and sign-in run on a fresh client from `client_factory` so the
    session they create never lands on the shared client.
    """

    def __init__(
        self,
        supabase: Client,
        admin_supabase: Optional[Client] = None,
        client_factory: Optional[Callable[[Optional[str]], Client]] = None,
    ):
        self.supabase = supabase
        self.admin_supabase = admin_supabase
        self.client_factory = client_factory or SupabaseClient.create_session_client

    def sign_up(self, signup_data: SignUpRequest) -> SignUpResponse:
        """Register a new account and create its profile rows"""
        try:
            auth_response = self.client_factory(None).auth.sign_up({
                "email": signup_data.email,
                "password": signup_data.password,
                "options": {
                    "data": {
                        "full_name": signup_data.full_name,
                        "user_type": signup_data.user_type,
                    }
                }
            })
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Sign-up failed for {signup_data.email}: {error_message}")
            raise HTTPException(status_code=500, detail="Registration failed")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        user_id = auth_response.user.id
        rows_client = self.admin_supabase
        if rows_client is None and auth_response.session:
            rows_client = self.client_factory(auth_response.session.access_token)
        if rows_client is None:
            # Email confirmation pending and no service key: the on_auth_user_created trigger writes the rows
            logger.info(f"No session for new account {user_id}; profile rows left to the database trigger")
        else:
            self._create_account_rows(rows_client, user_id, signup_data.full_name, signup_data.user_type)

        return SignUpResponse(
            user_id=user_id,
            email=auth_response.user.email or signup_data.email,
            user_type=signup_data.user_type,
            redirect_to=redirect_after_signup(signup_data.user_type),
            message="Account created successfully"
        )

    def _create_account_rows(self, client: Client, user_id: str, full_name: str, user_type: str) -> None:
        # Upsert so a database trigger that already created the rows is not an error
        try:
            client.table("profiles")\
                .upsert({"user_id": user_id, "full_name": full_name}, on_conflict="user_id")\
                .execute()
            if user_type == USER_TYPE_CREATOR:
                client.table("creator_profiles")\
                    .upsert({"user_id": user_id, "categories": []}, on_conflict="user_id")\
                    .execute()
        except Exception as e:
            logger.error(f"Failed to create profile rows for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Account created but profile setup failed")

    def sign_in(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.client_factory(None).auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.error(f"Sign-in failed for {login_data.email}: {error_message}")
            raise HTTPException(status_code=500, detail="Login failed")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")

        session = SessionContext.from_user(auth_response.user)
        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=session.user_id,
            email=session.email or login_data.email,
            user_type=session.user_type,
        )

    def get_current_user(self, token: str) -> SessionContext:
        """Resolve a bearer token to a session. Uses short TTL cache to reduce auth API calls."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            session, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return session
            del _AUTH_USER_CACHE[cache_key]
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        session = SessionContext.from_user(user_response.user, access_token=token)
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (session, now + _AUTH_CACHE_TTL_SEC)
        return session

    def sign_out(self, token: str) -> bool:
        """Revoke the token's refresh tokens and drop its cached session"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            return False
