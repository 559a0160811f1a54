"""
Core dependencies for resolving the request's session and the client it acts through
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from kalakar.core.session import SessionContext
from kalakar.database.supabase_client import get_supabase, get_service_supabase, get_client_factory
from kalakar.modules.auth.service import AuthService
from supabase import Client
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error is off so anonymous viewers can reach public pages
security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Optional[Client] = Depends(get_service_supabase),
    client_factory: Callable[[Optional[str]], Client] = Depends(get_client_factory),
) -> AuthService:
    return AuthService(supabase, admin_supabase, client_factory)


def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[SessionContext]:
    """Session for the bearer token, or None for anonymous viewers"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def get_session(
    session: Optional[SessionContext] = Depends(get_optional_session)
) -> SessionContext:
    """Require a signed-in user. Clients send the user to /login on 401."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_creator_session(
    session: SessionContext = Depends(get_session)
) -> SessionContext:
    """Require a signed-in creator account"""
    if not session.is_creator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only creator accounts can use the dashboard"
        )
    return session


def get_user_supabase(
    session: SessionContext = Depends(get_session),
    client_factory: Callable[[Optional[str]], Client] = Depends(get_client_factory),
) -> Client:
    """Client for this request only, authorized as the signed-in user"""
    return client_factory(session.access_token)
