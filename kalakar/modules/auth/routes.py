from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPAuthorizationCredentials
from kalakar.modules.auth.schemas import (
    LoginRequest, SignUpRequest, TokenResponse, SignUpResponse, CurrentUserResponse
)
from kalakar.modules.auth.service import AuthService
from kalakar.core.dependencies import get_auth_service, get_session, security
from kalakar.core.session import SessionContext

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignUpResponse, status_code=201)
async def signup(
    signup_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a user or creator account"""
    return service.sign_up(signup_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.sign_in(login_data)


@router.post("/logout", status_code=200)
async def logout(
    session: SessionContext = Depends(get_session),
    credentials: HTTPAuthorizationCredentials = Security(security),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and drop the cached session"""
    service.sign_out(credentials.credentials)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(session: SessionContext = Depends(get_session)):
    """Current signed-in identity"""
    return CurrentUserResponse(
        id=session.user_id,
        email=session.email,
        user_type=session.user_type,
        full_name=session.full_name,
    )
