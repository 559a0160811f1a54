from pydantic import BaseModel, EmailStr, model_validator
from typing import Literal, Optional
from kalakar.config.settings import settings

UserType = Literal["user", "creator"]


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    user_type: UserType = "user"


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str
    full_name: str = ""
    user_type: UserType = "user"

    @model_validator(mode="after")
    def check_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < settings.min_password_length:
            raise ValueError(f"Password must be at least {settings.min_password_length} characters")
        return self


class SignUpResponse(BaseModel):
    user_id: str
    email: str
    user_type: UserType
    redirect_to: str
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_type: UserType = "user"
    full_name: Optional[str] = None


def redirect_after_signup(user_type: str) -> str:
    return "/dashboard" if user_type == "creator" else "/explore"
