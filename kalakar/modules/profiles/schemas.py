from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime
from kalakar.config.categories import is_known_category


def dedupe_categories(values: Optional[List[str]]) -> List[str]:
    """Categories are a set; keep first occurrence order for stable output."""
    seen = []
    for value in values or []:
        if value and value not in seen:
            seen.append(value)
    return seen


class ProfileResponse(BaseModel):
    user_id: str
    id: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CreatorProfileResponse(BaseModel):
    user_id: str
    id: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None
    categories: List[str] = []
    portfolio_description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("categories", mode="before")
    @classmethod
    def normalize_categories(cls, value):
        return dedupe_categories(value)

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None


class CreatorProfileUpdate(BaseModel):
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None
    portfolio_description: Optional[str] = None
    categories: Optional[List[str]] = None

    @field_validator("categories")
    @classmethod
    def check_categories(cls, value):
        if value is None:
            return None
        unknown = [c for c in value if not is_known_category(c)]
        if unknown:
            raise ValueError(f"Unknown categories: {', '.join(unknown)}")
        return dedupe_categories(value)


class CreatorSummary(BaseModel):
    """A followed creator as shown on the viewer's profile page"""
    user_id: str
    profile: ProfileResponse
    creator_profile: Optional[CreatorProfileResponse] = None
