from pydantic import BaseModel, field_validator
from typing import Optional, List
from kalakar.config.categories import is_known_category
from kalakar.modules.profiles.schemas import (
    ProfileResponse, CreatorProfileResponse, ProfileUpdate, CreatorProfileUpdate
)
from kalakar.modules.posts.schemas import PostResponse
from kalakar.modules.contact_requests.schemas import ContactRequestResponse


class DashboardResponse(BaseModel):
    profile: Optional[ProfileResponse] = None
    creator_profile: Optional[CreatorProfileResponse] = None
    posts: List[PostResponse] = []
    contact_requests: List[ContactRequestResponse] = []


class ProfileSaveRequest(BaseModel):
    """Every editable field of the dashboard profile form"""
    full_name: str = ""
    bio: str = ""
    city: str = ""
    state: str = ""
    phone: str = ""
    whatsapp: str = ""
    instagram: str = ""
    website: str = ""
    portfolio_description: str = ""
    categories: List[str] = []

    @field_validator("categories")
    @classmethod
    def known_categories(cls, value: List[str]) -> List[str]:
        unknown = [c for c in value if not is_known_category(c)]
        if unknown:
            raise ValueError(f"Unknown categories: {', '.join(unknown)}")
        return value

    def profile_update(self) -> ProfileUpdate:
        return ProfileUpdate(full_name=self.full_name)

    def creator_profile_update(self) -> CreatorProfileUpdate:
        return CreatorProfileUpdate(**self.model_dump(exclude={"full_name"}))


class ProfileSaveResponse(BaseModel):
    profile: ProfileResponse
    creator_profile: CreatorProfileResponse


class CategoryToggleRequest(BaseModel):
    categories: List[str] = []
    category: str

    @field_validator("category")
    @classmethod
    def known_category(cls, value: str) -> str:
        if not is_known_category(value):
            raise ValueError(f"Unknown category: {value}")
        return value


class CategoryToggleResponse(BaseModel):
    categories: List[str]
