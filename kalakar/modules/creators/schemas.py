from pydantic import BaseModel
from typing import Optional, List
from kalakar.modules.profiles.schemas import ProfileResponse, CreatorProfileResponse
from kalakar.modules.posts.schemas import PostResponse


class CreatorCard(BaseModel):
    """One creator in the Explore directory"""
    user_id: str
    bio: Optional[str] = None
    city: Optional[str] = None
    categories: List[str] = []
    profile: Optional[ProfileResponse] = None
    posts: List[PostResponse] = []  # most recent work, newest first
    is_following: bool = False


class CreatorPage(BaseModel):
    """A creator's public profile page"""
    profile: ProfileResponse
    creator_profile: Optional[CreatorProfileResponse] = None
    posts: List[PostResponse] = []
    is_following: bool = False
    can_interact: bool = False  # follow and contact controls; never for yourself
