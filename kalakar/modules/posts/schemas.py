from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class PostCreate(BaseModel):
    title: str
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("description", "category")
    @classmethod
    def empty_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class PostResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    image_url: str
    category: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
