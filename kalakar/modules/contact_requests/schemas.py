from pydantic import BaseModel, field_validator
from typing import Literal, Optional
from datetime import datetime
from enum import Enum


class ContactRequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ContactRequestCreate(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def message_required(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class ContactRequestStatusUpdate(BaseModel):
    status: Literal["accepted", "rejected"]


class ContactRequestResponse(BaseModel):
    id: str
    sender_id: str
    creator_id: str
    message: str
    status: ContactRequestStatus = ContactRequestStatus.PENDING
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SentInquiryResponse(ContactRequestResponse):
    """A request as its sender sees it, with the creator's contact once accepted"""
    creator_name: Optional[str] = None
    whatsapp: Optional[str] = None
    phone: Optional[str] = None
    whatsapp_url: Optional[str] = None
