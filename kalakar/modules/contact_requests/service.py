from supabase import Client
from kalakar.modules.contact_requests.schemas import (
    ContactRequestCreate, ContactRequestResponse, ContactRequestStatus, SentInquiryResponse
)
from kalakar.modules.profiles.service import ProfileService
from typing import List, Optional
from fastapi import HTTPException
import re
import logging

logger = logging.getLogger(__name__)


def whatsapp_link(number: Optional[str]) -> Optional[str]:
    """wa.me link for a phone number, digits only"""
    if not number:
        return None
    digits = re.sub(r"\D", "", number)
    return f"https://wa.me/{digits}" if digits else None


class ContactRequestService:
    def __init__(self, supabase: Client, profiles: Optional[ProfileService] = None):
        self.supabase = supabase
        self.profiles = profiles or ProfileService(supabase)

    def create(self, sender_id: str, creator_id: str, request_data: ContactRequestCreate) -> ContactRequestResponse:
        """Send a pending contact request to a creator"""
        if sender_id == creator_id:
            raise HTTPException(status_code=400, detail="You cannot contact yourself")
        if self.profiles.get_creator_profile(creator_id) is None:
            raise HTTPException(status_code=404, detail="Creator not found")
        try:
            result = self.supabase.table("contact_requests").insert({
                "sender_id": sender_id,
                "creator_id": creator_id,
                "message": request_data.message,
                "status": ContactRequestStatus.PENDING.value,
            }).execute()
            if not result.data:
                raise RuntimeError("insert returned no row")
            return ContactRequestResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error sending contact request to {creator_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to send message")

    def list_for_creator(self, creator_id: str) -> List[ContactRequestResponse]:
        """Requests a creator received, newest first"""
        try:
            result = self.supabase.table("contact_requests")\
                .select("*")\
                .eq("creator_id", creator_id)\
                .order("created_at", desc=True)\
                .execute()
            return [ContactRequestResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching contact requests for creator {creator_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch contact requests")

    def list_for_sender(self, sender_id: str) -> List[SentInquiryResponse]:
        """Requests a viewer sent, newest first, joined with each creator's contact details"""
        try:
            result = self.supabase.table("contact_requests")\
                .select("*")\
                .eq("sender_id", sender_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
        except Exception as e:
            logger.error(f"Error fetching inquiries for {sender_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch inquiries")

        creator_ids = list(dict.fromkeys(row["creator_id"] for row in rows))
        names = {p.user_id: p.full_name for p in self.profiles.get_profiles_by_ids(creator_ids)}
        contacts = {c.user_id: c for c in self.profiles.get_creator_profiles_by_ids(creator_ids)}

        inquiries = []
        for row in rows:
            inquiry = SentInquiryResponse(**row, creator_name=names.get(row["creator_id"]))
            creator = contacts.get(inquiry.creator_id)
            # Contact details are only revealed once the creator accepts
            if creator and inquiry.status == ContactRequestStatus.ACCEPTED:
                inquiry.whatsapp = creator.whatsapp
                inquiry.phone = creator.phone
                inquiry.whatsapp_url = whatsapp_link(creator.whatsapp or creator.phone)
            inquiries.append(inquiry)
        return inquiries

    def update_status(self, creator_id: str, request_id: str, status: str) -> ContactRequestResponse:
        """Resolve a pending request. Repeating the current resolution is a no-op."""
        new_status = ContactRequestStatus(status)
        if new_status == ContactRequestStatus.PENDING:
            raise HTTPException(status_code=400, detail="A request cannot be reopened")
        try:
            result = self.supabase.table("contact_requests")\
                .select("*")\
                .eq("id", request_id)\
                .eq("creator_id", creator_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching contact request {request_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update request")
        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Contact request not found")

        current = ContactRequestResponse(**result.data)
        if current.status == new_status:
            return current
        if current.status != ContactRequestStatus.PENDING:
            raise HTTPException(status_code=409, detail=f"Request already {current.status.value}")

        try:
            # The pending filter keeps a concurrent resolution from being overwritten
            updated = self.supabase.table("contact_requests")\
                .update({"status": new_status.value})\
                .eq("id", request_id)\
                .eq("creator_id", creator_id)\
                .eq("status", ContactRequestStatus.PENDING.value)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating contact request {request_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update request")
        if not updated.data:
            raise HTTPException(status_code=409, detail="Request was already resolved")
        return ContactRequestResponse(**updated.data[0])
