from supabase import Client
from kalakar.modules.profiles.schemas import (
    ProfileResponse, CreatorProfileResponse, ProfileUpdate, CreatorProfileUpdate
)
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _maybe_single(self, table: str, user_id: str) -> Optional[dict]:
        result = self.supabase.table(table)\
            .select("*")\
            .eq("user_id", user_id)\
            .maybe_single()\
            .execute()
        # maybe_single() yields None instead of a response when nothing matched
        if result is None or not result.data:
            return None
        return result.data

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get a profile by user id; None when the account has no profile row"""
        try:
            row = self._maybe_single("profiles", user_id)
            return ProfileResponse(**row) if row else None
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch profile")

    def get_creator_profile(self, user_id: str) -> Optional[CreatorProfileResponse]:
        """Get a creator profile by user id; None for non-creator accounts"""
        try:
            row = self._maybe_single("creator_profiles", user_id)
            return CreatorProfileResponse(**row) if row else None
        except Exception as e:
            logger.error(f"Error fetching creator profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch creator profile")

    def list_creator_profiles(self) -> List[CreatorProfileResponse]:
        """All creator profiles in backend row order"""
        try:
            result = self.supabase.table("creator_profiles")\
                .select("*")\
                .execute()
            return [CreatorProfileResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error listing creator profiles: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch creators")

    def get_profiles_by_ids(self, user_ids: List[str]) -> List[ProfileResponse]:
        """Profiles for exactly these user ids. No query is issued for an empty set."""
        if not user_ids:
            return []
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .in_("user_id", user_ids)\
                .execute()
            return [ProfileResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching profiles: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch profiles")

    def get_creator_profiles_by_ids(self, user_ids: List[str]) -> List[CreatorProfileResponse]:
        """Creator profiles for exactly these user ids. No query is issued for an empty set."""
        if not user_ids:
            return []
        try:
            result = self.supabase.table("creator_profiles")\
                .select("*")\
                .in_("user_id", user_ids)\
                .execute()
            return [CreatorProfileResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching creator profiles: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch creator profiles")

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the owner's profile row"""
        update_data = profile_data.model_dump(exclude_none=True)
        return self._update("profiles", user_id, update_data, ProfileResponse, "profile")

    def set_avatar_url(self, user_id: str, avatar_url: str) -> ProfileResponse:
        return self._update("profiles", user_id, {"avatar_url": avatar_url}, ProfileResponse, "profile")

    def update_creator_profile(self, user_id: str, creator_data: CreatorProfileUpdate) -> CreatorProfileResponse:
        """Update the owner's creator profile row"""
        update_data = creator_data.model_dump(exclude_none=True)
        return self._update("creator_profiles", user_id, update_data, CreatorProfileResponse, "creator profile")

    def _update(self, table: str, user_id: str, update_data: dict, model, label: str):
        try:
            update_data = {**update_data, "updated_at": datetime.now(timezone.utc).isoformat()}
            result = self.supabase.table(table)\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
            return model(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating {label} {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update {label}")
