from supabase import Client
from kalakar.config.settings import settings
from kalakar.core.session import SessionContext
from kalakar.database.storage import StorageService, file_extension, validate_image
from kalakar.modules.dashboard.schemas import DashboardResponse, ProfileSaveRequest, ProfileSaveResponse
from kalakar.modules.profiles.schemas import ProfileResponse, dedupe_categories
from kalakar.modules.profiles.service import ProfileService
from kalakar.modules.posts.service import PostService
from kalakar.modules.contact_requests.service import ContactRequestService
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def toggle_category(categories: List[str], category: str) -> List[str]:
    """Add the category when absent, remove it when present"""
    current = dedupe_categories(categories)
    if category in current:
        return [c for c in current if c != category]
    return current + [category]


class DashboardService:
    def __init__(self, supabase: Client, storage: Optional[StorageService] = None):
        self.supabase = supabase
        self.storage = storage or StorageService(supabase)
        self.profiles = ProfileService(supabase)
        self.posts = PostService(supabase, self.storage)
        self.requests = ContactRequestService(supabase, self.profiles)

    def load(self, session: SessionContext) -> DashboardResponse:
        """Everything the dashboard shows. Each part loads independently; a failed part stays empty."""
        dashboard = DashboardResponse()
        user_id = session.user_id
        try:
            dashboard.profile = self.profiles.get_profile(user_id)
        except HTTPException:
            pass
        try:
            dashboard.creator_profile = self.profiles.get_creator_profile(user_id)
        except HTTPException:
            pass
        try:
            dashboard.posts = self.posts.list_for_user(user_id)
        except HTTPException:
            pass
        try:
            dashboard.contact_requests = self.requests.list_for_creator(user_id)
        except HTTPException:
            pass
        return dashboard

    def save_profile(self, user_id: str, form: ProfileSaveRequest) -> ProfileSaveResponse:
        """Write the profile and creator profile rows. The two updates are independent; either may fail alone."""
        profile = creator_profile = None
        failed = []
        try:
            profile = self.profiles.update_profile(user_id, form.profile_update())
        except HTTPException as e:
            failed.append(f"profile ({e.detail})")
        try:
            creator_profile = self.profiles.update_creator_profile(user_id, form.creator_profile_update())
        except HTTPException as e:
            failed.append(f"creator profile ({e.detail})")
        if failed:
            logger.error(f"Profile save for {user_id} failed: {', '.join(failed)}")
            raise HTTPException(status_code=500, detail="Failed to save profile")
        return ProfileSaveResponse(profile=profile, creator_profile=creator_profile)

    def upload_avatar(
        self,
        user_id: str,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> ProfileResponse:
        """Upload (overwriting) the avatar, then point the profile at its public URL.

        A failed profile update leaves the uploaded file in place and the old avatar_url unchanged.
        """
        validate_image(content, content_type)
        bucket = settings.avatars_bucket
        path = f"{user_id}/avatar.{file_extension(filename)}"
        try:
            self.storage.upload(bucket, path, content, content_type=content_type, upsert=True)
            avatar_url = self.storage.get_public_url(bucket, path)
        except Exception as e:
            logger.error(f"Error uploading avatar for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to upload avatar")
        try:
            return self.profiles.set_avatar_url(user_id, avatar_url)
        except HTTPException as e:
            logger.error(f"Avatar stored at {bucket}/{path} but profile update failed: {e.detail}")
            raise HTTPException(status_code=500, detail="Failed to upload avatar")
