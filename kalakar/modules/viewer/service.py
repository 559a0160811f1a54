from supabase import Client
from kalakar.core.session import SessionContext
from kalakar.modules.follows.service import FollowService
from kalakar.modules.profiles.schemas import CreatorSummary
from kalakar.modules.profiles.service import ProfileService
from kalakar.modules.contact_requests.service import ContactRequestService
from kalakar.modules.viewer.schemas import ViewerProfileResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ViewerProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)
        self.follows = FollowService(supabase)
        self.requests = ContactRequestService(supabase, self.profiles)

    def followed_creators(self, user_id: str) -> List[CreatorSummary]:
        """Profiles of followed creators. The profile fetches are skipped when nothing is followed."""
        creator_ids = list(dict.fromkeys(f.following_id for f in self.follows.list_follows(user_id)))
        if not creator_ids:
            return []
        profiles = self.profiles.get_profiles_by_ids(creator_ids)
        creator_profiles = {c.user_id: c for c in self.profiles.get_creator_profiles_by_ids(creator_ids)}
        return [
            CreatorSummary(user_id=p.user_id, profile=p, creator_profile=creator_profiles.get(p.user_id))
            for p in profiles
        ]

    def load(self, session: SessionContext) -> ViewerProfileResponse:
        """The viewer's own page. Each part loads independently; a failed part stays empty."""
        page = ViewerProfileResponse()
        try:
            page.profile = self.profiles.get_profile(session.user_id)
        except HTTPException:
            pass
        try:
            page.followed_creators = self.followed_creators(session.user_id)
        except HTTPException:
            pass
        try:
            page.inquiries = self.requests.list_for_sender(session.user_id)
        except HTTPException:
            pass
        return page
