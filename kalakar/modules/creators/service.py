from supabase import Client
from kalakar.config.categories import normalize_category_filter
from kalakar.config.settings import settings
from kalakar.core.session import SessionContext
from kalakar.modules.creators.schemas import CreatorCard, CreatorPage
from kalakar.modules.follows.service import FollowService
from kalakar.modules.posts.schemas import PostResponse
from kalakar.modules.posts.service import PostService
from kalakar.modules.profiles.service import ProfileService
from typing import Dict, Iterable, List, Optional, Set
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def latest_posts_by_creator(posts: Iterable[PostResponse], limit: int) -> Dict[str, List[PostResponse]]:
    """Group newest-first posts by owner, keeping at most `limit` each"""
    grouped: Dict[str, List[PostResponse]] = {}
    for post in posts:
        bucket = grouped.setdefault(post.user_id, [])
        if len(bucket) < limit:
            bucket.append(post)
    return grouped


def matches_search(card: CreatorCard, query: Optional[str]) -> bool:
    """Case-insensitive substring match on name, bio or city"""
    if not query:
        return True
    needle = query.lower()
    full_name = card.profile.full_name if card.profile else None
    return any(
        needle in field.lower()
        for field in (full_name, card.bio, card.city)
        if field
    )


def matches_category(card: CreatorCard, category: Optional[str]) -> bool:
    category = normalize_category_filter(category)
    return category is None or category in card.categories


def filter_creators(cards: Iterable[CreatorCard], query: Optional[str] = None, category: Optional[str] = None) -> List[CreatorCard]:
    return [c for c in cards if matches_search(c, query) and matches_category(c, category)]


class CreatorDirectoryService:
    def __init__(
        self,
        supabase: Client,
        profiles: Optional[ProfileService] = None,
        posts: Optional[PostService] = None,
        follows: Optional[FollowService] = None,
    ):
        self.supabase = supabase
        self.profiles = profiles or ProfileService(supabase)
        self.posts = posts or PostService(supabase)
        self.follows = follows or FollowService(supabase)

    def fetch_cards(self) -> List[CreatorCard]:
        """
        Creator profiles joined with their profile and most recent posts, in backend row order.
        Any failed fetch raises; a partial join is never returned.
        """
        creator_profiles = self.profiles.list_creator_profiles()
        user_ids = [c.user_id for c in creator_profiles]

        profiles = {p.user_id: p for p in self.profiles.get_profiles_by_ids(user_ids)}
        posts = latest_posts_by_creator(
            self.posts.list_for_users(user_ids), settings.directory_preview_posts
        )

        return [
            CreatorCard(
                user_id=c.user_id,
                bio=c.bio,
                city=c.city,
                categories=c.categories,
                profile=profiles.get(c.user_id),
                posts=posts.get(c.user_id, []),
            )
            for c in creator_profiles
        ]

    def following_ids(self, viewer: Optional[SessionContext]) -> Set[str]:
        if viewer is None:
            return set()
        try:
            return self.follows.list_following_ids(viewer.user_id)
        except HTTPException:
            return set()

    def list_creators(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        viewer: Optional[SessionContext] = None,
    ) -> List[CreatorCard]:
        """Explore listing: search and category filters combine with AND"""
        try:
            cards = self.fetch_cards()
        except HTTPException as e:
            logger.error(f"Creator directory unavailable: {e.detail}")
            cards = []
        following = self.following_ids(viewer)

        results = filter_creators(cards, query, category)
        for card in results:
            card.is_following = card.user_id in following
        return results

    def get_creator_page(self, creator_id: str, viewer: Optional[SessionContext] = None) -> CreatorPage:
        """A creator's public page; 404 when the account has no profile"""
        profile = self.profiles.get_profile(creator_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Creator not found")

        creator_profile = self.profiles.get_creator_profile(creator_id)
        posts = self.posts.list_for_user(creator_id)

        can_interact = viewer is not None and not viewer.is_self(creator_id)
        is_following = False
        if can_interact:
            try:
                is_following = self.follows.is_following(viewer.user_id, creator_id)
            except HTTPException:
                is_following = False

        return CreatorPage(
            profile=profile,
            creator_profile=creator_profile,
            posts=posts,
            is_following=is_following,
            can_interact=can_interact,
        )
