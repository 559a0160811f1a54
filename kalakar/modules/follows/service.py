from supabase import Client
from postgrest.exceptions import APIError
from kalakar.modules.follows.schemas import FollowResponse
from typing import List, Set
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class FollowService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_follows(self, follower_id: str) -> List[FollowResponse]:
        try:
            result = self.supabase.table("follows")\
                .select("*")\
                .eq("follower_id", follower_id)\
                .execute()
            return [FollowResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching follows for {follower_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch follows")

    def list_following_ids(self, follower_id: str) -> Set[str]:
        return {f.following_id for f in self.list_follows(follower_id)}

    def is_following(self, follower_id: str, following_id: str) -> bool:
        try:
            result = self.supabase.table("follows")\
                .select("id")\
                .eq("follower_id", follower_id)\
                .eq("following_id", following_id)\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Error checking follow {follower_id} -> {following_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to check follow status")

    def follow(self, follower_id: str, following_id: str) -> bool:
        """Follow a creator; following an already-followed creator is a no-op"""
        self._check_not_self(follower_id, following_id)
        if self.is_following(follower_id, following_id):
            return True
        try:
            self.supabase.table("follows").insert({
                "follower_id": follower_id,
                "following_id": following_id
            }).execute()
        except APIError as e:
            # A concurrent request already inserted the pair
            if e.code == UNIQUE_VIOLATION:
                return True
            logger.error(f"Error following {following_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to follow creator")
        except Exception as e:
            logger.error(f"Error following {following_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to follow creator")
        return True

    def unfollow(self, follower_id: str, following_id: str) -> bool:
        try:
            self.supabase.table("follows")\
                .delete()\
                .eq("follower_id", follower_id)\
                .eq("following_id", following_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error unfollowing {following_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to unfollow creator")
        return False

    def toggle(self, follower_id: str, following_id: str) -> bool:
        """Unfollow when following, otherwise follow. Returns the new state."""
        self._check_not_self(follower_id, following_id)
        if self.is_following(follower_id, following_id):
            return self.unfollow(follower_id, following_id)
        return self.follow(follower_id, following_id)

    @staticmethod
    def _check_not_self(follower_id: str, following_id: str) -> None:
        if follower_id == following_id:
            raise HTTPException(status_code=400, detail="You cannot follow yourself")
