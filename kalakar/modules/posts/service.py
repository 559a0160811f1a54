from supabase import Client
from kalakar.config.settings import settings
from kalakar.database.storage import StorageService, file_extension, validate_image
from kalakar.modules.posts.schemas import PostCreate, PostResponse
from typing import List, Optional
from fastapi import HTTPException
import time
import logging

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, supabase: Client, storage: Optional[StorageService] = None):
        self.supabase = supabase
        self.storage = storage or StorageService(supabase)
        self.bucket = settings.posts_bucket

    def list_for_user(self, user_id: str) -> List[PostResponse]:
        """A creator's portfolio, newest first"""
        try:
            result = self.supabase.table("posts")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [PostResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching posts for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch posts")

    def list_for_users(self, user_ids: List[str]) -> List[PostResponse]:
        """Posts of several creators, newest first. No query is issued for an empty set."""
        if not user_ids:
            return []
        try:
            result = self.supabase.table("posts")\
                .select("*")\
                .in_("user_id", user_ids)\
                .order("created_at", desc=True)\
                .execute()
            return [PostResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching posts: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch posts")

    def build_image_path(self, user_id: str, filename: Optional[str]) -> str:
        return f"{user_id}/{int(time.time() * 1000)}.{file_extension(filename)}"

    def create_post(
        self,
        user_id: str,
        post_data: PostCreate,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> PostResponse:
        """Upload the image, then insert the post row referencing its public URL.

        If the insert fails the uploaded image is removed again.
        """
        validate_image(content, content_type)
        path = self.build_image_path(user_id, filename)

        try:
            self.storage.upload(self.bucket, path, content, content_type=content_type)
            image_url = self.storage.get_public_url(self.bucket, path)
        except Exception as e:
            logger.error(f"Error uploading post image for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to add post")

        try:
            result = self.supabase.table("posts").insert({
                "user_id": user_id,
                "title": post_data.title,
                "description": post_data.description,
                "image_url": image_url,
                "category": post_data.category,
            }).execute()
            if not result.data:
                raise RuntimeError("insert returned no row")
            return PostResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error inserting post for {user_id}: {e}; removing {self.bucket}/{path}")
            self.storage.remove(self.bucket, [path])
            raise HTTPException(status_code=500, detail="Failed to add post")

    def delete_post(self, user_id: str, post_id: str) -> bool:
        """Delete the owner's post row. The stored image is left in the bucket."""
        try:
            result = self.supabase.table("posts")\
                .delete()\
                .eq("id", post_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting post {post_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete post")
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return True
