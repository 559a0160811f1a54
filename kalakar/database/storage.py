from supabase import Client
from fastapi import HTTPException
from kalakar.config.settings import settings
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


def file_extension(filename: Optional[str], default: str = "jpg") -> str:
    """Extension after the last dot, lower-cased"""
    if not filename or "." not in filename:
        return default
    ext = filename.rsplit(".", 1)[1].strip().lower()
    return ext or default


def validate_image(content: bytes, content_type: Optional[str]) -> None:
    """Reject empty, oversized or non-image uploads before anything is stored"""
    if not content_type or not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are accepted")
    if not content:
        raise HTTPException(status_code=400, detail="Image file is empty")
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Image file is too large")


class StorageService:
    """Supabase Storage access for the avatars and posts buckets."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
    ) -> str:
        """Upload an object and return its path inside the bucket"""
        try:
            self.supabase.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type,
                    "upsert": "true" if upsert else "false",
                },
            )
            return path
        except Exception as e:
            logger.error(f"Failed to upload {bucket}/{path}: {str(e)}")
            raise

    def get_public_url(self, bucket: str, path: str) -> str:
        return self.supabase.storage.from_(bucket).get_public_url(path)

    def remove(self, bucket: str, paths: List[str]) -> bool:
        """Delete objects from a bucket"""
        if not paths:
            return True
        try:
            self.supabase.storage.from_(bucket).remove(paths)
            return True
        except Exception as e:
            logger.error(f"Failed to delete {paths} from {bucket}: {str(e)}")
            return False
