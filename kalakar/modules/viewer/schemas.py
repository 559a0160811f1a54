from pydantic import BaseModel
from typing import Optional, List
from kalakar.modules.profiles.schemas import ProfileResponse, CreatorSummary
from kalakar.modules.contact_requests.schemas import SentInquiryResponse


class ViewerProfileResponse(BaseModel):
    profile: Optional[ProfileResponse] = None
    followed_creators: List[CreatorSummary] = []
    inquiries: List[SentInquiryResponse] = []
