from fastapi import APIRouter, Depends
from kalakar.core.dependencies import get_session, get_user_supabase
from kalakar.core.session import SessionContext
from kalakar.modules.viewer.schemas import ViewerProfileResponse
from kalakar.modules.viewer.service import ViewerProfileService
from supabase import Client

router = APIRouter(prefix="/me", tags=["me"])


def get_viewer_service(supabase: Client = Depends(get_user_supabase)) -> ViewerProfileService:
    return ViewerProfileService(supabase)


@router.get("/profile", response_model=ViewerProfileResponse)
async def get_my_profile(
    session: SessionContext = Depends(get_session),
    service: ViewerProfileService = Depends(get_viewer_service)
):
    """Followed creators and sent inquiries of the signed-in user"""
    return service.load(session)
