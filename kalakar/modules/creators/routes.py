from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from kalakar.database.supabase_client import get_supabase
from kalakar.core.dependencies import get_optional_session, get_session, get_user_supabase
from kalakar.core.inflight import in_flight
from kalakar.core.session import SessionContext
from kalakar.modules.creators.schemas import CreatorCard, CreatorPage
from kalakar.modules.creators.service import CreatorDirectoryService
from kalakar.modules.follows.schemas import FollowStatus
from kalakar.modules.follows.service import FollowService
from kalakar.modules.contact_requests.schemas import ContactRequestCreate, ContactRequestResponse
from kalakar.modules.contact_requests.service import ContactRequestService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/creators", tags=["creators"])


def get_directory_service(supabase: Client = Depends(get_supabase)) -> CreatorDirectoryService:
    return CreatorDirectoryService(supabase)


def get_follow_service(supabase: Client = Depends(get_user_supabase)) -> FollowService:
    return FollowService(supabase)


def get_contact_request_service(supabase: Client = Depends(get_user_supabase)) -> ContactRequestService:
    return ContactRequestService(supabase)


@router.get("", response_model=List[CreatorCard])
async def list_creators(
    q: Optional[str] = None,
    category: Optional[str] = None,
    session: Optional[SessionContext] = Depends(get_optional_session),
    service: CreatorDirectoryService = Depends(get_directory_service)
):
    """Explore creators, filtered by free text and category"""
    return service.list_creators(query=q, category=category, viewer=session)


@router.get("/{creator_id}", response_model=CreatorPage)
async def get_creator(
    creator_id: str,
    session: Optional[SessionContext] = Depends(get_optional_session),
    service: CreatorDirectoryService = Depends(get_directory_service)
):
    """A creator's public profile and portfolio"""
    return service.get_creator_page(creator_id, viewer=session)


@router.post("/{creator_id}/follow", response_model=FollowStatus)
async def toggle_follow(
    creator_id: str,
    session: SessionContext = Depends(get_session),
    service: FollowService = Depends(get_follow_service)
):
    """Follow the creator, or unfollow when already following"""
    with in_flight(session.user_id, f"follow:{creator_id}"):
        following = await run_in_threadpool(service.toggle, session.user_id, creator_id)
    return FollowStatus(creator_id=creator_id, following=following)


@router.post("/{creator_id}/contact", response_model=ContactRequestResponse, status_code=201)
async def contact_creator(
    creator_id: str,
    request_data: ContactRequestCreate,
    session: SessionContext = Depends(get_session),
    service: ContactRequestService = Depends(get_contact_request_service)
):
    """Send a contact request to the creator"""
    with in_flight(session.user_id, "send_message"):
        return await run_in_threadpool(service.create, session.user_id, creator_id, request_data)
