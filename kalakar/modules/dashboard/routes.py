from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from kalakar.core.dependencies import get_creator_session, get_user_supabase
from kalakar.core.inflight import in_flight
from kalakar.core.session import SessionContext
from kalakar.modules.dashboard.schemas import (
    DashboardResponse, ProfileSaveRequest, ProfileSaveResponse,
    CategoryToggleRequest, CategoryToggleResponse
)
from kalakar.modules.dashboard.service import DashboardService, toggle_category
from kalakar.modules.profiles.schemas import ProfileResponse
from kalakar.modules.posts.schemas import PostCreate, PostResponse
from kalakar.modules.contact_requests.schemas import ContactRequestStatusUpdate, ContactRequestResponse
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_user_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Profile, portfolio and inbound contact requests of the signed-in creator"""
    return service.load(session)


@router.put("/profile", response_model=ProfileSaveResponse)
async def save_profile(
    form: ProfileSaveRequest,
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Save name, contact details, portfolio description and categories"""
    with in_flight(session.user_id, "save_profile"):
        return await run_in_threadpool(service.save_profile, session.user_id, form)


@router.post("/avatar", response_model=ProfileResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Replace the creator's avatar image"""
    with in_flight(session.user_id, "upload_avatar"):
        content = await file.read()
        return await run_in_threadpool(
            service.upload_avatar, session.user_id, file.filename, content, file.content_type
        )


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(
    file: UploadFile = File(...),
    title: str = Form(...),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Add a portfolio post with its image"""
    try:
        post_data = PostCreate(title=title, description=description, category=category)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])
    with in_flight(session.user_id, "add_post"):
        content = await file.read()
        return await run_in_threadpool(
            service.posts.create_post, session.user_id, post_data, file.filename, content, file.content_type
        )


@router.delete("/posts/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Delete one of the creator's posts"""
    service.posts.delete_post(session.user_id, post_id)
    return None


@router.patch("/requests/{request_id}", response_model=ContactRequestResponse)
async def update_request_status(
    request_id: str,
    status_data: ContactRequestStatusUpdate,
    session: SessionContext = Depends(get_creator_session),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Accept or reject a pending contact request"""
    return service.requests.update_status(session.user_id, request_id, status_data.status)


@router.post("/categories/toggle", response_model=CategoryToggleResponse)
async def toggle_category_selection(
    toggle: CategoryToggleRequest,
    session: SessionContext = Depends(get_creator_session),
):
    """Toggle one category in a draft selection; saving the profile persists it"""
    return CategoryToggleResponse(categories=toggle_category(toggle.categories, toggle.category))
