# social_dashboard/routers/post_router.py
from datetime import date
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.schemas.post_schema import PostCreate, PostUpdate, PostRead
from social_dashboard.services.post_service import PostService
from social_dashboard.UAA.session import UserSession

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await PostService(session).create_post(user, payload)


@router.get("", response_model=List[PostRead])
async def list_posts(
    day: Optional[date] = None,
    upcoming: bool = False,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await PostService(session).list_posts(user, day=day, upcoming=upcoming, limit=limit)


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: uuid.UUID,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await PostService(session).get_post(user, post_id)


@router.patch("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: uuid.UUID,
    payload: PostUpdate,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await PostService(session).update_post(user, post_id, payload)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: uuid.UUID,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    await PostService(session).delete_post(user, post_id)
