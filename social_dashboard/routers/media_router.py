# social_dashboard/routers/media_router.py
from typing import List
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.schemas.media_schema import MediaCreate, MediaRead
from social_dashboard.services.media_service import MediaService
from social_dashboard.UAA.session import UserSession

router = APIRouter(prefix="/media", tags=["media"])


@router.post("", response_model=MediaRead, status_code=status.HTTP_201_CREATED)
async def register_media(
    payload: MediaCreate,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await MediaService(session).register_media(user, payload)


@router.get("", response_model=List[MediaRead])
async def list_media(
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await MediaService(session).list_media(user)


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    media_id: uuid.UUID,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    await MediaService(session).delete_media(user, media_id)
