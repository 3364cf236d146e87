# social_dashboard/routers/platforms_router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.models.enums import Platform
from social_dashboard.models.platform_connection import PlatformConnection
from social_dashboard.schemas.platform_schema import ConnectionUpsert, ConnectionRead
from social_dashboard.services.connection_service import ConnectionService
from social_dashboard.UAA.session import UserSession
from social_dashboard.utils.clock import utcnow

router = APIRouter(prefix="/platforms", tags=["platforms"])


def to_read(cp: PlatformConnection) -> ConnectionRead:
    return ConnectionRead(
        platform=cp.platform,
        connected=cp.connected,
        token_expires_at=cp.token_expires_at,
        expired=cp.is_expired(utcnow()),
        meta=cp.meta,
        updated_at=cp.updated_at,
    )


@router.get("", response_model=List[ConnectionRead])
async def list_connections(
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return [to_read(cp) for cp in await ConnectionService(session).list_connections(user)]


@router.put("/{platform}", response_model=ConnectionRead)
async def connect_platform(
    platform: Platform,
    payload: ConnectionUpsert,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return to_read(await ConnectionService(session).connect(user, platform.value, payload))


@router.delete("/{platform}", response_model=ConnectionRead)
async def disconnect_platform(
    platform: Platform,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return to_read(await ConnectionService(session).disconnect(user, platform.value))
