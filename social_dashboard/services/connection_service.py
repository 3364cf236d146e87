# social_dashboard/services/connection_service.py
from datetime import timedelta
from typing import Optional, List

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.errors import AuthenticationError, NotFoundError
from social_dashboard.infrastructure.connections_repo import ConnectionsRepository
from social_dashboard.models.platform_connection import PlatformConnection
from social_dashboard.schemas.platform_schema import ConnectionUpsert
from social_dashboard.UAA.session import UserSession
from social_dashboard.UAA.utils import encrypt_token
from social_dashboard.utils.clock import utcnow

logger = structlog.get_logger(__name__)


class ConnectionService:
    def __init__(self, session: AsyncSession):
        self.repo = ConnectionsRepository(session)

    async def list_connections(self, user: Optional[UserSession]) -> List[PlatformConnection]:
        if user is None:
            raise AuthenticationError()
        return await self.repo.list_by_user(user.user_id)

    async def connect(self, user: Optional[UserSession], platform: str, payload: ConnectionUpsert) -> PlatformConnection:
        if user is None:
            raise AuthenticationError()
        expires_at = utcnow() + timedelta(seconds=payload.expires_in) if payload.expires_in else None
        cp = await self.repo.upsert_tokens(
            user.user_id,
            platform,
            encrypt_token(payload.access_token),
            expires_at,
            meta=payload.meta,
        )
        logger.info("platform_connected", user_id=str(user.user_id), platform=platform, expires_at=expires_at)
        return cp

    async def disconnect(self, user: Optional[UserSession], platform: str) -> PlatformConnection:
        if user is None:
            raise AuthenticationError()
        cp = await self.repo.get_by_user_and_platform(user.user_id, platform)
        if cp is None:
            raise NotFoundError("connection", platform)
        cp = await self.repo.mark_disconnected(cp)
        logger.info("platform_disconnected", user_id=str(user.user_id), platform=platform)
        return cp
