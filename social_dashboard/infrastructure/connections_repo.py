# social_dashboard/infrastructure/connections_repo.py
from typing import Optional, List, Iterable
from datetime import datetime
import uuid

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select

from social_dashboard.models.platform_connection import PlatformConnection
from social_dashboard.utils.clock import utcnow


class ConnectionsRepository:
    """
    Repository for PlatformConnection entity.
    All methods are async and expect an AsyncSession to be injected from the outside.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_platform(self, user_id: uuid.UUID, platform: str) -> Optional[PlatformConnection]:
        q = select(PlatformConnection).where(
            PlatformConnection.user_id == user_id,
            PlatformConnection.platform == platform,
        )
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def list_by_user(self, user_id: uuid.UUID, platforms: Optional[Iterable[str]] = None) -> List[PlatformConnection]:
        q = select(PlatformConnection).where(PlatformConnection.user_id == user_id)
        if platforms is not None:
            q = q.where(PlatformConnection.platform.in_(list(platforms)))
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def upsert_tokens(
        self,
        user_id: uuid.UUID,
        platform: str,
        access_token_enc: str,
        expires_at: Optional[datetime],
        meta: Optional[dict] = None,
    ) -> PlatformConnection:
        """
        Create or refresh the connection for (user, platform) and mark it connected.
        A supplied meta replaces the stored one.
        """
        cp = await self.get_by_user_and_platform(user_id, platform)
        if cp is None:
            cp = PlatformConnection(user_id=user_id, platform=platform)
        cp.connected = True
        cp.access_token_enc = access_token_enc
        cp.token_expires_at = expires_at
        if meta is not None:
            cp.meta = meta
        cp.updated_at = utcnow()
        self.session.add(cp)
        await self.session.commit()
        await self.session.refresh(cp)
        return cp

    async def mark_disconnected(self, cp: PlatformConnection) -> PlatformConnection:
        cp.connected = False
        cp.access_token_enc = None
        cp.token_expires_at = None
        cp.updated_at = utcnow()
        self.session.add(cp)
        await self.session.commit()
        await self.session.refresh(cp)
        return cp
