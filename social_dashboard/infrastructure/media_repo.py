# social_dashboard/infrastructure/media_repo.py
from typing import Optional, List
import uuid

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select

from social_dashboard.models.media import MediaAsset


class MediaRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, asset: MediaAsset) -> MediaAsset:
        self.session.add(asset)
        await self.session.commit()
        await self.session.refresh(asset)
        return asset

    async def get_for_user(self, media_id: uuid.UUID, user_id: uuid.UUID) -> Optional[MediaAsset]:
        q = select(MediaAsset).where(MediaAsset.id == media_id, MediaAsset.user_id == user_id)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def list_by_user(self, user_id: uuid.UUID) -> List[MediaAsset]:
        q = select(MediaAsset).where(MediaAsset.user_id == user_id).order_by(MediaAsset.created_at.desc())
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def delete(self, asset: MediaAsset) -> None:
        await self.session.delete(asset)
        await self.session.commit()
