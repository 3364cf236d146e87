# social_dashboard/services/media_service.py
from typing import Optional, List
import uuid

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.errors import AuthenticationError, NotFoundError, ValidationError
from social_dashboard.infrastructure.media_repo import MediaRepository
from social_dashboard.models.media import MediaAsset
from social_dashboard.schemas.media_schema import MediaCreate
from social_dashboard.UAA.session import UserSession

logger = structlog.get_logger(__name__)

ALLOWED_MEDIA_TYPES = {
    "image/jpeg", "image/png", "image/gif", "image/webp",
    "video/mp4", "video/webm", "video/quicktime",
    "application/pdf",
}
MAX_MEDIA_SIZE = 100 * 1024 * 1024


class MediaService:
    """Metadata of files already uploaded to object storage."""

    def __init__(self, session: AsyncSession):
        self.repo = MediaRepository(session)

    async def register_media(self, user: Optional[UserSession], payload: MediaCreate) -> MediaAsset:
        if user is None:
            raise AuthenticationError()
        if payload.file_type not in ALLOWED_MEDIA_TYPES:
            raise ValidationError(
                "unsupported file type; use JPG, PNG, GIF or WebP images, MP4, WebM or MOV videos, or PDF",
                details={"field": "fileType", "value": payload.file_type},
            )
        if payload.file_size is not None and payload.file_size > MAX_MEDIA_SIZE:
            raise ValidationError("file size exceeds the 100MB limit", details={"field": "fileSize"})

        asset = MediaAsset(user_id=user.user_id, **payload.model_dump())
        asset = await self.repo.create(asset)
        logger.info("media_registered", media_id=str(asset.id), file_type=asset.file_type, size=asset.file_size)
        return asset

    async def list_media(self, user: Optional[UserSession]) -> List[MediaAsset]:
        if user is None:
            raise AuthenticationError()
        return await self.repo.list_by_user(user.user_id)

    async def delete_media(self, user: Optional[UserSession], media_id: uuid.UUID) -> None:
        if user is None:
            raise AuthenticationError()
        asset = await self.repo.get_for_user(media_id, user.user_id)
        if asset is None:
            raise NotFoundError("media", media_id)
        await self.repo.delete(asset)
        logger.info("media_deleted", media_id=str(media_id))
