# social_dashboard/schemas/post_schema.py
from typing import Optional, List
import uuid
from datetime import datetime

from social_dashboard.models.enums import Platform, MediaType, Orientation, PostStatus
from .base import CamelModel


class PostCreate(CamelModel):
    content: str
    platforms: List[Platform]
    media_type: MediaType = MediaType.image
    orientation: Orientation = Orientation.horizontal
    scheduled_at: Optional[datetime] = None
    media_refs: List[str] = []


class PostUpdate(CamelModel):
    # only fields present in the request body are applied; scheduledAt: null removes the schedule
    content: Optional[str] = None
    platforms: Optional[List[Platform]] = None
    media_type: Optional[MediaType] = None
    orientation: Optional[Orientation] = None
    scheduled_at: Optional[datetime] = None
    media_refs: Optional[List[str]] = None


class PostRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content: str
    media_refs: List[str]
    target_platforms: List[str]
    media_type: str
    orientation: str
    status: PostStatus
    scheduled_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime
