# social_dashboard/schemas/publish_schema.py
from typing import Optional, List
import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from social_dashboard.models.enums import Platform, MediaType
from .base import CamelModel


class PublishRequest(CamelModel):
    post_id: uuid.UUID
    platforms: List[Platform] = Field(min_length=1)
    content: str = Field(min_length=1)
    media_urls: List[str] = []


class PublishNowRequest(CamelModel):
    content: str = Field(min_length=1)
    platforms: List[Platform] = Field(min_length=1)
    media_urls: List[str] = []
    media_type: MediaType = MediaType.image


class PublishResultRead(CamelModel):
    platform: str
    success: bool
    external_post_id: Optional[str] = None
    error: Optional[str] = None
    suggestion: Optional[str] = None


class PublishSummaryRead(BaseModel):
    # snake_case on the wire, like the post record columns it mirrors
    status: str
    published_at: Optional[datetime] = None
    error_message: Optional[str] = None


class PublishResponse(CamelModel):
    post_id: uuid.UUID
    results: List[PublishResultRead]
    summary: PublishSummaryRead
