# social_dashboard/models/post.py
from sqlmodel import SQLModel, Field, Column
from typing import Optional, List
import uuid
from datetime import datetime
from sqlalchemy import String, JSON

from social_dashboard.utils.clock import utcnow

CONTENT_MAX_LENGTH = 5000


class Post(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    content: str
    media_refs: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    target_platforms: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    media_type: str = Field(default="image")
    orientation: str = Field(default="horizontal")  # only meaningful for video/story
    status: str = Field(sa_column=Column(String, index=True), default="draft")  # draft, scheduled, published, failed
    scheduled_at: Optional[datetime] = Field(default=None, index=True)
    published_at: Optional[datetime] = Field(default=None)
    error_message: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def effective_date(self) -> datetime:
        """Date the post is shown under on the calendar."""
        return self.scheduled_at or self.published_at or self.created_at
