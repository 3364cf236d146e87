# social_dashboard/models/media.py
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
import uuid

from social_dashboard.utils.clock import utcnow


class MediaAsset(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    name: str
    file_url: str  # public URL in object storage
    file_type: str
    file_size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    created_at: datetime = Field(default_factory=utcnow)
