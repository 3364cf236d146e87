# social_dashboard/schemas/media_schema.py
from typing import Optional
import uuid
from datetime import datetime

from .base import CamelModel


class MediaCreate(CamelModel):
    name: str
    file_url: str
    file_type: str
    file_size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None


class MediaRead(MediaCreate):
    id: uuid.UUID
    created_at: datetime
