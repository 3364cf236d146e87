# social_dashboard/schemas/platform_schema.py
from typing import Optional
from datetime import datetime

from pydantic import Field

from .base import CamelModel


class ConnectionUpsert(CamelModel):
    access_token: str = Field(min_length=1)
    expires_in: Optional[int] = Field(default=None, gt=0)  # seconds
    meta: Optional[dict] = None


class ConnectionRead(CamelModel):
    platform: str
    connected: bool
    token_expires_at: Optional[datetime] = None
    expired: bool = False
    meta: Optional[dict] = None
    updated_at: datetime
