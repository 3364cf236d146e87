# social_dashboard/models/platform_connection.py
from sqlmodel import SQLModel, Field, Column
from typing import Optional
from datetime import datetime
import uuid
from sqlalchemy import String, JSON

from social_dashboard.utils.clock import utcnow


class PlatformConnection(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    platform: str = Field(sa_column=Column(String, index=True))
    connected: bool = Field(default=False)
    access_token_enc: Optional[str] = None
    token_expires_at: Optional[datetime] = None
    meta: Optional[dict] = Field(sa_column=Column(JSON), default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: datetime) -> bool:
        return self.token_expires_at is not None and self.token_expires_at < now
