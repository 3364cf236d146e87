# social_dashboard/platforms/base.py
"""Sender protocol and the data classes exchanged with platform senders."""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class Credentials:
    """Decrypted credentials of one platform connection."""

    access_token: str
    meta: Optional[dict] = None


@dataclass(frozen=True)
class SendResult:
    success: bool
    external_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PublishOutcome:
    """Result of one publish attempt on one platform."""

    platform: str
    success: bool
    external_post_id: Optional[str] = None
    error: Optional[str] = None


@runtime_checkable
class PlatformSender(Protocol):
    """Delivers content to one platform. May raise; the publisher catches everything."""

    async def send(self, content: str, media: Sequence[str], credentials: Credentials) -> SendResult:
        ...
