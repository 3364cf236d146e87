# social_dashboard/services/publish_service.py
"""
Publish orchestration: fan one post out to its target platforms and fold the
per-platform outcomes into a single post status.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Sequence, Dict
import uuid

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.errors import AuthenticationError, NotFoundError, ValidationError, PlatformDeliveryError
from social_dashboard.infrastructure.connections_repo import ConnectionsRepository
from social_dashboard.infrastructure.posts_repo import PostsRepository
from social_dashboard.models.enums import PostStatus, MediaType
from social_dashboard.models.platform_connection import PlatformConnection
from social_dashboard.platforms.base import Credentials, PublishOutcome
from social_dashboard.platforms.registry import SenderRegistry, get_registry
from social_dashboard.platforms.rules import check_platform_rules
from social_dashboard.schemas.post_schema import PostCreate
from social_dashboard.services.post_service import PostService, validate_content
from social_dashboard.UAA.session import UserSession
from social_dashboard.UAA.utils import decrypt_token
from social_dashboard.utils.clock import utcnow

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PublishSummary:
    status: str
    published_at: Optional[datetime] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class PublishReport:
    post_id: uuid.UUID
    results: List[PublishOutcome]
    summary: PublishSummary


def aggregate_outcomes(outcomes: Sequence[PublishOutcome], now: datetime) -> PublishSummary:
    """
    Any success publishes the post (partial success included); failures are
    listed as "<platform>: <error>" joined by "; ".
    """
    errors = "; ".join(f"{o.platform}: {o.error}" for o in outcomes if not o.success)
    if any(o.success for o in outcomes):
        return PublishSummary(PostStatus.published.value, published_at=now, error_message=errors or None)
    return PublishSummary(PostStatus.failed.value, error_message=errors or None)


class PublishService:
    def __init__(self, session: AsyncSession, registry: Optional[SenderRegistry] = None):
        self.session = session
        self.posts = PostsRepository(session)
        self.connections = ConnectionsRepository(session)
        self.registry = registry or get_registry()

    async def _deliver(
        self,
        platform: str,
        content: str,
        media: Sequence[str],
        connection: Optional[PlatformConnection],
        now: datetime,
    ) -> PublishOutcome:
        token = decrypt_token(connection.access_token_enc) if connection and connection.connected else None
        if not token:
            return PublishOutcome(platform, False, error=f"{platform} not connected")
        if connection.is_expired(now):
            return PublishOutcome(platform, False, error="token expired")

        violation = check_platform_rules(platform, content, media)
        if violation:
            return PublishOutcome(platform, False, error=violation)

        sender = self.registry.get(platform)
        if sender is None:
            return PublishOutcome(platform, False, error=f"{platform} is not supported")

        try:
            result = await sender.send(content, media, Credentials(access_token=token, meta=connection.meta))
        except PlatformDeliveryError as e:
            logger.warning("publish_platform_failed", platform=platform, error=str(e))
            return PublishOutcome(platform, False, error=str(e))
        except Exception as e:
            logger.exception("publish_platform_error", platform=platform, error=str(e))
            return PublishOutcome(platform, False, error=str(e) or type(e).__name__)

        if not result.success:
            return PublishOutcome(platform, False, error=result.error or "unknown publishing error")
        return PublishOutcome(platform, True, external_post_id=result.external_id)

    async def publish(
        self,
        user: Optional[UserSession],
        post_id: uuid.UUID,
        platforms: Sequence[str],
        content: str,
        media_urls: Sequence[str] = (),
    ) -> PublishReport:
        if user is None:
            raise AuthenticationError()

        platforms = [getattr(p, "value", p) for p in platforms]
        if not platforms:
            raise ValidationError("select at least one platform", details={"field": "platforms"})
        validate_content(content)

        post = await self.posts.get_for_user(post_id, user.user_id)
        if post is None:
            raise NotFoundError("post", post_id)
        if post.status == PostStatus.published.value:
            raise ValidationError("post is already published")

        rows = await self.connections.list_by_user(user.user_id, platforms)
        by_platform: Dict[str, PlatformConnection] = {c.platform: c for c in rows}

        now = utcnow()
        # gather keeps request order; _deliver never raises
        outcomes = list(await asyncio.gather(*(
            self._deliver(platform, content, list(media_urls), by_platform.get(platform), now)
            for platform in platforms
        )))

        summary = aggregate_outcomes(outcomes, utcnow())
        post.status = summary.status
        if summary.published_at is not None:
            post.published_at = summary.published_at
        post.error_message = summary.error_message
        post.updated_at = utcnow()
        await self.posts.save(post)

        logger.info(
            "publish_complete",
            post_id=str(post_id),
            status=summary.status,
            succeeded=[o.platform for o in outcomes if o.success],
            failed=[o.platform for o in outcomes if not o.success],
        )
        return PublishReport(post_id=post.id, results=outcomes, summary=summary)

    async def publish_now(
        self,
        user: Optional[UserSession],
        content: str,
        platforms: Sequence[str],
        media_urls: Sequence[str] = (),
        media_type: MediaType = MediaType.image,
    ) -> PublishReport:
        """Create a draft from the content and publish it straight away."""
        payload = PostCreate(content=content, platforms=list(platforms), media_refs=list(media_urls), media_type=media_type)
        post = await PostService(self.session).create_post(user, payload)
        return await self.publish(user, post.id, post.target_platforms, post.content, media_urls)
