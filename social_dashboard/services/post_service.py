# social_dashboard/services/post_service.py
from datetime import date, datetime
from typing import Optional, List, Sequence
import uuid

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.errors import AuthenticationError, NotFoundError, ValidationError
from social_dashboard.infrastructure.posts_repo import PostsRepository
from social_dashboard.models.enums import PostStatus
from social_dashboard.models.post import Post, CONTENT_MAX_LENGTH
from social_dashboard.schemas.post_schema import PostCreate, PostUpdate
from social_dashboard.UAA.session import UserSession
from social_dashboard.utils.clock import utcnow, to_naive_utc

logger = structlog.get_logger(__name__)

DEFAULT_UPCOMING_LIMIT = 10


def validate_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationError("content is required", details={"field": "content"})
    if len(content) > CONTENT_MAX_LENGTH:
        raise ValidationError(
            f"content must be at most {CONTENT_MAX_LENGTH} characters",
            details={"field": "content", "length": len(content)},
        )
    return content.strip()


def validate_platforms(platforms: Optional[Sequence]) -> List[str]:
    if not platforms:
        raise ValidationError("select at least one platform", details={"field": "platforms"})
    # keep first occurrence order, drop duplicates
    return list(dict.fromkeys(getattr(p, "value", p) for p in platforms))


def validate_schedule(scheduled_at: Optional[datetime], now: datetime) -> Optional[datetime]:
    scheduled_at = to_naive_utc(scheduled_at)
    if scheduled_at is not None and scheduled_at <= now:
        raise ValidationError("date must be in the future", details={"field": "scheduledAt"})
    return scheduled_at


def _require(user: Optional[UserSession]) -> UserSession:
    if user is None:
        raise AuthenticationError()
    return user


class PostService:
    def __init__(self, session: AsyncSession):
        self.repo = PostsRepository(session)

    async def create_post(self, user: Optional[UserSession], payload: PostCreate) -> Post:
        user = _require(user)
        now = utcnow()
        content = validate_content(payload.content)
        platforms = validate_platforms(payload.platforms)
        scheduled_at = validate_schedule(payload.scheduled_at, now)

        status = PostStatus.scheduled if scheduled_at else PostStatus.draft
        post = Post(
            user_id=user.user_id,
            content=content,
            media_refs=list(payload.media_refs),
            target_platforms=platforms,
            media_type=payload.media_type.value,
            orientation=payload.orientation.value,
            status=status.value,
            scheduled_at=scheduled_at,
            created_at=now,
            updated_at=now,
        )
        post = await self.repo.create(post)
        logger.info("post_created", post_id=str(post.id), user_id=str(user.user_id), status=post.status)
        return post

    async def get_post(self, user: Optional[UserSession], post_id: uuid.UUID) -> Post:
        user = _require(user)
        post = await self.repo.get_for_user(post_id, user.user_id)
        if post is None:
            raise NotFoundError("post", post_id)
        return post

    async def update_post(self, user: Optional[UserSession], post_id: uuid.UUID, payload: PostUpdate) -> Post:
        """
        Apply only the fields present in the payload. A present scheduledAt
        recomputes the status (value => scheduled, null => draft). Published
        posts are read-only.
        """
        post = await self.get_post(user, post_id)
        fields = payload.model_dump(exclude_unset=True)
        if fields and post.status == PostStatus.published.value:
            raise ValidationError("published posts cannot be edited", details={"postId": str(post_id)})
        now = utcnow()

        # validate everything before touching the record
        changes = {}
        if "content" in fields:
            changes["content"] = validate_content(fields["content"])
        if "platforms" in fields:
            changes["target_platforms"] = validate_platforms(payload.platforms)
        if "media_refs" in fields:
            changes["media_refs"] = list(fields["media_refs"] or [])
        if fields.get("media_type") is not None:
            changes["media_type"] = payload.media_type.value
        if fields.get("orientation") is not None:
            changes["orientation"] = payload.orientation.value
        if "scheduled_at" in fields:
            scheduled_at = validate_schedule(fields["scheduled_at"], now)
            changes["scheduled_at"] = scheduled_at
            changes["status"] = (PostStatus.scheduled if scheduled_at else PostStatus.draft).value

        for name, value in changes.items():
            setattr(post, name, value)
        post.updated_at = now
        post = await self.repo.save(post)
        logger.info("post_updated", post_id=str(post.id), fields=sorted(changes), status=post.status)
        return post

    async def delete_post(self, user: Optional[UserSession], post_id: uuid.UUID) -> None:
        post = await self.get_post(user, post_id)
        await self.repo.delete(post)
        logger.info("post_deleted", post_id=str(post_id))

    async def list_posts(
        self,
        user: Optional[UserSession],
        day: Optional[date] = None,
        upcoming: bool = False,
        limit: Optional[int] = None,
    ) -> List[Post]:
        user = _require(user)
        posts = await self.repo.list_by_user(user.user_id)

        if day is not None:
            posts = [p for p in posts if p.effective_date().date() == day]

        if upcoming:
            now = utcnow()
            posts = [
                p for p in posts
                if p.status == PostStatus.scheduled.value and p.scheduled_at is not None and p.scheduled_at > now
            ]
            posts.sort(key=lambda p: p.scheduled_at)
            limit = DEFAULT_UPCOMING_LIMIT if limit is None else limit

        if limit is not None:
            posts = posts[:limit]
        return posts
