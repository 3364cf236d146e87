# social_dashboard/services/analytics_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Sequence

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.errors import AuthenticationError
from social_dashboard.infrastructure.posts_repo import PostsRepository
from social_dashboard.models.enums import PostStatus
from social_dashboard.models.post import Post
from social_dashboard.schemas.analytics_schema import (
    AnalyticsReport, Overview, ChartPoint, PlatformStats, TopContentItem,
)
from social_dashboard.services.metrics_source import MetricsSource, SyntheticMetricsSource
from social_dashboard.UAA.session import UserSession
from social_dashboard.utils.clock import utcnow

logger = structlog.get_logger(__name__)

ALL_PLATFORMS = "all"
DEFAULT_PERIOD = "7d"
TOP_CONTENT_LIMIT = 5
TOP_CONTENT_PREVIEW_CHARS = 100


@dataclass(frozen=True)
class PeriodSpec:
    window: timedelta
    buckets: int
    hourly: bool = False


PERIODS: Dict[str, PeriodSpec] = {
    "24h": PeriodSpec(timedelta(days=1), 24, hourly=True),
    "7d": PeriodSpec(timedelta(days=7), 7),
    "30d": PeriodSpec(timedelta(days=30), 30),
    "90d": PeriodSpec(timedelta(days=90), 90),
}


def filter_posts(posts: Sequence[Post], start: datetime, platform: str = ALL_PLATFORMS) -> List[Post]:
    in_window = [p for p in posts if p.created_at >= start]
    if platform == ALL_PLATFORMS:
        return in_window
    return [p for p in in_window if platform in (p.target_platforms or [])]


def summarize_posts(posts: Sequence[Post]) -> Overview:
    counts = {status.value: 0 for status in PostStatus}
    for post in posts:
        counts[post.status] = counts.get(post.status, 0) + 1
    total = len(posts)
    published = counts[PostStatus.published.value]
    return Overview(
        total_posts=total,
        published_posts=published,
        scheduled_posts=counts[PostStatus.scheduled.value],
        failed_posts=counts[PostStatus.failed.value],
        draft_posts=counts[PostStatus.draft.value],
        publish_rate=f"{published / total * 100:.1f}" if total else 0,
    )


def bucket_starts(now: datetime, spec: PeriodSpec) -> List[datetime]:
    """Oldest first; the last bucket is the current hour/day."""
    step = timedelta(hours=1) if spec.hourly else timedelta(days=1)
    return [now - step * i for i in range(spec.buckets - 1, -1, -1)]


def bucket_label(moment: datetime, hourly: bool) -> str:
    return moment.strftime("%H:00") if hourly else moment.strftime("%a %d")


class AnalyticsService:
    def __init__(self, session: AsyncSession, metrics: Optional[MetricsSource] = None):
        self.repo = PostsRepository(session)
        self.metrics = metrics or SyntheticMetricsSource()

    async def get_analytics(
        self,
        user: Optional[UserSession],
        period: str = DEFAULT_PERIOD,
        platform: str = ALL_PLATFORMS,
    ) -> AnalyticsReport:
        if user is None:
            raise AuthenticationError()
        # unknown periods fall back to the weekly view
        spec = PERIODS.get(period, PERIODS[DEFAULT_PERIOD])

        now = utcnow()
        posts = await self.repo.list_by_user(user.user_id)
        posts = filter_posts(posts, now - spec.window, platform)

        overview = summarize_posts(posts)
        engagement = self.metrics.engagement(overview.published_posts)

        starts = bucket_starts(now, spec)
        chart_data = [
            ChartPoint(
                name=bucket_label(start, spec.hourly),
                timestamp=start,
                views=m.views,
                engagement=m.engagement,
                reach=m.reach,
            )
            for start, m in zip(starts, self.metrics.buckets(engagement, starts))
        ]

        breakdown: Dict[str, PlatformStats] = {}
        for post in posts:
            for name in post.target_platforms or []:
                stats = breakdown.setdefault(name, PlatformStats(posts=0, engagement=0))
                stats.posts += 1
                stats.engagement += self.metrics.platform_engagement(name, post)

        top_content = []
        for post in [p for p in posts if p.status == PostStatus.published.value][:TOP_CONTENT_LIMIT]:
            post_engagement, views = self.metrics.post_metrics(post)
            top_content.append(TopContentItem(
                id=post.id,
                content=post.content[:TOP_CONTENT_PREVIEW_CHARS],
                platforms=list(post.target_platforms or []),
                engagement=post_engagement,
                views=views,
                published_at=post.published_at,
            ))

        logger.info("analytics_generated", user_id=str(user.user_id), period=period, platform=platform, posts=len(posts))
        return AnalyticsReport(
            overview=overview,
            engagement=engagement,
            chart_data=chart_data,
            platform_breakdown=breakdown,
            top_content=top_content,
            best_times=self.metrics.best_times(),
            period=period,
            generated_at=now,
        )
