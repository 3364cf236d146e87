# social_dashboard/services/metrics_source.py
"""
Engagement figures for analytics.

No platform insights API is integrated yet, so the only implementation is
``SyntheticMetricsSource``, which makes plausible numbers from post counts.
A real integration implements ``MetricsSource`` and is passed to
``AnalyticsService``; the aggregation code does not change.
"""
import random
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from social_dashboard.models.post import Post
from social_dashboard.schemas.analytics_schema import Engagement, BestTime


@dataclass(frozen=True)
class BucketMetrics:
    views: int
    engagement: int
    reach: int


class MetricsSource(Protocol):
    def engagement(self, published_count: int) -> Engagement:
        ...

    def buckets(self, totals: Engagement, bucket_starts: List[datetime]) -> List[BucketMetrics]:
        ...

    def platform_engagement(self, platform: str, post: Post) -> int:
        ...

    def post_metrics(self, post: Post) -> Tuple[int, int]:
        """(engagement, views) of one published post."""
        ...

    def best_times(self) -> List[BestTime]:
        ...


BEST_TIMES = [
    ("Tuesday", "11:00", 85),
    ("Wednesday", "09:00", 82),
    ("Thursday", "14:00", 78),
    ("Friday", "10:00", 75),
    ("Monday", "12:00", 72),
]


class SyntheticMetricsSource:
    """Placeholder numbers; pass a seeded ``random.Random`` for repeatable output."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def engagement(self, published_count: int) -> Engagement:
        rng = self.rng
        views = published_count * 150 + rng.randrange(500)
        likes = int(views * (0.05 + rng.random() * 0.1))
        comments = int(likes * (0.1 + rng.random() * 0.2))
        shares = int(likes * (0.05 + rng.random() * 0.15))
        reach = int(views * (1.2 + rng.random() * 0.5))
        rate = (likes + comments + shares) / views * 100 if views else 0.0
        return Engagement(
            views=views,
            likes=likes,
            comments=comments,
            shares=shares,
            reach=reach,
            engagement_rate=f"{rate:.2f}",
            growth=f"{(rng.random() - 0.3) * 20:.1f}",  # -6% .. +14%
        )

    def buckets(self, totals: Engagement, bucket_starts: List[datetime]) -> List[BucketMetrics]:
        n = len(bucket_starts)
        if n == 0:
            return []
        points = []
        for _ in bucket_starts:
            multiplier = 0.5 + self.rng.random()
            points.append(BucketMetrics(
                views=int(totals.views / n * multiplier),
                engagement=int((totals.likes + totals.comments) / n * multiplier),
                reach=int(totals.reach / n * multiplier),
            ))
        return points

    def platform_engagement(self, platform: str, post: Post) -> int:
        return int(self.rng.random() * 500 + 100)

    def post_metrics(self, post: Post) -> Tuple[int, int]:
        return int(self.rng.random() * 1000 + 200), int(self.rng.random() * 5000 + 500)

    def best_times(self) -> List[BestTime]:
        return [BestTime(day=d, time=t, engagement=e) for d, t, e in BEST_TIMES]
