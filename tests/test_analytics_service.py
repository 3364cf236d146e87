"""
Analytics aggregation over stored posts, with the synthetic metrics source.
"""
import random
from datetime import timedelta

import pytest

from social_dashboard.errors import AuthenticationError
from social_dashboard.infrastructure.posts_repo import PostsRepository
from social_dashboard.models.post import Post
from social_dashboard.services.analytics_service import (
    AnalyticsService, PERIODS, bucket_starts, summarize_posts, filter_posts,
)
from social_dashboard.services.metrics_source import SyntheticMetricsSource
from social_dashboard.utils.clock import utcnow


async def _seed(session, user, statuses, age=timedelta(hours=1), platforms=("twitter",)):
    repo = PostsRepository(session)
    now = utcnow()
    posts = []
    for i, status in enumerate(statuses):
        post = Post(
            user_id=user.user_id,
            content=f"post {i} " + "x" * 150,
            target_platforms=list(platforms),
            status=status,
            published_at=now - age if status == "published" else None,
            created_at=now - age,
        )
        posts.append(await repo.create(post))
    return posts


def _service(session):
    return AnalyticsService(session, metrics=SyntheticMetricsSource(random.Random(7)))


class TestOverview:

    async def test_ten_posts_six_published(self, session, user):
        statuses = ["published"] * 6 + ["scheduled"] * 2 + ["failed", "draft"]
        await _seed(session, user, statuses)

        report = await _service(session).get_analytics(user, "7d", "all")

        assert report.overview.total_posts == 10
        assert report.overview.published_posts == 6
        assert report.overview.scheduled_posts == 2
        assert report.overview.failed_posts == 1
        assert report.overview.draft_posts == 1
        assert report.overview.publish_rate == "60.0"

    async def test_no_posts(self, session, user):
        report = await _service(session).get_analytics(user, "7d", "all")
        assert report.overview.total_posts == 0
        assert report.overview.publish_rate == 0
        assert report.top_content == []
        assert report.platform_breakdown == {}

    async def test_posts_outside_window_ignored(self, session, user):
        await _seed(session, user, ["published"], age=timedelta(days=10))
        await _seed(session, user, ["draft"])
        report = await _service(session).get_analytics(user, "7d", "all")
        assert report.overview.total_posts == 1
        assert report.overview.publish_rate == "0.0"

    async def test_platform_filter(self, session, user):
        await _seed(session, user, ["published", "draft"], platforms=("twitter",))
        await _seed(session, user, ["published"], platforms=("linkedin", "facebook"))
        report = await _service(session).get_analytics(user, "30d", "linkedin")
        assert report.overview.total_posts == 1
        assert set(report.platform_breakdown) == {"linkedin", "facebook"}

    async def test_only_own_posts(self, session, user, other_user):
        await _seed(session, other_user, ["published"] * 3)
        report = await _service(session).get_analytics(user, "7d")
        assert report.overview.total_posts == 0


class TestReportShape:

    @pytest.mark.parametrize("period,count", [("24h", 24), ("7d", 7), ("30d", 30), ("90d", 90)])
    async def test_chart_bucket_count(self, session, user, period, count):
        report = await _service(session).get_analytics(user, period)
        assert len(report.chart_data) == count
        stamps = [p.timestamp for p in report.chart_data]
        assert stamps == sorted(stamps)
        assert report.period == period

    async def test_hourly_labels(self, session, user):
        report = await _service(session).get_analytics(user, "24h")
        assert all(p.name.endswith(":00") for p in report.chart_data)

    async def test_top_content(self, session, user):
        await _seed(session, user, ["published"] * 7 + ["draft"])
        report = await _service(session).get_analytics(user, "7d")
        assert len(report.top_content) == 5
        assert all(len(item.content) <= 100 for item in report.top_content)
        assert all(item.published_at is not None for item in report.top_content)

    async def test_breakdown_counts(self, session, user):
        await _seed(session, user, ["published", "draft"], platforms=("twitter", "facebook"))
        report = await _service(session).get_analytics(user, "7d")
        assert report.platform_breakdown["twitter"].posts == 2
        assert report.platform_breakdown["facebook"].posts == 2

    async def test_best_times_and_growth(self, session, user):
        report = await _service(session).get_analytics(user, "7d")
        assert report.best_times[0].day == "Tuesday"
        float(report.engagement.growth)
        assert report.generated_at <= utcnow()

    async def test_camel_case_json(self, session, user):
        report = await _service(session).get_analytics(user, "7d")
        body = report.model_dump(by_alias=True)
        assert {"overview", "engagement", "chartData", "platformBreakdown", "topContent", "bestTimes", "generatedAt"} <= set(body)
        assert "publishRate" in body["overview"]
        assert "engagementRate" in body["engagement"]


class TestErrors:

    async def test_unknown_period_falls_back_to_week(self, session, user):
        await _seed(session, user, ["published"], age=timedelta(days=3))
        await _seed(session, user, ["draft"], age=timedelta(days=10))

        report = await _service(session).get_analytics(user, "1y")

        assert len(report.chart_data) == 7
        assert report.overview.total_posts == 1
        assert report.period == "1y"

    async def test_requires_session(self, session):
        with pytest.raises(AuthenticationError):
            await _service(session).get_analytics(None)


class TestHelpers:

    def test_summarize_is_order_independent(self):
        posts = [Post(user_id=None, content="a", status=s) for s in ("published", "draft", "published")]
        assert summarize_posts(posts) == summarize_posts(list(reversed(posts)))
        assert summarize_posts(posts).publish_rate == "66.7"

    def test_bucket_starts_end_at_now(self):
        now = utcnow()
        starts = bucket_starts(now, PERIODS["7d"])
        assert starts[-1] == now
        assert starts[0] == now - timedelta(days=6)

    def test_filter_posts_window_is_inclusive(self):
        start = utcnow()
        post = Post(user_id=None, content="a", created_at=start, target_platforms=["twitter"])
        assert filter_posts([post], start) == [post]
        assert filter_posts([post], start, "facebook") == []


class TestSyntheticMetrics:

    def test_zero_views_has_zero_rate(self):
        class ZeroRandom(random.Random):
            def randrange(self, *args, **kwargs):
                return 0

        engagement = SyntheticMetricsSource(ZeroRandom(1)).engagement(0)
        assert engagement.views == 0
        assert engagement.engagement_rate == "0.00"

    def test_seeded_source_is_repeatable(self):
        a = SyntheticMetricsSource(random.Random(3)).engagement(4)
        b = SyntheticMetricsSource(random.Random(3)).engagement(4)
        assert a == b
        assert a.views >= 600
