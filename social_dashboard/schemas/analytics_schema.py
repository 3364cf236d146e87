# social_dashboard/schemas/analytics_schema.py
from typing import Optional, List, Dict, Union
from datetime import datetime
import uuid

from .base import CamelModel


class Overview(CamelModel):
    total_posts: int
    published_posts: int
    scheduled_posts: int
    failed_posts: int
    draft_posts: int
    publish_rate: Union[str, int]  # "60.0", or 0 when there are no posts


class Engagement(CamelModel):
    views: int
    likes: int
    comments: int
    shares: int
    reach: int
    engagement_rate: str
    growth: str


class ChartPoint(CamelModel):
    name: str
    timestamp: datetime
    views: int
    engagement: int
    reach: int


class PlatformStats(CamelModel):
    posts: int
    engagement: int


class TopContentItem(CamelModel):
    id: uuid.UUID
    content: str
    platforms: List[str]
    engagement: int
    views: int
    published_at: Optional[datetime] = None


class BestTime(CamelModel):
    day: str
    time: str
    engagement: int


class AnalyticsReport(CamelModel):
    overview: Overview
    engagement: Engagement
    chart_data: List[ChartPoint]
    platform_breakdown: Dict[str, PlatformStats]
    top_content: List[TopContentItem]
    best_times: List[BestTime]
    period: str
    generated_at: datetime
