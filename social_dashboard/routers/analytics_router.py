# social_dashboard/routers/analytics_router.py
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.schemas.analytics_schema import AnalyticsReport
from social_dashboard.services.analytics_service import AnalyticsService, ALL_PLATFORMS
from social_dashboard.UAA.session import UserSession

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsReport)
async def get_analytics(
    period: str = "7d",
    platform: str = ALL_PLATFORMS,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    return await AnalyticsService(session).get_analytics(user, period=period, platform=platform)
