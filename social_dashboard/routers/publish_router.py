# social_dashboard/routers/publish_router.py
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.schemas.publish_schema import (
    PublishRequest, PublishNowRequest, PublishResponse, PublishResultRead, PublishSummaryRead,
)
from social_dashboard.services.publish_service import PublishService, PublishReport
from social_dashboard.services.suggestions import suggest_fix
from social_dashboard.UAA.session import UserSession

router = APIRouter(prefix="/publish", tags=["publish"])


def to_response(report: PublishReport) -> PublishResponse:
    results = [
        PublishResultRead(
            platform=o.platform,
            success=o.success,
            external_post_id=o.external_post_id,
            error=o.error,
            suggestion=None if o.success else suggest_fix(o.error),
        )
        for o in report.results
    ]
    summary = PublishSummaryRead(
        status=report.summary.status,
        published_at=report.summary.published_at,
        error_message=report.summary.error_message,
    )
    return PublishResponse(post_id=report.post_id, results=results, summary=summary)


@router.post("", response_model=PublishResponse, response_model_exclude_none=True)
async def publish(
    payload: PublishRequest,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    report = await PublishService(session).publish(
        user, payload.post_id, payload.platforms, payload.content, payload.media_urls,
    )
    return to_response(report)


@router.post("/now", response_model=PublishResponse, response_model_exclude_none=True)
async def publish_now(
    payload: PublishNowRequest,
    session: AsyncSession = Depends(get_session_dep),
    user: UserSession = Depends(get_current_session),
):
    report = await PublishService(session).publish_now(
        user, payload.content, payload.platforms, payload.media_urls, payload.media_type,
    )
    return to_response(report)
