# social_dashboard/routers/content_router.py
from fastapi import APIRouter, Depends

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.schemas.content_schema import ContentRequest, GeneratedContent
from social_dashboard.services.content_service import ContentGenerator
from social_dashboard.UAA.session import UserSession

router = APIRouter(prefix="/content", tags=["content"])


def get_generator() -> ContentGenerator:
    return ContentGenerator()


@router.post("/generate", response_model=GeneratedContent)
async def generate_content(
    payload: ContentRequest,
    generator: ContentGenerator = Depends(get_generator),
    user: UserSession = Depends(get_current_session),
):
    return await generator.generate(payload.topic, payload.platforms, payload.tone, payload.language)
