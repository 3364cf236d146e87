# social_dashboard/services/content_service.py
import re
from typing import Optional, Sequence

import structlog

from social_dashboard.errors import ValidationError
from social_dashboard.infrastructure.ai_gateway_client import AIGatewayClient
from social_dashboard.schemas.content_schema import GeneratedContent

logger = structlog.get_logger(__name__)

DEFAULT_TONE = "professional but approachable"

_POST_RE = re.compile(r"POST:\s*(.+?)(?=HASHTAGS:|$)", re.S)
_HASHTAGS_RE = re.compile(r"HASHTAGS:\s*(.+?)(?=CTA:|$)", re.S)
_CTA_RE = re.compile(r"CTA:\s*(.+?)$", re.S)


def build_messages(topic: str, platforms: Optional[Sequence[str]], tone: Optional[str], language: str) -> list:
    platforms_text = f"for the platforms: {', '.join(platforms)}" if platforms else "for social media"
    system_prompt = (
        "You are a digital marketing specialist who writes social media content.\n"
        "Write engaging content, optimized for engagement and suited to each platform.\n"
        "Always include a call to action when appropriate.\n"
        f"Answer ONLY in {language}."
    )
    user_prompt = (
        f'Write a post {platforms_text} about the following topic: "{topic}"\n\n'
        f"Desired tone: {tone or DEFAULT_TONE}\n\n"
        "Include:\n"
        "1. Main post text (at most 280 characters for Twitter/X, up to 2200 for the others)\n"
        "2. 5-10 relevant hashtags\n"
        "3. One call-to-action suggestion\n\n"
        "Format the answer like this:\n"
        "POST: [post text]\n"
        "HASHTAGS: [space separated hashtags]\n"
        "CTA: [suggested call to action]"
    )
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def parse_generated(text: str) -> GeneratedContent:
    post = _POST_RE.search(text)
    hashtags = _HASHTAGS_RE.search(text)
    cta = _CTA_RE.search(text)
    return GeneratedContent(
        post=(post.group(1).strip() if post else "") or text,
        hashtags=hashtags.group(1).strip() if hashtags else "",
        cta=cta.group(1).strip() if cta else "",
        raw=text,
    )


class ContentGenerator:
    def __init__(self, client: Optional[AIGatewayClient] = None):
        self.client = client or AIGatewayClient()

    async def generate(
        self,
        topic: str,
        platforms: Optional[Sequence[str]] = None,
        tone: Optional[str] = None,
        language: str = "pt-BR",
    ) -> GeneratedContent:
        if not topic or not topic.strip():
            raise ValidationError("topic is required", details={"field": "topic"})

        text = await self.client.complete(build_messages(topic.strip(), platforms, tone, language))
        logger.info("content_generated", topic=topic[:80], chars=len(text))
        return parse_generated(text)
