# social_dashboard/infrastructure/ai_gateway_client.py
import os
from typing import List, Optional

import httpx
import structlog

from social_dashboard.errors import UpstreamServiceError, RateLimitedError, QuotaExceededError

logger = structlog.get_logger(__name__)

AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
AI_GATEWAY_API_KEY = os.getenv("AI_GATEWAY_API_KEY", "")
AI_MODEL = os.getenv("AI_MODEL", "google/gemini-3-flash-preview")
AI_TIMEOUT = int(os.getenv("AI_TIMEOUT", "60"))


class AIGatewayClient:
    """
    Client for an OpenAI-compatible chat completions endpoint.
    The gateway is an opaque text service: messages in, one completion out.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: int = AI_TIMEOUT,
    ):
        self.api_key = api_key if api_key is not None else AI_GATEWAY_API_KEY
        self.url = url or AI_GATEWAY_URL
        self.model = model or AI_MODEL
        self.timeout = timeout

    async def complete(self, messages: List[dict]) -> str:
        if not self.api_key:
            raise UpstreamServiceError("AI_GATEWAY_API_KEY is not configured", code="CONFIGURATION_ERROR")

        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {"model": self.model, "messages": messages}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.warning("ai_gateway_unreachable", error=str(e))
            raise UpstreamServiceError(f"AI gateway unreachable: {e}")

        if response.status_code == 429:
            raise RateLimitedError()
        if response.status_code == 402:
            raise QuotaExceededError()
        if response.status_code >= 400:
            logger.error("ai_gateway_error", status=response.status_code, body=response.text[:500])
            raise UpstreamServiceError(f"AI gateway error: {response.status_code}")

        data = response.json()
        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or ""
