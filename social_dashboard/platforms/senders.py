# social_dashboard/platforms/senders.py
import asyncio
import os
import random
import secrets
import time
from typing import Optional, Sequence

import structlog

from social_dashboard.errors import PlatformDeliveryError
from social_dashboard.infrastructure.telegram_bot_client import TelegramBotClient, TelegramBotError
from .base import Credentials, SendResult

logger = structlog.get_logger(__name__)

SIMULATED_SEND_MIN_DELAY = float(os.getenv("SIMULATED_SEND_MIN_DELAY", "0.5"))
SIMULATED_SEND_MAX_DELAY = float(os.getenv("SIMULATED_SEND_MAX_DELAY", "1.5"))


class SimulatedSender:
    """
    Stand-in for a real platform API: waits a little and returns a mock post id.
    """

    def __init__(self, platform: str, min_delay: Optional[float] = None, max_delay: Optional[float] = None):
        self.platform = platform
        self.min_delay = SIMULATED_SEND_MIN_DELAY if min_delay is None else min_delay
        self.max_delay = SIMULATED_SEND_MAX_DELAY if max_delay is None else max_delay

    async def send(self, content: str, media: Sequence[str], credentials: Credentials) -> SendResult:
        if self.max_delay > 0:
            await asyncio.sleep(random.uniform(self.min_delay, self.max_delay))
        external_id = f"{self.platform}_{int(time.time() * 1000)}_{secrets.token_hex(3)}"
        logger.info("simulated_publish", platform=self.platform, external_id=external_id, chars=len(content), media=len(media))
        return SendResult(success=True, external_id=external_id)


class TelegramSender:
    """Posts to the chat stored in the connection meta (``chat_id``)."""

    platform = "telegram"

    def __init__(self, client: TelegramBotClient):
        self.client = client

    async def send(self, content: str, media: Sequence[str], credentials: Credentials) -> SendResult:
        chat_id = (credentials.meta or {}).get("chat_id")
        if not chat_id:
            raise PlatformDeliveryError(self.platform, "telegram connection has no chat_id")
        try:
            message_id = await self.client.send_post(str(chat_id), content, media)
        except TelegramBotError as e:
            raise PlatformDeliveryError(self.platform, str(e))
        return SendResult(success=True, external_id=message_id)
