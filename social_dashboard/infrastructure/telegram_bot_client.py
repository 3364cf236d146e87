# social_dashboard/infrastructure/telegram_bot_client.py
import os
from typing import Optional, Sequence

import httpx


class TelegramBotError(Exception):
    pass


class TelegramBotClient:
    """Thin async wrapper over the Bot API methods the publisher needs."""

    def __init__(self, bot_token: Optional[str] = None, timeout: int = 30):
        self.bot_token = bot_token or os.getenv("TELEGRAM_BOT_TOKEN")
        self.timeout = timeout

        if not self.bot_token:
            raise TelegramBotError("TELEGRAM_BOT_TOKEN is not configured")

        self.base_url = f"https://api.telegram.org/bot{self.bot_token}"

    async def _call(self, method: str, payload: dict) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}/{method}", json=payload)

        if response.status_code == 429:
            raise TelegramBotError("Telegram rate limit reached")
        if response.status_code >= 400:
            raise TelegramBotError(f"Telegram API error ({response.status_code}): {response.text}")

        body = response.json()
        if not body.get("ok"):
            raise TelegramBotError(f"Telegram API rejected request: {body.get('description', body)}")
        return body["result"]

    async def send_post(self, chat_id: str, content: str, media_urls: Sequence[str] = ()) -> str:
        """
        Send one post to a chat; the first media URL becomes a photo with the
        text as caption (Telegram caps captions at 1024 characters).
        Returns the message id.
        """
        if not content.strip() and not media_urls:
            raise TelegramBotError("Post content is empty; nothing to publish to Telegram")

        if media_urls and len(content) <= 1024:
            result = await self._call("sendPhoto", {"chat_id": chat_id, "photo": media_urls[0], "caption": content})
        else:
            text = "\n\n".join([content, *media_urls]).strip()
            result = await self._call(
                "sendMessage",
                {"chat_id": chat_id, "text": text, "disable_web_page_preview": False},
            )
        return str(result["message_id"])
