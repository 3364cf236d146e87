# social_dashboard/platforms/registry.py
"""
Platform sender registry.

Maps a platform identifier to the sender that delivers to it. New platforms
are added with ``register``; the publisher never switches on platform names.
"""
import os
from typing import Dict, Optional

import structlog

from social_dashboard.models.enums import Platform
from social_dashboard.infrastructure.telegram_bot_client import TelegramBotClient, TelegramBotError
from .base import PlatformSender
from .senders import SimulatedSender, TelegramSender

logger = structlog.get_logger(__name__)


class SenderRegistry:
    def __init__(self):
        self._senders: Dict[str, PlatformSender] = {}

    def register(self, platform: str, sender: PlatformSender) -> None:
        self._senders[platform] = sender
        logger.debug("registry.loaded", platform=platform, sender=type(sender).__name__)

    def get(self, platform: str) -> Optional[PlatformSender]:
        return self._senders.get(platform)

    def platforms(self) -> list:
        return sorted(self._senders)


def build_default_registry() -> SenderRegistry:
    """Simulated senders everywhere; a real Telegram sender when a bot token is configured."""
    registry = SenderRegistry()
    for platform in Platform:
        registry.register(platform.value, SimulatedSender(platform.value))

    if os.getenv("TELEGRAM_BOT_TOKEN"):
        try:
            registry.register(Platform.telegram.value, TelegramSender(TelegramBotClient()))
        except TelegramBotError as e:
            logger.warning("registry.skip", platform="telegram", error=str(e))

    logger.info("registry.complete", total=len(registry.platforms()))
    return registry


_default_registry: Optional[SenderRegistry] = None


def get_registry() -> SenderRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry
