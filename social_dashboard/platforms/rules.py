# social_dashboard/platforms/rules.py
"""
Per-platform pre-validation applied before any delivery attempt.
"""
from typing import Optional, Sequence

# Hard caps on post text; platforms not listed only have the global 5000 cap
PLATFORM_RULES = {
    "twitter":   {"max_chars": 280},
    "threads":   {"max_chars": 500},
    "pinterest": {"max_chars": 500, "requires_media": True},
    "instagram": {"max_chars": 2200, "requires_media": True},
    "tiktok":    {"max_chars": 2200, "requires_media": True},
    "linkedin":  {"max_chars": 3000},
    "telegram":  {"max_chars": 4096},
    "youtube":   {"max_chars": 5000, "requires_media": True},
    "snapchat":  {"max_chars": 250, "requires_media": True},
    "facebook":  {"max_chars": 63206},
    "whatsapp":  {"max_chars": 65536},
}


def check_platform_rules(platform: str, content: str, media: Sequence[str]) -> Optional[str]:
    """Return a failure message, or None when the post fits the platform."""
    rules = PLATFORM_RULES.get(platform, {})
    max_chars = rules.get("max_chars")
    if max_chars is not None and len(content) > max_chars:
        return f"exceeds {max_chars} characters"
    if rules.get("requires_media") and not media:
        return f"{platform} requires at least one media item"
    return None
