# social_dashboard/models/enums.py
from enum import Enum


class Platform(str, Enum):
    facebook = "facebook"
    instagram = "instagram"
    twitter = "twitter"
    linkedin = "linkedin"
    youtube = "youtube"
    tiktok = "tiktok"
    whatsapp = "whatsapp"
    telegram = "telegram"
    pinterest = "pinterest"
    snapchat = "snapchat"
    threads = "threads"
    site = "site"


class MediaType(str, Enum):
    image = "image"
    video = "video"
    document = "document"
    story = "story"
    live = "live"


class Orientation(str, Enum):
    horizontal = "horizontal"
    vertical = "vertical"


class PostStatus(str, Enum):
    draft = "draft"
    scheduled = "scheduled"
    published = "published"
    failed = "failed"
