# social_dashboard/schemas/content_schema.py
from typing import Optional, List
from pydantic import BaseModel


class ContentRequest(BaseModel):
    topic: str
    platforms: Optional[List[str]] = None
    tone: Optional[str] = None
    language: str = "pt-BR"


class GeneratedContent(BaseModel):
    post: str
    hashtags: str
    cta: str
    raw: str
