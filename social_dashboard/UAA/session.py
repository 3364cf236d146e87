# social_dashboard/UAA/session.py
from dataclasses import dataclass
import uuid


@dataclass(frozen=True)
class UserSession:
    """
    Identity of the caller for one request.
    Created from a verified access token and handed explicitly to every
    service call; nothing about the caller is kept at module level.
    """
    user_id: uuid.UUID
    token_jti: str
    expires_at: int
