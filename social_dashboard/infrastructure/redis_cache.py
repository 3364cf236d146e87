# social_dashboard/infrastructure/redis_cache.py
import os
import redis.asyncio as aioredis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# connections are opened lazily on first command
redis_client = aioredis.from_url(REDIS_URL, decode_responses=True)


def blacklist_key(jti: str) -> str:
    return f"bl:{jti}"


def login_attempts_key(user_id: str) -> str:
    return f"la:attempts:{user_id}"


def login_lock_key(user_id: str) -> str:
    return f"la:lock:{user_id}"
