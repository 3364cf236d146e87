# social_dashboard/UAA/utils.py
import os
import time
import uuid
from datetime import timedelta
from typing import Dict, Any, Optional

import structlog
from passlib.context import CryptContext
from jose import jwt, JWTError
from cryptography.fernet import Fernet, InvalidToken

from social_dashboard.infrastructure import redis_cache

logger = structlog.get_logger(__name__)

# Config (env)
SECRET_KEY = os.getenv("SECRET_KEY", "change_me_now")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
OAUTH_TOKEN_KEY = os.getenv("OAUTH_TOKEN_KEY")  # base64 Fernet key for platform access tokens

if not OAUTH_TOKEN_KEY:
    # dev fallback: tokens stored with it are unreadable after a restart
    OAUTH_TOKEN_KEY = Fernet.generate_key().decode()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
fernet = Fernet(OAUTH_TOKEN_KEY.encode())


# --- Password utilities ---
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError) as e:
        logger.warning("password_verify_failed", error=str(e))
        return False


def assert_password_policy(password: str) -> None:
    if len(password) < 8:
        raise ValueError("password must be at least 8 characters")
    if not any(c.isdigit() for c in password):
        raise ValueError("password must include a digit")
    if not any(c.islower() for c in password):
        raise ValueError("password must include a lowercase letter")
    if not any(c.isupper() for c in password):
        raise ValueError("password must include an uppercase letter")


# --- JWT helpers ---
def _now_ts() -> int:
    return int(time.time())


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> Dict[str, Any]:
    jti = str(uuid.uuid4())
    issued = _now_ts()
    expire = issued + int((expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)).total_seconds())
    payload = {"sub": subject, "exp": expire, "jti": jti, "type": "access", "iat": issued}
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    logger.debug("create_access_token", sub=subject, jti=jti, exp=expire)
    return {"token": token, "jti": jti, "exp": expire}


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning("token_decode_failed", error=str(e))
        raise


# --- Redis-based access token blacklist ---
async def blacklist_access_jti(jti: str, expires_at_ts: int) -> None:
    ttl = expires_at_ts - _now_ts()
    if ttl <= 0:
        return
    await redis_cache.redis_client.set(redis_cache.blacklist_key(jti), "1", ex=ttl)
    logger.info("access_jti_blacklisted", jti=jti, ttl=ttl)


async def is_access_jti_blacklisted(jti: str) -> bool:
    return await redis_cache.redis_client.exists(redis_cache.blacklist_key(jti)) == 1


# --- Platform token encryption ---
def encrypt_token(plaintext: Optional[str]) -> Optional[str]:
    if plaintext is None:
        return None
    return fernet.encrypt(plaintext.encode()).decode()


def decrypt_token(ciphertext: Optional[str]) -> Optional[str]:
    if not ciphertext:
        return None
    try:
        return fernet.decrypt(ciphertext.encode()).decode()
    except InvalidToken:
        logger.warning("platform_token_decrypt_failed")
        return None
