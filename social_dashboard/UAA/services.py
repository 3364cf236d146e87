# social_dashboard/UAA/services.py
import structlog

from .models import User
from .repository import UserRepository
from .schemas import UserCreate
from .session import UserSession
from . import utils
from social_dashboard.errors import AuthenticationError, ValidationError
from social_dashboard.infrastructure import redis_cache

logger = structlog.get_logger(__name__)

# brute-force constants
LOGIN_ATTEMPT_WINDOW_SECONDS = 300
MAX_LOGIN_ATTEMPTS = 5
LOCKOUT_SECONDS = 300


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def register_user(self, user_in: UserCreate) -> User:
        try:
            utils.assert_password_policy(user_in.password)
        except ValueError as e:
            raise ValidationError(str(e))

        if await self.repo.exists(user_in.email, user_in.username):
            logger.debug("register_user_exists", email=user_in.email, username=user_in.username)
            raise ValidationError("email or username already registered")

        hashed = utils.hash_password(user_in.password)
        user = User(email=user_in.email, username=user_in.username, hashed_password=hashed)
        created = await self.repo.create(user)
        logger.info("user_registered", user_id=str(created.id), email=created.email)
        return created

    async def _is_locked(self, user_id: str) -> bool:
        return await redis_cache.redis_client.exists(redis_cache.login_lock_key(user_id)) == 1

    async def _increment_login_attempts(self, user_id: str) -> int:
        key = redis_cache.login_attempts_key(user_id)
        attempts = await redis_cache.redis_client.incr(key)
        if attempts == 1:
            await redis_cache.redis_client.expire(key, LOGIN_ATTEMPT_WINDOW_SECONDS)
        if attempts >= MAX_LOGIN_ATTEMPTS:
            await redis_cache.redis_client.set(redis_cache.login_lock_key(user_id), "1", ex=LOCKOUT_SECONDS)
            logger.warning("user_locked_due_to_failed_logins", user_id=user_id)
        return attempts

    async def _reset_login_attempts(self, user_id: str) -> None:
        await redis_cache.redis_client.delete(redis_cache.login_attempts_key(user_id))
        await redis_cache.redis_client.delete(redis_cache.login_lock_key(user_id))

    async def authenticate_user(self, email: str, password: str) -> User:
        user = await self.repo.get_by_email(email)
        if not user or not user.is_active:
            logger.debug("auth_failed_unknown_email", email=email)
            raise AuthenticationError("invalid credentials")

        user_id = str(user.id)
        if await self._is_locked(user_id):
            logger.warning("auth_attempt_on_locked_user", user_id=user_id)
            raise AuthenticationError("account temporarily locked due to failed login attempts")

        if not utils.verify_password(password, user.hashed_password):
            attempts = await self._increment_login_attempts(user_id)
            logger.info("auth_failed_wrong_password", user_id=user_id, attempts=attempts)
            raise AuthenticationError("invalid credentials")

        await self._reset_login_attempts(user_id)
        await self.repo.update_last_login(user)
        logger.info("auth_success", user_id=user_id)
        return user

    def issue_access_token(self, user: User) -> dict:
        access = utils.create_access_token(str(user.id))
        logger.info("access_token_issued", user_id=str(user.id), jti=access["jti"])
        return access

    async def logout(self, user_session: UserSession) -> None:
        await utils.blacklist_access_jti(user_session.token_jti, user_session.expires_at)
        logger.info("user_logged_out", user_id=str(user_session.user_id), jti=user_session.token_jti)
