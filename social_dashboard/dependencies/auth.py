# social_dashboard/dependencies/auth.py
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlmodel.ext.asyncio.session import AsyncSession

from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.UAA.models import User
from social_dashboard.UAA.repository import UserRepository
from social_dashboard.UAA.session import UserSession
from social_dashboard.UAA.utils import decode_token, is_access_jti_blacklisted

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(token: str = Depends(oauth2_scheme), session: AsyncSession = Depends(get_session_dep)) -> User:
    try:
        payload = decode_token(token)
    except JWTError:
        raise _unauthorized("invalid token")

    if payload.get("type") != "access":
        raise _unauthorized("invalid token")
    jti = payload.get("jti")
    if jti and await is_access_jti_blacklisted(jti):
        raise _unauthorized("token revoked")

    try:
        user_id = uuid.UUID(payload.get("sub", ""))
    except ValueError:
        raise _unauthorized("invalid token")

    user = await UserRepository(session).get_by_id(user_id)
    if not user or not user.is_active:
        raise _unauthorized("user not found")
    return user


async def get_current_session(token: str = Depends(oauth2_scheme), user: User = Depends(get_current_user)) -> UserSession:
    # token was already verified by get_current_user
    payload = decode_token(token)
    return UserSession(user_id=user.id, token_jti=payload.get("jti", ""), expires_at=int(payload["exp"]))
