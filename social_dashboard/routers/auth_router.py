# social_dashboard/routers/auth_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from social_dashboard.dependencies.auth import get_current_session
from social_dashboard.dependencies.db import get_session_dep
from social_dashboard.errors import AuthenticationError
from social_dashboard.UAA.repository import UserRepository
from social_dashboard.UAA.schemas import UserCreate, UserRead, LoginRequest, Token
from social_dashboard.UAA.services import UserService
from social_dashboard.UAA.session import UserSession
from social_dashboard.UAA.utils import ACCESS_TOKEN_EXPIRE_MINUTES

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, session: AsyncSession = Depends(get_session_dep)):
    svc = UserService(UserRepository(session))
    return await svc.register_user(user_in)


@router.post("/login", response_model=Token)
async def login(form_data: LoginRequest, session: AsyncSession = Depends(get_session_dep)):
    """
    Expects JSON: {"email": "...", "password": "..."}.
    The password is only ever checked here, server side.
    """
    svc = UserService(UserRepository(session))
    try:
        user = await svc.authenticate_user(form_data.email, form_data.password)
    except AuthenticationError as e:
        # Do not reveal whether email exists
        logger.warning("login_failed", reason=str(e), email=form_data.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    access = svc.issue_access_token(user)
    return Token(access_token=access["token"], expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(user: UserSession = Depends(get_current_session), session: AsyncSession = Depends(get_session_dep)):
    await UserService(UserRepository(session)).logout(user)
