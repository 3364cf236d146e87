# social_dashboard/routers/user_router.py
from fastapi import APIRouter, Depends

from social_dashboard.dependencies.auth import get_current_user
from social_dashboard.UAA.models import User
from social_dashboard.UAA.schemas import UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
