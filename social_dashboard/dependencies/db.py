# social_dashboard/dependencies/db.py
from typing import AsyncGenerator

from social_dashboard.infrastructure import database


async def get_session_dep() -> AsyncGenerator:
    async with database.get_session() as session:
        yield session
