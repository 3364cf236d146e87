# social_dashboard/infrastructure/database.py
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine

# tables must be registered on SQLModel.metadata before create_all
from social_dashboard.UAA.models import User  # noqa: F401
from social_dashboard.models.post import Post  # noqa: F401
from social_dashboard.models.platform_connection import PlatformConnection  # noqa: F401
from social_dashboard.models.media import MediaAsset  # noqa: F401

logger = structlog.get_logger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./social_dashboard.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

engine: AsyncEngine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO)


async def init_db(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    logger.info("db_tables_ready", url=bind.url.render_as_string(hide_password=True))


@asynccontextmanager
async def get_session(bind: AsyncEngine = engine) -> AsyncIterator[AsyncSession]:
    # expire_on_commit=False: attributes stay readable after commit without a lazy reload
    async with AsyncSession(bind, expire_on_commit=False) as session:
        yield session
