# social_dashboard/infrastructure/posts_repo.py
from typing import Optional, List
import uuid

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select

from social_dashboard.models.post import Post


class PostsRepository:
    """
    Post record store. Every read is scoped to the owning user.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: Post) -> Post:
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        return post

    async def get_for_user(self, post_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Post]:
        q = select(Post).where(Post.id == post_id, Post.user_id == user_id)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def list_by_user(self, user_id: uuid.UUID) -> List[Post]:
        """Newest first."""
        q = select(Post).where(Post.user_id == user_id).order_by(Post.created_at.desc())
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def save(self, post: Post) -> Post:
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        return post

    async def delete(self, post: Post) -> None:
        await self.session.delete(post)
        await self.session.commit()
