# artmatch/repositories/like_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from artmatch.models.like import Like

class LikeRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_like(self, user_id: int, liked_user_id: int) -> Optional[Like]:
        """
        查詢 user_id -> liked_user_id 的按讚紀錄
        """
        stmt = select(Like).where(
            Like.user_id == user_id,
            Like.liked_user_id == liked_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_like(self, user_id: int, liked_user_id: int) -> Like:
        """
        新增按讚 (重複時由唯一鍵擋下，拋出 IntegrityError)
        """
        like = Like(user_id=user_id, liked_user_id=liked_user_id)
        self.db.add(like)
        await self.db.commit()
        await self.db.refresh(like)
        return like

    async def delete_like(self, like: Like) -> None:
        await self.db.delete(like)
        await self.db.commit()
