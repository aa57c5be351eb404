# artmatch/repositories/comment_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional

from artmatch.models.comment import ArtistComment

class CommentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_comment_by_id(self, comment_id: int) -> Optional[ArtistComment]:
        stmt = select(ArtistComment).where(ArtistComment.comment_id == comment_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def check_existing_comment(self, commenter_user_id: int, profile_user_id: int) -> Optional[ArtistComment]:
        stmt = select(ArtistComment).where(
            ArtistComment.commenter_user_id == commenter_user_id,
            ArtistComment.profile_user_id == profile_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_comments_for_profile(self, profile_user_id: int) -> List[ArtistComment]:
        stmt = (
            select(ArtistComment)
            .where(ArtistComment.profile_user_id == profile_user_id)
            .order_by(ArtistComment.created_at.desc(), ArtistComment.comment_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_all_comments(self) -> List[ArtistComment]:
        stmt = select(ArtistComment).order_by(ArtistComment.created_at.desc(), ArtistComment.comment_id.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_comments(self) -> int:
        result = await self.db.execute(select(func.count(ArtistComment.comment_id)))
        return result.scalar_one()

    async def create_comment(self, comment: ArtistComment) -> ArtistComment:
        self.db.add(comment)
        await self.db.commit()
        await self.db.refresh(comment)
        return comment

    async def delete_comment(self, comment: ArtistComment) -> None:
        await self.db.delete(comment)
        await self.db.commit()
