# artmatch/repositories/review_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional, Tuple

from artmatch.models.review import Review

class ReviewRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_review_by_id(self, review_id: int) -> Optional[Review]:
        stmt = select(Review).where(Review.review_id == review_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def check_existing_review(self, chat_id: int, reviewer_user_id: int) -> Optional[Review]:
        stmt = select(Review).where(
            Review.chat_id == chat_id,
            Review.reviewer_user_id == reviewer_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_review(self, review: Review) -> Review:
        """
        新增評價 (尚未 commit，由 Service 與聊天室狀態一起提交)
        """
        self.db.add(review)
        await self.db.flush()
        return review

    async def list_reviews_for_user(self, reviewed_user_id: int) -> List[Review]:
        stmt = (
            select(Review)
            .where(Review.reviewed_user_id == reviewed_user_id)
            .order_by(Review.created_at.desc(), Review.review_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_all_reviews(self) -> List[Review]:
        stmt = select(Review).order_by(Review.created_at.desc(), Review.review_id.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_rating_summary(self, reviewed_user_id: int) -> Tuple[Optional[float], int]:
        """
        回傳 (平均分數, 評價數量)
        """
        stmt = select(
            func.avg(Review.overall_rating),
            func.count(Review.review_id)
        ).where(Review.reviewed_user_id == reviewed_user_id)
        result = await self.db.execute(stmt)
        average, count = result.one()
        return (float(average) if average is not None else None), int(count or 0)

    async def count_reviews(self) -> int:
        result = await self.db.execute(select(func.count(Review.review_id)))
        return result.scalar_one()

    async def delete_review(self, review: Review) -> None:
        await self.db.delete(review)
        await self.db.commit()
