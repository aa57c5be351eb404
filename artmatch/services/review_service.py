# artmatch/services/review_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List
import logging

from artmatch.models.user import User, UserRoleEnum
from artmatch.models.review import Review
from artmatch.models.message import RATING_COMPLETED
from artmatch.repositories.review_repo import ReviewRepository
from artmatch.repositories.message_repo import MessageRepository
from artmatch.schemas.review_schema import ReviewCreate, AverageRatingOut

logger = logging.getLogger(__name__)

class ReviewService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.message_repo = MessageRepository(db)

    async def create_review(self, review_data: ReviewCreate, reviewer: User) -> Review:
        """
        業務邏輯：聊天室的一方評價另一方

        評價與聊天室的評價狀態在同一個交易中寫入。
        """
        chat = await self.message_repo.get_chat_by_id(review_data.chat_id)
        if not chat:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "聊天室不存在")
        if not chat.has_participant(reviewer.user_id):
            raise HTTPException(status.HTTP_403_FORBIDDEN, "您不是此聊天室的成員")
        if review_data.reviewed_user_id == reviewer.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法評價自己")
        if not chat.has_participant(review_data.reviewed_user_id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "被評價者不是此聊天室的成員")

        if await self.review_repo.check_existing_review(chat.chat_id, reviewer.user_id):
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經評價過此聊天室")

        new_review = Review(
            chat_id=chat.chat_id,
            reviewer_user_id=reviewer.user_id,
            reviewed_user_id=review_data.reviewed_user_id,
            overall_rating=review_data.overall_rating,
            specific_answers=review_data.specific_answers
        )

        # 依評價者的角色更新對應的評價狀態
        if reviewer.role == UserRoleEnum.artist:
            chat.artist_rating_status = RATING_COMPLETED
        else:
            chat.employer_rating_status = RATING_COMPLETED

        try:
            await self.review_repo.create_review(new_review)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經評價過此聊天室")

        await self.db.refresh(new_review)
        logger.info(f"Review {new_review.review_id} created in Chat {chat.chat_id}")
        return new_review

    async def list_reviews(self, user_id: int) -> List[Review]:
        return await self.review_repo.list_reviews_for_user(user_id)

    async def get_average_rating(self, user_id: int) -> AverageRatingOut:
        average, count = await self.review_repo.get_rating_summary(user_id)
        return AverageRatingOut(
            average_rating=round(average, 1) if average is not None else None,
            review_count=count
        )
