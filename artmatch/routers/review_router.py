# artmatch/routers/review_router.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.review_schema import ReviewCreate, ReviewOut, AverageRatingOut
from artmatch.services.review_service import ReviewService
from artmatch.utils.ids import parse_id

router = APIRouter(
    tags=["Reviews"],
    dependencies=[Depends(get_current_user)]
)

@router.post("/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    評價聊天室中的另一方 (每間聊天室每人一次)
    """
    service = ReviewService(db)
    return await service.create_review(review_data, current_user)

@router.get("/users/{user_id}/reviews", response_model=List[ReviewOut])
async def list_user_reviews(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ReviewService(db)
    return await service.list_reviews(parse_id(user_id, "使用者 ID"))

@router.get("/users/{user_id}/average-rating", response_model=AverageRatingOut)
async def get_average_rating(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """平均分數取到小數點後一位，沒有評價時為 null"""
    service = ReviewService(db)
    return await service.get_average_rating(parse_id(user_id, "使用者 ID"))
