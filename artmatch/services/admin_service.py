# artmatch/services/admin_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import List
import logging

from artmatch.models.comment import ArtistComment
from artmatch.models.job_posting import JobPosting
from artmatch.models.review import Review
from artmatch.models.user import User, UserRoleEnum
from artmatch.repositories.user_repo import UserRepository
from artmatch.repositories.job_repo import JobRepository
from artmatch.repositories.review_repo import ReviewRepository
from artmatch.repositories.comment_repo import CommentRepository
from artmatch.repositories.message_repo import MessageRepository
from artmatch.repositories.portfolio_repo import PortfolioRepository
from artmatch.schemas.admin_schema import DashboardStatsOut
from artmatch.utils.uploads import remove_upload_files

logger = logging.getLogger(__name__)

class AdminService:
    """後台管理：統計、列表與內容刪除 (呼叫端須為管理員)"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.job_repo = JobRepository(db)
        self.review_repo = ReviewRepository(db)
        self.comment_repo = CommentRepository(db)
        self.message_repo = MessageRepository(db)
        self.portfolio_repo = PortfolioRepository(db)

    async def get_stats(self) -> DashboardStatsOut:
        return DashboardStatsOut(
            total_users=await self.user_repo.count_users(),
            artists=await self.user_repo.count_users(UserRoleEnum.artist),
            employers=await self.user_repo.count_users(UserRoleEnum.employer),
            job_postings=await self.job_repo.count_jobs(),
            chats=await self.message_repo.count_chats(),
            reviews=await self.review_repo.count_reviews(),
            comments=await self.comment_repo.count_comments(),
            portfolios=await self.portfolio_repo.count_items()
        )

    # --- 使用者 ---

    async def list_users(self) -> List[User]:
        return await self.user_repo.list_users()

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_user_by_id(user_id)
        if not user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "使用者不存在")
        return user

    async def delete_user(self, user_id: int, admin: User) -> None:
        if user_id == admin.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法刪除自己的帳號")
        user = await self.get_user(user_id)
        if user.role == UserRoleEnum.admin:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "無法刪除其他管理員")
        file_urls = await self.user_repo.delete_user(user)
        await remove_upload_files(file_urls)
        logger.info(f"Admin {admin.user_id} deleted User {user_id}")

    # --- 內容列表 ---

    async def list_reviews(self) -> List[Review]:
        return await self.review_repo.list_all_reviews()

    async def list_comments(self) -> List[ArtistComment]:
        return await self.comment_repo.list_all_comments()

    async def list_jobs(self) -> List[JobPosting]:
        return await self.job_repo.list_jobs()

    # --- 內容刪除 ---

    async def delete_review(self, review_id: int, admin: User) -> None:
        review = await self.review_repo.get_review_by_id(review_id)
        if not review:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "評價不存在")
        await self.review_repo.delete_review(review)
        logger.info(f"Admin {admin.user_id} deleted Review {review_id}")

    async def delete_comment(self, comment_id: int, admin: User) -> None:
        comment = await self.comment_repo.get_comment_by_id(comment_id)
        if not comment:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "留言不存在")
        await self.comment_repo.delete_comment(comment)
        logger.info(f"Admin {admin.user_id} deleted Comment {comment_id}")

    async def delete_job(self, job_id: int, admin: User) -> None:
        job = await self.job_repo.get_job_by_id(job_id)
        if not job:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")
        await self.job_repo.delete_job(job)
        logger.info(f"Admin {admin.user_id} deleted Job {job_id}")
