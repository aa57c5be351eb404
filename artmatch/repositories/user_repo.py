# artmatch/repositories/user_repo.py
# 負責與使用者相關的資料庫操作
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, or_
from typing import List, Optional
from artmatch.models.user import User, UserRoleEnum
from artmatch.models.like import Like
from artmatch.models.notification import Notification
from artmatch.models.message import Chat, Message
from artmatch.models.review import Review
from artmatch.models.comment import ArtistComment
from artmatch.models.job_posting import JobPosting, JobApplication
from artmatch.models.support import ArtistSupport
from artmatch.models.portfolio import Portfolio

class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """
        透過 email 查詢使用者
        """
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_user_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_user_by_id(self, user_id: int) -> User | None:
        """
        透過 user_id 查詢使用者
        """
        stmt = select(User).where(User.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_user(self, user: User) -> User:
        """
        新增使用者到資料庫 (Profile 透過 relationship 一併寫入)
        """
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_user(self, user: User) -> User:
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def list_users(self) -> List[User]:
        stmt = select(User).order_by(User.user_id)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_users(self, role: Optional[UserRoleEnum] = None) -> int:
        stmt = select(func.count(User.user_id))
        if role is not None:
            stmt = stmt.where(User.role == role)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def delete_user(self, user: User) -> List[str]:
        """
        刪除使用者以及所有關聯資料，回傳該使用者上傳過的檔案 URL (由 Service 刪除檔案)

        不依賴資料庫的 ON DELETE CASCADE (SQLite 預設不啟用外鍵)，
        直接依序刪除子資料表。
        """
        uid = user.user_id
        result = await self.db.execute(select(Portfolio.image_url).where(Portfolio.artist_user_id == uid))
        file_urls = list(result.scalars().all())
        if user.profile is not None and user.profile.profile_picture:
            file_urls.append(user.profile.profile_picture)

        chat_ids = select(Chat.chat_id).where(or_(Chat.user1_id == uid, Chat.user2_id == uid))
        job_ids = select(JobPosting.job_id).where(JobPosting.employer_user_id == uid)

        await self.db.execute(delete(Like).where(or_(Like.user_id == uid, Like.liked_user_id == uid)))
        await self.db.execute(delete(Notification).where(or_(Notification.user_id == uid, Notification.sender_id == uid)))
        await self.db.execute(delete(Review).where(or_(
            Review.chat_id.in_(chat_ids),
            Review.reviewer_user_id == uid,
            Review.reviewed_user_id == uid
        )))
        await self.db.execute(delete(Message).where(or_(
            Message.chat_id.in_(chat_ids),
            Message.sender_id == uid,
            Message.receiver_id == uid
        )))
        await self.db.execute(delete(Chat).where(or_(Chat.user1_id == uid, Chat.user2_id == uid)))
        await self.db.execute(delete(ArtistComment).where(or_(
            ArtistComment.profile_user_id == uid,
            ArtistComment.commenter_user_id == uid
        )))
        await self.db.execute(delete(JobApplication).where(or_(
            JobApplication.job_id.in_(job_ids),
            JobApplication.artist_user_id == uid
        )))
        await self.db.execute(delete(JobPosting).where(JobPosting.employer_user_id == uid))
        await self.db.execute(delete(ArtistSupport).where(or_(
            ArtistSupport.supporter_user_id == uid,
            ArtistSupport.supported_user_id == uid
        )))
        await self.db.execute(delete(Portfolio).where(Portfolio.artist_user_id == uid))

        # Profile 由 relationship 的 cascade 處理
        await self.db.delete(user)
        await self.db.commit()
        return file_urls
