# artmatch/services/user_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from artmatch.models.user import User
from artmatch.repositories.user_repo import UserRepository
from artmatch.schemas.user_schema import UserUpdate
from artmatch.utils.uploads import remove_upload_files

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def get_public_profile(self, user_id: int) -> User:
        """獲取指定 ID 的使用者公開資料"""
        user = await self.user_repo.get_user_by_id(user_id)
        if not user or not user.is_active:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "使用者不存在")
        return user

    async def update_me(self, user: User, update_data: UserUpdate) -> User:
        update_dict = update_data.model_dump(exclude_unset=True)

        new_email = update_dict.get("email")
        if new_email and new_email != user.email:
            if await self.user_repo.get_user_by_email(new_email):
                raise HTTPException(status.HTTP_409_CONFLICT, "此 Email 已經被註冊")

        for key, value in update_dict.items():
            if value is None and key != "phone_number":
                continue
            setattr(user, key, value)

        try:
            return await self.user_repo.update_user(user)
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status.HTTP_409_CONFLICT, "此 Email 已經被註冊")

    async def delete_me(self, user: User) -> None:
        """
        刪除自己的帳號 (按讚、通知、聊天室、Profile、作品集與上傳檔案一併刪除)
        """
        user_id = user.user_id
        file_urls = await self.user_repo.delete_user(user)
        await remove_upload_files(file_urls)
        logger.info(f"User {user_id} deleted their account")
