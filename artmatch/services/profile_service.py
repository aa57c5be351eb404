# artmatch/services/profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status, UploadFile
import logging

from artmatch.models.user import User, UserRoleEnum
from artmatch.repositories.profile_repo import ProfileRepository, AnyProfile
from artmatch.schemas.profile_schema import ProfileUpdate
from artmatch.utils.uploads import IMAGE_TYPES, save_upload_file, remove_upload_file

logger = logging.getLogger(__name__)

class ProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = ProfileRepository(db)
        self.db = db

    async def get_my_profile(self, user: User) -> AnyProfile:
        """依據角色取得 Profile"""
        profile = None
        if user.role == UserRoleEnum.artist:
            profile = await self.repo.get_artist_profile_by_user_id(user.user_id)
        elif user.role == UserRoleEnum.employer:
            profile = await self.repo.get_employer_profile_by_user_id(user.user_id)

        if not profile:
            # 管理員沒有 profile
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile 不存在")
        return profile

    async def update_my_profile(self, user: User, update_data: ProfileUpdate) -> AnyProfile:
        profile = await self.get_my_profile(user)
        return await self.repo.update_profile(profile, update_data)

    async def upload_profile_picture(self, user: User, file: UploadFile) -> AnyProfile:
        profile = await self.get_my_profile(user)
        old_url = profile.profile_picture
        new_url = await save_upload_file(file, IMAGE_TYPES, "大頭貼僅支援 JPEG、PNG 或 WebP 格式")
        try:
            updated = await self.repo.set_profile_picture(profile, new_url)
        except Exception:
            # 資料庫沒更新成功，剛寫入的檔案不再有人引用
            logger.error(f"User {user.user_id} 的大頭貼更新失敗，移除 {new_url}")
            await self.db.rollback()
            await remove_upload_file(new_url)
            raise
        await remove_upload_file(old_url)
        return updated

    async def delete_profile_picture(self, user: User) -> AnyProfile:
        profile = await self.get_my_profile(user)
        old_url = profile.profile_picture
        updated = await self.repo.set_profile_picture(profile, None)
        await remove_upload_file(old_url)
        return updated
