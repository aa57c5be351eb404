# artmatch/services/like_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from artmatch.models.user import User
from artmatch.repositories.like_repo import LikeRepository
from artmatch.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

class LikeService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.like_repo = LikeRepository(db)
        self.user_repo = UserRepository(db)

    async def _validate_target(self, actor: User, target_id: int) -> User:
        # 所有檢查都在寫入之前完成
        if target_id == actor.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法對自己按讚")

        target = await self.user_repo.get_user_by_id(target_id)
        if not target:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "使用者不存在")
        return target

    async def toggle_like(self, actor: User, target_id: int) -> bool:
        """
        切換按讚狀態，回傳切換後是否為「已按讚」

        這裡只處理 Like 本身；通知與配對由 Router 排入背景工作，在回應送出後才執行。
        """
        await self._validate_target(actor, target_id)
        actor_id = actor.user_id

        existing_like = await self.like_repo.get_like(actor_id, target_id)
        if existing_like:
            await self.like_repo.delete_like(existing_like)
            logger.info(f"User {actor_id} un-liked User {target_id}")
            return False

        try:
            await self.like_repo.create_like(actor_id, target_id)
        except IntegrityError:
            # 同一個使用者的兩個請求同時按讚
            await self.db.rollback()
            raise HTTPException(status.HTTP_409_CONFLICT, "按讚狀態已變更，請重新整理")

        logger.info(f"User {actor_id} liked User {target_id}")
        return True

    async def is_liked(self, actor: User, target_id: int) -> bool:
        await self._validate_target(actor, target_id)
        return await self.like_repo.get_like(actor.user_id, target_id) is not None
