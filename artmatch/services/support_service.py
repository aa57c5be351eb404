# artmatch/services/support_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import Tuple
import logging

from artmatch.models.user import User, UserRoleEnum
from artmatch.repositories.support_repo import SupportRepository
from artmatch.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

class SupportService:
    """藝術家之間的應援 (只有藝術家可以應援藝術家)"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.support_repo = SupportRepository(db)
        self.user_repo = UserRepository(db)

    async def toggle_support(self, actor: User, target_id: int) -> Tuple[bool, int]:
        """
        切換應援狀態，回傳 (切換後是否為「已應援」, 被應援者目前的應援數)
        """
        if actor.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有藝術家可以應援其他藝術家")
        if target_id == actor.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法應援自己")

        target = await self.user_repo.get_user_by_id(target_id)
        if not target or target.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "找不到要應援的藝術家")

        existing = await self.support_repo.get_support(actor.user_id, target_id)
        if existing:
            await self.support_repo.delete_support(existing)
            logger.info(f"Artist {actor.user_id} withdrew support for Artist {target_id}")
            has_supported = False
        else:
            try:
                await self.support_repo.create_support(actor.user_id, target_id)
            except IntegrityError:
                await self.db.rollback()
                raise HTTPException(status.HTTP_409_CONFLICT, "應援狀態已變更，請重新整理")
            logger.info(f"Artist {actor.user_id} supported Artist {target_id}")
            has_supported = True

        return has_supported, await self.support_repo.count_supports(target_id)

    async def get_support_status(self, actor: User, target_id: int) -> Tuple[bool, int]:
        # 不檢查對象是否存在：不存在時應援數為 0
        support = await self.support_repo.get_support(actor.user_id, target_id)
        return support is not None, await self.support_repo.count_supports(target_id)
