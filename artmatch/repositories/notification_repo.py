# artmatch/repositories/notification_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.orm import selectinload
from typing import List, Optional
import logging

from artmatch.models.notification import Notification

logger = logging.getLogger(__name__)

class NotificationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_notification(self, notification: Notification) -> Notification:
        """
        新增一筆通知
        """
        try:
            # 步驟 1: 加入 Session 並執行 INSERT (Flush)
            self.db.add(notification)
            await self.db.flush()
            # 步驟 2: 提交事務 (Commit)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"建立通知失敗: {e}", exc_info=True)
            raise

        # 步驟 3: 重新查詢，取得 DB 產生的 created_at 以及 sender
        return await self.get_notification_by_id(notification.notification_id)

    async def get_notification_by_id(self, notification_id: int) -> Optional[Notification]:
        """
        依 ID 獲取通知 (主要用於權限檢查)
        """
        stmt = (
            select(Notification)
            .where(Notification.notification_id == notification_id)
            .options(selectinload(Notification.sender))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_notifications_by_user(self, user_id: int) -> List[Notification]:
        """
        獲取某位使用者的所有通知 (依時間降序排列)
        """
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .options(selectinload(Notification.sender))
            .order_by(Notification.created_at.desc(), Notification.notification_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def mark_as_read(self, notification: Notification) -> Notification:
        """
        將單一通知設為已讀
        """
        notification.read_status = True
        await self.db.commit()
        await self.db.refresh(notification)
        return notification

    async def mark_all_as_read(self, user_id: int) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read_status == False)
            .values(read_status=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount

    async def delete_notification(self, notification: Notification) -> None:
        await self.db.delete(notification)
        await self.db.commit()

    async def delete_all_by_user(self, user_id: int) -> int:
        result = await self.db.execute(
            delete(Notification).where(Notification.user_id == user_id)
        )
        await self.db.commit()
        return result.rowcount
