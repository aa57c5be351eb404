# artmatch/services/notification_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional
import logging

from artmatch.models.user import User
from artmatch.models.notification import Notification
from artmatch.repositories.notification_repo import NotificationRepository
from artmatch.schemas.notification_schema import NotificationOut
from artmatch.services.push_service import PushService

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, db: AsyncSession, push_service: Optional[PushService] = None):
        self.db = db
        self.repo = NotificationRepository(db)
        self.push_service = push_service

    async def create_notification(
        self,
        user_id: int,
        sender_id: int,
        message: Optional[str] = None,
        message_key: Optional[str] = None,
        message_params: Optional[Dict[str, Any]] = None
    ) -> Notification:
        """
        (內部使用) 供其他 Service 呼叫的介面
        """
        if not message and not message_key:
            raise ValueError("通知必須有 message 或 message_key")

        new_notification = Notification(
            user_id=user_id,
            sender_id=sender_id,
            message=message,
            message_key=message_key,
            message_params=message_params,
            read_status=False
        )
        logger.info(f"建立通知 for User ID: {user_id}, Sender: {sender_id}, Key: {message_key}")
        return await self.repo.create_notification(new_notification)

    async def notify(
        self,
        user_id: int,
        sender_id: int,
        message_key: str,
        message_params: Optional[Dict[str, Any]] = None
    ) -> Notification:
        """
        (內部使用) 建立通知後立即推播給接收者
        推播失敗不影響已寫入的通知
        """
        notification = await self.create_notification(
            user_id=user_id,
            sender_id=sender_id,
            message_key=message_key,
            message_params=message_params
        )
        if self.push_service is not None:
            payload = NotificationOut.model_validate(notification).model_dump(mode="json")
            await self.push_service.push_notification(user_id, payload)
        return notification

    def _ensure_owner(self, owner_id: int, user: User) -> None:
        # (重要) 只能操作自己的通知
        if owner_id != user.user_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "無權操作此通知")

    async def _get_owned_notification(self, notification_id: int, user: User) -> Notification:
        notification = await self.repo.get_notification_by_id(notification_id)
        if not notification:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "通知不存在")
        self._ensure_owner(notification.user_id, user)
        return notification

    async def get_user_notifications(self, user_id: int, user: User) -> List[Notification]:
        """
        (API 用) 獲取指定使用者 (必須是自己) 的通知列表
        """
        self._ensure_owner(user_id, user)
        return await self.repo.list_notifications_by_user(user_id)

    async def mark_notification_as_read(self, notification_id: int, user: User) -> Notification:
        """
        (API 用) 將通知設為已讀，並檢查權限
        """
        notification = await self._get_owned_notification(notification_id, user)

        if notification.read_status:
            return notification # 已讀，直接回傳

        return await self.repo.mark_as_read(notification)

    async def mark_all_as_read(self, user_id: int, user: User) -> int:
        self._ensure_owner(user_id, user)
        return await self.repo.mark_all_as_read(user_id)

    async def delete_notification(self, notification_id: int, user: User) -> None:
        notification = await self._get_owned_notification(notification_id, user)
        await self.repo.delete_notification(notification)

    async def delete_all_notifications(self, user_id: int, user: User) -> int:
        self._ensure_owner(user_id, user)
        return await self.repo.delete_all_by_user(user_id)
