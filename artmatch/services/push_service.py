# artmatch/services/push_service.py
# 即時推播：使用者專屬 room + 直接送到該使用者目前的連線

from fastapi import Depends
from typing import Any, Dict
import logging

from artmatch.core.websocket_manager import ConnectionManager, chat_room, user_room, get_connection_manager

logger = logging.getLogger(__name__)

NEW_NOTIFICATION_EVENT = "new_notification"
NEW_MESSAGE_EVENT = "new_message"


class PushService:
    """
    盡力而為 (best effort) 的推播。

    對方不在線上時什麼都不做，通知紀錄本身已存在資料庫，下次登入時仍讀得到。
    所有錯誤只記錄 log，不會往上拋。
    """

    def __init__(self, manager: ConnectionManager):
        self.manager = manager

    async def _deliver(self, room: str, recipient_id: int, event: str, payload: Dict[str, Any]) -> None:
        # 1. 廣播給 room (已加入 room 的前端)
        delivered = await self.manager.emit(room, event, payload)

        # 2. 再直接送到對方目前的連線 (尚未加入 room 的前端)
        websocket = self.manager.presence.lookup(recipient_id)
        if websocket is not None and id(websocket) not in delivered:
            await self.manager.send_direct(websocket, event, payload)

    async def push_notification(self, recipient_id: int, payload: Dict[str, Any]) -> None:
        try:
            await self._deliver(user_room(recipient_id), recipient_id, NEW_NOTIFICATION_EVENT, payload)
        except Exception as e:
            logger.error(f"推播通知給 User {recipient_id} 失敗: {e}", exc_info=True)

    async def push_message(self, chat_id: int, receiver_id: int, payload: Dict[str, Any]) -> None:
        try:
            await self._deliver(chat_room(chat_id), receiver_id, NEW_MESSAGE_EVENT, payload)
        except Exception as e:
            logger.error(f"推播訊息到 Chat {chat_id} 失敗: {e}", exc_info=True)


def get_push_service(
    manager: ConnectionManager = Depends(get_connection_manager)
) -> PushService:
    """FastAPI Dependency: 以目前的連線管理器建立 PushService"""
    return PushService(manager)
