# artmatch/services/match_service.py
# 按讚之後的通知與配對 (在 HTTP 回應送出之後才執行)

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from typing import Any, Dict, Optional
import logging

from artmatch.models.notification import NEW_LIKE, NEW_MATCH
from artmatch.models.message import Chat
from artmatch.repositories.like_repo import LikeRepository
from artmatch.repositories.user_repo import UserRepository
from artmatch.services.message_service import ChatService
from artmatch.services.notification_service import NotificationService
from artmatch.services.push_service import PushService

logger = logging.getLogger(__name__)


def chat_link(chat_id: int) -> str:
    return f"/chat/{chat_id}"


class MatchService:
    """
    處理一次新的按讚：
      1. 通知被按讚者 (並推播)
      2. 若對方也按過讚，找到或建立兩人的聊天室
      3. 通知雙方配對成功 (並推播)

    每一步各自捕捉錯誤：某一筆通知失敗只記 log，不影響後面的步驟。
    """

    def __init__(self, db: AsyncSession, push_service: PushService):
        self.db = db
        self.like_repo = LikeRepository(db)
        self.user_repo = UserRepository(db)
        self.notification_service = NotificationService(db, push_service)
        self.chat_service = ChatService(db, push_service)

    async def _safe_notify(self, user_id: int, sender_id: int, message_key: str, params: Dict[str, Any]) -> None:
        try:
            await self.notification_service.notify(user_id, sender_id, message_key, params)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"通知 User {user_id} ({message_key}) 失敗: {e}", exc_info=True)

    async def handle_new_like(self, actor_id: int, target_id: int) -> Optional[Chat]:
        """回傳配對後的聊天室；沒有配對則回傳 None"""
        actor = await self.user_repo.get_user_by_id(actor_id)
        target = await self.user_repo.get_user_by_id(target_id)
        if not actor or not target:
            logger.warning(f"Skip like fan-out: user {actor_id} or {target_id} no longer exists")
            return None

        # rollback 之後 ORM 物件會失效，先把需要的值取出來
        actor_name = actor.fullname
        target_name = target.fullname

        # 步驟 1 + 2: 通知被按讚者
        await self._safe_notify(target_id, actor_id, NEW_LIKE, {"name": actor_name})

        # 步驟 3: 對方是否也按過讚
        reverse_like = await self.like_repo.get_like(target_id, actor_id)
        if not reverse_like:
            return None

        # 步驟 4: 找到或建立唯一的聊天室
        try:
            chat, created = await self.chat_service.find_or_create_chat(actor_id, target_id)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"配對 ({actor_id}, {target_id}) 建立聊天室失敗: {e}", exc_info=True)
            return None

        chat_id = chat.chat_id
        link = chat_link(chat_id)
        logger.info(f"Users {actor_id} and {target_id} matched in Chat {chat_id} (new: {created})")

        # 步驟 5 + 6: 通知雙方
        await self._safe_notify(
            target_id, actor_id, NEW_MATCH,
            {"name": actor_name, "chat_id": chat_id, "link": link}
        )
        await self._safe_notify(
            actor_id, target_id, NEW_MATCH,
            {"name": target_name, "chat_id": chat_id, "link": link}
        )
        return chat


async def run_like_fanout(
    session_factory: sessionmaker,
    push_service: PushService,
    actor_id: int,
    target_id: int
) -> None:
    """
    BackgroundTasks 的進入點：request 的 session 已關閉，這裡自己開一個新的。
    任何錯誤都只記錄 log，呼叫端早已收到回應。
    """
    try:
        async with session_factory() as db:
            await MatchService(db, push_service).handle_new_like(actor_id, target_id)
    except Exception as e:
        logger.error(f"Like fan-out ({actor_id} -> {target_id}) 失敗: {e}", exc_info=True)
