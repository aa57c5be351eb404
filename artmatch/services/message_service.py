# artmatch/services/message_service.py

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
import logging

from artmatch.schemas.message_schema import MessageIn, MessageOut, ChatListItemOut, ChatOut
from artmatch.repositories.message_repo import MessageRepository
from artmatch.repositories.user_repo import UserRepository
from artmatch.models.user import User
from artmatch.models.message import Chat, Message
from artmatch.services.push_service import PushService

logger = logging.getLogger(__name__)


def normalize_pair(user_a: int, user_b: int) -> Tuple[int, int]:
    """聊天室一律以 (較小 id, 較大 id) 儲存"""
    return min(user_a, user_b), max(user_a, user_b)


class ChatService:
    def __init__(self, db: AsyncSession, push_service: Optional[PushService] = None):
        self.db = db
        self.message_repo = MessageRepository(db)
        self.user_repo = UserRepository(db)
        self.push_service = push_service

    async def find_or_create_chat(self, user_a: int, user_b: int) -> Tuple[Chat, bool]:
        """
        找到或建立兩人之間唯一的聊天室，回傳 (chat, 是否為新建立)

        不加任何應用層的鎖：兩邊同時建立時，由 (user1_id, user2_id) 唯一鍵擋下第二筆，
        失敗的一方 rollback 後重新讀取勝出的那一筆。
        """
        if user_a == user_b:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法與自己建立聊天室")

        low, high = normalize_pair(user_a, user_b)

        existing_chat = await self.message_repo.get_chat_by_pair(low, high)
        if existing_chat:
            return existing_chat, False

        try:
            new_chat = await self.message_repo.create_chat(low, high)
            logger.info(f"Chat {new_chat.chat_id} created for users ({low}, {high})")
            return new_chat, True
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Chat for users ({low}, {high}) was created concurrently, re-reading it")

        existing_chat = await self.message_repo.get_chat_by_pair(low, high)
        if not existing_chat:
            raise HTTPException(status.HTTP_409_CONFLICT, "聊天室建立失敗，請稍後再試")
        return existing_chat, False

    async def start_chat(self, user: User, receiver_id: int) -> Tuple[Chat, bool]:
        """
        業務邏輯：使用者主動開啟與對方的聊天室 (REST API 用)
        """
        if receiver_id == user.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法與自己建立聊天室")

        receiver = await self.user_repo.get_user_by_id(receiver_id)
        if not receiver:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "對方使用者不存在")

        return await self.find_or_create_chat(user.user_id, receiver_id)

    async def get_user_chats(self, user: User) -> List[ChatListItemOut]:
        """
        獲取使用者的所有聊天室，附上對方的名稱 (REST API 用)
        """
        chats = await self.message_repo.get_chats_by_user_id(user.user_id)
        items = []
        for chat in chats:
            other_user = chat.user2 if chat.user1_id == user.user_id else chat.user1
            items.append(ChatListItemOut(
                **ChatOut.model_validate(chat).model_dump(),
                other_user_id=chat.other_participant(user.user_id),
                other_user_name=other_user.fullname if other_user else "未知使用者"
            ))
        return items

    async def get_participant_chat(self, chat_id: int, user: User) -> Chat:
        """
        取得聊天室並確認使用者是參與者 (REST / WS 共用)
        """
        chat = await self.message_repo.get_chat_by_id(chat_id)
        if not chat:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "聊天室不存在")
        if not chat.has_participant(user.user_id):
            raise HTTPException(status.HTTP_403_FORBIDDEN, "無權限查看此聊天室")
        return chat

    async def get_chat_messages(self, chat_id: int, user: User) -> List[Message]:
        await self.get_participant_chat(chat_id, user)
        return await self.message_repo.get_messages_by_chat_id(chat_id)

    async def send_message(self, user: User, message_in: MessageIn) -> Message:
        """
        儲存訊息後推播 new_message 給聊天室與接收者
        """
        content = message_in.message.strip()
        if not content:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "訊息內容不可為空")

        chat = await self.get_participant_chat(message_in.chat_id, user)
        receiver_id = chat.other_participant(user.user_id)

        new_message = await self.message_repo.save_message(
            chat=chat,
            sender_id=user.user_id,
            receiver_id=receiver_id,
            content=content
        )

        if self.push_service is not None:
            payload = MessageOut.model_validate(new_message).model_dump(mode="json")
            await self.push_service.push_message(chat.chat_id, receiver_id, payload)

        return new_message
