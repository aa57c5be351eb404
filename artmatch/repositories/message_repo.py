# artmatch/repositories/message_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, update, func
from typing import Optional, List

from artmatch.models.message import Chat, Message

class MessageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # --- Chat 相關操作 ---

    async def get_chat_by_id(self, chat_id: int) -> Optional[Chat]:
        stmt = select(Chat).where(Chat.chat_id == chat_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_chat_by_pair(self, user1_id: int, user2_id: int) -> Optional[Chat]:
        """
        以正規化後的 (小, 大) user_id 查詢聊天室
        """
        stmt = select(Chat).where(
            Chat.user1_id == user1_id,
            Chat.user2_id == user2_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_chat(self, user1_id: int, user2_id: int) -> Chat:
        """
        建立聊天室；若同一對使用者已存在，資料庫唯一鍵會拋出 IntegrityError
        """
        new_chat = Chat(user1_id=user1_id, user2_id=user2_id)
        self.db.add(new_chat)
        await self.db.commit()
        await self.db.refresh(new_chat)
        return new_chat

    async def get_chats_by_user_id(self, user_id: int) -> List[Chat]:
        """
        獲取使用者參與的所有聊天室 (最近有動靜的排前面)
        """
        stmt = (
            select(Chat)
            .where(or_(Chat.user1_id == user_id, Chat.user2_id == user_id))
            .order_by(Chat.updated_at.desc(), Chat.chat_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_chats(self) -> int:
        result = await self.db.execute(select(func.count(Chat.chat_id)))
        return result.scalar_one()

    async def update_chat(self, chat: Chat) -> Chat:
        await self.db.commit()
        await self.db.refresh(chat)
        return chat

    # --- Message 相關操作 ---

    async def get_messages_by_chat_id(self, chat_id: int) -> List[Message]:
        stmt = (
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at.asc(), Message.message_id.asc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def save_message(self, chat: Chat, sender_id: int, receiver_id: int, content: str) -> Message:
        """
        儲存訊息並把聊天室的 message_count 加一 (同一個交易)
        """
        new_message = Message(
            chat_id=chat.chat_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            message=content
        )
        self.db.add(new_message)
        # 以 SQL 運算式遞增，避免併發時互相覆蓋
        await self.db.execute(
            update(Chat)
            .where(Chat.chat_id == chat.chat_id)
            .values(message_count=Chat.message_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        await self.db.refresh(new_message)
        await self.db.refresh(chat)
        return new_message
