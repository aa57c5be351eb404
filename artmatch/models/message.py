# artmatch/models/message.py

from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, TIMESTAMP, CheckConstraint, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

RATING_PENDING = "pending"
RATING_COMPLETED = "completed"

class Chat(Base):
    """
    兩位使用者之間的聊天室 (每一對使用者最多一間)

    user1_id 永遠是較小的 user_id，user2_id 是較大的，
    再搭配 (user1_id, user2_id) 唯一鍵，由資料庫保證不會重複建立。
    """
    __tablename__ = "chats"
    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_chats_pair"),
        CheckConstraint("user1_id < user2_id", name="ck_chats_pair_order"),
    )

    chat_id = Column(Integer, primary_key=True, autoincrement=True)
    user1_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    user2_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    message_count = Column(Integer, default=0, nullable=False)
    artist_rating_status = Column(String(20), default=RATING_PENDING, nullable=False)
    employer_rating_status = Column(String(20), default=RATING_PENDING, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user1 = relationship("User", foreign_keys=[user1_id], lazy="selectin")
    user2 = relationship("User", foreign_keys=[user2_id], lazy="selectin")

    messages = relationship(
        "Message",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="Message.message_id"
    )

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant(self, user_id: int) -> int:
        return self.user2_id if user_id == self.user1_id else self.user1_id


class Message(Base):
    __tablename__ = "messages"
    message_id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column(Integer, ForeignKey("chats.chat_id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    chat = relationship("Chat", back_populates="messages")
    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")
