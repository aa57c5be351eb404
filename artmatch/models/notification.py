# artmatch/models/notification.py

from sqlalchemy import Column, Integer, String, TEXT, BOOLEAN, JSON, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

# 前端依 message_key 做多語系顯示
NEW_LIKE = "notification.new_like"
NEW_MATCH = "notification.new_match"
NEW_APPLICATION = "notification.new_application"
NEW_COMMENT = "notification.new_comment"

class Notification(Base):
    __tablename__ = "notifications"

    notification_id = Column(Integer, primary_key=True, autoincrement=True)

    # (重要) 接收通知的 user
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    # 觸發通知的 user
    sender_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)

    # 二擇一：直接顯示的訊息，或是 message_key + 參數
    message = Column(TEXT, nullable=True)
    message_key = Column(String(100), nullable=True)
    message_params = Column(JSON, nullable=True)

    read_status = Column(BOOLEAN, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 建立反向關聯
    user = relationship("User", foreign_keys=[user_id])
    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")

    @property
    def sender_name(self) -> str:
        return self.sender.fullname if self.sender else "未知使用者"
