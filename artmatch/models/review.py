# artmatch/models/review.py

from sqlalchemy import Column, Integer, JSON, ForeignKey, TIMESTAMP, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        # 每位使用者在每間聊天室只能評價一次
        UniqueConstraint("chat_id", "reviewer_user_id", name="uq_reviews_chat_reviewer"),
        CheckConstraint("overall_rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    review_id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column(Integer, ForeignKey("chats.chat_id", ondelete="CASCADE"), nullable=False, index=True)
    reviewer_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    reviewed_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    overall_rating = Column(Integer, nullable=False)
    specific_answers = Column(JSON, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    reviewer = relationship("User", foreign_keys=[reviewer_user_id], lazy="selectin")

    @property
    def reviewer_name(self) -> str:
        return self.reviewer.fullname if self.reviewer else "未知使用者"
