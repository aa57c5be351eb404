# artmatch/models/like.py

from sqlalchemy import Column, Integer, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

class Like(Base):
    """
    單向的「按讚」：user_id -> liked_user_id
    只有存在與否兩種狀態，沒有更新
    """
    __tablename__ = "likes"
    __table_args__ = (
        # 同一對 (按讚者, 被按讚者) 只能有一筆
        UniqueConstraint("user_id", "liked_user_id", name="uq_likes_pair"),
    )

    like_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    liked_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    liker = relationship("User", foreign_keys=[user_id])
    liked_user = relationship("User", foreign_keys=[liked_user_id])
