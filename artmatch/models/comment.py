# artmatch/models/comment.py

from sqlalchemy import Column, Integer, TEXT, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

class ArtistComment(Base):
    """藝術家在另一位藝術家的個人頁留下的評論 (每人每頁一則)"""
    __tablename__ = "artist_comments"
    __table_args__ = (
        UniqueConstraint("commenter_user_id", "profile_user_id", name="uq_artist_comments_pair"),
    )

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    profile_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    commenter_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    comment_text = Column(TEXT, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    commenter = relationship("User", foreign_keys=[commenter_user_id], lazy="selectin")

    @property
    def commenter_name(self) -> str:
        return self.commenter.fullname if self.commenter else "未知使用者"
