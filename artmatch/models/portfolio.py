# artmatch/models/portfolio.py

from sqlalchemy import Column, Integer, String, TEXT, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

# 作品類型 (依上傳檔案的格式決定)
ITEM_TYPE_IMAGE = "image"
ITEM_TYPE_PDF = "pdf"

class Portfolio(Base):
    __tablename__ = "artist_portfolios"

    portfolio_id = Column(Integer, primary_key=True, autoincrement=True)
    artist_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(1024), nullable=False)
    description = Column(TEXT, nullable=True)
    item_type = Column(String(20), nullable=False, default=ITEM_TYPE_IMAGE)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    artist = relationship("User", foreign_keys=[artist_user_id], lazy="selectin")

    @property
    def artist_name(self) -> str:
        return self.artist.fullname if self.artist else "未知使用者"
