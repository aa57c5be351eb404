# artmatch/models/support.py

from sqlalchemy import Column, Integer, ForeignKey, TIMESTAMP, UniqueConstraint, func
from artmatch.core.database import Base

class ArtistSupport(Base):
    """
    藝術家對另一位藝術家的「應援」：supporter_user_id -> supported_user_id
    和 Like 一樣只有存在與否，但不會觸發配對
    """
    __tablename__ = "artist_supports"
    __table_args__ = (
        UniqueConstraint("supporter_user_id", "supported_user_id", name="uq_artist_supports_pair"),
    )

    support_id = Column(Integer, primary_key=True, autoincrement=True)
    supporter_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    supported_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
