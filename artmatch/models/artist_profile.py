# artmatch/models/artist_profile.py
from sqlalchemy import Column, Integer, String, TEXT, ForeignKey
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

class ArtistProfile(Base):
    __tablename__ = "artist_profiles"
    profile_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    bio = Column(TEXT, default="")
    profile_picture = Column(String(500))

    # 呼應 user.py 中的 'artist_profile'
    user = relationship("User", back_populates="artist_profile")
