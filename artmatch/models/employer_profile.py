# artmatch/models/employer_profile.py
from sqlalchemy import Column, Integer, String, TEXT, ForeignKey
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

class EmployerProfile(Base):
    __tablename__ = "employer_profiles"
    profile_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    bio = Column(TEXT, default="")
    profile_picture = Column(String(500))

    # 1-to-1 反向關聯到 User
    # 呼應 user.py 中的 'employer_profile'
    user = relationship("User", back_populates="employer_profile")
