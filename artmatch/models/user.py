# models/user.py
from sqlalchemy import Column, Integer, String, Boolean, Enum, TIMESTAMP, func
from artmatch.core.database import Base
import enum
from sqlalchemy.orm import relationship

# 對應 SQL 中的 ENUM 型別
class UserRoleEnum(str, enum.Enum):
    artist = "Artist"
    employer = "Employer"
    admin = "Admin"

class User(Base):
    __tablename__ = "users"

    # 基本欄位 (user_id 為數字，聊天室配對時以大小排序)
    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    fullname = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=True)
    role = Column(Enum(UserRoleEnum, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 關聯設定
    artist_profile = relationship(
        "ArtistProfile", # <-- 使用字串
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    employer_profile = relationship(
        "EmployerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    job_postings = relationship(
        "JobPosting",
        back_populates="employer"
    )

    @property
    def profile(self):
        """依角色回傳對應的 Profile (管理員為 None)"""
        if self.role == UserRoleEnum.artist:
            return self.artist_profile
        if self.role == UserRoleEnum.employer:
            return self.employer_profile
        return None
