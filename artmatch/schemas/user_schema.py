# artmatch/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
import re
from datetime import datetime
from artmatch.models.user import UserRoleEnum
from artmatch.schemas.profile_schema import ProfileOut
from typing import Optional

# Token 回應的格式
class Token(BaseModel):
    access_token: str
    token_type: str

# Token 內的資料
class TokenData(BaseModel):
    user_id: int
    role: str


# 註冊請求 Body
class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    # 密碼要求英數混合
    password: str = Field(..., min_length=8)
    fullname: str = Field(..., min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    role: UserRoleEnum # 接受 "Artist" / "Employer"

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        """
        驗證密碼是否至少8碼且包含英文和數字
        """
        if not re.search(r'(?=.*[a-zA-Z])(?=.*[0-9])', v):
            raise ValueError('密碼必須包含英文和數字')
        return v

# 更新個人資料 (全為選填)
class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    fullname: Optional[str] = Field(None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)

# 註冊/查詢使用者的安全回應 (不含密碼)
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    username: str
    email: EmailStr
    fullname: str
    phone_number: Optional[str] = None
    role: UserRoleEnum
    is_active: bool

# 目前登入者 (含 Profile)
class UserOutWithProfile(UserOut):
    profile: Optional[ProfileOut] = None

# 公開的個人頁資料
class PublicUserProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    fullname: str
    role: UserRoleEnum
    artist_profile: Optional[ProfileOut] = None
    employer_profile: Optional[ProfileOut] = None

# 管理員用的使用者列表
class AdminUserOut(UserOut):
    created_at: Optional[datetime] = None
