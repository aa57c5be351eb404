# artmatch/schemas/profile_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# --- 藝術家 / 雇主 Profile (欄位相同) ---
class ProfileBase(BaseModel):
    bio: Optional[str] = Field(None, max_length=5000)

class ProfileUpdate(ProfileBase):
    pass # 更新時全為選填

class ProfileOut(ProfileBase):
    model_config = ConfigDict(from_attributes=True)

    profile_id: int
    user_id: int
    profile_picture: Optional[str] = None
