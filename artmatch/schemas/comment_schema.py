# artmatch/schemas/comment_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class CommentCreate(BaseModel):
    comment_text: str = Field(..., min_length=1, max_length=2000)

class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_id: int
    profile_user_id: int
    commenter_user_id: int
    comment_text: str
    commenter_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
