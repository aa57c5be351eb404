# artmatch/schemas/message_schema.py

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime


class ChatCreate(BaseModel):
    """
    用於開啟聊天室的請求體 (前端傳 receiverId)
    """
    model_config = ConfigDict(populate_by_name=True)

    receiver_id: int = Field(..., alias="receiverId", gt=0)

class ChatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    chat_id: int
    user1_id: int
    user2_id: int
    message_count: int
    artist_rating_status: str
    employer_rating_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ChatStartOut(BaseModel):
    message: str
    chat: ChatOut

class ChatListItemOut(ChatOut):
    """聊天室列表：附上對方的 id 與顯示名稱"""
    other_user_id: int
    other_user_name: str

class MessageIn(BaseModel):
    chat_id: int = Field(..., gt=0)
    message: str = Field(..., description="訊息內容")

class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message_id: int
    chat_id: int
    sender_id: int
    receiver_id: int
    message: str
    created_at: Optional[datetime] = None

class MessageSentOut(BaseModel):
    message: str
    data: MessageOut

class ChatHistoryOut(BaseModel):
    messages: List[MessageOut]
