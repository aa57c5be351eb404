# artmatch/schemas/notification_schema.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Any, Dict, List, Optional

class NotificationOut(BaseModel):
    """
    用於 API 回傳 / WebSocket 推播的通知格式
    """
    model_config = ConfigDict(from_attributes=True)

    notification_id: int
    user_id: int
    sender_id: int
    message: Optional[str] = None
    message_key: Optional[str] = None
    message_params: Optional[Dict[str, Any]] = None
    read_status: bool
    created_at: Optional[datetime] = None
    sender_name: str

class NotificationListOut(BaseModel):
    notifications: List[NotificationOut]

class NotificationActionOut(BaseModel):
    message: str
    notification: Optional[NotificationOut] = None

class NotificationBulkOut(BaseModel):
    """全部已讀 / 全部刪除 的回應 (count 為影響筆數)"""
    message: str
    count: int
