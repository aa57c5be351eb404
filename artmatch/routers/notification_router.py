# artmatch/routers/notification_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from artmatch.core.database import get_db
from artmatch.models.user import User
from artmatch.core.security import get_current_user
from artmatch.services.notification_service import NotificationService
from artmatch.schemas.notification_schema import (
    NotificationOut, NotificationListOut, NotificationActionOut, NotificationBulkOut
)
from artmatch.utils.ids import parse_id

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
    dependencies=[Depends(get_current_user)]
)

@router.get(
    "/{user_id}",
    response_model=NotificationListOut,
    summary="獲取使用者的通知列表"
)
async def get_user_notifications(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取通知列表 (依時間倒序，附上發送者名稱)，只能查看自己的通知。
    """
    service = NotificationService(db)
    notifications = await service.get_user_notifications(parse_id(user_id, "使用者 ID"), current_user)
    return NotificationListOut(notifications=[NotificationOut.model_validate(n) for n in notifications])

@router.put(
    "/{user_id}/all-read",
    response_model=NotificationBulkOut,
    summary="將所有通知設為已讀"
)
async def mark_all_as_read(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = NotificationService(db)
    count = await service.mark_all_as_read(parse_id(user_id, "使用者 ID"), current_user)
    return NotificationBulkOut(message="所有通知已設為已讀", count=count)

@router.put(
    "/{notification_id}",
    response_model=NotificationActionOut,
    summary="將通知設為已讀"
)
async def mark_as_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    當使用者點擊通知時，前端應呼叫此 API 將其標記為已讀。
    """
    service = NotificationService(db)
    notification = await service.mark_notification_as_read(parse_id(notification_id, "通知 ID"), current_user)
    return NotificationActionOut(message="通知已設為已讀", notification=NotificationOut.model_validate(notification))

@router.delete(
    "/{user_id}/all",
    response_model=NotificationBulkOut,
    summary="刪除所有通知"
)
async def delete_all_notifications(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = NotificationService(db)
    count = await service.delete_all_notifications(parse_id(user_id, "使用者 ID"), current_user)
    return NotificationBulkOut(message="所有通知已刪除", count=count)

@router.delete(
    "/{notification_id}",
    response_model=NotificationActionOut,
    summary="刪除單一通知"
)
async def delete_notification(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = NotificationService(db)
    await service.delete_notification(parse_id(notification_id, "通知 ID"), current_user)
    return NotificationActionOut(message="通知已刪除")
