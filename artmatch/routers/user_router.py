# artmatch/routers/user_router.py
from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from artmatch.core.database import get_db, get_session_factory
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.user_schema import UserOutWithProfile, UserUpdate, PublicUserProfileOut
from artmatch.schemas.like_schema import LikeToggleOut, LikeStatusOut
from artmatch.schemas.support_schema import SupportToggleOut, SupportStatusOut
from artmatch.services.user_service import UserService
from artmatch.services.like_service import LikeService
from artmatch.services.support_service import SupportService
from artmatch.services.match_service import run_like_fanout
from artmatch.services.push_service import PushService, get_push_service
from artmatch.utils.ids import parse_id

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_user)] # (重要) 整個路由都需要登入
)

@router.get("/me", response_model=UserOutWithProfile)
async def read_users_me(
    current_user: User = Depends(get_current_user)
):
    """
    獲取當前登入使用者的基本資料與 Profile (不含密碼)
    """
    return current_user

@router.put("/me", response_model=UserOutWithProfile)
async def update_users_me(
    update_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = UserService(db)
    return await service.update_me(current_user, update_data)

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_users_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    刪除自己的帳號 (按讚、通知、聊天室一併刪除)
    """
    service = UserService(db)
    await service.delete_me(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/profile/{user_id}", response_model=PublicUserProfileOut)
async def get_public_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """
    獲取指定使用者的公開個人頁資料
    """
    service = UserService(db)
    return await service.get_public_profile(parse_id(user_id, "使用者 ID"))

# --- 按讚 / 配對 ---

@router.post("/{user_id}/like", response_model=LikeToggleOut, status_code=status.HTTP_201_CREATED)
async def toggle_like(
    user_id: str,
    response: Response,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    push_service: PushService = Depends(get_push_service)
):
    """
    對指定使用者按讚 / 收回讚

    - 按讚成功回傳 201，收回讚回傳 200。
    - 通知與配對 (雙方互讚時建立聊天室) 在回應送出後才執行。
    """
    target_id = parse_id(user_id, "使用者 ID")
    actor_id = current_user.user_id

    service = LikeService(db)
    liked = await service.toggle_like(current_user, target_id)

    if not liked:
        response.status_code = status.HTTP_200_OK
        return LikeToggleOut(message="已收回讚", liked=False)

    background_tasks.add_task(run_like_fanout, session_factory, push_service, actor_id, target_id)
    return LikeToggleOut(message="按讚成功", liked=True)

@router.get("/{user_id}/like", response_model=LikeStatusOut)
async def get_like_status(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """查詢自己是否已對指定使用者按讚"""
    service = LikeService(db)
    liked = await service.is_liked(current_user, parse_id(user_id, "使用者 ID"))
    return LikeStatusOut(liked=liked)

# --- 應援 (藝術家之間) ---

@router.post("/{user_id}/support", response_model=SupportToggleOut, status_code=status.HTTP_201_CREATED)
async def toggle_support(
    user_id: str,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (藝術家) 應援 / 取消應援另一位藝術家

    應援成功回傳 201，取消應援回傳 200，兩者都附上最新的應援數。
    """
    service = SupportService(db)
    has_supported, count = await service.toggle_support(current_user, parse_id(user_id, "使用者 ID"))

    if not has_supported:
        response.status_code = status.HTTP_200_OK
        return SupportToggleOut(message="已取消應援", has_supported=False, support_count=count)
    return SupportToggleOut(message="應援成功", has_supported=True, support_count=count)

@router.get("/{user_id}/support-status", response_model=SupportStatusOut)
async def get_support_status(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = SupportService(db)
    has_supported, count = await service.get_support_status(current_user, parse_id(user_id, "使用者 ID"))
    return SupportStatusOut(has_supported=has_supported, support_count=count)
