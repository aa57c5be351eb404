# artmatch/routers/admin_router.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from artmatch.core.database import get_db
from artmatch.core.security import get_current_admin
from artmatch.models.user import User
from artmatch.schemas.admin_schema import DashboardStatsOut, AdminUserDetailOut
from artmatch.schemas.comment_schema import CommentOut
from artmatch.schemas.job_schema import JobPostingOut
from artmatch.schemas.portfolio_schema import PortfolioOut
from artmatch.schemas.review_schema import ReviewOut
from artmatch.schemas.user_schema import AdminUserOut
from artmatch.services.admin_service import AdminService
from artmatch.services.portfolio_service import PortfolioService
from artmatch.utils.ids import parse_id

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin)] # 整個路由僅限管理員
)

@router.get("/stats", response_model=DashboardStatsOut)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    """後台首頁統計數字"""
    service = AdminService(db)
    return await service.get_stats()

# --- 使用者 ---

@router.get("/users", response_model=List[AdminUserOut])
async def list_users(db: AsyncSession = Depends(get_db)):
    service = AdminService(db)
    return await service.list_users()

@router.get("/users/{user_id}", response_model=AdminUserDetailOut)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    """單一使用者的完整資料 (含 Profile)"""
    service = AdminService(db)
    return await service.get_user(parse_id(user_id, "使用者 ID"))

@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdminService(db)
    await service.delete_user(parse_id(user_id, "使用者 ID"), admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- 評價 / 留言 ---

@router.get("/reviews", response_model=List[ReviewOut])
async def list_reviews(db: AsyncSession = Depends(get_db)):
    service = AdminService(db)
    return await service.list_reviews()

@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdminService(db)
    await service.delete_review(parse_id(review_id, "評價 ID"), admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/comments", response_model=List[CommentOut])
async def list_comments(db: AsyncSession = Depends(get_db)):
    service = AdminService(db)
    return await service.list_comments()

@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdminService(db)
    await service.delete_comment(parse_id(comment_id, "留言 ID"), admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- 作品集 ---

@router.get("/portfolios", response_model=List[PortfolioOut])
async def list_portfolios(db: AsyncSession = Depends(get_db)):
    service = PortfolioService(db)
    return await service.list_all_items()

@router.delete("/portfolios/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio(
    portfolio_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = PortfolioService(db)
    await service.delete_item_as_admin(parse_id(portfolio_id, "作品 ID"), admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- 職缺 ---

@router.get("/jobs", response_model=List[JobPostingOut])
async def list_jobs(db: AsyncSession = Depends(get_db)):
    service = AdminService(db)
    return await service.list_jobs()

@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdminService(db)
    await service.delete_job(parse_id(job_id, "職缺 ID"), admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
