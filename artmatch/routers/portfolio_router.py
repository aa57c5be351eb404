# artmatch/routers/portfolio_router.py

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.portfolio_schema import PortfolioOut
from artmatch.services.portfolio_service import PortfolioService
from artmatch.utils.ids import parse_id

router = APIRouter(
    prefix="/portfolios",
    tags=["Portfolios"],
    dependencies=[Depends(get_current_user)]
)

@router.post("", response_model=PortfolioOut, status_code=status.HTTP_201_CREATED)
async def create_portfolio_item(
    # 檔案上傳，description 必須來自 Form
    image: UploadFile = File(...),
    description: Optional[str] = Form(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (藝術家) 上傳作品

    - 必須傳送 form-data。
    - 檔案支援 JPEG / PNG / WebP / PDF。
    """
    service = PortfolioService(db)
    return await service.create_item(current_user, image, description)

# (注意) /me 必須在 /{artist_id} 之前
@router.get("/me", response_model=List[PortfolioOut])
async def get_my_portfolio(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PortfolioService(db)
    return await service.list_my_items(current_user)

@router.get("/{artist_id}", response_model=List[PortfolioOut])
async def get_artist_portfolio(
    artist_id: str,
    db: AsyncSession = Depends(get_db)
):
    """查看指定藝術家 (以 user_id 指定) 的作品集"""
    service = PortfolioService(db)
    return await service.list_artist_items(parse_id(artist_id, "藝術家 ID"))

@router.put("/{portfolio_id}", response_model=PortfolioOut)
async def update_portfolio_item(
    portfolio_id: str,
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """更新作品說明或替換檔案 (皆為選填)"""
    service = PortfolioService(db)
    return await service.update_item(parse_id(portfolio_id, "作品 ID"), current_user, description, image)

@router.delete("/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio_item(
    portfolio_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PortfolioService(db)
    await service.delete_item(parse_id(portfolio_id, "作品 ID"), current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
