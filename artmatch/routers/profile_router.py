# artmatch/routers/profile_router.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.profile_schema import ProfileOut, ProfileUpdate
from artmatch.services.profile_service import ProfileService

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/me", response_model=ProfileOut)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取我的 Profile (藝術家 / 雇主)
    """
    service = ProfileService(db)
    return await service.get_my_profile(current_user)

@router.put("/me", response_model=ProfileOut)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.update_my_profile(current_user, update_data)

@router.post("/me/picture", response_model=ProfileOut)
async def upload_profile_picture(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    上傳大頭貼 (僅支援 JPEG / PNG / WebP)，舊檔案會被刪除
    """
    service = ProfileService(db)
    return await service.upload_profile_picture(current_user, file)

@router.delete("/me/picture", response_model=ProfileOut)
async def delete_profile_picture(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.delete_profile_picture(current_user)
