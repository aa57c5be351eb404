# artmatch/routers/job_router.py

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.job_schema import (
    JobPostingCreate, JobPostingUpdate, JobPostingOut,
    JobApplicationOut, JobApplicationWithJobOut, ApplyOut
)
from artmatch.services.job_service import JobService
from artmatch.services.push_service import PushService, get_push_service
from artmatch.utils.ids import parse_id

router = APIRouter(
    prefix="/job-postings",
    tags=["Job Postings"],
    dependencies=[Depends(get_current_user)]
)

# 藝術家的應徵紀錄 (不在 /job-postings 底下)
application_router = APIRouter(
    tags=["Job Applications"],
    dependencies=[Depends(get_current_user)]
)

@router.post("", response_model=JobPostingOut, status_code=status.HTTP_201_CREATED)
async def create_job_posting(
    job_data: JobPostingCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (雇主) 刊登新職缺
    """
    service = JobService(db)
    return await service.create_job(job_data, current_user)

@router.get("", response_model=List[JobPostingOut])
async def list_job_postings(
    keyword: Optional[str] = Query(None, description="職缺標題關鍵字"),
    location: Optional[str] = Query(None, description="地區"),
    db: AsyncSession = Depends(get_db)
):
    """
    瀏覽所有職缺 (可依關鍵字 / 地區篩選)
    """
    service = JobService(db)
    return await service.list_jobs(keyword=keyword, location=location)

# (注意) /my 必須定義在 /{job_id} 之前
@router.get("/my", response_model=List[JobPostingOut])
async def list_my_job_postings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = JobService(db)
    return await service.list_my_jobs(current_user)

@router.get("/{job_id}", response_model=JobPostingOut)
async def get_job_posting(
    job_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = JobService(db)
    return await service.get_job(parse_id(job_id, "職缺 ID"))

@router.put("/{job_id}", response_model=JobPostingOut)
async def update_job_posting(
    job_id: str,
    update_data: JobPostingUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (雇主) 更新自己的職缺
    """
    service = JobService(db)
    return await service.update_job(parse_id(job_id, "職缺 ID"), update_data, current_user)

@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_posting(
    job_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (雇主) 刪除自己的職缺，應徵紀錄一併刪除
    """
    service = JobService(db)
    await service.delete_job(parse_id(job_id, "職缺 ID"), current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{job_id}/apply", response_model=ApplyOut, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    push_service: PushService = Depends(get_push_service)
):
    """
    (藝術家) 應徵職缺，雇主會收到通知
    """
    service = JobService(db, push_service)
    application = await service.apply_to_job(parse_id(job_id, "職缺 ID"), current_user)
    return ApplyOut(message="應徵成功", application=JobApplicationOut.model_validate(application))

@application_router.get("/my-applications", response_model=List[JobApplicationWithJobOut])
async def list_my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (藝術家) 查看自己的應徵紀錄 (附職缺資訊)
    """
    service = JobService(db)
    return await service.list_my_applications(current_user)
