# artmatch/services/job_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from artmatch.models.user import User, UserRoleEnum
from artmatch.models.job_posting import JobPosting, JobApplication
from artmatch.models.notification import NEW_APPLICATION
from artmatch.repositories.job_repo import JobRepository
from artmatch.schemas.job_schema import JobPostingCreate, JobPostingUpdate
from artmatch.services.notification_service import NotificationService
from artmatch.services.push_service import PushService

logger = logging.getLogger(__name__)

class JobService:
    def __init__(self, db: AsyncSession, push_service: Optional[PushService] = None):
        self.db = db
        self.job_repo = JobRepository(db)
        self.notification_service = NotificationService(db, push_service)

    async def create_job(self, job_data: JobPostingCreate, employer: User) -> JobPosting:
        """
        業務邏輯：雇主刊登職缺
        """
        if employer.role != UserRoleEnum.employer:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有雇主可以刊登職缺")

        new_job = JobPosting(**job_data.model_dump(), employer_user_id=employer.user_id)
        created = await self.job_repo.create_job(new_job)
        logger.info(f"Job {created.job_id} posted by User {employer.user_id}")
        return created

    async def list_jobs(self, keyword: Optional[str] = None, location: Optional[str] = None) -> List[JobPosting]:
        return await self.job_repo.list_jobs(keyword=keyword, location=location)

    async def list_my_jobs(self, employer: User) -> List[JobPosting]:
        if employer.role != UserRoleEnum.employer:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有雇主可以查看自己的職缺")
        return await self.job_repo.list_jobs_by_employer(employer.user_id)

    async def get_job(self, job_id: int) -> JobPosting:
        job = await self.job_repo.get_job_by_id(job_id)
        if not job:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")
        return job

    async def _get_owned_job(self, job_id: int, user: User) -> JobPosting:
        job = await self.get_job(job_id)
        if job.employer_user_id != user.user_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "您不是此職缺的擁有者")
        return job

    async def update_job(self, job_id: int, update_data: JobPostingUpdate, user: User) -> JobPosting:
        job = await self._get_owned_job(job_id, user)
        for key, value in update_data.model_dump(exclude_unset=True).items():
            setattr(job, key, value)
        return await self.job_repo.update_job(job)

    async def delete_job(self, job_id: int, user: User) -> None:
        job = await self._get_owned_job(job_id, user)
        await self.job_repo.delete_job(job)

    async def apply_to_job(self, job_id: int, artist: User) -> JobApplication:
        """
        業務邏輯：藝術家應徵職缺，並通知雇主
        """
        if artist.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有藝術家可以應徵職缺")

        job = await self.get_job(job_id)
        # 先取出需要的值，之後的 commit / rollback 不影響
        employer_id = job.employer_user_id
        job_title = job.title
        artist_id = artist.user_id
        artist_name = artist.fullname

        if await self.job_repo.check_existing_application(job_id, artist_id):
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經應徵過此職缺")

        try:
            application = await self.job_repo.create_application(
                JobApplication(job_id=job_id, artist_user_id=artist_id, status="pending")
            )
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經應徵過此職缺")

        # 通知失敗不影響已完成的應徵
        try:
            await self.notification_service.notify(
                user_id=employer_id,
                sender_id=artist_id,
                message_key=NEW_APPLICATION,
                message_params={"name": artist_name, "job_id": job_id, "job_title": job_title}
            )
        except Exception as e:
            await self.db.rollback()
            logger.error(f"通知雇主 {employer_id} 新應徵失敗: {e}", exc_info=True)
            await self.db.refresh(application)

        return application

    async def list_my_applications(self, artist: User) -> List[JobApplication]:
        if artist.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有藝術家可以查看應徵紀錄")
        return await self.job_repo.list_applications_by_artist(artist.user_id)
