# artmatch/repositories/job_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from typing import List, Optional

from artmatch.models.job_posting import JobPosting, JobApplication

class JobRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # --- JobPosting ---

    async def get_job_by_id(self, job_id: int) -> Optional[JobPosting]:
        stmt = select(JobPosting).where(JobPosting.job_id == job_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_jobs(self, keyword: Optional[str] = None, location: Optional[str] = None) -> List[JobPosting]:
        """
        列出職缺 (可依關鍵字 / 地區模糊搜尋)
        """
        stmt = select(JobPosting)
        if keyword:
            stmt = stmt.where(JobPosting.title.ilike(f"%{keyword}%"))
        if location:
            stmt = stmt.where(JobPosting.location.ilike(f"%{location}%"))
        stmt = stmt.order_by(JobPosting.created_at.desc(), JobPosting.job_id.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_jobs_by_employer(self, employer_user_id: int) -> List[JobPosting]:
        stmt = (
            select(JobPosting)
            .where(JobPosting.employer_user_id == employer_user_id)
            .order_by(JobPosting.created_at.desc(), JobPosting.job_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_jobs(self) -> int:
        result = await self.db.execute(select(func.count(JobPosting.job_id)))
        return result.scalar_one()

    async def create_job(self, job: JobPosting) -> JobPosting:
        self.db.add(job)
        await self.db.commit()
        await self.db.refresh(job)
        return job

    async def update_job(self, job: JobPosting) -> JobPosting:
        await self.db.commit()
        await self.db.refresh(job)
        return job

    async def delete_job(self, job: JobPosting) -> None:
        """
        刪除職缺 (應徵紀錄由 relationship cascade 一併刪除)
        """
        await self.db.delete(job)
        await self.db.commit()

    # --- JobApplication ---

    async def check_existing_application(self, job_id: int, artist_user_id: int) -> Optional[JobApplication]:
        stmt = select(JobApplication).where(
            JobApplication.job_id == job_id,
            JobApplication.artist_user_id == artist_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_application(self, application: JobApplication) -> JobApplication:
        self.db.add(application)
        await self.db.commit()
        await self.db.refresh(application)
        return application

    async def list_applications_by_artist(self, artist_user_id: int) -> List[JobApplication]:
        stmt = (
            select(JobApplication)
            .where(JobApplication.artist_user_id == artist_user_id)
            .options(selectinload(JobApplication.job))
            .order_by(JobApplication.created_at.desc(), JobApplication.application_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
