# artmatch/repositories/profile_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Union
from artmatch.models.artist_profile import ArtistProfile
from artmatch.models.employer_profile import EmployerProfile
from artmatch.schemas.profile_schema import ProfileUpdate

AnyProfile = Union[ArtistProfile, EmployerProfile]


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # --- Artist ---
    async def get_artist_profile_by_user_id(self, user_id: int) -> ArtistProfile | None:
        stmt = select(ArtistProfile).where(ArtistProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    # --- Employer ---
    async def get_employer_profile_by_user_id(self, user_id: int) -> EmployerProfile | None:
        stmt = select(EmployerProfile).where(EmployerProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def update_profile(self, profile: AnyProfile, update_data: ProfileUpdate) -> AnyProfile:
        """更新 Profile (藝術家 / 雇主 共用)"""

        # exclude_unset=True 只包含 "有被傳入" 的欄位
        update_dict = update_data.model_dump(exclude_unset=True)

        for key, value in update_dict.items():
            setattr(profile, key, value)

        await self.db.commit()
        await self.db.refresh(profile)
        return profile

    async def set_profile_picture(self, profile: AnyProfile, url: str | None) -> AnyProfile:
        profile.profile_picture = url
        await self.db.commit()
        await self.db.refresh(profile)
        return profile
