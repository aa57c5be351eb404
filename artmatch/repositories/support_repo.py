# artmatch/repositories/support_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Optional

from artmatch.models.support import ArtistSupport

class SupportRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_support(self, supporter_user_id: int, supported_user_id: int) -> Optional[ArtistSupport]:
        stmt = select(ArtistSupport).where(
            ArtistSupport.supporter_user_id == supporter_user_id,
            ArtistSupport.supported_user_id == supported_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_support(self, supporter_user_id: int, supported_user_id: int) -> ArtistSupport:
        """
        新增應援 (重複時由唯一鍵擋下，拋出 IntegrityError)
        """
        support = ArtistSupport(supporter_user_id=supporter_user_id, supported_user_id=supported_user_id)
        self.db.add(support)
        await self.db.commit()
        await self.db.refresh(support)
        return support

    async def delete_support(self, support: ArtistSupport) -> None:
        await self.db.delete(support)
        await self.db.commit()

    async def count_supports(self, supported_user_id: int) -> int:
        stmt = select(func.count(ArtistSupport.support_id)).where(
            ArtistSupport.supported_user_id == supported_user_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()
