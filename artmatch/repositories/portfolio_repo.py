# artmatch/repositories/portfolio_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional

from artmatch.models.portfolio import Portfolio

class PortfolioRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_item_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        stmt = select(Portfolio).where(Portfolio.portfolio_id == portfolio_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_items_by_artist(self, artist_user_id: int) -> List[Portfolio]:
        stmt = (
            select(Portfolio)
            .where(Portfolio.artist_user_id == artist_user_id)
            .order_by(Portfolio.created_at.desc(), Portfolio.portfolio_id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_all_items(self) -> List[Portfolio]:
        stmt = select(Portfolio).order_by(Portfolio.created_at.desc(), Portfolio.portfolio_id.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_items(self) -> int:
        result = await self.db.execute(select(func.count(Portfolio.portfolio_id)))
        return result.scalar_one()

    async def create_item(self, item: Portfolio) -> Portfolio:
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def update_item(self, item: Portfolio) -> Portfolio:
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete_item(self, item: Portfolio) -> None:
        await self.db.delete(item)
        await self.db.commit()
