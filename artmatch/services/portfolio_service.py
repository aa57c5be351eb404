# artmatch/services/portfolio_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status, UploadFile
from typing import List, Optional
import logging

from artmatch.models.portfolio import Portfolio, ITEM_TYPE_IMAGE, ITEM_TYPE_PDF
from artmatch.models.user import User, UserRoleEnum
from artmatch.repositories.portfolio_repo import PortfolioRepository
from artmatch.repositories.user_repo import UserRepository
from artmatch.utils.uploads import IMAGE_TYPES, PDF_TYPES, save_upload_file, remove_upload_file

logger = logging.getLogger(__name__)

# 作品集接受圖片與 PDF
PORTFOLIO_TYPES = {**IMAGE_TYPES, **PDF_TYPES}
PORTFOLIO_TYPE_ERROR = "作品僅支援 JPEG、PNG、WebP 或 PDF 格式"


def _item_type_for(file: UploadFile) -> str:
    return ITEM_TYPE_PDF if file.content_type in PDF_TYPES else ITEM_TYPE_IMAGE


class PortfolioService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = PortfolioRepository(db)
        self.user_repo = UserRepository(db)

    def _ensure_artist(self, user: User):
        if user.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有藝術家可以管理作品集")

    async def _get_own_item(self, portfolio_id: int, user: User) -> Portfolio:
        item = await self.repo.get_item_by_id(portfolio_id)
        if not item:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "作品不存在")
        if item.artist_user_id != user.user_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "您沒有權限修改此作品")
        return item

    async def _save_item(self, item: Portfolio, uploaded_url: Optional[str], create: bool) -> Portfolio:
        """寫入資料庫；失敗時移除本次上傳的檔案"""
        try:
            if create:
                return await self.repo.create_item(item)
            return await self.repo.update_item(item)
        except Exception:
            logger.error(f"作品 {item.portfolio_id} 儲存失敗，移除 {uploaded_url}")
            await self.db.rollback()
            await remove_upload_file(uploaded_url)
            raise

    async def create_item(self, artist: User, file: UploadFile, description: Optional[str]) -> Portfolio:
        """
        上傳一件作品 (藝術家限定)
        """
        self._ensure_artist(artist)
        url = await save_upload_file(file, PORTFOLIO_TYPES, PORTFOLIO_TYPE_ERROR)
        item = Portfolio(
            artist_user_id=artist.user_id,
            image_url=url,
            description=description,
            item_type=_item_type_for(file)
        )
        item = await self._save_item(item, url, create=True)
        logger.info(f"Artist {artist.user_id} added Portfolio {item.portfolio_id}")
        return item

    async def list_my_items(self, artist: User) -> List[Portfolio]:
        self._ensure_artist(artist)
        return await self.repo.list_items_by_artist(artist.user_id)

    async def list_artist_items(self, artist_user_id: int) -> List[Portfolio]:
        artist = await self.user_repo.get_user_by_id(artist_user_id)
        if not artist or artist.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "找不到此藝術家")
        return await self.repo.list_items_by_artist(artist_user_id)

    async def update_item(
        self,
        portfolio_id: int,
        user: User,
        description: Optional[str],
        file: Optional[UploadFile]
    ) -> Portfolio:
        """
        更新作品說明，或換掉作品檔案 (只有作者本人可以修改)
        """
        item = await self._get_own_item(portfolio_id, user)
        old_url = None
        new_url = None
        if file is not None:
            new_url = await save_upload_file(file, PORTFOLIO_TYPES, PORTFOLIO_TYPE_ERROR)
            old_url = item.image_url
            item.image_url = new_url
            item.item_type = _item_type_for(file)
        if description is not None:
            item.description = description

        item = await self._save_item(item, new_url, create=False)
        await remove_upload_file(old_url)
        return item

    async def delete_item(self, portfolio_id: int, user: User) -> None:
        item = await self._get_own_item(portfolio_id, user)
        await self._delete(item)
        logger.info(f"Artist {user.user_id} deleted Portfolio {portfolio_id}")

    # --- 管理員 ---

    async def list_all_items(self) -> List[Portfolio]:
        return await self.repo.list_all_items()

    async def delete_item_as_admin(self, portfolio_id: int, admin: User) -> None:
        item = await self.repo.get_item_by_id(portfolio_id)
        if not item:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "作品不存在")
        await self._delete(item)
        logger.info(f"Admin {admin.user_id} deleted Portfolio {portfolio_id}")

    async def _delete(self, item: Portfolio) -> None:
        url = item.image_url
        await self.repo.delete_item(item)
        await remove_upload_file(url)
