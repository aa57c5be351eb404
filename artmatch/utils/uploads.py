# artmatch/utils/uploads.py
# 上傳檔案的本機儲存 (大頭貼、作品集共用)
from fastapi import HTTPException, status, UploadFile
from pathlib import Path
from typing import Dict, Iterable, Optional
import aiofiles
import aiofiles.os
import logging
import uuid

from artmatch.core.config import settings

logger = logging.getLogger(__name__)

# content type -> 副檔名
IMAGE_TYPES: Dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
PDF_TYPES: Dict[str, str] = {
    "application/pdf": ".pdf",
}


def _url_for(filename: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{filename}"


async def save_upload_file(file: UploadFile, allowed_types: Dict[str, str], detail: str) -> str:
    """
    將上傳檔案寫入 UPLOAD_DIR，回傳對外的 URL

    - 格式不在 allowed_types 中回傳 400 (detail 為錯誤訊息)
    - 超過 MAX_UPLOAD_BYTES 回傳 413
    """
    extension = allowed_types.get(file.content_type)
    if not extension:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="檔案大小超過上限"
        )

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{uuid.uuid4()}{extension}"
    try:
        async with aiofiles.open(upload_dir / filename, 'wb') as f:
            await f.write(content)
    except OSError as e:
        logger.error(f"檔案儲存失敗: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="檔案儲存失敗"
        )
    return _url_for(filename)


async def remove_upload_file(url: Optional[str]) -> None:
    """刪除本機上的檔案 (不是本機 URL 或找不到檔案就略過)"""
    if not url:
        return
    prefix = settings.UPLOAD_URL_PREFIX.rstrip('/') + '/'
    if not url.startswith(prefix):
        return
    path = Path(settings.UPLOAD_DIR) / url[len(prefix):]
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"刪除檔案 {path} 失敗: {e}")


async def remove_upload_files(urls: Iterable[Optional[str]]) -> None:
    for url in urls:
        await remove_upload_file(url)
