# artmatch/services/comment_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List, Optional
import logging

from artmatch.models.user import User, UserRoleEnum
from artmatch.models.comment import ArtistComment
from artmatch.models.notification import NEW_COMMENT
from artmatch.repositories.comment_repo import CommentRepository
from artmatch.repositories.user_repo import UserRepository
from artmatch.schemas.comment_schema import CommentCreate
from artmatch.services.notification_service import NotificationService
from artmatch.services.push_service import PushService

logger = logging.getLogger(__name__)

class CommentService:
    def __init__(self, db: AsyncSession, push_service: Optional[PushService] = None):
        self.db = db
        self.comment_repo = CommentRepository(db)
        self.user_repo = UserRepository(db)
        self.notification_service = NotificationService(db, push_service)

    async def add_comment(self, profile_user_id: int, comment_data: CommentCreate, commenter: User) -> ArtistComment:
        """
        藝術家在另一位藝術家的個人頁留言 (每人每頁一則)
        """
        if commenter.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有藝術家可以留言")
        if profile_user_id == commenter.user_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法在自己的頁面留言")

        profile_user = await self.user_repo.get_user_by_id(profile_user_id)
        if not profile_user or profile_user.role != UserRoleEnum.artist:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "藝術家不存在")

        commenter_id = commenter.user_id
        commenter_name = commenter.fullname

        if await self.comment_repo.check_existing_comment(commenter_id, profile_user_id):
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經在此頁面留過言")

        try:
            comment = await self.comment_repo.create_comment(ArtistComment(
                profile_user_id=profile_user_id,
                commenter_user_id=commenter_id,
                comment_text=comment_data.comment_text
            ))
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status.HTTP_409_CONFLICT, "您已經在此頁面留過言")

        try:
            await self.notification_service.notify(
                user_id=profile_user_id,
                sender_id=commenter_id,
                message_key=NEW_COMMENT,
                message_params={"name": commenter_name}
            )
        except Exception as e:
            await self.db.rollback()
            logger.error(f"通知 User {profile_user_id} 新留言失敗: {e}", exc_info=True)
            await self.db.refresh(comment)

        return comment

    async def list_comments(self, profile_user_id: int) -> List[ArtistComment]:
        return await self.comment_repo.list_comments_for_profile(profile_user_id)

    async def delete_comment(self, comment_id: int, user: User) -> None:
        comment = await self.comment_repo.get_comment_by_id(comment_id)
        if not comment:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "留言不存在")
        if comment.commenter_user_id != user.user_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只能刪除自己的留言")
        await self.comment_repo.delete_comment(comment)
