# artmatch/routers/comment_router.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user
from artmatch.models.user import User
from artmatch.schemas.comment_schema import CommentCreate, CommentOut
from artmatch.services.comment_service import CommentService
from artmatch.services.push_service import PushService, get_push_service
from artmatch.utils.ids import parse_id

router = APIRouter(
    tags=["Comments"],
    dependencies=[Depends(get_current_user)]
)

@router.post("/users/{user_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
async def add_comment(
    user_id: str,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    push_service: PushService = Depends(get_push_service)
):
    """
    (藝術家) 在其他藝術家的個人頁留言，每人每頁限一則
    """
    service = CommentService(db, push_service)
    return await service.add_comment(parse_id(user_id, "使用者 ID"), comment_data, current_user)

@router.get("/users/{user_id}/comments", response_model=List[CommentOut])
async def list_comments(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = CommentService(db)
    return await service.list_comments(parse_id(user_id, "使用者 ID"))

@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """刪除自己的留言"""
    service = CommentService(db)
    await service.delete_comment(parse_id(comment_id, "留言 ID"), current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
