# artmatch/routers/message_router.py

from fastapi import APIRouter, Depends, status, WebSocket, WebSocketDisconnect, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import json
import logging

from artmatch.core.database import get_db
from artmatch.core.security import get_current_user, get_current_user_from_websocket_token
from artmatch.core.websocket_manager import ConnectionManager, get_connection_manager, chat_room
from artmatch.services.message_service import ChatService
from artmatch.services.push_service import PushService, get_push_service
from artmatch.schemas.message_schema import (
    ChatCreate, ChatStartOut, ChatOut, ChatListItemOut, ChatHistoryOut, MessageIn, MessageOut, MessageSentOut
)
from artmatch.models.user import User
from artmatch.utils.ids import parse_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["Chats"])
ws_router = APIRouter(tags=["WebSocket"])

# --- RESTful API ---

@router.post("", response_model=ChatStartOut, summary="開啟 (或取得既有的) 聊天室")
async def start_chat(
    chat_data: ChatCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    與指定使用者開啟聊天室；兩人之間已有聊天室時直接回傳該聊天室。
    """
    service = ChatService(db)
    chat, created = await service.start_chat(user, chat_data.receiver_id)
    message = "聊天室建立成功" if created else "聊天室已存在"
    return ChatStartOut(message=message, chat=ChatOut.model_validate(chat))

@router.get("", response_model=List[ChatListItemOut], summary="獲取使用者的聊天室列表")
async def list_user_chats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入使用者參與的所有聊天室 (最近有訊息的在前)。
    """
    service = ChatService(db)
    return await service.get_user_chats(user)

@router.get("/{chat_id}/messages", response_model=ChatHistoryOut, summary="獲取聊天室的歷史訊息")
async def get_history_messages(
    chat_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取聊天室的歷史訊息 (舊 -> 新)，只有聊天室成員可以查看。
    """
    service = ChatService(db)
    messages = await service.get_chat_messages(parse_id(chat_id, "聊天室 ID"), user)
    return ChatHistoryOut(messages=[MessageOut.model_validate(m) for m in messages])

@router.post("/send", response_model=MessageSentOut, status_code=status.HTTP_201_CREATED, summary="傳送訊息")
async def send_message(
    message_in: MessageIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    push_service: PushService = Depends(get_push_service)
):
    """
    儲存訊息，並推播 new_message 到聊天室與接收者的連線。
    """
    service = ChatService(db, push_service)
    new_message = await service.send_message(user, message_in)
    return MessageSentOut(message="訊息已送出", data=MessageOut.model_validate(new_message))


# --- WebSocket Endpoint ---

async def _handle_client_frame(
    raw: str,
    websocket: WebSocket,
    user: User,
    service: ChatService,
    manager: ConnectionManager
) -> None:
    """
    處理前端送來的控制訊息：
      {"event": "join_chat", "chat_id": N}
      {"event": "leave_chat", "chat_id": N}
    """
    try:
        frame = json.loads(raw)
        event = frame.get("event")
        chat_id = frame.get("chat_id")
    except (ValueError, AttributeError):
        chat_id = None
    # chat_id 必須是 JSON 整數 (1.9、"1"、true 都不接受)
    if not isinstance(chat_id, int) or isinstance(chat_id, bool):
        await manager.send_direct(websocket, "error", {"detail": "無效的訊息格式"})
        return

    if event == "join_chat":
        try:
            await service.get_participant_chat(chat_id, user)
        except HTTPException as e:
            await manager.send_direct(websocket, "error", {"detail": e.detail, "chat_id": chat_id})
            return
        manager.join(chat_room(chat_id), websocket)
        await manager.send_direct(websocket, "joined_chat", {"chat_id": chat_id})
    elif event == "leave_chat":
        manager.leave(chat_room(chat_id), websocket)
        await manager.send_direct(websocket, "left_chat", {"chat_id": chat_id})
    else:
        await manager.send_direct(websocket, "error", {"detail": f"不支援的事件: {event}"})

@ws_router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    # 前端連線 URL 必須是: /ws?token=...
    user: User = Depends(get_current_user_from_websocket_token),
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager)
):
    """
    WebSocket 即時推播端點。
    - 連線後自動加入 user-{id}，接收 new_notification
    - 傳送 join_chat 後加入 chat-{id}，接收 new_message
    """
    user_id = user.user_id
    service = ChatService(db)

    await manager.connect(user_id, websocket)

    try:
        while True:
            data = await websocket.receive_text()
            await _handle_client_frame(data, websocket, user, service, manager)
    except WebSocketDisconnect:
        manager.disconnect(user_id, websocket)
    except Exception as e:
        # 處理意外錯誤
        logger.error(f"Unexpected error in WS for user {user_id}: {e}", exc_info=True)
        manager.disconnect(user_id, websocket)
