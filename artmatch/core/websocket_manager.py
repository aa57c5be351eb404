# artmatch/core/websocket_manager.py

from abc import ABC, abstractmethod
from fastapi import WebSocket
from typing import Any, Dict, List, Optional, Set
import json
import logging

logger = logging.getLogger(__name__)


def user_room(user_id: int) -> str:
    """每位使用者專屬的 room 名稱"""
    return f"user-{user_id}"

def chat_room(chat_id: int) -> str:
    """聊天室的 room 名稱"""
    return f"chat-{chat_id}"


class PresenceRegistry(ABC):
    """
    線上狀態查詢介面：user_id -> 目前的 WebSocket 連線

    預設實作放在記憶體中 (單一 process)。
    若要跨多台機器部署，可換成以 Redis 等實作的版本，只要提供相同的三個方法。
    """

    @abstractmethod
    def register(self, user_id: int, websocket: WebSocket) -> None:
        ...

    @abstractmethod
    def unregister(self, user_id: int, websocket: WebSocket) -> None:
        ...

    @abstractmethod
    def lookup(self, user_id: int) -> Optional[WebSocket]:
        ...


class InMemoryPresenceRegistry(PresenceRegistry):
    def __init__(self):
        # 結構: {user_id: WebSocket} (只記錄最後一次連線)
        self._sessions: Dict[int, WebSocket] = {}

    def register(self, user_id: int, websocket: WebSocket) -> None:
        self._sessions[user_id] = websocket

    def unregister(self, user_id: int, websocket: WebSocket) -> None:
        # 只移除同一條連線，避免新連線被舊連線的斷線事件清掉
        if self._sessions.get(user_id) is websocket:
            del self._sessions[user_id]

    def lookup(self, user_id: int) -> Optional[WebSocket]:
        return self._sessions.get(user_id)


# 連線管理器：維護 'room' -> List[WebSocket] 的映射
class ConnectionManager:
    """管理 WebSocket 連線：用於廣播事件給特定 Room 的所有連線。"""

    def __init__(self, presence: Optional[PresenceRegistry] = None):
        # 結構: {room: [WebSocket]}
        self.active_connections: Dict[str, List[WebSocket]] = {}
        self.presence = presence or InMemoryPresenceRegistry()

    async def connect(self, user_id: int, websocket: WebSocket):
        """接受連線、登記線上狀態，並加入使用者專屬 room"""
        await websocket.accept()
        self.presence.register(user_id, websocket)
        self.join(user_room(user_id), websocket)
        logger.info(f"User {user_id} connected.")

    def disconnect(self, user_id: int, websocket: WebSocket):
        self.presence.unregister(user_id, websocket)
        for room in list(self.active_connections.keys()):
            self.leave(room, websocket)
        logger.info(f"User {user_id} disconnected.")

    def join(self, room: str, websocket: WebSocket):
        connections = self.active_connections.setdefault(room, [])
        if websocket not in connections:
            connections.append(websocket)

    def leave(self, room: str, websocket: WebSocket):
        connections = self.active_connections.get(room)
        if not connections:
            return
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            del self.active_connections[room]

    def room_members(self, room: str) -> List[WebSocket]:
        return list(self.active_connections.get(room, []))

    @staticmethod
    def encode(event: str, payload: Any) -> str:
        return json.dumps({"event": event, "data": payload}, default=str)

    async def send_direct(self, websocket: WebSocket, event: str, payload: Any) -> bool:
        """傳送給單一連線；失敗時回傳 False"""
        try:
            await websocket.send_text(self.encode(event, payload))
            return True
        except Exception as e:
            logger.warning(f"Failed to send '{event}' to a client: {e}")
            return False

    async def emit(self, room: str, event: str, payload: Any) -> Set[int]:
        """
        將事件廣播給特定 Room 的所有連線。
        回傳成功送達的連線 id() 集合，供呼叫端避免重複傳送。
        """
        delivered: Set[int] = set()
        disconnected_clients = []
        for ws in self.room_members(room):
            if await self.send_direct(ws, event, payload):
                delivered.add(id(ws))
            else:
                disconnected_clients.append(ws)
        # 清理已斷開的連線
        for ws in disconnected_clients:
            self.leave(room, ws)
        return delivered

# 實例化管理器 (全域單例)
manager = ConnectionManager()


def get_connection_manager() -> ConnectionManager:
    """FastAPI Dependency: 取得連線管理器 (測試時可覆寫)"""
    return manager
