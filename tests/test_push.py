import pytest

from artmatch.core.websocket_manager import (
    ConnectionManager, InMemoryPresenceRegistry, PresenceRegistry, user_room, chat_room
)
from artmatch.services.push_service import PushService


class BrokenPresence(PresenceRegistry):
    def register(self, user_id, websocket):
        pass

    def unregister(self, user_id, websocket):
        pass

    def lookup(self, user_id):
        raise RuntimeError("presence store unavailable")


def test_room_names():
    assert user_room(7) == "user-7"
    assert chat_room(3) == "chat-3"


def test_presence_unregister_keeps_newer_session(make_socket):
    presence = InMemoryPresenceRegistry()
    old_ws, new_ws = make_socket(), make_socket()
    presence.register(1, old_ws)
    presence.register(1, new_ws)

    presence.unregister(1, old_ws)

    assert presence.lookup(1) is new_ws


@pytest.mark.asyncio
async def test_connected_user_receives_notification_once(connection_manager, connect_socket):
    ws = await connect_socket(1)

    await PushService(connection_manager).push_notification(1, {"notification_id": 10})

    assert ws.accepted is True
    assert ws.sent == [{"event": "new_notification", "data": {"notification_id": 10}}]


@pytest.mark.asyncio
async def test_direct_session_is_used_when_not_in_room(connection_manager, make_socket):
    ws = make_socket()
    connection_manager.presence.register(1, ws)

    await PushService(connection_manager).push_notification(1, {"notification_id": 10})

    assert ws.events("new_notification") == [{"notification_id": 10}]


@pytest.mark.asyncio
async def test_room_members_and_direct_session_both_receive(connection_manager, make_socket, connect_socket):
    # 同一位使用者開了兩個分頁：一個在 room 中，另一個是最新的直接連線
    tab_in_room = await connect_socket(1)
    latest_tab = make_socket()
    connection_manager.presence.register(1, latest_tab)

    await PushService(connection_manager).push_notification(1, {"notification_id": 10})

    assert len(tab_in_room.events("new_notification")) == 1
    assert len(latest_tab.events("new_notification")) == 1


@pytest.mark.asyncio
async def test_offline_user_is_a_no_op(connection_manager):
    await PushService(connection_manager).push_notification(42, {"notification_id": 1})


@pytest.mark.asyncio
async def test_dead_socket_is_dropped_and_error_swallowed(connection_manager, connect_socket):
    dead = await connect_socket(1, fail=True)

    await PushService(connection_manager).push_notification(1, {"notification_id": 1})

    assert dead.sent == []
    assert connection_manager.room_members(user_room(1)) == []


@pytest.mark.asyncio
async def test_presence_failure_never_raises(make_socket):
    manager = ConnectionManager(presence=BrokenPresence())
    ws = make_socket()
    manager.join(user_room(1), ws)

    await PushService(manager).push_notification(1, {"notification_id": 1})

    # room 廣播在查詢線上狀態之前就已完成
    assert len(ws.events("new_notification")) == 1


@pytest.mark.asyncio
async def test_message_goes_to_chat_room_and_receiver(connection_manager, connect_socket):
    sender_ws = await connect_socket(1)
    receiver_ws = await connect_socket(2)
    connection_manager.join(chat_room(5), sender_ws)

    await PushService(connection_manager).push_message(5, 2, {"message_id": 3})

    assert sender_ws.events("new_message") == [{"message_id": 3}]
    assert receiver_ws.events("new_message") == [{"message_id": 3}]


@pytest.mark.asyncio
async def test_disconnect_leaves_all_rooms(connection_manager, connect_socket):
    ws = await connect_socket(1)
    connection_manager.join(chat_room(5), ws)

    connection_manager.disconnect(1, ws)

    assert connection_manager.active_connections == {}
    assert connection_manager.presence.lookup(1) is None


def test_incomplete_presence_registry_cannot_be_created():
    class RegisterOnly(PresenceRegistry):
        def register(self, user_id, websocket):
            pass

    with pytest.raises(TypeError):
        RegisterOnly()
