import pytest
from sqlalchemy import select

from artmatch.models.notification import Notification, NEW_LIKE, NEW_COMMENT
from artmatch.services.notification_service import NotificationService
from artmatch.services.push_service import PushService


@pytest.fixture
def seed_notification(session_factory):
    async def _seed(recipient, sender, key=NEW_LIKE):
        async with session_factory() as session:
            return await NotificationService(session).create_notification(
                user_id=recipient.user_id,
                sender_id=sender.user_id,
                message_key=key,
                message_params={"name": sender.fullname}
            )
    return _seed


@pytest.mark.asyncio
async def test_create_requires_message_or_key(db, make_user):
    a, b = await make_user(), await make_user()

    with pytest.raises(ValueError):
        await NotificationService(db).create_notification(user_id=a.user_id, sender_id=b.user_id)


@pytest.mark.asyncio
async def test_notify_persists_and_pushes(db, make_user, connection_manager, connect_socket):
    recipient = await make_user()
    sender = await make_user(fullname="Carol")
    ws = await connect_socket(recipient.user_id)

    service = NotificationService(db, PushService(connection_manager))
    notification = await service.notify(recipient.user_id, sender.user_id, NEW_COMMENT, {"name": "Carol"})

    assert notification.notification_id is not None
    pushed = ws.events("new_notification")
    assert len(pushed) == 1
    assert pushed[0]["notification_id"] == notification.notification_id
    assert pushed[0]["read_status"] is False
    assert pushed[0]["sender_name"] == "Carol"


@pytest.mark.asyncio
async def test_list_is_newest_first_with_sender_name(client, make_user, auth_headers, seed_notification):
    me = await make_user()
    alice = await make_user(fullname="Alice")
    bob = await make_user(fullname="Bob")
    first = await seed_notification(me, alice)
    second = await seed_notification(me, bob)

    res = await client.get(f"/notifications/{me.user_id}", headers=auth_headers(me))

    assert res.status_code == 200
    items = res.json()["notifications"]
    assert [n["notification_id"] for n in items] == [second.notification_id, first.notification_id]
    assert [n["sender_name"] for n in items] == ["Bob", "Alice"]


@pytest.mark.asyncio
async def test_cannot_read_someone_elses_notifications(client, make_user, auth_headers):
    me = await make_user()
    other = await make_user()

    res = await client.get(f"/notifications/{other.user_id}", headers=auth_headers(me))

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_mark_as_read(client, make_user, auth_headers, seed_notification):
    me = await make_user()
    other = await make_user()
    notification = await seed_notification(me, other)

    res = await client.put(f"/notifications/{notification.notification_id}", headers=auth_headers(me))
    assert res.status_code == 200
    assert res.json()["notification"]["read_status"] is True

    res = await client.put(f"/notifications/{notification.notification_id}", headers=auth_headers(other))
    assert res.status_code == 403

    res = await client.put("/notifications/98765", headers=auth_headers(me))
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_mark_all_as_read(client, make_user, auth_headers, seed_notification, fetch_all):
    me = await make_user()
    other = await make_user()
    await seed_notification(me, other)
    await seed_notification(me, other)
    await seed_notification(other, me)

    res = await client.put(f"/notifications/{me.user_id}/all-read", headers=auth_headers(me))

    assert res.status_code == 200
    assert res.json()["count"] == 2
    unread = await fetch_all(select(Notification).where(Notification.read_status == False))
    assert [n.user_id for n in unread] == [other.user_id]


@pytest.mark.asyncio
async def test_delete_one_and_all(client, make_user, auth_headers, seed_notification, fetch_all):
    me = await make_user()
    other = await make_user()
    first = await seed_notification(me, other)
    await seed_notification(me, other)
    theirs = await seed_notification(other, me)

    res = await client.delete(f"/notifications/{theirs.notification_id}", headers=auth_headers(me))
    assert res.status_code == 403

    res = await client.delete(f"/notifications/{first.notification_id}", headers=auth_headers(me))
    assert res.status_code == 200

    res = await client.delete(f"/notifications/{me.user_id}/all", headers=auth_headers(me))
    assert res.status_code == 200
    assert res.json()["count"] == 1

    remaining = await fetch_all(select(Notification))
    assert [n.notification_id for n in remaining] == [theirs.notification_id]
