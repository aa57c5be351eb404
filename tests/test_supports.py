import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from artmatch.models.support import ArtistSupport
from artmatch.models.user import UserRoleEnum
from artmatch.repositories.support_repo import SupportRepository


@pytest.mark.asyncio
async def test_support_toggle(client, make_user, auth_headers, fetch_all):
    fan = await make_user()
    other_fan = await make_user()
    painter = await make_user()
    path = f"/users/{painter.user_id}/support"

    res = await client.post(path, headers=auth_headers(fan))
    assert res.status_code == 201
    assert res.json() == {"message": "應援成功", "hasSupported": True, "supportCount": 1}

    res = await client.post(path, headers=auth_headers(other_fan))
    assert res.json()["supportCount"] == 2

    res = await client.post(path, headers=auth_headers(fan))
    assert res.status_code == 200
    assert res.json() == {"message": "已取消應援", "hasSupported": False, "supportCount": 1}

    supports = await fetch_all(select(ArtistSupport))
    assert [(s.supporter_user_id, s.supported_user_id) for s in supports] == [(other_fan.user_id, painter.user_id)]


@pytest.mark.asyncio
async def test_support_rules(client, make_user, auth_headers, fetch_all):
    artist = await make_user()
    employer = await make_user(role=UserRoleEnum.employer)

    res = await client.post(f"/users/{artist.user_id}/support", headers=auth_headers(employer))
    assert res.status_code == 403
    res = await client.post(f"/users/{artist.user_id}/support", headers=auth_headers(artist))
    assert res.status_code == 400
    res = await client.post(f"/users/{employer.user_id}/support", headers=auth_headers(artist))
    assert res.status_code == 404
    res = await client.post("/users/999/support", headers=auth_headers(artist))
    assert res.status_code == 404
    res = await client.post("/users/abc/support", headers=auth_headers(artist))
    assert res.status_code == 400

    assert await fetch_all(select(ArtistSupport)) == []


@pytest.mark.asyncio
async def test_support_status(client, make_user, auth_headers):
    fan = await make_user()
    painter = await make_user()
    path = f"/users/{painter.user_id}/support-status"

    res = await client.get(path, headers=auth_headers(fan))
    assert res.json() == {"hasSupported": False, "supportCount": 0}

    await client.post(f"/users/{painter.user_id}/support", headers=auth_headers(fan))

    assert (await client.get(path, headers=auth_headers(fan))).json() == {"hasSupported": True, "supportCount": 1}
    assert (await client.get(path, headers=auth_headers(painter))).json() == {"hasSupported": False, "supportCount": 1}


@pytest.mark.asyncio
async def test_racing_support_is_a_conflict(client, make_user, auth_headers, monkeypatch):
    fan = await make_user()
    painter = await make_user()

    # 模擬另一個請求剛好先寫入
    async def lost_race(self, supporter_user_id, supported_user_id):
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(SupportRepository, "create_support", lost_race)

    res = await client.post(f"/users/{painter.user_id}/support", headers=auth_headers(fan))

    assert res.status_code == 409


@pytest.mark.asyncio
async def test_pair_is_unique_in_database(db, make_user):
    fan = await make_user()
    painter = await make_user()
    repo = SupportRepository(db)
    await repo.create_support(fan.user_id, painter.user_id)

    with pytest.raises(IntegrityError):
        await repo.create_support(fan.user_id, painter.user_id)


@pytest.mark.asyncio
async def test_deleting_user_removes_supports(client, make_user, auth_headers, fetch_all):
    fan = await make_user()
    painter = await make_user()
    await client.post(f"/users/{painter.user_id}/support", headers=auth_headers(fan))

    assert (await client.delete("/users/me", headers=auth_headers(painter))).status_code == 204

    assert await fetch_all(select(ArtistSupport)) == []
