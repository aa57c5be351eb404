import pytest
from fastapi import HTTPException
from sqlalchemy import select

from artmatch.models.job_posting import JobPosting
from artmatch.models.portfolio import Portfolio
from artmatch.models.user import User, UserRoleEnum
from artmatch.services.message_service import ChatService
from artmatch.utils.ids import parse_id


def test_parse_id():
    assert parse_id("42") == 42
    assert parse_id(" 7 ") == 7
    for bad in ["abc", "0", "-1", "1.5", ""]:
        with pytest.raises(HTTPException) as exc:
            parse_id(bad, "使用者 ID")
        assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_admin_routes_require_admin(client, make_user, auth_headers):
    artist = await make_user()

    assert (await client.get("/admin/stats", headers=auth_headers(artist))).status_code == 403
    assert (await client.get("/admin/stats")).status_code == 401


@pytest.mark.asyncio
async def test_stats(client, make_user, auth_headers):
    admin = await make_user(role=UserRoleEnum.admin)
    await make_user()
    await make_user()
    boss = await make_user(role=UserRoleEnum.employer)
    await client.post(
        "/job-postings",
        json={"title": "Poster", "description": "A3 poster"},
        headers=auth_headers(boss)
    )

    res = await client.get("/admin/stats", headers=auth_headers(admin))

    assert res.status_code == 200
    assert res.json() == {
        "total_users": 4, "artists": 2, "employers": 1,
        "job_postings": 1, "chats": 0, "reviews": 0, "comments": 0, "portfolios": 0
    }


@pytest.mark.asyncio
async def test_list_and_delete_users(client, make_user, auth_headers, fetch_all):
    admin = await make_user(role=UserRoleEnum.admin)
    victim = await make_user()
    other = await make_user()
    await client.post(f"/users/{other.user_id}/like", headers=auth_headers(victim))

    res = await client.get("/admin/users", headers=auth_headers(admin))
    assert [u["user_id"] for u in res.json()] == [admin.user_id, victim.user_id, other.user_id]

    assert (await client.delete(f"/admin/users/{admin.user_id}", headers=auth_headers(admin))).status_code == 400
    assert (await client.delete("/admin/users/999", headers=auth_headers(admin))).status_code == 404
    assert (await client.delete(f"/admin/users/{victim.user_id}", headers=auth_headers(admin))).status_code == 204

    remaining = [u.user_id for u in await fetch_all(select(User))]
    assert remaining == [admin.user_id, other.user_id]


@pytest.mark.asyncio
async def test_admin_deletes_content(client, make_user, auth_headers, fetch_all):
    admin = await make_user(role=UserRoleEnum.admin)
    boss = await make_user(role=UserRoleEnum.employer)
    author = await make_user()
    target = await make_user()
    job = await client.post(
        "/job-postings",
        json={"title": "Poster", "description": "A3 poster"},
        headers=auth_headers(boss)
    )
    comment = await client.post(
        f"/users/{target.user_id}/comments",
        json={"comment_text": "Great"},
        headers=auth_headers(author)
    )

    res = await client.delete(f"/admin/jobs/{job.json()['job_id']}", headers=auth_headers(admin))
    assert res.status_code == 204
    res = await client.delete(f"/admin/comments/{comment.json()['comment_id']}", headers=auth_headers(admin))
    assert res.status_code == 204
    res = await client.delete("/admin/reviews/1", headers=auth_headers(admin))
    assert res.status_code == 404

    assert await fetch_all(select(JobPosting)) == []


@pytest.mark.asyncio
async def test_user_detail_and_admins_are_protected(client, make_user, auth_headers):
    admin = await make_user(role=UserRoleEnum.admin)
    other_admin = await make_user(role=UserRoleEnum.admin)
    boss = await make_user(role=UserRoleEnum.employer, fullname="Gallery")

    res = await client.get(f"/admin/users/{boss.user_id}", headers=auth_headers(admin))
    assert res.status_code == 200
    assert res.json()["fullname"] == "Gallery"
    assert res.json()["profile"]["user_id"] == boss.user_id

    assert (await client.get("/admin/users/999", headers=auth_headers(admin))).status_code == 404
    res = await client.delete(f"/admin/users/{other_admin.user_id}", headers=auth_headers(admin))
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_admin_content_listings(client, session_factory, make_user, auth_headers):
    admin = await make_user(role=UserRoleEnum.admin)
    boss = await make_user(role=UserRoleEnum.employer)
    author = await make_user()
    target = await make_user()
    headers = auth_headers(admin)
    await client.post(
        "/job-postings",
        json={"title": "Poster", "description": "A3 poster"},
        headers=auth_headers(boss)
    )
    await client.post(
        f"/users/{target.user_id}/comments",
        json={"comment_text": "Great"},
        headers=auth_headers(author)
    )
    async with session_factory() as session:
        chat, _ = await ChatService(session).find_or_create_chat(author.user_id, boss.user_id)
    await client.post(
        "/reviews",
        json={"chat_id": chat.chat_id, "reviewed_user_id": author.user_id, "overall_rating": 5},
        headers=auth_headers(boss)
    )

    assert [j["title"] for j in (await client.get("/admin/jobs", headers=headers)).json()] == ["Poster"]
    assert [c["comment_text"] for c in (await client.get("/admin/comments", headers=headers)).json()] == ["Great"]
    reviews = (await client.get("/admin/reviews", headers=headers)).json()
    assert [(r["reviewer_user_id"], r["overall_rating"]) for r in reviews] == [(boss.user_id, 5)]

    assert (await client.get("/admin/reviews", headers=auth_headers(author))).status_code == 403


@pytest.mark.asyncio
async def test_admin_lists_and_deletes_portfolios(client, make_user, auth_headers, fetch_all):
    admin = await make_user(role=UserRoleEnum.admin)
    painter = await make_user()
    res = await client.post(
        "/portfolios",
        files={"image": ("work.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        headers=auth_headers(painter)
    )
    portfolio_id = res.json()["portfolio_id"]

    listed = await client.get("/admin/portfolios", headers=auth_headers(admin))
    assert [p["portfolio_id"] for p in listed.json()] == [portfolio_id]
    stats = await client.get("/admin/stats", headers=auth_headers(admin))
    assert stats.json()["portfolios"] == 1

    res = await client.delete(f"/admin/portfolios/{portfolio_id}", headers=auth_headers(admin))
    assert res.status_code == 204
    assert (await client.delete(f"/admin/portfolios/{portfolio_id}", headers=auth_headers(admin))).status_code == 404
    assert await fetch_all(select(Portfolio)) == []
