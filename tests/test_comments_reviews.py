import pytest
from sqlalchemy import select

from artmatch.models.message import Chat
from artmatch.models.notification import Notification, NEW_COMMENT
from artmatch.models.user import UserRoleEnum
from artmatch.services.message_service import ChatService


# --- 留言 ---

@pytest.mark.asyncio
async def test_artist_comments_on_artist(client, make_user, auth_headers, fetch_all):
    author = await make_user(fullname="Rembrandt")
    profile_owner = await make_user()

    res = await client.post(
        f"/users/{profile_owner.user_id}/comments",
        json={"comment_text": "Lovely brushwork"},
        headers=auth_headers(author)
    )

    assert res.status_code == 201
    assert res.json()["commenter_name"] == "Rembrandt"
    notifications = await fetch_all(select(Notification))
    assert [(n.user_id, n.message_key) for n in notifications] == [(profile_owner.user_id, NEW_COMMENT)]

    listed = await client.get(f"/users/{profile_owner.user_id}/comments", headers=auth_headers(author))
    assert [c["comment_text"] for c in listed.json()] == ["Lovely brushwork"]


@pytest.mark.asyncio
async def test_comment_rules(client, make_user, auth_headers):
    author = await make_user()
    profile_owner = await make_user()
    employer = await make_user(role=UserRoleEnum.employer)
    path = f"/users/{profile_owner.user_id}/comments"
    body = {"comment_text": "Nice"}

    assert (await client.post(path, json=body, headers=auth_headers(author))).status_code == 201
    assert (await client.post(path, json=body, headers=auth_headers(author))).status_code == 409
    assert (await client.post(path, json=body, headers=auth_headers(employer))).status_code == 403

    self_path = f"/users/{author.user_id}/comments"
    assert (await client.post(self_path, json=body, headers=auth_headers(author))).status_code == 400

    employer_path = f"/users/{employer.user_id}/comments"
    assert (await client.post(employer_path, json=body, headers=auth_headers(author))).status_code == 404


@pytest.mark.asyncio
async def test_only_author_deletes_comment(client, make_user, auth_headers):
    author = await make_user()
    profile_owner = await make_user()
    res = await client.post(
        f"/users/{profile_owner.user_id}/comments",
        json={"comment_text": "Nice"},
        headers=auth_headers(author)
    )
    path = f"/comments/{res.json()['comment_id']}"

    assert (await client.delete(path, headers=auth_headers(profile_owner))).status_code == 403
    assert (await client.delete(path, headers=auth_headers(author))).status_code == 204
    assert (await client.delete(path, headers=auth_headers(author))).status_code == 404


# --- 評價 ---

async def open_chat(session_factory, user_a, user_b):
    async with session_factory() as session:
        chat, _ = await ChatService(session).find_or_create_chat(user_a.user_id, user_b.user_id)
        return chat.chat_id


@pytest.mark.asyncio
async def test_review_marks_reviewer_side_completed(client, session_factory, make_user, auth_headers, fetch_all):
    artist = await make_user()
    employer = await make_user(role=UserRoleEnum.employer, fullname="Gallery")
    chat_id = await open_chat(session_factory, artist, employer)

    res = await client.post(
        "/reviews",
        json={"chat_id": chat_id, "reviewed_user_id": artist.user_id, "overall_rating": 4,
              "specific_answers": {"on_time": True}},
        headers=auth_headers(employer)
    )

    assert res.status_code == 201
    assert res.json()["reviewer_name"] == "Gallery"
    chat = (await fetch_all(select(Chat)))[0]
    assert chat.employer_rating_status == "completed"
    assert chat.artist_rating_status == "pending"

    res = await client.post(
        "/reviews",
        json={"chat_id": chat_id, "reviewed_user_id": employer.user_id, "overall_rating": 5},
        headers=auth_headers(artist)
    )
    assert res.status_code == 201
    chat = (await fetch_all(select(Chat)))[0]
    assert chat.artist_rating_status == "completed"


@pytest.mark.asyncio
async def test_review_rules(client, session_factory, make_user, auth_headers):
    artist = await make_user()
    employer = await make_user(role=UserRoleEnum.employer)
    outsider = await make_user()
    chat_id = await open_chat(session_factory, artist, employer)

    def review(target, rating=5):
        return {"chat_id": chat_id, "reviewed_user_id": target.user_id, "overall_rating": rating}

    assert (await client.post("/reviews", json=review(employer), headers=auth_headers(outsider))).status_code == 403
    assert (await client.post("/reviews", json=review(artist), headers=auth_headers(artist))).status_code == 400
    assert (await client.post("/reviews", json=review(outsider), headers=auth_headers(artist))).status_code == 400
    assert (await client.post("/reviews", json=review(employer, 6), headers=auth_headers(artist))).status_code == 422
    assert (await client.post("/reviews", json=review(employer), headers=auth_headers(artist))).status_code == 201
    assert (await client.post("/reviews", json=review(employer), headers=auth_headers(artist))).status_code == 409

    missing = {"chat_id": 999, "reviewed_user_id": employer.user_id, "overall_rating": 3}
    assert (await client.post("/reviews", json=missing, headers=auth_headers(artist))).status_code == 404


@pytest.mark.asyncio
async def test_average_rating(client, session_factory, make_user, auth_headers):
    artist = await make_user()
    first = await make_user(role=UserRoleEnum.employer)
    second = await make_user(role=UserRoleEnum.employer)
    viewer_headers = auth_headers(first)

    res = await client.get(f"/users/{artist.user_id}/average-rating", headers=viewer_headers)
    assert res.json() == {"average_rating": None, "review_count": 0}

    for employer, rating in [(first, 4), (second, 5)]:
        chat_id = await open_chat(session_factory, artist, employer)
        await client.post(
            "/reviews",
            json={"chat_id": chat_id, "reviewed_user_id": artist.user_id, "overall_rating": rating},
            headers=auth_headers(employer)
        )

    res = await client.get(f"/users/{artist.user_id}/average-rating", headers=viewer_headers)
    assert res.json() == {"average_rating": 4.5, "review_count": 2}

    res = await client.get(f"/users/{artist.user_id}/reviews", headers=viewer_headers)
    assert sorted(r["overall_rating"] for r in res.json()) == [4, 5]
