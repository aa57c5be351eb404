import os

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from artmatch.core.config import settings
from artmatch.models.portfolio import Portfolio
from artmatch.models.user import UserRoleEnum
from artmatch.repositories.portfolio_repo import PortfolioRepository

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF_BYTES = b"%PDF-1.4\n%%EOF\n"


def stored_path(url: str) -> str:
    return os.path.join(settings.UPLOAD_DIR, url.rsplit("/", 1)[-1])


async def upload(client, headers, description="Sunset study", name="work.png", content=PNG_BYTES, content_type="image/png"):
    return await client.post(
        "/portfolios",
        data={"description": description},
        files={"image": (name, content, content_type)},
        headers=headers
    )


@pytest.mark.asyncio
async def test_artist_uploads_and_lists_portfolio(client, make_user, auth_headers):
    painter = await make_user(fullname="Monet")
    viewer = await make_user(role=UserRoleEnum.employer)
    headers = auth_headers(painter)

    res = await upload(client, headers)
    assert res.status_code == 201
    item = res.json()
    assert item["item_type"] == "image"
    assert item["artist_name"] == "Monet"
    assert item["description"] == "Sunset study"
    assert os.path.exists(stored_path(item["image_url"]))

    res = await upload(client, headers, description="CV", name="cv.pdf", content=PDF_BYTES, content_type="application/pdf")
    assert res.json()["item_type"] == "pdf"

    mine = await client.get("/portfolios/me", headers=headers)
    assert len(mine.json()) == 2

    public = await client.get(f"/portfolios/{painter.user_id}", headers=auth_headers(viewer))
    assert sorted(i["description"] for i in public.json()) == ["CV", "Sunset study"]


@pytest.mark.asyncio
async def test_portfolio_upload_rules(client, make_user, auth_headers, fetch_all):
    painter = await make_user()
    employer = await make_user(role=UserRoleEnum.employer)

    assert (await upload(client, auth_headers(employer))).status_code == 403
    res = await upload(client, auth_headers(painter), name="x.gif", content=b"GIF89a", content_type="image/gif")
    assert res.status_code == 400
    assert (await client.get("/portfolios/me", headers=auth_headers(employer))).status_code == 403
    assert (await client.get(f"/portfolios/{employer.user_id}", headers=auth_headers(painter))).status_code == 404

    assert await fetch_all(select(Portfolio)) == []


@pytest.mark.asyncio
async def test_owner_updates_description_and_file(client, make_user, auth_headers):
    painter = await make_user()
    stranger = await make_user()
    item = (await upload(client, auth_headers(painter))).json()
    path = f"/portfolios/{item['portfolio_id']}"

    res = await client.put(path, data={"description": "Hijacked"}, headers=auth_headers(stranger))
    assert res.status_code == 403

    res = await client.put(path, data={"description": "Dawn study"}, headers=auth_headers(painter))
    assert res.status_code == 200
    assert res.json()["description"] == "Dawn study"
    assert res.json()["image_url"] == item["image_url"]

    res = await client.put(
        path,
        files={"image": ("new.pdf", PDF_BYTES, "application/pdf")},
        headers=auth_headers(painter)
    )
    updated = res.json()
    assert updated["item_type"] == "pdf"
    assert updated["description"] == "Dawn study"
    assert os.path.exists(stored_path(updated["image_url"]))
    assert not os.path.exists(stored_path(item["image_url"]))

    assert (await client.put("/portfolios/999", data={"description": "x"}, headers=auth_headers(painter))).status_code == 404


@pytest.mark.asyncio
async def test_owner_deletes_item_and_file(client, make_user, auth_headers, fetch_all):
    painter = await make_user()
    stranger = await make_user()
    item = (await upload(client, auth_headers(painter))).json()
    path = f"/portfolios/{item['portfolio_id']}"

    assert (await client.delete(path, headers=auth_headers(stranger))).status_code == 403
    assert (await client.delete(path, headers=auth_headers(painter))).status_code == 204
    assert (await client.delete(path, headers=auth_headers(painter))).status_code == 404

    assert await fetch_all(select(Portfolio)) == []
    assert not os.path.exists(stored_path(item["image_url"]))


@pytest.mark.asyncio
async def test_failed_insert_removes_uploaded_file(client, make_user, auth_headers, monkeypatch):
    painter = await make_user()
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    before = set(os.listdir(settings.UPLOAD_DIR))

    async def broken_create(self, item):
        raise SQLAlchemyError("database went away")

    monkeypatch.setattr(PortfolioRepository, "create_item", broken_create)

    with pytest.raises(SQLAlchemyError):
        await upload(client, auth_headers(painter))

    assert set(os.listdir(settings.UPLOAD_DIR)) == before


@pytest.mark.asyncio
async def test_deleting_account_removes_portfolio_files(client, make_user, auth_headers, fetch_all):
    painter = await make_user()
    item = (await upload(client, auth_headers(painter))).json()

    assert (await client.delete("/users/me", headers=auth_headers(painter))).status_code == 204

    assert await fetch_all(select(Portfolio)) == []
    assert not os.path.exists(stored_path(item["image_url"]))
