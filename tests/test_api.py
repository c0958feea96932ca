from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from portfolio_server.app.core.config import Settings
from portfolio_server.app.core.errors import InitializationError, InsertError, QueryError
from portfolio_server.app.main import create_app

PNG = b"\x89PNG\r\n\x1a\nfake image"


def _post(client: TestClient, *, title="Logo", category="design", prix="99.5", filename="logo.png"):
    files = {"img": (filename, PNG, "image/png")} if filename is not None else None
    return client.post(
        "/api/portfolio",
        data={"title": title, "category": category, "prix": prix},
        files=files,
    )


def test_list_empty_portfolio(client: TestClient) -> None:
    response = client.get("/api/portfolio")
    assert response.status_code == 200
    assert response.json() == []


def test_startup_seeds_empty_database(app_settings: Settings) -> None:
    Path(app_settings.seed_path).write_text(
        json.dumps(
            [
                {"title": "Brand", "category": "design", "prix": 450, "img": "/a.png"},
                {"title": "Site", "category": "web", "price": 7.5, "img": "/b.png"},
            ]
        ),
        encoding="utf-8",
    )
    with TestClient(create_app(app_settings)) as client:
        body = client.get("/api/portfolio").json()

    assert [item["title"] for item in body] == ["Brand", "Site"]
    assert [item["prix"] for item in body] == [450, 7.5]
    assert set(body[0]) == {"id", "title", "category", "prix", "img"}


def test_startup_survives_broken_seed(app_settings: Settings) -> None:
    Path(app_settings.seed_path).write_text("{broken", encoding="utf-8")
    with TestClient(create_app(app_settings)) as client:
        response = client.get("/api/portfolio")
    assert response.status_code == 200
    assert response.json() == []


def test_create_item(client: TestClient, app_settings: Settings) -> None:
    response = _post(client)
    assert response.status_code == 201
    created = response.json()
    assert created["id"] > 0
    assert created["title"] == "Logo"
    assert created["category"] == "design"
    assert created["prix"] == 99.5
    assert created["img"] == "/assets/img/portfolio/logo.png"

    saved = app_settings.upload_dir / "logo.png"
    assert saved.read_bytes() == PNG

    listed = client.get("/api/portfolio").json()
    assert listed == [created]


def test_uploaded_image_is_served_as_static_file(client: TestClient) -> None:
    created = _post(client).json()
    response = client.get(created["img"])
    assert response.status_code == 200
    assert response.content == PNG


def test_create_without_file_is_rejected(client: TestClient) -> None:
    store = client.app.state.store
    before = store.count()
    response = _post(client, filename=None)
    assert response.status_code == 400
    assert store.count() == before


def test_create_with_unparsable_price_defaults_to_zero(client: TestClient) -> None:
    response = _post(client, prix="abc")
    assert response.status_code == 201
    assert response.json()["prix"] == 0


def test_create_without_title_is_rejected(client: TestClient, app_settings: Settings) -> None:
    response = _post(client, title="   ")
    assert response.status_code == 400
    assert response.json()["detail"] == "missing title or img"
    assert not (app_settings.upload_dir / "logo.png").exists()
    assert client.app.state.store.count() == 0


def test_create_with_json_body_is_rejected(client: TestClient) -> None:
    response = client.post("/api/portfolio", json={"title": "Logo", "img": "/x.png"})
    assert response.status_code == 400
    assert client.app.state.store.count() == 0


def test_create_with_text_instead_of_file_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/api/portfolio",
        content=b"--b\r\nContent-Disposition: form-data; name=\"img\"\r\n\r\nnot-a-file\r\n--b--\r\n",
        headers={"Content-Type": "multipart/form-data; boundary=b"},
    )
    assert response.status_code == 400


def test_ids_increase_with_each_post(client: TestClient) -> None:
    ids = [_post(client, title=f"item {n}", filename=f"{n}.png").json()["id"] for n in range(3)]
    assert ids == sorted(ids)
    assert [item["id"] for item in client.get("/api/portfolio").json()] == ids


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "PUT", "PATCH", "DELETE", "TRACE"])
def test_other_methods_are_not_allowed(client: TestClient, method: str) -> None:
    response = client.request(method, "/api/portfolio")
    assert response.status_code == 405
    assert response.headers["allow"] == "GET, POST"
    assert client.app.state.store.count() == 0


def test_category_is_stored_as_submitted(client: TestClient) -> None:
    created = _post(client, category="  web design ").json()
    assert created["category"] == "  web design "
    assert client.get("/api/portfolio").json()[0]["category"] == "  web design "


def test_query_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken():
        raise QueryError("disk gone")

    monkeypatch.setattr(client.app.state.store, "list_all", broken)
    response = client.get("/api/portfolio")
    assert response.status_code == 500
    assert response.json()["detail"] == "failed to query portfolio"


def test_insert_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(item):
        raise InsertError("read only")

    monkeypatch.setattr(client.app.state.store, "insert", broken)
    response = _post(client)
    assert response.status_code == 500
    assert response.json()["detail"] == "failed to insert item"


def test_upload_write_failure_returns_500(
    client: TestClient, app_settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    # A regular file where the upload directory should be
    blocker = app_settings.document_root_path / "blocked"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(app_settings, "upload_subdir", "blocked/img")

    response = _post(client)
    assert response.status_code == 500
    assert response.json()["detail"] == "error saving file"
    assert client.app.state.store.count() == 0


def test_static_files_are_served_from_document_root(client: TestClient, app_settings: Settings) -> None:
    (app_settings.document_root_path / "about.html").write_text("<p>about</p>", encoding="utf-8")
    response = client.get("/about.html")
    assert response.status_code == 200
    assert "about" in response.text


def test_unusable_database_stops_startup(app_settings: Settings, tmp_path: Path) -> None:
    app_settings.database_url = str(tmp_path)
    with pytest.raises(InitializationError):
        create_app(app_settings)
