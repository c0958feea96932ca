from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from portfolio_api import PortfolioAPI


def _response(status: int, body: Any = None, url: str = "http://test/api/portfolio") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.reason = "Test"
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


class StubSession:
    """Records calls and returns a canned response (or raises)."""

    def __init__(self, response: Optional[requests.Response] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def request(self, **kwargs: Any) -> requests.Response:
        files = kwargs.get("files")
        if files:
            name, fh, content_type = files["img"]
            kwargs["uploaded"] = (name, fh.read(), content_type)
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def test_list_items_returns_payload() -> None:
    items = [{"id": 1, "title": "Logo", "category": "design", "prix": 9.5, "img": "/x.png"}]
    session = StubSession(_response(200, items))
    api = PortfolioAPI(base_url="http://test/", session=session)

    data, error = api.list_items()

    assert error is None
    assert data == items
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://test/api/portfolio"


def test_list_items_reports_http_error() -> None:
    session = StubSession(_response(500, {"detail": "failed to query portfolio"}))
    data, error = PortfolioAPI(base_url="http://test", session=session).list_items()
    assert data == []
    assert error == {"status_code": 500, "message": "failed to query portfolio"}


def test_list_items_reports_connection_error() -> None:
    session = StubSession(error=requests.ConnectionError("refused"))
    data, error = PortfolioAPI(base_url="http://test", session=session).list_items()
    assert data == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_create_item_uploads_multipart_form(tmp_path: Path) -> None:
    image = tmp_path / "logo.png"
    image.write_bytes(b"png-bytes")
    created = {"id": 4, "title": "Logo", "category": "design", "prix": 99.5, "img": "/assets/img/portfolio/logo.png"}
    session = StubSession(_response(201, created))

    data, error = PortfolioAPI(base_url="http://test", session=session).create_item(
        "Logo", "design", 99.5, str(image)
    )

    assert error is None
    assert data == created
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["data"] == {"title": "Logo", "category": "design", "prix": "99.5"}
    assert call["uploaded"] == ("logo.png", b"png-bytes", "image/png")


def test_create_item_with_missing_image_does_not_call_server(tmp_path: Path) -> None:
    session = StubSession(_response(201, {}))
    data, error = PortfolioAPI(base_url="http://test", session=session).create_item(
        "Logo", "design", 1, str(tmp_path / "missing.png")
    )
    assert data is None
    assert error["status_code"] is None
    assert session.calls == []
