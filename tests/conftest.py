from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterator, List

import pytest
from fastapi.testclient import TestClient

from portfolio_server.app.core.config import Settings
from portfolio_server.app.main import create_app
from portfolio_server.app.services.portfolio_store import PortfolioStore


@pytest.fixture
def store(tmp_path: Path) -> PortfolioStore:
    return PortfolioStore(tmp_path / "portfolio.db")


@pytest.fixture
def write_seed(tmp_path: Path) -> Callable[..., Path]:
    def _write(records: List[Any], name: str = "seed.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "server.db"),
        seed_path=str(tmp_path / "seed.json"),
        document_root=str(tmp_path / "site"),
        upload_subdir="assets/img/portfolio",
        log_file=None,
    )


@pytest.fixture
def client(app_settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
