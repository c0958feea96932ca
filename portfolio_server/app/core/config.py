"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server can be started from a fresh checkout without any setup.
Relative paths are resolved against the project root by
:func:`resolve_path`; the upload directory is resolved against the
document root.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Repository root (the directory containing ``portfolio_server/``)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Portfolio Server")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path of the SQLite database file.  Kept outside the document root
    # so the static file server never exposes it.
    database_url: str = os.getenv("DATABASE_URL", "server.db")

    # JSON document imported once into an empty database at startup.
    seed_path: str = os.getenv("SEED_PATH", "site/assets/data/portfolio.json")

    # Directory served as the static site for every path outside /api.
    document_root: str = os.getenv("DOCUMENT_ROOT", "site")

    # Uploaded images are written here, relative to ``document_root``.
    # Image references returned by the API are ``/<upload_subdir>/<name>``.
    upload_subdir: str = os.getenv("UPLOAD_SUBDIR", "assets/img/portfolio")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    @property
    def database_path(self) -> Path:
        return resolve_path(self.database_url)

    @property
    def seed_file(self) -> Path:
        return resolve_path(self.seed_path)

    @property
    def document_root_path(self) -> Path:
        return resolve_path(self.document_root)

    @property
    def upload_dir(self) -> Path:
        return self.document_root_path / self.upload_subdir.strip("/")

    @property
    def upload_url_prefix(self) -> str:
        return "/" + self.upload_subdir.strip("/")


def resolve_path(value: str) -> Path:
    """Return ``value`` as an absolute path.

    Absolute paths are returned unchanged; relative ones are resolved
    against the project root rather than the current working directory.
    """
    path = Path(value)
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
