"""
Portfolio endpoints.

``GET /api/portfolio`` lists every item; ``POST /api/portfolio``
creates one from a multipart form with ``title``, ``category``,
``prix`` and an ``img`` file.  There is no authentication, update or
delete: other methods are answered with 405.

Handlers are plain (synchronous) functions, so FastAPI runs them in
its thread pool and the blocking SQLite and file I/O never stalls the
event loop.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from portfolio_server.app.core.config import Settings
from portfolio_server.app.core.errors import InsertError, QueryError
from portfolio_server.app.schemas.portfolio import PortfolioItemCreate, PortfolioItemRead
from portfolio_server.app.services.portfolio_store import PortfolioStore
from portfolio_server.app.services.seed_loader import parse_price
from portfolio_server.app.services.upload_service import save_upload

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_ALLOWED_METHODS = ["HEAD", "OPTIONS", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]


def get_store(request: Request) -> PortfolioStore:
    """Return the store created at startup by ``create_app``."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/portfolio", response_model=List[PortfolioItemRead])
def list_portfolio(store: PortfolioStore = Depends(get_store)) -> List[PortfolioItemRead]:
    """Return all portfolio items ordered by ``id`` ascending."""
    try:
        return store.list_all()
    except QueryError:
        logger.exception("Failed to query portfolio")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to query portfolio"
        )


@router.post("/portfolio", response_model=PortfolioItemRead, status_code=status.HTTP_201_CREATED)
def create_portfolio_item(
    title: str = Form(""),
    category: str = Form(""),
    prix: str = Form(""),
    img: Optional[UploadFile] = File(None),
    store: PortfolioStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> PortfolioItemRead:
    """Create a portfolio item from an uploaded image.

    ``prix`` is parsed leniently: anything that is not a number is
    stored as 0.  The title is checked before the image is written so
    that a rejected request leaves nothing behind in the upload
    directory.
    """
    if img is None or not img.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="error retrieving the file")

    title = title.strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing title or img")

    try:
        filename = save_upload(img, settings.upload_dir)
    except OSError:
        logger.exception("Failed to save upload %r", img.filename)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="error saving file")
    finally:
        img.file.close()
    if not filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing title or img")

    item = PortfolioItemCreate(
        title=title,
        category=category,
        price=parse_price(prix),
        image_ref=f"{settings.upload_url_prefix}/{filename}",
    )
    try:
        return store.insert(item)
    except InsertError:
        logger.exception("Failed to insert portfolio item %r", title)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to insert item"
        )


# Everything except GET and POST.  Routed explicitly because the static
# mount would otherwise answer (HEAD with a 404, the rest without Allow).
@router.api_route("/portfolio", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
def portfolio_method_not_allowed() -> None:
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="method not allowed",
        headers={"Allow": "GET, POST"},
    )
