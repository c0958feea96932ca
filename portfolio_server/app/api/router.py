"""
Top-level API router.

Aggregates the resource routers.  The portfolio router declares its
own ``/portfolio`` paths, so it is included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import portfolio

router = APIRouter()

router.include_router(portfolio.router, tags=["portfolio"])
