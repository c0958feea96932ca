"""
Top-level package for the portfolio server.

All functionality lives in submodules under ``app``; import them by
their fully qualified names, e.g. ``portfolio_server.app.main``.
"""

__all__ = []
