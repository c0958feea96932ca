"""Portfolio API client.

A small wrapper around the portfolio server's HTTP API using the
``requests`` library.  It is used by scripts that publish new work to
a running site and by anything else that wants the item list without
going through the browser.

The client exposes:

* :meth:`PortfolioAPI.list_items` – return all portfolio items.
* :meth:`PortfolioAPI.create_item` – upload an image and create an item.

Both return a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

PORTFOLIO_PATH = "/api/portfolio"


class PortfolioAPI:
    """Client for the ``/api/portfolio`` endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        data: Dict[str, Any] | None = None,
        files: Dict[str, Any] | None = None,
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns a tuple ``(data, error)``; see the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                data=data,
                files=files,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    body = exc.response.json()
                    detail = body.get("detail") if isinstance(body, dict) else body
                    message = detail if isinstance(detail, str) else str(detail or "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Portfolio operations
    # ------------------------------------------------------------------
    def list_items(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all portfolio items ordered by id."""
        data, error = self._request("GET", PORTFOLIO_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def create_item(
        self,
        title: str,
        category: str,
        price: float,
        image_path: str,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Upload ``image_path`` and create a new portfolio item.

        Returns the created item (including its ``id``) on success.
        """
        form = {"title": title, "category": category, "prix": str(price)}
        content_type = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
        try:
            with open(image_path, "rb") as fh:
                files = {"img": (os.path.basename(image_path), fh, content_type)}
                return self._request("POST", PORTFOLIO_PATH, data=form, files=files)
        except OSError as exc:
            logger.error("Cannot read image %s: %s", image_path, exc)
            return None, {"status_code": None, "message": str(exc)}
