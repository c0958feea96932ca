"""
Loading of the static seed document.

The seed file is a JSON array of objects with string ``title``,
``category`` and ``img`` fields.  The price has been stored under
different names over the life of the site (``prix``, ``price`` and the
legacy ``prx``), so records are parsed into plain dictionaries first
and the price is picked by :func:`resolve_price`.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from portfolio_server.app.core.errors import SourceParseError, SourceReadError

# Checked in this order; the first field holding a number wins.
PRICE_FIELDS = ("prix", "price", "prx")

TEXT_FIELDS = ("title", "category", "img")


def load_seed_document(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read ``path`` and return its records as a list of dictionaries.

    Raises ``SourceReadError`` when the file cannot be read and
    ``SourceParseError`` when it is not a JSON array of objects or a
    text field holds something other than a string.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"cannot read seed file {path}: {exc}") from exc

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SourceParseError(f"seed file {path} is not valid JSON: {exc}") from exc

    if not isinstance(document, list):
        raise SourceParseError(f"seed file {path} must contain a JSON array")

    for index, record in enumerate(document):
        if not isinstance(record, dict):
            raise SourceParseError(f"seed record {index} is not an object")
        for field in TEXT_FIELDS:
            value = record.get(field)
            if value is not None and not isinstance(value, str):
                raise SourceParseError(f"seed record {index}: field {field!r} must be a string")
    return document


def _as_number(value: Any) -> Optional[float]:
    # bool is a subclass of int but true/false are not prices
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def resolve_price(record: Dict[str, Any]) -> float:
    """Return the price of a seed record.

    ``prix`` is preferred, then ``price``, then the legacy ``prx``.
    Fields that are missing or do not hold a JSON number are skipped.
    Returns ``0.0`` when no field qualifies.
    """
    for field in PRICE_FIELDS:
        if field in record:
            number = _as_number(record[field])
            if number is not None:
                return number
    return 0.0


def parse_price(value: Optional[str]) -> float:
    """Convert a submitted price string to a float.

    Blank, unparsable or non-finite input yields ``0.0`` instead of an
    error, e.g. ``parse_price("abc") == 0.0``.
    """
    if value is None:
        return 0.0
    try:
        number = float(value.strip())
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number
