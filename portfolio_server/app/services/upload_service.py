"""
Storage of uploaded portfolio images.

Images are written into the upload directory under the document root,
so the static file server publishes them straight away.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)


def safe_filename(filename: Optional[str]) -> str:
    """Strip any directory components a client put in ``filename``.

    Both ``/`` and ``\\`` separators are removed; ``..`` and ``.`` are
    rejected.  Returns an empty string when nothing usable is left.
    """
    if not filename:
        return ""
    name = PureWindowsPath(PurePosixPath(filename).name).name.strip()
    if name in {".", ".."}:
        return ""
    return name


def save_upload(upload: UploadFile, upload_dir: Path) -> Optional[str]:
    """Write ``upload`` into ``upload_dir`` and return the stored file name.

    Returns ``None`` without writing anything when the client-supplied
    file name is empty after sanitizing.  An existing file with the
    same name is replaced.  ``OSError`` propagates to the caller.
    """
    name = safe_filename(upload.filename)
    if not name:
        return None
    upload_dir.mkdir(parents=True, exist_ok=True)
    destination = upload_dir / name
    with destination.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    logger.info("Saved upload %s (%d bytes)", destination, destination.stat().st_size)
    return name
