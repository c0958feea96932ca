"""Root logger setup shared by the server, ``run.py`` and ``seed_portfolio.py``."""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every multipart chunk at DEBUG level
NOISY_LOGGERS = ("multipart", "python_multipart")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send log records to stderr and, if ``logfile`` is given, to that file.

    No-op once the root logger has handlers, so repeated ``create_app``
    calls do not duplicate output.  Unknown level names mean ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)
