"""
Logging setup for the Users API.

``setup_logging`` is called by ``create_app`` with ``LOG_LEVEL`` and
``LOG_FILE`` from the settings.  Handlers it installs on the root
logger are named, so building several applications in one process
(the test suite does) never duplicates log lines.  Request access
lines are emitted at DEBUG level on the ``users_api.access`` logger
and only appear with ``LOG_LEVEL=DEBUG``.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "users_api.console"
FILE_HANDLER_PREFIX = "users_api.file:"


def _resolve_level(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _build_handlers(existing: List[str], logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if CONSOLE_HANDLER not in existing:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER)
        handlers.append(console)

    if logfile:
        path = Path(logfile).resolve()
        name = FILE_HANDLER_PREFIX + str(path)
        if name not in existing:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.set_name(name)
            handlers.append(file_handler)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> List[logging.Handler]:
    """Configure the root logger and return the handlers added to it.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to ``INFO``.
    logfile : Optional[str]
        Also append log records to this file.  Missing parent
        directories are created.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    existing = [handler.get_name() for handler in root.handlers]
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    added = _build_handlers(existing, logfile)
    for handler in added:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return added
