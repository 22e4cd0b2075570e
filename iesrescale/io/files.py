from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from iesrescale.io.cursor import ByteCursor

logger = logging.getLogger(__name__)


def acquire(identifier: str | Path) -> Optional[bytes]:
    """Read a whole file. Missing, unreadable and empty files all yield None."""
    if not str(identifier):
        return None
    p = Path(identifier).expanduser()
    try:
        data = p.read_bytes()
    except OSError as e:
        logger.warning("Could not read %s: %s", p, e)
        return None
    if not data:
        logger.warning("File is empty: %s", p)
        return None
    return data


def persist(identifier: str | Path, data: bytes) -> bool:
    if not str(identifier):
        logger.warning("Refusing to write to an empty file name")
        return False
    p = Path(identifier).expanduser()
    try:
        p.write_bytes(data)
    except OSError as e:
        logger.warning("Could not write %s: %s", p, e)
        return False
    logger.debug("Wrote %d bytes to %s", len(data), p)
    return True


def read_cursor(identifier: str | Path, source: Callable[[str], Optional[bytes]] = acquire) -> Optional[ByteCursor]:
    data = source(str(identifier))
    if data is None:
        return None
    return ByteCursor(data, name=str(identifier))
