from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


def log_notice(message: str) -> None:
    """Default notice sink for headless use: notices go to the log."""
    logger.warning("%s", message)


__all__ = [
    "Notify",
    "log_notice",
]
