from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Toaster(Protocol):
    def __call__(self, title: str, description: str, *, variant: str = "default") -> None: ...


def log_toast(title: str, description: str, *, variant: str = "default") -> None:
    """Default toaster for headless use: writes the toast to the log."""
    level = logging.ERROR if variant == "destructive" else logging.INFO
    logger.log(level, "%s: %s", title, description)
