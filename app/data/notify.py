from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """User-facing notification surface (toast). Fire-and-forget."""

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        ...


class LogNotifier:
    """Notifier for headless use: toasts become log lines."""

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", title, description)
