"""Avisos para el usuario."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

logger = logging.getLogger(__name__)

FAILED = "failed"


class Notifier(Protocol):
    """Destino de avisos; no devuelve nada."""

    def notify(self, level: str, message: str) -> None: ...


@dataclass
class Notification:
    """Un aviso mostrado al usuario."""

    level: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)


class NotificationLog:
    """Guarda los últimos avisos en memoria."""

    def __init__(self, maxlen: int = 50) -> None:
        self.messages: deque[Notification] = deque(maxlen=maxlen)

    def notify(self, level: str, message: str) -> None:
        self.messages.append(Notification(level=level, message=message))
        logger.debug("Aviso [%s]: %s", level, message)

    def latest(self) -> Notification | None:
        """Último aviso, si lo hay."""
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()
