from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from loguru import logger


@dataclass(frozen=True)
class Notification:
    level: str  # success, error
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {"level": self.level, "message": self.message, "created_at": self.created_at.isoformat()}


class Notifier:
    """
    Transient user-facing messages raised while a view handles one interaction.
    """

    def __init__(self) -> None:
        self._items: List[Notification] = []

    def success(self, message: str) -> Notification:
        return self._push(Notification("success", message))

    def error(self, message: str) -> Notification:
        return self._push(Notification("error", message))

    def _push(self, note: Notification) -> Notification:
        logger.debug("Notify [{}] {}", note.level, note.message)
        self._items.append(note)
        return note

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    @property
    def last(self) -> Notification | None:
        return self._items[-1] if self._items else None
