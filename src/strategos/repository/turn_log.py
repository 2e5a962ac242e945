"""Append-only turn log stored as JSON lines."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class TurnEvent(BaseModel):
    """A single recorded change to the game."""

    sequence: int = Field(ge=1)
    kind: str
    summary: str
    payload: dict[str, Any] = Field(default_factory=dict)
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class JsonlTurnLog:
    """Record turn events one JSON document per line."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def events(self) -> list[TurnEvent]:
        """Return every recorded event in order."""

        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as handle:
            return [TurnEvent.model_validate_json(line) for line in handle if line.strip()]

    def next_sequence(self) -> int:
        """Sequence number the next appended event will receive."""

        if not self.path.exists():
            return 1
        with self.path.open("r", encoding="utf-8") as handle:
            return sum(1 for line in handle if line.strip()) + 1

    def append(self, kind: str, summary: str, payload: dict[str, Any] | None = None) -> TurnEvent:
        """Record one event and return it."""

        event = TurnEvent(
            sequence=self.next_sequence(),
            kind=kind,
            summary=summary,
            payload=payload or {},
        )
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(event.model_dump_json() + "\n")
        logger.info("turn event %d: %s", event.sequence, summary)
        return event
