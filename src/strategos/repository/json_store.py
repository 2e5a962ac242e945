"""JSON-based record store for units and player research records."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import TypeAdapter

from strategos.domain import models as dm
from strategos.domain.errors import InvalidRecordIdError, RecordNotFoundError

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.:-]+$")


class JsonRecordStore:
    """Persist unit and player snapshots as JSON files on disk."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.units_path = base_path / "units"
        self.players_path = base_path / "players"
        self.units_path.mkdir(parents=True, exist_ok=True)
        self.players_path.mkdir(parents=True, exist_ok=True)
        self._unit_adapter: TypeAdapter[dm.Unit] = TypeAdapter(dm.Unit)
        self._player_adapter: TypeAdapter[dm.PlayerResearchState] = TypeAdapter(
            dm.PlayerResearchState
        )

    @staticmethod
    def _checked(record_id: str) -> str:
        if not _SAFE_ID.match(record_id):
            raise InvalidRecordIdError(record_id)
        return record_id

    def _unit_file(self, unit_id: str) -> Path:
        return self.units_path / f"unit_{self._checked(unit_id)}.json"

    def _player_file(self, player_id: str) -> Path:
        return self.players_path / f"player_{self._checked(player_id)}.json"

    def save_unit(self, unit: dm.Unit) -> Path:
        """Serialize a unit to disk and return the snapshot path."""

        path = self._unit_file(unit.id)
        path.write_bytes(self._unit_adapter.dump_json(unit, indent=2))
        logger.debug("saved unit %s to %s", unit.id, path)
        return path

    def load_unit(self, unit_id: dm.UnitID) -> dm.Unit:
        """Load a unit snapshot or raise :class:`RecordNotFoundError`."""

        path = self._unit_file(unit_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise RecordNotFoundError("unit", unit_id) from None
        return self._unit_adapter.validate_json(data)

    def list_units(self) -> list[dm.UnitID]:
        """Return all unit ids currently persisted in the store."""

        return [dm.UnitID(raw) for raw in _ids_in(self.units_path, "unit_")]

    def save_player_state(self, state: dm.PlayerResearchState) -> Path:
        """Serialize a player's research record and return the snapshot path."""

        path = self._player_file(state.player_id)
        path.write_bytes(self._player_adapter.dump_json(state, indent=2))
        logger.debug("saved player %s to %s", state.player_id, path)
        return path

    def load_player_state(self, player_id: dm.PlayerID) -> dm.PlayerResearchState:
        """Load a player's research record or raise :class:`RecordNotFoundError`."""

        path = self._player_file(player_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise RecordNotFoundError("player", player_id) from None
        return self._player_adapter.validate_json(data)

    def list_players(self) -> list[dm.PlayerID]:
        """Return all player ids currently persisted in the store."""

        return [dm.PlayerID(raw) for raw in _ids_in(self.players_path, "player_")]


def _ids_in(directory: Path, prefix: str) -> list[str]:
    suffix = ".json"
    ids: list[str] = []
    for path in directory.glob(f"{prefix}*{suffix}"):
        name = path.name
        raw = name[len(prefix) : -len(suffix)]
        if raw and _SAFE_ID.match(raw):
            ids.append(raw)
    return sorted(ids)
