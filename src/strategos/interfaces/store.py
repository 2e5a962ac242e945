"""Record store and turn log protocol interfaces.

The services depend on these protocols rather than on the JSON adapters so
tests can inject in-memory fakes.
"""

from pathlib import Path
from typing import Any, Protocol

from strategos.domain.models import PlayerID, PlayerResearchState, Unit, UnitID
from strategos.repository.turn_log import TurnEvent


class IRecordStore(Protocol):
    """Protocol for loading and saving unit and player snapshots.

    Every call is atomic on its own; callers sequence related loads and saves
    themselves.
    """

    def load_unit(self, unit_id: UnitID) -> Unit:
        """Return the unit snapshot or raise ``RecordNotFoundError``."""
        ...

    def save_unit(self, unit: Unit) -> Path:
        """Persist a unit snapshot, replacing any previous one."""
        ...

    def list_units(self) -> list[UnitID]:
        """Return every stored unit id."""
        ...

    def load_player_state(self, player_id: PlayerID) -> PlayerResearchState:
        """Return the player's research record or raise ``RecordNotFoundError``."""
        ...

    def save_player_state(self, state: PlayerResearchState) -> Path:
        """Persist a player's research record, replacing any previous one."""
        ...

    def list_players(self) -> list[PlayerID]:
        """Return every stored player id."""
        ...


class ITurnLog(Protocol):
    """Protocol for the append-only log of game changes."""

    def append(self, kind: str, summary: str, payload: dict[str, Any] | None = None) -> TurnEvent:
        """Record one event and return it with its sequence number."""
        ...

    def events(self) -> list[TurnEvent]:
        """Return every recorded event in order."""
        ...

    def next_sequence(self) -> int:
        """Sequence number the next appended event will receive."""
        ...
