"""Dataclasses describing the snapshots the rules engine works on.

The rules layer never touches storage. Orchestrators load these snapshots
from a record store, hand them to the pure rule functions and persist the
new snapshots those functions return. Every rule function treats its
inputs as read-only and builds fresh instances for its result.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import NewType

from .enums import (
    Era,
    Formation,
    SpecialAbility,
    TechCategory,
    Terrain,
    UnitStatus,
    UnitType,
    UnlockKind,
    Weather,
)

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", str)
PlayerID = NewType("PlayerID", str)
TechID = NewType("TechID", str)


# --- Combat ---------------------------------------------------------------------


@dataclass(slots=True)
class Unit:
    """A combat participant."""

    id: UnitID
    type: UnitType
    health: int = 100
    max_health: int = 100
    attack: float = 10.0
    defense: float = 5.0
    level: int = 1
    experience: int = 0
    status: UnitStatus = UnitStatus.ACTIVE
    owner: PlayerID | None = None
    ability_cooldowns: dict[SpecialAbility, int] = field(default_factory=dict)

    @property
    def is_defeated(self) -> bool:
        return self.status == UnitStatus.DEFEATED


@dataclass(frozen=True, slots=True)
class CombatOptions:
    """Situational modifiers for a single attack.

    Raw strings are accepted so that values coming from an outer layer can be
    passed straight through; they are validated when the attack is resolved.
    """

    terrain: Terrain | str = Terrain.PLAINS
    weather: Weather | str = Weather.CLEAR
    formation: Formation | str = Formation.LINE
    special_ability: SpecialAbility | str | None = None


@dataclass(frozen=True, slots=True)
class CombatResult:
    """Outcome of one attack."""

    damage: int
    is_critical: bool
    experience_gained: int
    raw_damage: float


@dataclass(frozen=True, slots=True)
class CombatExchange:
    """Both combatants after an attack has been applied to them."""

    attacker: Unit
    defender: Unit
    result: CombatResult


# --- Technology -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Unlock:
    """A unit or building type made available by a technology."""

    id: str
    kind: UnlockKind


@dataclass(frozen=True, slots=True)
class Technology:
    """Immutable node of the technology tree."""

    id: TechID
    name: str
    era: Era
    category: TechCategory
    cost: Mapping[str, float]
    research_time: int
    prerequisites: tuple[TechID, ...] = ()
    effects: Mapping[str, float] = field(default_factory=dict)
    unlocks: tuple[Unlock, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "cost", MappingProxyType(dict(self.cost)))
        object.__setattr__(self, "effects", MappingProxyType(dict(self.effects)))
        object.__setattr__(self, "prerequisites", tuple(self.prerequisites))
        object.__setattr__(self, "unlocks", tuple(self.unlocks))


@dataclass(slots=True)
class ResearchProgress:
    """The technology a player is currently researching."""

    technology: TechID
    progress: float
    total: float

    @property
    def is_complete(self) -> bool:
        return self.progress >= self.total


@dataclass(slots=True)
class PlayerResearchState:
    """Per-player research record."""

    player_id: PlayerID
    resources: dict[str, float] = field(default_factory=dict)
    researched_technologies: list[TechID] = field(default_factory=list)
    current_research: ResearchProgress | None = None
    effects: dict[str, float] = field(default_factory=dict)
    current_era: Era = Era.ANCIENT
    era_changed: bool = False


@dataclass(slots=True)
class UnlockedContent:
    """Units and buildings unlocked by a set of researched technologies."""

    units: list[str] = field(default_factory=list)
    buildings: list[str] = field(default_factory=list)
