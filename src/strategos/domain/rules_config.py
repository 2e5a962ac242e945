"""Declarative rule configuration for the rules engine.

Everything here is immutable. :data:`DEFAULT_RULES` is assembled once at
import time; rule functions accept a ``rules`` argument defaulting to it so
callers (and tests) can inject smaller or altered rule sets.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import Formation, SpecialAbility, Terrain, UnitType, Weather
from .tech_data import REFERENCE_TECHNOLOGIES
from .tech_tree import TechTree


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Combat and levelling constants."""

    base_attack_damage: float = 10
    base_defense: float = 5
    critical_hit_chance: float = 0.1
    critical_hit_multiplier: float = 2.0
    experience_per_combat: int = 10
    experience_for_level_up: int = 100
    max_level: int = 10
    level_up_stat_increase: float = 0.1
    strong_multiplier: float = 1.5
    weak_multiplier: float = 0.7
    min_defense: float = 1


@dataclass(frozen=True, slots=True)
class TypeAdvantage:
    """Which unit types a unit type is strong or weak against."""

    strong_against: frozenset[UnitType] = frozenset()
    weak_against: frozenset[UnitType] = frozenset()


@dataclass(frozen=True, slots=True)
class Modifier:
    """Attack/defense scaling for a terrain, weather or formation key."""

    attack_modifier: float = 0.0
    defense_modifier: float = 0.0
    movement_modifier: float = 0.0
    movement_cost: int = 1


@dataclass(frozen=True, slots=True)
class Ability:
    """Special ability definition."""

    attack_modifier: float = 0.0
    defense_modifier: float = 0.0
    cooldown: int = 0
    heal_amount: int = 0


def _advantage(strong: tuple[UnitType, ...], weak: tuple[UnitType, ...]) -> TypeAdvantage:
    return TypeAdvantage(strong_against=frozenset(strong), weak_against=frozenset(weak))


DEFAULT_ADVANTAGES: Mapping[UnitType, TypeAdvantage] = MappingProxyType({
    UnitType.INFANTRY: _advantage((UnitType.ARCHER,), (UnitType.CAVALRY,)),
    UnitType.ARCHER: _advantage((UnitType.CAVALRY,), (UnitType.INFANTRY,)),
    UnitType.CAVALRY: _advantage((UnitType.INFANTRY,), (UnitType.ARCHER,)),
    UnitType.SIEGE: _advantage((UnitType.BUILDING,), (UnitType.CAVALRY,)),
    UnitType.BUILDING: _advantage((), (UnitType.SIEGE,)),
})

DEFAULT_TERRAIN: Mapping[Terrain, Modifier] = MappingProxyType({
    Terrain.PLAINS: Modifier(0.0, 0.0, movement_cost=1),
    Terrain.FOREST: Modifier(-0.1, 0.2, movement_cost=2),
    Terrain.MOUNTAIN: Modifier(0.1, 0.3, movement_cost=3),
    Terrain.WATER: Modifier(-0.2, -0.1, movement_cost=4),
    Terrain.DESERT: Modifier(-0.1, -0.1, movement_cost=2),
})

DEFAULT_WEATHER: Mapping[Weather, Modifier] = MappingProxyType({
    Weather.CLEAR: Modifier(0.0, 0.0, 0.0),
    Weather.RAIN: Modifier(-0.1, 0.0, -0.2),
    Weather.SNOW: Modifier(-0.2, -0.1, -0.3),
    Weather.FOG: Modifier(-0.3, 0.1, -0.1),
    Weather.STORM: Modifier(-0.2, -0.2, -0.4),
})

DEFAULT_FORMATIONS: Mapping[Formation, Modifier] = MappingProxyType({
    Formation.LINE: Modifier(0.1, 0.1, 0.0),
    Formation.COLUMN: Modifier(0.0, 0.0, 0.2),
    Formation.SQUARE: Modifier(-0.1, 0.3, -0.2),
    Formation.WEDGE: Modifier(0.3, -0.1, 0.0),
    Formation.SKIRMISH: Modifier(0.0, 0.0, 0.3),
})

DEFAULT_ABILITIES: Mapping[SpecialAbility, Ability] = MappingProxyType({
    SpecialAbility.CHARGE: Ability(0.5, -0.2, cooldown=3),
    SpecialAbility.SHIELD_WALL: Ability(-0.2, 0.5, cooldown=3),
    SpecialAbility.VOLLEY: Ability(0.3, -0.1, cooldown=2),
    SpecialAbility.AMBUSH: Ability(0.7, 0.0, cooldown=4),
    SpecialAbility.HEAL: Ability(cooldown=5, heal_amount=20),
})


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for combat and research."""

    combat: CombatRules = CombatRules()
    advantages: Mapping[UnitType, TypeAdvantage] = field(default_factory=lambda: DEFAULT_ADVANTAGES)
    terrain: Mapping[Terrain, Modifier] = field(default_factory=lambda: DEFAULT_TERRAIN)
    weather: Mapping[Weather, Modifier] = field(default_factory=lambda: DEFAULT_WEATHER)
    formations: Mapping[Formation, Modifier] = field(default_factory=lambda: DEFAULT_FORMATIONS)
    abilities: Mapping[SpecialAbility, Ability] = field(default_factory=lambda: DEFAULT_ABILITIES)
    technologies: TechTree = field(default_factory=lambda: TechTree(REFERENCE_TECHNOLOGIES))

    def __post_init__(self) -> None:
        for name in ("advantages", "terrain", "weather", "formations", "abilities"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))


DEFAULT_RULES = RulesConfig()
