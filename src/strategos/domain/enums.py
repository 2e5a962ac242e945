"""Enumerations used by the Strategos rules engine."""

from __future__ import annotations

from enum import StrEnum


class UnitType(StrEnum):
    """Closed set of combat unit categories."""

    INFANTRY = "infantry"
    ARCHER = "archer"
    CAVALRY = "cavalry"
    SIEGE = "siege"
    BUILDING = "building"


class UnitStatus(StrEnum):
    """Status derived after a unit takes part in combat."""

    ACTIVE = "active"
    DAMAGED = "damaged"
    LEVELED_UP = "leveled_up"
    DEFEATED = "defeated"


class Terrain(StrEnum):
    """Terrain the combat takes place on."""

    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    WATER = "water"
    DESERT = "desert"


class Weather(StrEnum):
    """Weather during the combat."""

    CLEAR = "clear"
    RAIN = "rain"
    SNOW = "snow"
    FOG = "fog"
    STORM = "storm"


class Formation(StrEnum):
    """Formation adopted by the attacking unit."""

    LINE = "line"
    COLUMN = "column"
    SQUARE = "square"
    WEDGE = "wedge"
    SKIRMISH = "skirmish"


class SpecialAbility(StrEnum):
    """Special abilities a unit may activate."""

    CHARGE = "charge"
    SHIELD_WALL = "shield_wall"
    VOLLEY = "volley"
    AMBUSH = "ambush"
    HEAL = "heal"


class Era(StrEnum):
    """Technological eras, declared in ascending order."""

    ANCIENT = "ancient"
    MEDIEVAL = "medieval"
    RENAISSANCE = "renaissance"
    INDUSTRIAL = "industrial"
    MODERN = "modern"
    FUTURE = "future"

    @property
    def index(self) -> int:
        return list(Era).index(self)


class TechCategory(StrEnum):
    """Research branches of the technology tree."""

    MILITARY = "military"
    ECONOMY = "economy"
    INFRASTRUCTURE = "infrastructure"
    SCIENCE = "science"
    CULTURE = "culture"


class UnlockKind(StrEnum):
    """What a technology unlock makes available for production."""

    UNIT = "unit"
    BUILDING = "building"
