"""Reference technology tree and era/category metadata."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import Era, TechCategory, UnlockKind
from .models import TechID, Technology, Unlock


@dataclass(frozen=True, slots=True)
class EraInfo:
    """Display metadata for an era."""

    name: str


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Display metadata for a research category."""

    name: str
    color: str


ERA_INFO: dict[Era, EraInfo] = {
    Era.ANCIENT: EraInfo("Ancient Era"),
    Era.MEDIEVAL: EraInfo("Medieval Era"),
    Era.RENAISSANCE: EraInfo("Renaissance Era"),
    Era.INDUSTRIAL: EraInfo("Industrial Era"),
    Era.MODERN: EraInfo("Modern Era"),
    Era.FUTURE: EraInfo("Future Era"),
}

CATEGORY_INFO: dict[TechCategory, CategoryInfo] = {
    TechCategory.MILITARY: CategoryInfo("Military", "#ff0000"),
    TechCategory.ECONOMY: CategoryInfo("Economy", "#ffcc00"),
    TechCategory.INFRASTRUCTURE: CategoryInfo("Infrastructure", "#0099ff"),
    TechCategory.SCIENCE: CategoryInfo("Science", "#00cc99"),
    TechCategory.CULTURE: CategoryInfo("Culture", "#cc00ff"),
}


def _unit(name: str) -> Unlock:
    return Unlock(id=name, kind=UnlockKind.UNIT)


def _building(name: str) -> Unlock:
    return Unlock(id=name, kind=UnlockKind.BUILDING)


def _tech(
    tech_id: str,
    name: str,
    era: Era,
    category: TechCategory,
    science: int,
    research_time: int,
    prerequisites: tuple[str, ...],
    effects: dict[str, float],
    description: str,
    unlocks: tuple[Unlock, ...] = (),
) -> Technology:
    return Technology(
        id=TechID(tech_id),
        name=name,
        era=era,
        category=category,
        cost={"science": science},
        research_time=research_time,
        prerequisites=tuple(TechID(p) for p in prerequisites),
        effects=effects,
        unlocks=unlocks,
        description=description,
    )


REFERENCE_TECHNOLOGIES: tuple[Technology, ...] = (
    # Ancient
    _tech(
        "agriculture",
        "Agriculture",
        Era.ANCIENT,
        TechCategory.ECONOMY,
        10,
        1,
        (),
        {"food_production": 0.2, "population_growth": 0.1},
        "Enables farming and increases food production.",
    ),
    _tech(
        "mining",
        "Mining",
        Era.ANCIENT,
        TechCategory.ECONOMY,
        15,
        1,
        (),
        {"stone_production": 0.2, "gold_production": 0.1},
        "Enables mining of stone and precious metals.",
    ),
    _tech(
        "bronze_working",
        "Bronze Working",
        Era.ANCIENT,
        TechCategory.MILITARY,
        20,
        2,
        ("mining",),
        {"unit_attack": 0.1, "unit_defense": 0.1},
        "Enables bronze weapons and armor.",
        (_unit("spearman"),),
    ),
    _tech(
        "writing",
        "Writing",
        Era.ANCIENT,
        TechCategory.SCIENCE,
        25,
        2,
        (),
        {"science_production": 0.2},
        "Enables written records and scientific progress.",
    ),
    # Medieval
    _tech(
        "iron_working",
        "Iron Working",
        Era.MEDIEVAL,
        TechCategory.MILITARY,
        40,
        3,
        ("bronze_working",),
        {"unit_attack": 0.2, "unit_defense": 0.2},
        "Enables iron weapons and armor.",
        (_unit("swordsman"),),
    ),
    _tech(
        "mathematics",
        "Mathematics",
        Era.MEDIEVAL,
        TechCategory.SCIENCE,
        45,
        3,
        ("writing",),
        {"science_production": 0.2, "building_cost": -0.1},
        "Enables advanced calculations and engineering.",
    ),
    _tech(
        "construction",
        "Construction",
        Era.MEDIEVAL,
        TechCategory.INFRASTRUCTURE,
        50,
        4,
        ("mathematics",),
        {"building_health": 0.3, "building_cost": -0.1},
        "Enables advanced building techniques.",
        (_building("walls"), _building("aqueduct")),
    ),
    _tech(
        "feudalism",
        "Feudalism",
        Era.MEDIEVAL,
        TechCategory.ECONOMY,
        55,
        4,
        ("agriculture",),
        {"food_production": 0.2, "gold_production": 0.2},
        "Establishes a feudal system for resource management.",
    ),
    # Renaissance
    _tech(
        "gunpowder",
        "Gunpowder",
        Era.RENAISSANCE,
        TechCategory.MILITARY,
        80,
        5,
        ("iron_working",),
        {"unit_attack": 0.3},
        "Enables gunpowder weapons.",
        (_unit("musketman"),),
    ),
    _tech(
        "printing_press",
        "Printing Press",
        Era.RENAISSANCE,
        TechCategory.SCIENCE,
        85,
        5,
        ("mathematics",),
        {"science_production": 0.3, "culture_production": 0.2},
        "Enables mass production of books and knowledge sharing.",
    ),
    _tech(
        "banking",
        "Banking",
        Era.RENAISSANCE,
        TechCategory.ECONOMY,
        90,
        6,
        ("feudalism",),
        {"gold_production": 0.3, "trade_income": 0.2},
        "Establishes a banking system for economic growth.",
    ),
    # Industrial
    _tech(
        "steam_power",
        "Steam Power",
        Era.INDUSTRIAL,
        TechCategory.INFRASTRUCTURE,
        120,
        7,
        ("construction",),
        {"production_speed": 0.3, "movement_speed": 0.2},
        "Harnesses steam for industrial applications.",
        (_building("factory"),),
    ),
    _tech(
        "rifling",
        "Rifling",
        Era.INDUSTRIAL,
        TechCategory.MILITARY,
        130,
        7,
        ("gunpowder",),
        {"unit_attack": 0.3, "unit_range": 0.2},
        "Enables rifled firearms for increased accuracy.",
        (_unit("rifleman"),),
    ),
    _tech(
        "industrialization",
        "Industrialization",
        Era.INDUSTRIAL,
        TechCategory.ECONOMY,
        140,
        8,
        ("steam_power", "banking"),
        {"production_speed": 0.4, "resource_production": 0.3},
        "Establishes industrial methods for mass production.",
    ),
    # Modern
    _tech(
        "electricity",
        "Electricity",
        Era.MODERN,
        TechCategory.INFRASTRUCTURE,
        180,
        9,
        ("industrialization",),
        {"production_speed": 0.4, "building_efficiency": 0.3},
        "Harnesses electrical power for various applications.",
        (_building("power_plant"),),
    ),
    _tech(
        "radio",
        "Radio",
        Era.MODERN,
        TechCategory.SCIENCE,
        190,
        9,
        ("electricity",),
        {"communication_range": 0.5, "culture_production": 0.3},
        "Enables wireless communication over long distances.",
    ),
    _tech(
        "combustion",
        "Combustion",
        Era.MODERN,
        TechCategory.MILITARY,
        200,
        10,
        ("rifling",),
        {"unit_movement": 0.4, "unit_attack": 0.3},
        "Enables combustion engines for vehicles.",
        (_unit("tank"),),
    ),
    # Future
    _tech(
        "computers",
        "Computers",
        Era.FUTURE,
        TechCategory.SCIENCE,
        250,
        12,
        ("electricity", "radio"),
        {"science_production": 0.5, "production_efficiency": 0.4},
        "Enables digital computing for advanced applications.",
    ),
    _tech(
        "robotics",
        "Robotics",
        Era.FUTURE,
        TechCategory.INFRASTRUCTURE,
        280,
        14,
        ("computers",),
        {"production_speed": 0.5, "resource_efficiency": 0.4},
        "Enables automated robots for various tasks.",
        (_building("robot_factory"),),
    ),
    _tech(
        "artificial_intelligence",
        "Artificial Intelligence",
        Era.FUTURE,
        TechCategory.SCIENCE,
        300,
        15,
        ("computers", "robotics"),
        {
            "science_production": 0.6,
            "production_efficiency": 0.5,
            "resource_efficiency": 0.5,
        },
        "Enables intelligent systems that can learn and adapt.",
    ),
)
