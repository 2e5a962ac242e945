"""HTTP routes for the Strategos API.

Rule violations raised by the services propagate as ``RulesError`` and are
turned into responses by the handler registered in :mod:`strategos.api.app`.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from strategos.api.runtime import ApiState
from strategos.domain import models as dm
from strategos.domain.enums import Formation, SpecialAbility, Terrain, UnitType, Weather
from strategos.domain.tech_data import CATEGORY_INFO, ERA_INFO
from strategos.repository import TurnEvent

router = APIRouter()

_RECORD_ID = r"^[A-Za-z0-9_.:-]+$"


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class TechnologySummary(BaseModel):
    id: str
    name: str
    era: str
    era_name: str
    category: str
    category_name: str
    category_color: str
    cost: dict[str, float]
    research_time: int
    prerequisites: list[str]
    effects: dict[str, float]
    unlocks: list[dict[str, str]]
    description: str


class TechnologyPath(BaseModel):
    technology: str
    path: list[str]


class UnitCreateRequest(BaseModel):
    id: str = Field(min_length=1, pattern=_RECORD_ID)
    type: UnitType
    owner: str | None = None
    health: int = Field(default=100, ge=0)
    max_health: int = Field(default=100, ge=1)
    attack: float = Field(default=10.0, gt=0)
    defense: float = Field(default=5.0, ge=0)
    level: int = Field(default=1, ge=1)


class UnitSummary(BaseModel):
    id: str
    type: str
    owner: str | None
    health: int
    max_health: int
    attack: float
    defense: float
    level: int
    experience: int
    status: str
    ability_cooldowns: dict[str, int]


class AttackRequest(BaseModel):
    attacker_id: str = Field(min_length=1, pattern=_RECORD_ID)
    defender_id: str = Field(min_length=1, pattern=_RECORD_ID)
    terrain: Terrain = Terrain.PLAINS
    weather: Weather = Weather.CLEAR
    formation: Formation = Formation.LINE
    special_ability: SpecialAbility | None = None
    draw: float | None = Field(default=None, ge=0.0, lt=1.0)


class CombatResponse(BaseModel):
    damage: int
    is_critical: bool
    experience_gained: int
    draw: float
    seed: str | None
    attacker: UnitSummary
    defender: UnitSummary
    event_sequence: int


class EndTurnRequest(BaseModel):
    unit_ids: list[str] | None = None


class PlayerCreateRequest(BaseModel):
    id: str = Field(min_length=1, pattern=_RECORD_ID)
    resources: dict[str, float] = Field(default_factory=dict)


class ResearchProgressSummary(BaseModel):
    technology: str
    progress: float
    total: float


class PlayerSummary(BaseModel):
    id: str
    resources: dict[str, float]
    researched_technologies: list[str]
    current_research: ResearchProgressSummary | None
    effects: dict[str, float]
    current_era: str
    era_changed: bool


class StartResearchRequest(BaseModel):
    technology: str = Field(min_length=1)


class ResearchPointsRequest(BaseModel):
    points: float = Field(ge=0)


class UnlockedSummary(BaseModel):
    units: list[str]
    buildings: list[str]


def _technology_summary(tech: dm.Technology) -> TechnologySummary:
    category = CATEGORY_INFO[tech.category]
    return TechnologySummary(
        id=tech.id,
        name=tech.name,
        era=str(tech.era),
        era_name=ERA_INFO[tech.era].name,
        category=str(tech.category),
        category_name=category.name,
        category_color=category.color,
        cost=dict(tech.cost),
        research_time=tech.research_time,
        prerequisites=list(tech.prerequisites),
        effects=dict(tech.effects),
        unlocks=[{"id": unlock.id, "kind": str(unlock.kind)} for unlock in tech.unlocks],
        description=tech.description,
    )


def _unit_summary(unit: dm.Unit) -> UnitSummary:
    return UnitSummary(
        id=unit.id,
        type=str(unit.type),
        owner=unit.owner,
        health=unit.health,
        max_health=unit.max_health,
        attack=unit.attack,
        defense=unit.defense,
        level=unit.level,
        experience=unit.experience,
        status=str(unit.status),
        ability_cooldowns={str(k): v for k, v in unit.ability_cooldowns.items()},
    )


def _player_summary(state: dm.PlayerResearchState) -> PlayerSummary:
    current = state.current_research
    return PlayerSummary(
        id=state.player_id,
        resources=dict(state.resources),
        researched_technologies=list(state.researched_technologies),
        current_research=(
            ResearchProgressSummary(
                technology=current.technology, progress=current.progress, total=current.total
            )
            if current is not None
            else None
        ),
        effects=dict(state.effects),
        current_era=str(state.current_era),
        era_changed=state.era_changed,
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "technology_count": len(state.rules.technologies),
    }


@router.get("/technologies", response_model=list[TechnologySummary])
async def list_technologies(state: ApiStateDep) -> list[TechnologySummary]:
    return [_technology_summary(tech) for tech in state.rules.technologies]


@router.get("/technologies/{tech_id}", response_model=TechnologySummary)
async def get_technology(tech_id: str, state: ApiStateDep) -> TechnologySummary:
    return _technology_summary(state.rules.technologies.get(tech_id))


@router.get("/technologies/{tech_id}/path", response_model=TechnologyPath)
async def technology_path(tech_id: str, state: ApiStateDep) -> TechnologyPath:
    return TechnologyPath(technology=tech_id, path=state.research.path(tech_id))


@router.get("/technologies/{tech_id}/plan", response_model=TechnologyPath)
async def technology_plan(
    tech_id: str, state: ApiStateDep, player_id: str | None = None
) -> TechnologyPath:
    return TechnologyPath(technology=tech_id, path=state.research.plan(tech_id, player_id))


@router.post("/units", response_model=UnitSummary, status_code=status.HTTP_201_CREATED)
async def create_unit(request: UnitCreateRequest, state: ApiStateDep) -> UnitSummary:
    unit = dm.Unit(
        id=dm.UnitID(request.id),
        type=request.type,
        owner=dm.PlayerID(request.owner) if request.owner is not None else None,
        health=request.health,
        max_health=request.max_health,
        attack=request.attack,
        defense=request.defense,
        level=request.level,
    )
    try:
        created = state.combat.register_unit(unit)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _unit_summary(created)


@router.get("/units/{unit_id}", response_model=UnitSummary)
async def get_unit(unit_id: str, state: ApiStateDep) -> UnitSummary:
    return _unit_summary(state.store.load_unit(dm.UnitID(unit_id)))


@router.post("/units/{unit_id}/heal", response_model=UnitSummary)
async def heal_unit(unit_id: str, state: ApiStateDep) -> UnitSummary:
    return _unit_summary(state.combat.heal(unit_id))


@router.post("/combat", response_model=CombatResponse)
async def attack(request: AttackRequest, state: ApiStateDep) -> CombatResponse:
    options = dm.CombatOptions(
        terrain=request.terrain,
        weather=request.weather,
        formation=request.formation,
        special_ability=request.special_ability,
    )
    report = state.combat.attack(
        request.attacker_id, request.defender_id, options, draw=request.draw
    )
    return CombatResponse(
        damage=report.result.damage,
        is_critical=report.result.is_critical,
        experience_gained=report.result.experience_gained,
        draw=report.draw,
        seed=report.seed,
        attacker=_unit_summary(report.attacker),
        defender=_unit_summary(report.defender),
        event_sequence=report.event.sequence,
    )


@router.post("/turns/end", response_model=list[UnitSummary])
async def end_turn(request: EndTurnRequest, state: ApiStateDep) -> list[UnitSummary]:
    return [_unit_summary(unit) for unit in state.combat.end_turn(request.unit_ids)]


@router.post("/players", response_model=PlayerSummary, status_code=status.HTTP_201_CREATED)
async def create_player(request: PlayerCreateRequest, state: ApiStateDep) -> PlayerSummary:
    try:
        player = state.research.create_player(request.id, request.resources)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _player_summary(player)


@router.get("/players/{player_id}", response_model=PlayerSummary)
async def get_player(player_id: str, state: ApiStateDep) -> PlayerSummary:
    return _player_summary(state.research.get_player(player_id))


@router.get("/players/{player_id}/research/available", response_model=list[TechnologySummary])
async def available_research(player_id: str, state: ApiStateDep) -> list[TechnologySummary]:
    return [_technology_summary(tech) for tech in state.research.available(player_id)]


@router.post("/players/{player_id}/research", response_model=PlayerSummary)
async def start_research(
    player_id: str, request: StartResearchRequest, state: ApiStateDep
) -> PlayerSummary:
    return _player_summary(state.research.start_research(player_id, request.technology))


@router.post("/players/{player_id}/research/progress", response_model=PlayerSummary)
async def research_progress(
    player_id: str, request: ResearchPointsRequest, state: ApiStateDep
) -> PlayerSummary:
    return _player_summary(state.research.contribute(player_id, request.points))


@router.get("/players/{player_id}/unlocks", response_model=UnlockedSummary)
async def player_unlocks(player_id: str, state: ApiStateDep) -> UnlockedSummary:
    content = state.research.unlocks(player_id)
    return UnlockedSummary(units=content.units, buildings=content.buildings)


@router.get("/players/{player_id}/effects")
async def player_effects(player_id: str, state: ApiStateDep) -> dict[str, float]:
    return state.research.effects(player_id)


@router.get("/events", response_model=list[TurnEvent])
async def list_events(state: ApiStateDep) -> list[TurnEvent]:
    return state.turn_log.events()
