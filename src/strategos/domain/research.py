"""Research scheduling: starting, progressing and completing technologies.

A player is either idle (no ``current_research``) or researching exactly
one technology. Starting research validates everything before touching the
player's resources. Completing it folds the technology's effects into the
player's effects and re-derives the era. All functions return a new
:class:`PlayerResearchState`; the input is left untouched.
"""

from __future__ import annotations

from .enums import Era
from .errors import (
    AlreadyResearchedError,
    InsufficientResourcesError,
    PrerequisitesNotMetError,
    ResearchInProgressError,
)
from .models import (
    PlayerID,
    PlayerResearchState,
    ResearchProgress,
    Technology,
    UnlockedContent,
)
from .rules_config import DEFAULT_RULES
from .tech_tree import TechTree

INITIAL_ERA = Era.ANCIENT


def new_player_state(
    player_id: str, resources: dict[str, float] | None = None
) -> PlayerResearchState:
    """Create the research record of a freshly founded civilization."""

    return PlayerResearchState(
        player_id=PlayerID(player_id),
        resources=dict(resources or {}),
        current_era=INITIAL_ERA,
    )


def _clone(state: PlayerResearchState) -> PlayerResearchState:
    current = state.current_research
    return PlayerResearchState(
        player_id=state.player_id,
        resources=dict(state.resources),
        researched_technologies=list(state.researched_technologies),
        current_research=(
            ResearchProgress(current.technology, current.progress, current.total)
            if current is not None
            else None
        ),
        effects=dict(state.effects),
        current_era=state.current_era,
        era_changed=state.era_changed,
    )


def start_research(
    tech_id: str,
    state: PlayerResearchState,
    *,
    tree: TechTree = DEFAULT_RULES.technologies,
) -> PlayerResearchState:
    """Begin researching ``tech_id``, paying its full cost up front."""

    tech = tree.get(tech_id)
    researched = set(state.researched_technologies)

    if tech.id in researched:
        raise AlreadyResearchedError(tech.id)
    if state.current_research is not None:
        raise ResearchInProgressError(state.current_research.technology)

    missing = [prereq for prereq in tech.prerequisites if prereq not in researched]
    if missing:
        raise PrerequisitesNotMetError(tech.id, missing)

    shortfall = {
        resource: amount - state.resources.get(resource, 0)
        for resource, amount in tech.cost.items()
        if state.resources.get(resource, 0) < amount
    }
    if shortfall:
        raise InsufficientResourcesError(tech.id, shortfall)

    updated = _clone(state)
    for resource, amount in tech.cost.items():
        updated.resources[resource] = updated.resources.get(resource, 0) - amount
    updated.current_research = ResearchProgress(
        technology=tech.id, progress=0, total=tech.research_time
    )
    updated.era_changed = False
    return updated


def advance_research(
    points: float,
    state: PlayerResearchState,
    *,
    tree: TechTree = DEFAULT_RULES.technologies,
) -> PlayerResearchState:
    """Contribute research points, completing the active research if enough."""

    if points < 0:
        raise ValueError(f"research points must be non-negative, got {points}")

    updated = _clone(state)
    updated.era_changed = False
    current = updated.current_research
    if current is None:
        return updated

    current.progress += points
    if not current.is_complete:
        return updated

    tech = tree.get(current.technology)
    updated.researched_technologies.append(tech.id)
    for effect, value in tech.effects.items():
        updated.effects[effect] = updated.effects.get(effect, 0.0) + value
    updated.current_research = None

    previous_era = updated.current_era
    updated.current_era = tree.derive_era(updated.researched_technologies, initial=INITIAL_ERA)
    updated.era_changed = updated.current_era != previous_era
    return updated


def available_technologies(
    state: PlayerResearchState, *, tree: TechTree = DEFAULT_RULES.technologies
) -> list[Technology]:
    """Technologies the player could start researching next."""

    return tree.available_technologies(state.researched_technologies)


def combined_effects(
    state: PlayerResearchState, *, tree: TechTree = DEFAULT_RULES.technologies
) -> dict[str, float]:
    """Recompute the player's effects from scratch out of its researched set."""

    return tree.combined_effects(state.researched_technologies)


def unlocked_content(
    state: PlayerResearchState, *, tree: TechTree = DEFAULT_RULES.technologies
) -> UnlockedContent:
    """Units and buildings the player may produce."""

    return tree.unlocked_content(state.researched_technologies)
