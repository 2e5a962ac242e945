"""Unit tests for research scheduling."""

from __future__ import annotations

import pytest

from strategos.domain import models as dm
from strategos.domain import research
from strategos.domain.enums import Era, TechCategory
from strategos.domain.errors import (
    AlreadyResearchedError,
    InsufficientResourcesError,
    PrerequisitesNotMetError,
    ResearchInProgressError,
    UnknownTechnologyError,
)
from strategos.domain.tech_tree import TechTree


def _player(science: float = 100, **overrides) -> dm.PlayerResearchState:
    state = research.new_player_state("p1", {"science": science})
    for key, value in overrides.items():
        setattr(state, key, value)
    return state


def test_new_player_starts_idle_in_ancient_era():
    state = research.new_player_state("p1")

    assert state.current_era == Era.ANCIENT
    assert state.current_research is None
    assert state.researched_technologies == []
    assert state.resources == {}


def test_agriculture_start_to_finish():
    state = _player(100)

    started = research.start_research("agriculture", state)
    assert started.resources["science"] == 90
    assert started.current_research == dm.ResearchProgress("agriculture", 0, 1)

    done = research.advance_research(1, started)
    assert done.current_research is None
    assert done.researched_technologies == ["agriculture"]
    assert done.effects == pytest.approx({"food_production": 0.2, "population_growth": 0.1})
    assert done.current_era == Era.ANCIENT
    assert done.era_changed is False


def test_inputs_are_not_modified():
    state = _player(100)
    started = research.start_research("agriculture", state)
    research.advance_research(5, started)

    assert state.resources == {"science": 100}
    assert state.current_research is None
    assert started.current_research is not None
    assert started.researched_technologies == []


def test_missing_prerequisite_is_rejected():
    with pytest.raises(PrerequisitesNotMetError) as excinfo:
        research.start_research("bronze_working", _player(100))
    assert excinfo.value.missing == ("mining",)


def test_unknown_technology_is_rejected():
    with pytest.raises(UnknownTechnologyError):
        research.start_research("alchemy", _player())


def test_already_researched_is_rejected():
    state = _player(researched_technologies=[dm.TechID("agriculture")])
    with pytest.raises(AlreadyResearchedError):
        research.start_research("agriculture", state)


def test_second_research_while_busy_is_rejected():
    started = research.start_research("agriculture", _player(100))
    with pytest.raises(ResearchInProgressError) as excinfo:
        research.start_research("mining", started)
    assert excinfo.value.active == "agriculture"


def test_insufficient_science_is_rejected():
    with pytest.raises(InsufficientResourcesError) as excinfo:
        research.start_research("writing", _player(5))
    assert excinfo.value.shortfall == {"science": 20}


def test_cost_is_all_or_nothing():
    tree = TechTree(
        [
            dm.Technology(
                id=dm.TechID("coinage"),
                name="Coinage",
                era=Era.ANCIENT,
                category=TechCategory.ECONOMY,
                cost={"science": 10, "gold": 5},
                research_time=1,
            )
        ]
    )
    state = research.new_player_state("p1", {"science": 20})

    with pytest.raises(InsufficientResourcesError) as excinfo:
        research.start_research("coinage", state, tree=tree)
    assert excinfo.value.shortfall == {"gold": 5}
    assert state.resources == {"science": 20}


def test_partial_progress_accumulates():
    state = research.start_research("writing", _player(100))

    state = research.advance_research(1, state)
    assert state.current_research is not None
    assert state.current_research.progress == 1
    assert state.researched_technologies == []

    state = research.advance_research(1, state)
    assert state.researched_technologies == ["writing"]


def test_completed_research_is_not_applied_twice():
    state = research.start_research("agriculture", _player(100))
    state = research.advance_research(1, state)
    again = research.advance_research(10, state)

    assert again.researched_technologies == ["agriculture"]
    assert again.effects == state.effects


def test_advance_while_idle_changes_nothing():
    state = _player(100)
    assert research.advance_research(3, state) == state


def test_negative_points_are_rejected():
    with pytest.raises(ValueError):
        research.advance_research(-1, _player())


def test_era_change_is_reported_once():
    state = _player(100, researched_technologies=[dm.TechID("writing")])
    state = research.start_research("mathematics", state)

    state = research.advance_research(3, state)
    assert state.current_era == Era.MEDIEVAL
    assert state.era_changed is True

    state = research.advance_research(1, state)
    assert state.current_era == Era.MEDIEVAL
    assert state.era_changed is False


def test_query_helpers_follow_researched_set():
    state = _player(researched_technologies=[dm.TechID("mining"), dm.TechID("bronze_working")])

    available = {tech.id for tech in research.available_technologies(state)}
    assert "iron_working" in available
    assert "bronze_working" not in available
    assert research.unlocked_content(state).units == ["spearman"]
    assert research.combined_effects(state)["unit_attack"] == pytest.approx(0.1)
