"""Research orchestration for Strategos."""

from __future__ import annotations

import logging

from strategos.domain import research
from strategos.domain.errors import RecordNotFoundError
from strategos.domain.models import (
    PlayerID,
    PlayerResearchState,
    TechID,
    Technology,
    UnlockedContent,
)
from strategos.domain.rules_config import DEFAULT_RULES
from strategos.domain.tech_tree import TechTree
from strategos.interfaces import IRecordStore, ITurnLog

logger = logging.getLogger(__name__)


class ResearchService:
    """Service driving players through the technology tree."""

    def __init__(
        self,
        store: IRecordStore,
        turn_log: ITurnLog,
        *,
        tree: TechTree = DEFAULT_RULES.technologies,
    ) -> None:
        self.store = store
        self.turn_log = turn_log
        self.tree = tree

    def create_player(
        self, player_id: str, resources: dict[str, float] | None = None
    ) -> PlayerResearchState:
        """Create and persist the research record of a new player."""

        try:
            self.store.load_player_state(PlayerID(player_id))
        except RecordNotFoundError:
            pass
        else:
            raise ValueError(f"player {player_id!r} already exists")

        state = research.new_player_state(player_id, resources)
        self.store.save_player_state(state)
        self.turn_log.append(
            "player_created",
            f"Player {player_id} founded in the {state.current_era} era",
            {"player_id": player_id, "resources": dict(state.resources)},
        )
        return state

    def get_player(self, player_id: str) -> PlayerResearchState:
        return self.store.load_player_state(PlayerID(player_id))

    def start_research(self, player_id: str, tech_id: str) -> PlayerResearchState:
        """Validate and pay for a technology, then mark it as being researched."""

        state = self.get_player(player_id)
        updated = research.start_research(tech_id, state, tree=self.tree)
        self.store.save_player_state(updated)

        tech = self.tree.get(tech_id)
        self.turn_log.append(
            "research_started",
            f"Player {player_id} started researching {tech.name}",
            {"player_id": player_id, "technology": tech.id, "cost": dict(tech.cost)},
        )
        logger.info("player %s started researching %s", player_id, tech.id)
        return updated

    def contribute(self, player_id: str, points: float) -> PlayerResearchState:
        """Add research points to the player's active research."""

        state = self.get_player(player_id)
        active = state.current_research
        updated = research.advance_research(points, state, tree=self.tree)
        self.store.save_player_state(updated)

        if active is None:
            logger.warning(
                "player %s contributed %s points with no active research", player_id, points
            )
            return updated

        if updated.current_research is not None:
            self.turn_log.append(
                "research_progress",
                f"Player {player_id} research on {active.technology}: "
                f"{updated.current_research.progress:g}/{updated.current_research.total:g}",
                {
                    "player_id": player_id,
                    "technology": active.technology,
                    "progress": updated.current_research.progress,
                    "total": updated.current_research.total,
                },
            )
            return updated

        self.turn_log.append(
            "research_completed",
            f"Player {player_id} completed {active.technology}",
            {
                "player_id": player_id,
                "technology": active.technology,
                "effects": dict(self.tree.get(active.technology).effects),
            },
        )
        logger.info("player %s completed %s", player_id, active.technology)
        if updated.era_changed:
            self.turn_log.append(
                "era_advanced",
                f"Player {player_id} entered the {updated.current_era} era",
                {"player_id": player_id, "era": str(updated.current_era)},
            )
            logger.info("player %s advanced to the %s era", player_id, updated.current_era)
        return updated

    def available(self, player_id: str) -> list[Technology]:
        return research.available_technologies(self.get_player(player_id), tree=self.tree)

    def path(self, tech_id: str) -> list[TechID]:
        return self.tree.technology_path(tech_id)

    def plan(self, tech_id: str, player_id: str | None = None) -> list[TechID]:
        """Missing technologies for ``tech_id``, optionally skipping a player's known ones."""

        researched = self.get_player(player_id).researched_technologies if player_id else []
        return self.tree.research_plan(tech_id, researched)

    def unlocks(self, player_id: str) -> UnlockedContent:
        return research.unlocked_content(self.get_player(player_id), tree=self.tree)

    def effects(self, player_id: str) -> dict[str, float]:
        return research.combined_effects(self.get_player(player_id), tree=self.tree)
