"""Runtime primitives backing the Strategos HTTP API."""

from __future__ import annotations

import logging

from strategos import factory
from strategos.config import Settings, get_settings
from strategos.domain.rules_config import RulesConfig

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig | None = None
    ) -> None:
        self.settings = settings or get_settings()
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        self.rules = rules or factory.create_rules(self.settings)
        self.store = factory.create_record_store(self.settings)
        self.turn_log = factory.create_turn_log(self.settings)
        self.combat = factory.create_combat_service(
            self.settings, rules=self.rules, store=self.store, turn_log=self.turn_log
        )
        self.research = factory.create_research_service(
            self.settings, rules=self.rules, store=self.store, turn_log=self.turn_log
        )
        logger.info(
            "API state ready: data_dir=%s, %d technologies",
            self.settings.data_dir,
            len(self.rules.technologies),
        )

    async def shutdown(self) -> None:
        logger.info("API state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
