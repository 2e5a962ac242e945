"""Service Factory for Strategos.

This module provides factory functions for creating service instances with
proper dependency wiring from :class:`~strategos.config.Settings`. Use these
functions in production code; in tests construct the services directly
with in-memory fakes.

Example:
    # Production usage
    from strategos.factory import create_research_service
    research = create_research_service(get_settings())

    # Testing usage
    from strategos.services.research_service import ResearchService
    research = ResearchService(FakeStore(), FakeTurnLog(), tree=small_tree)
"""

from dataclasses import replace

from strategos.config import Settings
from strategos.domain.rules_config import DEFAULT_RULES, RulesConfig
from strategos.repository import JsonlTurnLog, JsonRecordStore, load_tech_tree
from strategos.services.combat_service import CombatService
from strategos.services.research_service import ResearchService


def create_rules(settings: Settings) -> RulesConfig:
    """Build the rules configuration, swapping in a tree file when configured.

    Args:
        settings: Application settings

    Returns:
        DEFAULT_RULES, or a copy using the technology tree from
        ``settings.tech_tree_file``
    """
    if settings.tech_tree_file is None:
        return DEFAULT_RULES
    return replace(DEFAULT_RULES, technologies=load_tech_tree(settings.tech_tree_file))


def create_record_store(settings: Settings) -> JsonRecordStore:
    """Create the JSON record store rooted at ``settings.data_dir``."""
    return JsonRecordStore(settings.data_dir)


def create_turn_log(settings: Settings) -> JsonlTurnLog:
    """Create the turn log stored next to the records."""
    return JsonlTurnLog(settings.turn_log_path)


def create_combat_service(
    settings: Settings,
    *,
    rules: RulesConfig | None = None,
    store: JsonRecordStore | None = None,
    turn_log: JsonlTurnLog | None = None,
) -> CombatService:
    """Create a CombatService with all dependencies.

    Args:
        settings: Application settings
        rules: Rules to use (built from settings when omitted)
        store: Record store to share with other services
        turn_log: Turn log to share with other services

    Returns:
        Fully initialized CombatService
    """
    return CombatService(
        store or create_record_store(settings),
        turn_log or create_turn_log(settings),
        rules=rules or create_rules(settings),
        game_id=settings.game_id,
    )


def create_research_service(
    settings: Settings,
    *,
    rules: RulesConfig | None = None,
    store: JsonRecordStore | None = None,
    turn_log: JsonlTurnLog | None = None,
) -> ResearchService:
    """Create a ResearchService with all dependencies.

    Args:
        settings: Application settings
        rules: Rules to use (built from settings when omitted)
        store: Record store to share with other services
        turn_log: Turn log to share with other services

    Returns:
        Fully initialized ResearchService
    """
    rules = rules or create_rules(settings)
    return ResearchService(
        store or create_record_store(settings),
        turn_log or create_turn_log(settings),
        tree=rules.technologies,
    )
