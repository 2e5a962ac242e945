"""Tests for settings and service wiring."""

from __future__ import annotations

from pathlib import Path

from strategos import factory
from strategos.api.runtime import ApiState
from strategos.config import Settings
from strategos.domain import models as dm
from strategos.domain.enums import Era, TechCategory
from strategos.domain.rules_config import DEFAULT_RULES
from strategos.domain.tech_tree import TechTree
from strategos.repository import export_tech_tree


def test_settings_defaults():
    settings = Settings()

    assert settings.data_dir == Path("game-data")
    assert settings.game_id == "default"
    assert settings.tech_tree_file is None
    assert settings.turn_log_path == Path("game-data") / "turns.jsonl"


def test_settings_read_prefixed_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STRATEGOS_GAME_ID", "campaign-7")
    monkeypatch.setenv("STRATEGOS_DATA_DIR", str(tmp_path))

    settings = Settings()

    assert settings.game_id == "campaign-7"
    assert settings.data_dir == tmp_path


def test_default_rules_without_tree_file(tmp_path):
    assert factory.create_rules(Settings(data_dir=tmp_path)) is DEFAULT_RULES


def test_tree_file_replaces_reference_tree(tmp_path):
    tree = TechTree(
        [
            dm.Technology(
                id=dm.TechID("fire"),
                name="Fire",
                era=Era.ANCIENT,
                category=TechCategory.SCIENCE,
                cost={"science": 1},
                research_time=1,
            )
        ]
    )
    path = export_tech_tree(tree, tmp_path / "tree.json")

    rules = factory.create_rules(Settings(data_dir=tmp_path, tech_tree_file=path))

    assert [tech.id for tech in rules.technologies] == ["fire"]
    assert rules.combat == DEFAULT_RULES.combat
    research = factory.create_research_service(Settings(data_dir=tmp_path), rules=rules)
    assert research.tree is rules.technologies


def test_combat_service_uses_configured_game_id(tmp_path):
    service = factory.create_combat_service(Settings(data_dir=tmp_path, game_id="g-42"))

    assert service.game_id == "g-42"
    assert service.turn_log.path == tmp_path / "turns.jsonl"


def test_api_state_shares_store_between_services(tmp_path):
    state = ApiState(settings=Settings(data_dir=tmp_path / "data"))

    assert state.combat.store is state.store
    assert state.research.store is state.store
    assert state.research.turn_log is state.turn_log
    assert (tmp_path / "data" / "units").is_dir()
