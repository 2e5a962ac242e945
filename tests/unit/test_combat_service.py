"""Unit tests for CombatService."""

from __future__ import annotations

import pytest

from strategos.domain import models as dm
from strategos.domain.enums import SpecialAbility, Terrain, UnitStatus, UnitType
from strategos.domain.errors import (
    AbilityOnCooldownError,
    InvalidAttackerError,
    RecordNotFoundError,
)
from strategos.repository import JsonlTurnLog, JsonRecordStore
from strategos.services import CombatService


def _service(path, game_id: str = "test-game") -> CombatService:
    return CombatService(
        JsonRecordStore(path), JsonlTurnLog(path / "turns.jsonl"), game_id=game_id
    )


def _seed_units(service: CombatService, *, defender_health: int = 100) -> None:
    service.register_unit(
        dm.Unit(id=dm.UnitID("archer"), type=UnitType.ARCHER, attack=15, defense=3)
    )
    service.register_unit(
        dm.Unit(
            id=dm.UnitID("cavalry"),
            type=UnitType.CAVALRY,
            attack=20,
            defense=8,
            health=defender_health,
        )
    )


class TestCombatService:
    """Test cases for CombatService functionality."""

    def test_attack_persists_both_units(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)

        report = service.attack("archer", "cavalry", draw=0.5)

        assert report.result.damage == 28
        assert report.seed is None
        assert service.store.load_unit(dm.UnitID("cavalry")).health == 72
        assert service.store.load_unit(dm.UnitID("archer")).experience == 10

    def test_attack_is_recorded_in_turn_log(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)

        report = service.attack("archer", "cavalry", draw=0.5)

        events = service.turn_log.events()
        assert [event.kind for event in events] == ["unit_created", "unit_created", "combat"]
        assert report.event.sequence == 3
        assert report.event.summary == "Combat: archer attacked cavalry for 28 damage"
        assert report.event.payload["terrain"] == "plains"
        assert report.event.payload["defender_status"] == "damaged"

    def test_seeded_draw_is_reproducible(self, tmp_path):
        first = _service(tmp_path / "one")
        second = _service(tmp_path / "two")
        _seed_units(first)
        _seed_units(second)

        a = first.attack("archer", "cavalry")
        b = second.attack("archer", "cavalry")

        assert a.seed == "test-game:3:combat:archer:cavalry"
        assert a.seed == b.seed
        assert a.draw == b.draw
        assert a.result == b.result
        assert 0.0 <= a.draw < 1.0

    def test_ability_goes_on_cooldown(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)
        options = dm.CombatOptions(special_ability=SpecialAbility.CHARGE)

        report = service.attack("archer", "cavalry", options, draw=0.5)
        assert report.attacker.ability_cooldowns == {SpecialAbility.CHARGE: 3}

        with pytest.raises(AbilityOnCooldownError):
            service.attack("archer", "cavalry", options, draw=0.5)
        assert service.store.load_unit(dm.UnitID("cavalry")).health == report.defender.health

    def test_end_turn_ticks_cooldowns(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)
        options = dm.CombatOptions(special_ability=SpecialAbility.VOLLEY)
        service.attack("archer", "cavalry", options, draw=0.5)

        ticked = service.end_turn()
        assert [unit.id for unit in ticked] == ["archer"]
        assert ticked[0].ability_cooldowns == {SpecialAbility.VOLLEY: 1}

        service.end_turn(["archer"])
        assert service.store.load_unit(dm.UnitID("archer")).ability_cooldowns == {}

    def test_defeated_defender_cannot_be_attacked_again(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service, defender_health=10)

        report = service.attack("archer", "cavalry", draw=0.5)
        assert report.defender.status == UnitStatus.DEFEATED
        assert report.defender.health == 0

        with pytest.raises(InvalidAttackerError):
            service.attack("archer", "cavalry", draw=0.5)

    def test_invalid_terrain_leaves_store_untouched(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)

        with pytest.raises(ValueError):
            service.attack("archer", "cavalry", dm.CombatOptions(terrain="lava"), draw=0.5)
        assert service.store.load_unit(dm.UnitID("cavalry")).health == 100
        assert len(service.turn_log.events()) == 2

    def test_self_attack_is_rejected(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)
        with pytest.raises(InvalidAttackerError):
            service.attack("archer", "archer", draw=0.5)

    def test_unknown_unit_raises(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)
        with pytest.raises(RecordNotFoundError):
            service.attack("archer", "ghost", dm.CombatOptions(terrain=Terrain.FOREST))

    def test_duplicate_unit_is_rejected(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service)
        with pytest.raises(ValueError):
            service.register_unit(dm.Unit(id=dm.UnitID("archer"), type=UnitType.ARCHER))

    def test_heal_updates_stored_unit(self, tmp_path):
        service = _service(tmp_path)
        _seed_units(service, defender_health=50)

        healed = service.heal("cavalry")

        assert healed.health == 70
        assert service.store.load_unit(dm.UnitID("cavalry")).health == 70
        assert service.turn_log.events()[-1].kind == "heal"
