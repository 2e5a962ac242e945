"""Unit progression after combat: damage, defeat, experience and levels."""

from __future__ import annotations

from dataclasses import replace

from .enums import UnitStatus
from .models import Unit
from .rules_config import DEFAULT_RULES, RulesConfig


def apply_combat_outcome(
    unit: Unit,
    damage: int,
    experience_gained: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Return a copy of ``unit`` with one combat outcome applied.

    A unit brought to zero health is defeated and gains nothing else. A
    surviving unit banks the experience and levels up once the threshold is
    reached, unless it is already at the level cap.
    """

    if damage < 0:
        raise ValueError(f"damage must be non-negative, got {damage}")
    if experience_gained < 0:
        raise ValueError(f"experience must be non-negative, got {experience_gained}")

    combat = rules.combat
    updated = replace(unit, ability_cooldowns=dict(unit.ability_cooldowns))
    updated.health = unit.health - damage

    if updated.health <= 0:
        updated.health = 0
        updated.status = UnitStatus.DEFEATED
        return updated

    updated.experience = unit.experience + experience_gained

    if updated.experience >= combat.experience_for_level_up and unit.level < combat.max_level:
        growth = 1 + combat.level_up_stat_increase
        updated.level = unit.level + 1
        updated.experience = 0
        updated.attack = unit.attack * growth
        updated.defense = unit.defense * growth
        updated.status = UnitStatus.LEVELED_UP
    else:
        updated.status = UnitStatus.DAMAGED
    return updated
