"""Combat resolution rules."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import TypeVar

from .enums import Formation, SpecialAbility, Terrain, UnitType, Weather
from .errors import InvalidAttackerError, InvalidModifierKeyError
from .models import CombatExchange, CombatOptions, CombatResult, Unit
from .progression import apply_combat_outcome
from .rules_config import DEFAULT_RULES, Ability, Modifier, RulesConfig

KeyT = TypeVar("KeyT", bound=StrEnum)
EntryT = TypeVar("EntryT", Modifier, Ability)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def resolve_combat(
    attacker: Unit,
    defender: Unit,
    options: CombatOptions | None = None,
    *,
    draw: float,
    rules: RulesConfig = DEFAULT_RULES,
) -> CombatResult:
    """Compute damage, critical hit and experience for one attack.

    ``draw`` is a caller supplied random number in ``[0, 1)`` used for the
    critical hit check. Neither unit is modified. The multipliers are applied
    in a fixed order and the damage is rounded once at the very end.
    """

    options = options or CombatOptions()
    if not 0.0 <= draw < 1.0:
        raise ValueError(f"draw must be in [0, 1), got {draw}")
    _check_combatants(attacker, defender, rules)

    terrain = _lookup(rules.terrain, Terrain, options.terrain, "terrain")
    weather = _lookup(rules.weather, Weather, options.weather, "weather")
    formation = _lookup(rules.formations, Formation, options.formation, "formation")
    ability = None
    if options.special_ability is not None:
        ability = _lookup(rules.abilities, SpecialAbility, options.special_ability, "ability")

    combat = rules.combat
    defense = max(defender.defense, combat.min_defense)
    damage = combat.base_attack_damage * attacker.attack / defense

    advantage = rules.advantages[attacker.type]
    if defender.type in advantage.strong_against:
        damage *= combat.strong_multiplier
    elif defender.type in advantage.weak_against:
        damage *= combat.weak_multiplier

    for entry in (terrain, weather, formation, ability):
        if entry is None:
            continue
        damage *= 1 + entry.attack_modifier
        damage /= 1 + entry.defense_modifier

    damage *= 1 + (attacker.level - 1) * combat.level_up_stat_increase
    damage /= 1 + (defender.level - 1) * combat.level_up_stat_increase

    is_critical = draw < combat.critical_hit_chance
    if is_critical:
        damage *= combat.critical_hit_multiplier

    experience = -(-combat.experience_per_combat * defender.level // attacker.level)

    return CombatResult(
        damage=max(0, round_half_away_from_zero(damage)),
        is_critical=is_critical,
        experience_gained=experience,
        raw_damage=damage,
    )


def resolve_exchange(
    attacker: Unit,
    defender: Unit,
    options: CombatOptions | None = None,
    *,
    draw: float,
    rules: RulesConfig = DEFAULT_RULES,
) -> CombatExchange:
    """Resolve an attack and apply its outcome to both units.

    The attacker only gains experience; the defender only takes damage.
    """

    result = resolve_combat(attacker, defender, options, draw=draw, rules=rules)
    return CombatExchange(
        attacker=apply_combat_outcome(attacker, 0, result.experience_gained, rules=rules),
        defender=apply_combat_outcome(defender, result.damage, 0, rules=rules),
        result=result,
    )


def _check_combatants(attacker: Unit, defender: Unit, rules: RulesConfig) -> None:
    if attacker.type == UnitType.BUILDING:
        raise InvalidAttackerError(f"building {attacker.id!r} cannot attack")
    if attacker.type not in rules.advantages:
        raise InvalidAttackerError(f"no advantage entry for unit type {attacker.type!r}")
    if attacker.is_defeated:
        raise InvalidAttackerError(f"attacker {attacker.id!r} is defeated")
    if defender.is_defeated:
        raise InvalidAttackerError(f"defender {defender.id!r} is already defeated")
    for unit in (attacker, defender):
        if unit.level < 1:
            raise ValueError(f"unit {unit.id!r} has invalid level {unit.level}")


def _lookup(
    table: Mapping[KeyT, EntryT],
    key_type: type[KeyT],
    key: object,
    label: str,
) -> EntryT:
    try:
        member = key_type(key)
    except ValueError:
        raise InvalidModifierKeyError(label, key) from None
    entry = table.get(member)
    if entry is None:
        raise InvalidModifierKeyError(label, key)
    return entry
