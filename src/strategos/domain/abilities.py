"""Special ability bookkeeping kept on the caller side of combat.

The combat resolver assumes an ability passed in its options is usable.
These helpers track cooldowns on the unit snapshot and apply the heal
ability, which has no effect on damage.
"""

from __future__ import annotations

from dataclasses import replace

from .enums import SpecialAbility
from .errors import AbilityOnCooldownError, InvalidAttackerError, InvalidModifierKeyError
from .models import Unit
from .rules_config import DEFAULT_RULES, Ability, RulesConfig


def _ability(ability: SpecialAbility | str, rules: RulesConfig) -> tuple[SpecialAbility, Ability]:
    try:
        key = SpecialAbility(ability)
    except ValueError:
        raise InvalidModifierKeyError("ability", ability) from None
    definition = rules.abilities.get(key)
    if definition is None:
        raise InvalidModifierKeyError("ability", ability)
    return key, definition


def ability_ready(
    unit: Unit,
    ability: SpecialAbility | str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    """Whether ``ability`` has no remaining cooldown on ``unit``."""

    key, _ = _ability(ability, rules)
    return unit.ability_cooldowns.get(key, 0) <= 0


def use_ability(
    unit: Unit,
    ability: SpecialAbility | str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Return a copy of ``unit`` with ``ability`` put on cooldown."""

    key, definition = _ability(ability, rules)
    remaining = unit.ability_cooldowns.get(key, 0)
    if remaining > 0:
        raise AbilityOnCooldownError(unit.id, key, remaining)
    cooldowns = dict(unit.ability_cooldowns)
    if definition.cooldown > 0:
        cooldowns[key] = definition.cooldown
    return replace(unit, ability_cooldowns=cooldowns)


def tick_cooldowns(unit: Unit) -> Unit:
    """Advance every cooldown by one turn, dropping the expired ones."""

    cooldowns = {
        ability: turns - 1 for ability, turns in unit.ability_cooldowns.items() if turns > 1
    }
    return replace(unit, ability_cooldowns=cooldowns)


def heal(unit: Unit, *, rules: RulesConfig = DEFAULT_RULES) -> Unit:
    """Activate the heal ability, restoring health up to ``max_health``."""

    if unit.is_defeated:
        raise InvalidAttackerError(f"defeated unit {unit.id!r} cannot be healed")
    _, definition = _ability(SpecialAbility.HEAL, rules)
    healed = use_ability(unit, SpecialAbility.HEAL, rules=rules)
    healed.health = min(unit.max_health, unit.health + definition.heal_amount)
    return healed
