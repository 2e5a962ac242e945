"""Combat orchestration for Strategos.

Loads both units from the record store, runs the pure combat rules, saves
the two updated snapshots and records the attack in the turn log.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from strategos.domain.abilities import heal, tick_cooldowns, use_ability
from strategos.domain.combat import resolve_exchange
from strategos.domain.errors import InvalidAttackerError, RecordNotFoundError
from strategos.domain.models import CombatOptions, CombatResult, Unit, UnitID
from strategos.domain.rules_config import DEFAULT_RULES, RulesConfig
from strategos.interfaces import IRecordStore, ITurnLog
from strategos.repository.turn_log import TurnEvent
from strategos.utils.rng import generate_seed, random_unit_interval

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatReport:
    """Everything an attack produced."""

    attacker: Unit
    defender: Unit
    result: CombatResult
    draw: float
    seed: str | None
    event: TurnEvent


class CombatService:
    """Service for resolving attacks between stored units."""

    def __init__(
        self,
        store: IRecordStore,
        turn_log: ITurnLog,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        game_id: str = "default",
    ) -> None:
        self.store = store
        self.turn_log = turn_log
        self.rules = rules
        self.game_id = game_id

    def register_unit(self, unit: Unit) -> Unit:
        """Store a newly trained unit; its id must be unused."""

        try:
            self.store.load_unit(unit.id)
        except RecordNotFoundError:
            pass
        else:
            raise ValueError(f"unit {unit.id!r} already exists")
        self.store.save_unit(unit)
        self.turn_log.append(
            "unit_created",
            f"Unit {unit.id} ({unit.type}) created",
            {"unit_id": unit.id, "type": str(unit.type), "owner": unit.owner},
        )
        return unit

    def attack(
        self,
        attacker_id: str,
        defender_id: str,
        options: CombatOptions | None = None,
        *,
        draw: float | None = None,
    ) -> CombatReport:
        """Resolve one attack and persist both combatants.

        When ``draw`` is omitted it is derived from a seed built out of the
        game id, the next turn log sequence number and the two unit ids.
        """

        if attacker_id == defender_id:
            raise InvalidAttackerError(f"unit {attacker_id!r} cannot attack itself")
        options = options or CombatOptions()
        attacker = self.store.load_unit(UnitID(attacker_id))
        defender = self.store.load_unit(UnitID(defender_id))

        if options.special_ability is not None:
            attacker = use_ability(attacker, options.special_ability, rules=self.rules)

        seed = None
        if draw is None:
            seed = generate_seed(
                self.game_id,
                self.turn_log.next_sequence(),
                f"combat:{attacker.id}:{defender.id}",
            )
            draw = random_unit_interval(seed)["value"]

        exchange = resolve_exchange(attacker, defender, options, draw=draw, rules=self.rules)
        result = exchange.result

        self.store.save_unit(exchange.attacker)
        self.store.save_unit(exchange.defender)

        event = self.turn_log.append(
            "combat",
            f"Combat: {attacker.id} attacked {defender.id} for {result.damage} damage",
            {
                "attacker_id": attacker.id,
                "defender_id": defender.id,
                "terrain": str(options.terrain),
                "weather": str(options.weather),
                "formation": str(options.formation),
                "special_ability": (
                    str(options.special_ability) if options.special_ability is not None else None
                ),
                "damage": result.damage,
                "is_critical": result.is_critical,
                "experience_gained": result.experience_gained,
                "draw": draw,
                "seed": seed,
                "attacker_status": str(exchange.attacker.status),
                "defender_status": str(exchange.defender.status),
            },
        )
        if exchange.defender.is_defeated:
            logger.info("unit %s defeated by %s", defender.id, attacker.id)
        if exchange.attacker.level > attacker.level:
            logger.info("unit %s reached level %d", attacker.id, exchange.attacker.level)

        return CombatReport(
            attacker=exchange.attacker,
            defender=exchange.defender,
            result=result,
            draw=draw,
            seed=seed,
            event=event,
        )

    def heal(self, unit_id: str) -> Unit:
        """Activate the heal ability of a stored unit."""

        unit = self.store.load_unit(UnitID(unit_id))
        healed = heal(unit, rules=self.rules)
        self.store.save_unit(healed)
        self.turn_log.append(
            "heal",
            f"Unit {unit.id} healed to {healed.health}",
            {"unit_id": unit.id, "health_before": unit.health, "health_after": healed.health},
        )
        return healed

    def end_turn(self, unit_ids: Iterable[str] | None = None) -> list[Unit]:
        """Tick ability cooldowns of the given units (all units by default)."""

        ids = [UnitID(u) for u in unit_ids] if unit_ids is not None else self.store.list_units()
        updated: list[Unit] = []
        for unit_id in ids:
            unit = self.store.load_unit(unit_id)
            if not unit.ability_cooldowns:
                continue
            ticked = tick_cooldowns(unit)
            self.store.save_unit(ticked)
            updated.append(ticked)
        logger.debug("ticked cooldowns on %d unit(s)", len(updated))
        return updated
