"""Error taxonomy raised by the rules engine and its adapters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class RulesError(RuntimeError):
    """Base class for every validation failure raised by Strategos."""


class RecordNotFoundError(RulesError, LookupError):
    """Raised when a unit or player record is missing from the store."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} {record_id!r} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidRecordIdError(RulesError, ValueError):
    """Raised for a unit or player id that cannot name a stored record."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"invalid record id {record_id!r}")
        self.record_id = record_id


class InvalidModifierKeyError(RulesError, ValueError):
    """Raised for an unrecognized terrain, weather, formation or ability key."""

    def __init__(self, table: str, key: object) -> None:
        super().__init__(f"unknown {table} {key!r}")
        self.table = table
        self.key = key


class InvalidAttackerError(RulesError, ValueError):
    """Raised when a combat is requested between units that cannot fight."""


class AbilityOnCooldownError(RulesError):
    """Raised when a unit activates an ability that is still recharging."""

    def __init__(self, unit_id: str, ability: str, turns_left: int) -> None:
        super().__init__(f"{ability} on unit {unit_id!r} ready in {turns_left} turn(s)")
        self.unit_id = unit_id
        self.ability = ability
        self.turns_left = turns_left


class UnknownTechnologyError(RulesError, LookupError):
    """Raised when a technology id is not part of the tree."""

    def __init__(self, tech_id: str) -> None:
        super().__init__(f"technology {tech_id!r} not found")
        self.tech_id = tech_id


class AlreadyResearchedError(RulesError):
    """Raised when research is started on a technology the player already has."""

    def __init__(self, tech_id: str) -> None:
        super().__init__(f"technology {tech_id!r} already researched")
        self.tech_id = tech_id


class ResearchInProgressError(RulesError):
    """Raised when research is started while another one is still active."""

    def __init__(self, active: str) -> None:
        super().__init__(f"already researching {active!r}")
        self.active = active


class PrerequisitesNotMetError(RulesError):
    """Raised when research is started before every prerequisite is known."""

    def __init__(self, tech_id: str, missing: Iterable[str]) -> None:
        self.tech_id = tech_id
        self.missing = tuple(missing)
        super().__init__(
            f"prerequisites for {tech_id!r} not met: missing {', '.join(self.missing)}"
        )


class InsufficientResourcesError(RulesError):
    """Raised when a player cannot pay the full cost of a technology."""

    def __init__(self, tech_id: str, shortfall: Mapping[str, float]) -> None:
        self.tech_id = tech_id
        self.shortfall = dict(shortfall)
        detail = ", ".join(
            f"{resource} short by {amount:g}" for resource, amount in self.shortfall.items()
        )
        super().__init__(f"not enough resources to research {tech_id!r}: {detail}")


class CyclicPrerequisiteError(RulesError):
    """Raised when the prerequisite relation of a technology tree has a cycle."""

    def __init__(self, cycle: Iterable[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(f"prerequisite cycle: {' -> '.join(self.cycle)}")
