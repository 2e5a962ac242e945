"""Service layer for Strategos.

The services are the orchestrators around the pure rules in
:mod:`strategos.domain`. Each one:

- loads snapshots through an ``IRecordStore``
- calls the rule functions
- saves the returned snapshots
- appends a ``TurnEvent`` to an ``ITurnLog``

Architecture:
    - CombatService: unit registration, attacks, heal ability, cooldown ticks
    - ResearchService: player creation, research start/progress, tree queries

Production Usage:
    from strategos.factory import create_combat_service
    combat = create_combat_service(settings)
    report = combat.attack("unit1", "unit2")

Testing Usage:
    from strategos.services.combat_service import CombatService

    # any objects satisfying IRecordStore / ITurnLog will do
    service = CombatService(InMemoryStore(), InMemoryTurnLog())
    report = service.attack("unit1", "unit2", draw=0.5)
"""

from strategos.services.combat_service import CombatReport, CombatService
from strategos.services.research_service import ResearchService

__all__ = [
    "CombatReport",
    "CombatService",
    "ResearchService",
]
