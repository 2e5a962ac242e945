"""Rules engine for Strategos.

This package holds every game rule and nothing else. It exposes:

* Dataclasses describing units, technologies and research records
  (see :mod:`models`).
* Enumerations and the error taxonomy used across the rules layer.
* Rule configuration objects and the reference rule tables
  (see :mod:`rules_config` and :mod:`tech_data`).
* Pure rule functions for combat, unit progression, abilities, the
  technology graph and research scheduling.

Nothing in here performs I/O. Snapshots are loaded and persisted by the
services through a thin repository adapter.
"""

from . import (
    abilities,
    combat,
    enums,
    errors,
    models,
    progression,
    research,
    rules_config,
    tech_data,
    tech_tree,
)

__all__ = [
    "abilities",
    "combat",
    "enums",
    "errors",
    "models",
    "progression",
    "research",
    "rules_config",
    "tech_data",
    "tech_tree",
]
