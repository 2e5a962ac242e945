"""Persistence adapters for Strategos."""

from strategos.repository.json_store import JsonRecordStore
from strategos.repository.rules_file import export_tech_tree, load_tech_tree
from strategos.repository.turn_log import JsonlTurnLog, TurnEvent

__all__ = [
    "JsonRecordStore",
    "JsonlTurnLog",
    "TurnEvent",
    "export_tech_tree",
    "load_tech_tree",
]
