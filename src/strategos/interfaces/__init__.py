"""Protocol-based interfaces for the Strategos services.

The services receive their collaborators through these protocols, enabling
dependency injection and testing with simple fakes.
"""

from strategos.interfaces.store import IRecordStore, ITurnLog

__all__ = [
    "IRecordStore",
    "ITurnLog",
]
