"""Deterministic random draws for Strategos.

The rules engine never generates randomness itself; callers hand it a draw.
This module is where orchestrators obtain those draws. Every draw is seeded
from game state (game id, turn, context) so that:
- Reproducibility: Same seed always produces same results
- Bug reproduction: A logged seed replays the exact combat
- Audit trail: The seed is returned alongside the value

Examples:
    >>> seed = generate_seed("skirmish", 42, "combat:unit1:unit2")
    >>> seed
    'skirmish:42:combat:unit1:unit2'
    >>> result = random_unit_interval(seed)
    >>> 0.0 <= result["value"] < 1.0
    True
"""

import hashlib
import random
from typing import Any


def generate_seed(game_id: str, turn: int, context: str) -> str:
    """Generate deterministic seed from game state.

    Format: "game_id:turn:context"

    Args:
        game_id: Identifier of the running game
        turn: Turn (event sequence) number the draw belongs to
        context: What the draw is for (e.g., 'combat:unit1:unit2')

    Returns:
        Seed string in format "game_id:turn:context"

    Raises:
        ValueError: If game_id is empty or turn is negative
    """
    if not game_id:
        raise ValueError("game_id must not be empty")
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")

    return f"{game_id}:{turn}:{context}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)


def random_unit_interval(seed: str) -> dict[str, Any]:
    """Draw a float in ``[0, 1)`` with deterministic seed.

    Args:
        seed: Deterministic seed string (from generate_seed)

    Returns:
        Dictionary containing:
            - value: The drawn float
            - seed: The seed used
    """
    rng = random.Random(_seed_to_int(seed))
    return {"value": rng.random(), "seed": seed}
