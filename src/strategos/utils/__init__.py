"""Utility functions for the Strategos rules engine."""

from strategos.utils.rng import generate_seed, random_unit_interval

__all__ = [
    "generate_seed",
    "random_unit_interval",
]
