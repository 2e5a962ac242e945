"""HTTP API for the Strategos rules engine."""
