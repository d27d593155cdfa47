"""Constants shared across the engine."""
