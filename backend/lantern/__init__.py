"""Lantern - a turn-based engine for interactive-fiction worlds."""

__version__ = "0.1.0"
