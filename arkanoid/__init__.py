"""Arkanoid - single-player brick breaker built on pygame."""

__version__ = "1.0.0"
