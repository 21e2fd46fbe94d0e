"""Arkanoid core: geometry, entities, game states and debug trace."""
