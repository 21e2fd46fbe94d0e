"""Input handling for Arkanoid."""

from .keyboard import InputState, Keyboard

__all__ = ['InputState', 'Keyboard']
