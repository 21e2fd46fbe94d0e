"""Arkanoid skins (rendering and overlay screens)."""

from .base import ArkanoidSkin, Overlay, Overlays
from .classic import ClassicSkin

__all__ = ['ArkanoidSkin', 'Overlay', 'Overlays', 'ClassicSkin']
