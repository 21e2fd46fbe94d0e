"""Arkanoid game entities."""

from .paddle import Paddle
from .ball import Ball, Collision, XDirection, YDirection
from .block import Block, Board, build_stage

__all__ = [
    'Paddle',
    'Ball', 'Collision', 'XDirection', 'YDirection',
    'Block', 'Board', 'build_stage',
]
