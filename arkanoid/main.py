#!/usr/bin/env python3
"""Arkanoid - Standalone Entry Point.

Usage:
    arkanoid
    arkanoid --width 600 --height 700
    arkanoid --config settings.yaml --debug-trace
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

import pygame

from .clock import PygameClock
from .config import GameSettings, SettingsError, load_settings
from .game.trace import DebugTrace
from .game_mode import ArkanoidGame
from .input.keyboard import InputState, Keyboard
from .logging import configure_logging, get_logger
from .skins.classic import ClassicSkin

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Arkanoid - keyboard brick breaker")

    # Display options
    parser.add_argument('--width', type=int, default=None, help='Screen width')
    parser.add_argument('--height', type=int, default=None, help='Screen height')
    parser.add_argument('--fps', type=int, default=None, help='Target updates per second')

    # Settings
    parser.add_argument('--config', type=str, default=None, help='YAML settings file')
    parser.add_argument('--debug-trace', action='store_true', default=None,
                        help='Draw the ball path')
    parser.add_argument('--trace-points', type=int, default=None,
                        help='Number of ball positions kept for the path')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['TRACE', 'DEBUG', 'INFO', 'OFF'],
                        help='Default log level')
    return parser


def _overrides_from_args(args: argparse.Namespace, base: GameSettings) -> Dict[str, Any]:
    """Collect settings given explicitly on the command line."""
    overrides: Dict[str, Any] = {}
    if args.width is not None:
        overrides['screen_width'] = args.width
    if args.height is not None:
        overrides['screen_height'] = args.height
    if args.fps is not None:
        overrides['fps'] = args.fps

    if args.debug_trace is not None or args.trace_points is not None:
        trace = base.trace.model_dump()
        if args.debug_trace is not None:
            trace['debug_trace'] = args.debug_trace
        if args.trace_points is not None:
            trace['max_points'] = args.trace_points
        overrides['trace'] = trace
    return overrides


def resolve_settings(args: argparse.Namespace) -> GameSettings:
    """Build settings from defaults, an optional YAML file and CLI flags.

    Raises:
        SettingsError: If the file or the combined values are invalid
    """
    if args.config:
        base = load_settings(args.config)
    else:
        try:
            base = GameSettings()
        except ValueError as e:
            raise SettingsError(f"Invalid environment settings: {e}") from e

    overrides = _overrides_from_args(args, base)
    if not overrides:
        return base

    data = base.model_dump()
    data.update(overrides)
    try:
        return GameSettings(**data)
    except ValueError as e:
        raise SettingsError(f"Invalid command line settings: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Run Arkanoid standalone."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    try:
        settings = resolve_settings(args)
    except SettingsError as e:
        print(f"arkanoid: {e}", file=sys.stderr)
        return 2

    # Initialize pygame
    pygame.init()
    pygame.font.init()

    screen = pygame.display.set_mode((settings.screen_width, settings.screen_height))
    pygame.display.set_caption("Arkanoid")

    clock = PygameClock()
    trace = DebugTrace(settings.trace.debug_trace, settings.trace.max_points)
    skin = ClassicSkin(screen, trace)
    keys = InputState()
    game = ArkanoidGame(clock, settings, skin=skin, keys=keys)

    keyboard = Keyboard(
        state=keys,
        on_pause=game.on_pause_pressed,
        on_restart=game.reset,
        on_quit=clock.stop,
    )

    def poll() -> bool:
        for event in pygame.event.get():
            keyboard.handle_event(event)
        return clock.is_running

    print("\n" + "=" * 50)
    print("ARKANOID")
    print("=" * 50)
    print("Controls:")
    print("  - Left/Right arrows to move the paddle")
    print("  - Space to launch the ball")
    print("  - Esc to pause / resume")
    print("  - F5 or R to restart")
    print("  - Q to quit")
    print("=" * 50 + "\n")

    log.info("Starting Arkanoid %dx%d", settings.screen_width, settings.screen_height)
    game.render()
    game.start()
    try:
        clock.run(poll)
    finally:
        game.stop()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
