# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .errors import ConfigError, FrontendError
from .game import GameState, new_game_state
from .loop import GameLoop

logger = logging.getLogger("termsnake")

EXIT_OK = 0
EXIT_FRONTEND_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    d = DEFAULT_CONFIG
    parser = argparse.ArgumentParser(prog="termsnake", description="Play snake in your terminal.")
    parser.add_argument(
        "--frontend",
        choices=["terminal", "pygame"],
        default="terminal",
        help="terminal: curses full screen (default); pygame: a desktop window",
    )
    parser.add_argument("--width", type=int, default=d.grid_width, help="grid columns")
    parser.add_argument("--height", type=int, default=d.grid_height, help="grid rows")
    parser.add_argument("--length", type=int, default=d.initial_snake_length, help="starting snake length")
    parser.add_argument("--base-tick-ms", type=int, default=d.base_tick_ms, help="starting time between moves")
    parser.add_argument("--min-tick-ms", type=int, default=d.min_tick_ms, help="fastest time between moves")
    parser.add_argument(
        "--speed-step-ms",
        type=int,
        default=d.speed_increase_per_food,
        help="how much faster the snake gets per food eaten",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed food placement for reproducible games")
    parser.add_argument("--log-file", type=str, default=None, help="write a log here (nothing is logged otherwise)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        grid_width=args.width,
        grid_height=args.height,
        initial_snake_length=args.length,
        base_tick_ms=args.base_tick_ms,
        min_tick_ms=args.min_tick_ms,
        speed_increase_per_food=args.speed_step_ms,
        seed=args.seed,
    )


def setup_logging(log_file: Optional[str], level: str) -> None:
    # The terminal belongs to curses while playing, so only a file is ever written to
    root = logging.getLogger("termsnake")
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
    root.propagate = False


# ---------- Frontends ----------
def run_terminal(state: GameState) -> int:
    import curses
    from .frontends.terminal import CursesKeySource, CursesRenderer, setup_terminal

    def play(stdscr) -> int:
        setup_terminal(stdscr)
        return GameLoop(state, CursesKeySource(stdscr), CursesRenderer(stdscr)).run()

    try:
        return curses.wrapper(play)
    except curses.error as exc:
        raise FrontendError(f"terminal setup failed: {exc}") from exc


def run_pygame(state: GameState) -> int:
    import pygame  # type: ignore
    from .frontends.window import PygameKeySource, PygameRenderer

    pygame.init()
    try:
        renderer = PygameRenderer(state.config.grid_width, state.config.grid_height)
        return GameLoop(state, PygameKeySource(), renderer).run()
    finally:
        pygame.quit()


FRONTENDS = {
    "terminal": run_terminal,
    "pygame": run_pygame,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    try:
        state = new_game_state(config_from_args(args))
    except ConfigError as exc:
        logger.error("invalid configuration: %s", exc)
        print(f"termsnake: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        status = FRONTENDS[args.frontend](state)
    except FrontendError as exc:
        logger.exception("frontend failure")
        print(f"termsnake: {exc}", file=sys.stderr)
        return EXIT_FRONTEND_ERROR

    print(f"Final score: {state.score}  (best this session: {max(state.best_score, state.score)})")
    return status


if __name__ == "__main__":
    sys.exit(main())
