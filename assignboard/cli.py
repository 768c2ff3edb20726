#!/usr/bin/env python3
"""Board CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from assignboard.board import BoardSession
from assignboard.lib.config import BoardConfig, load_config
from assignboard.lib.constants import EXIT_CONFIG
from assignboard.lib.seed import SeedError, default_snapshot, load_seed
from assignboard.commands import show as cmd_show_module
from assignboard.commands import play as cmd_play_module

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_config(args) -> BoardConfig:
    """Load config from --config or board.env, then apply CLI overrides."""
    config = load_config(Path(args.config) if args.config else None)
    if args.seed:
        config.seed_path = Path(args.seed)
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def create_session(config: BoardConfig) -> BoardSession:
    """Seed a fresh session from the configured dataset.

    Raises:
        SeedError: if the seed file is missing or invalid
    """
    if config.seed_path:
        snapshot = load_seed(config.seed_path)
    else:
        snapshot = default_snapshot()
    return BoardSession(snapshot)


def _run(args, handler) -> int:
    try:
        config = get_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}")
        return EXIT_CONFIG

    _setup_logging(config.log_level)
    logger.debug(f"[CLI] {args.command}: {config}")

    try:
        session = create_session(config)
    except SeedError as e:
        print(f"ERROR: {e}")
        return EXIT_CONFIG

    return handler(args, config, session)


def cmd_show(args):
    return _run(args, cmd_show_module.cmd_show)


def cmd_play(args):
    return _run(args, cmd_play_module.cmd_play)


def cmd_tui(args):
    # Imported lazily so show/play don't pay for textual
    from assignboard.commands import tui as cmd_tui_module
    return _run(args, cmd_tui_module.cmd_tui)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='board', description='Team assignment board')
    parser.add_argument('--config', '-c', help='Path to board.env (default: ./board.env if present)')
    parser.add_argument('--seed', '-s', help='Seed dataset (.json or .yaml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # board show
    p_show = subparsers.add_parser('show', help='Print pool and projects')
    p_show.add_argument('--filter', '-f', default='', help='Only show pool members matching text')
    p_show.set_defaults(func=cmd_show)

    # board play
    p_play = subparsers.add_parser('play', help='Apply a script of operations')
    p_play.add_argument('script', help="Script file ('-' for stdin)")
    p_play.add_argument('--strict', action='store_true', help='Stop with exit 1 on the first rejection')
    p_play.add_argument('--show', action='store_true', help='Print the board after the script')
    p_play.set_defaults(func=cmd_play)

    # board tui
    p_tui = subparsers.add_parser('tui', help='Interactive board')
    p_tui.set_defaults(func=cmd_tui)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
