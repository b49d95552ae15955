#!/usr/bin/env python3
"""
MarkSweeper - Main entry point.

Usage:
    python main.py play [--difficulty NAME] [--rows R --cols C --mines M] [--seed N]
    python main.py simulate [--games N] [--seed N]
"""
import argparse
import logging
import random
from typing import List, Optional

import numpy as np

from src.marksweeper.config import BoardConfig, DIFFICULTIES, get_difficulty
from src.marksweeper.engine import GameEngine
from src.marksweeper.environment import MinesweeperEnv


PLAY_HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"


def build_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> BoardConfig:
    """
    Build a board config from a preset or explicit dimensions.

    Custom boards need --rows, --cols and --mines together. Bad
    combinations or values end the program through parser.error().
    """
    custom = (args.rows, args.cols, args.mines)
    if all(value is None for value in custom):
        return get_difficulty(args.difficulty)
    if any(value is None for value in custom):
        parser.error("--rows, --cols and --mines must be given together")
    try:
        return BoardConfig(args.rows, args.cols, args.mines)
    except ValueError as exc:
        parser.error(str(exc))


def print_board(engine: GameEngine) -> None:
    """Print the board with column and row labels."""
    header = "    " + " ".join(str(col % 10) for col in range(engine.cols))
    print(header)
    for row, line in enumerate(str(engine.board).split("\n")):
        print(f"{row:>3} {line}")
    print(
        f"Mines: {engine.mines_remaining}  Time: {engine.elapsed}  "
        f"[{engine.phase.name}]"
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive round in the terminal."""
    rng = random.Random(args.seed) if args.seed is not None else None
    engine = GameEngine(args.config, rng=rng, tick_interval=1.0)

    print(PLAY_HELP)
    print_board(engine)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        parts = line.split()
        command = parts[0]

        if command == "q":
            break
        if command == "n":
            engine.reset()
            print_board(engine)
            continue
        if command not in ("r", "f") or len(parts) != 3:
            print(PLAY_HELP)
            continue

        try:
            row, col = int(parts[1]), int(parts[2])
        except ValueError:
            print("Row and column must be integers")
            continue

        if command == "r":
            result = engine.reveal(row, col)
        else:
            result = engine.toggle_flag(row, col)

        if not result.success:
            print(f"Rejected: {result.error.value}")
            continue

        if engine.is_ended:
            engine.reveal_all_mines()
        print_board(engine)

        if engine.session.is_won:
            print("\n*** WIN! ***")
        elif engine.session.is_lost:
            print("\n*** LOST (hit mine) ***")
            wrong = engine.incorrect_flags()
            if wrong:
                print(f"Incorrect flags: {[cell.position for cell in wrong]}")


def simulate(args: argparse.Namespace) -> None:
    """Play random reveals through the Gymnasium wrapper and report results."""
    env = MinesweeperEnv(config=args.config)
    rng = np.random.default_rng(args.seed)

    wins = []
    reveals = []
    for game in range(args.games):
        seed = args.seed + game if args.seed is not None else None
        _, info = env.reset(seed=seed)
        done = False
        while not done:
            actions = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(actions))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        wins.append(info["phase"] == "WON")
        reveals.append(info["revealed"])

    print(f"Games played: {args.games}")
    print(f"Win rate: {np.mean(wins):.1%}")
    print(f"Avg revealed: {np.mean(reveals):.1f} cells")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with play and simulate subcommands."""
    parser = argparse.ArgumentParser(description="MarkSweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in (
        ("play", "Play in the terminal"),
        ("simulate", "Run random-policy games"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--difficulty",
            choices=sorted(DIFFICULTIES),
            default="beginner",
            help="Difficulty preset",
        )
        sub.add_argument("--rows", type=int, help="Custom row count")
        sub.add_argument("--cols", type=int, help="Custom column count")
        sub.add_argument("--mines", type=int, help="Custom mine count")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")
        if name == "simulate":
            sub.add_argument(
                "--games", type=int, default=100, help="Number of games to play"
            )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command line arguments.

    Args:
        argv: Arguments to parse (default: sys.argv[1:]).

    Returns:
        Namespace with a ``config`` attribute holding the board config
        when a subcommand was given.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    args.config = None
    if args.command is None:
        return args

    args.config = build_config(parser, args)
    if args.command == "simulate" and args.games < 1:
        parser.error("--games must be at least 1")
    return args


def main() -> None:
    """Parse arguments and run the appropriate command."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        build_parser().print_help()


if __name__ == "__main__":
    main()
