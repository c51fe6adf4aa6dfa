#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}] [--seed N]
    python main.py scores [--sort {date,time,difficulty}] [--order {asc,desc}]
    python main.py clear-scores [--yes]
"""
import argparse
import logging
import random

from src.minefield.board import Difficulty
from src.minefield.controller import GameController, GameSnapshot
from src.minefield.environment import render_ansi
from src.minefield.factory import BoardFactory
from src.minefield.rules import GameStatus
from src.minefield.scores import (
    ScoreHistory,
    SortDirection,
    SortField,
    format_date,
    format_difficulty,
    format_elapsed,
)
from src.minefield.settings import GameSettings

PLAY_HELP = """Commands:
  r ROW COL   reveal a cell (on a revealed number: chord)
  c ROW COL   chord a revealed number
  m ROW COL   cycle marking (none -> flag -> question)
  p ROW COL   preview which cells a chord would reveal
  n [LEVEL]   new game, optionally at another difficulty
  q           quit"""


def print_snapshot(controller: GameController, snapshot: GameSnapshot) -> None:
    """Print the board with the flag counter and clock."""
    print()
    print(render_ansi(snapshot.board, snapshot.highlight))
    print(
        f"\nMines left: {controller.mines_remaining}   "
        f"Time: {format_elapsed(snapshot.elapsed_seconds)}"
    )
    if snapshot.status is GameStatus.LOST:
        print("Game Over! You hit a mine.")
    elif snapshot.status is GameStatus.WON:
        print(
            "Congratulations! You found all mines! "
            f"(Time: {format_elapsed(snapshot.elapsed_seconds)})"
        )
    snapshot.board.clear_new_flags()


def play(args: argparse.Namespace, settings: GameSettings) -> None:
    """Run an interactive game in the terminal."""
    difficulty = (
        Difficulty.parse(args.difficulty) if args.difficulty
        else settings.difficulty
    )
    seed = args.seed if args.seed is not None else settings.seed
    history = ScoreHistory(settings.scores_path).load()
    controller = GameController(
        difficulty,
        factory=BoardFactory(random.Random(seed)),
        scores=history,
        settings=settings,
    )

    print(f"{format_difficulty(difficulty)}: "
          f"{difficulty.config.rows}x{difficulty.config.cols}, "
          f"{difficulty.config.mines} mines")
    print(PLAY_HELP)
    print_snapshot(controller, controller.snapshot())

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *params = line.split()
        if command == "q":
            break
        if command == "n":
            try:
                level = Difficulty.parse(params[0]) if params else None
            except ValueError as error:
                print(error)
                continue
            print_snapshot(controller, controller.start(level))
            continue

        try:
            row, col = (int(value) for value in params)
        except ValueError:
            print(PLAY_HELP)
            continue

        if command == "r":
            snapshot = controller.reveal(row, col)
        elif command == "c":
            snapshot = controller.chord(row, col)
        elif command == "m":
            snapshot = controller.mark(row, col)
        elif command == "p":
            cells = sorted(controller.preview_chord(row, col))
            print(f"Chord would reveal: {cells}" if cells else "Chord would reveal nothing")
            continue
        else:
            print(PLAY_HELP)
            continue
        print_snapshot(controller, snapshot)


def scores(args: argparse.Namespace, settings: GameSettings) -> None:
    """Print the personal records table."""
    history = ScoreHistory(settings.scores_path).load()
    if not len(history):
        print("No records yet. Records will be saved when you complete a game.")
        return

    ordered = history.sorted(SortField(args.sort), SortDirection(args.order))

    print("\n" + "=" * 50)
    print("Personal Records")
    print("=" * 50)
    print(f"{'Date':<22} {'Time':>10}   {'Difficulty':<14}")
    print("-" * 50)

    for score in ordered:
        print(
            f"{format_date(score.timestamp):<22} "
            f"{format_elapsed(score.elapsed_seconds):>10}   "
            f"{format_difficulty(score.difficulty):<14}"
        )


def clear_scores(args: argparse.Namespace, settings: GameSettings) -> None:
    """Delete every stored record."""
    if not args.yes:
        answer = input("Are you sure you want to delete all records? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            return
    ScoreHistory(settings.scores_path).clear()
    print("Records deleted.")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal and review records"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Board preset",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the mine layout"
    )

    # Scores command
    scores_parser = subparsers.add_parser("scores", help="Show records")
    scores_parser.add_argument(
        "--sort",
        choices=[f.value for f in SortField],
        default=SortField.DATE.value,
        help="Column to sort by",
    )
    scores_parser.add_argument(
        "--order",
        choices=[d.value for d in SortDirection],
        default=SortDirection.DESC.value,
        help="Sort direction",
    )

    # Clear command
    clear_parser = subparsers.add_parser("clear-scores", help="Delete records")
    clear_parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        settings = GameSettings.from_env()
    except ValueError as error:
        parser.error(str(error))

    if args.command == "play":
        play(args, settings)
    elif args.command == "scores":
        scores(args, settings)
    elif args.command == "clear-scores":
        clear_scores(args, settings)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
