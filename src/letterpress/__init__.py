"""Letterpress Move Finder.

Finds every way to spell dictionary words with the letters of a 5x5 Letterpress board,
works out which cells each move would capture, and ranks the moves by captured cell
count and then word length.
"""

import argparse
import random
import sys
from collections.abc import Sequence

from .board import BOARD_SIZE, FULL_BOARD_MASK, Board
from .solver.moves import Move, MoveFinder, get_move_finder, get_moves_for_board
from .solver.parallel import find_moves_parallel, get_executor
from .solver.utils import get_bitmask_for_positions, positions_from_bitmask
from .testurls import DEFAULT_COUNT, DEFAULT_HOST, generate_test_urls
from .wordlist import (
    DEFAULT_FREQUENCY,
    FREQUENCY_BANDS,
    MAX_FREQUENCY,
    band_frequency,
    validate_frequency,
)

__all__ = [
    "BOARD_SIZE",
    "DEFAULT_FREQUENCY",
    "FREQUENCY_BANDS",
    "FULL_BOARD_MASK",
    "MAX_FREQUENCY",
    "Move",
    "MoveFinder",
    "get_bitmask_for_positions",
    "get_moves_for_board",
    "main",
]


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(prog="letterpress", description=__doc__.splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    moves = subparsers.add_parser("moves", help="List the ranked moves for a board")
    moves.add_argument("board", help=f"Board letters, {BOARD_SIZE} lowercase letters row by row")
    freq = moves.add_mutually_exclusive_group()
    freq.add_argument(
        "--min-frequency",
        type=int,
        default=None,
        help=f"Minimum word frequency, 0-{MAX_FREQUENCY} (default: {DEFAULT_FREQUENCY})",
    )
    freq.add_argument("--band", choices=list(FREQUENCY_BANDS), help="Named frequency band")
    moves.add_argument("--limit", type=int, default=20, help="Number of moves to show")
    moves.add_argument(
        "--parallel", action="store_true", help="Enumerate placements on worker processes"
    )

    urls = subparsers.add_parser("test-urls", help="Print random URLs for load testing")
    urls.add_argument("host", nargs="?", default=DEFAULT_HOST, help="Protocol, host and port")
    urls.add_argument("--count", type=int, default=DEFAULT_COUNT, help="Number of URLs")
    urls.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser


def _print_moves(board: Board, moves: Sequence[Move], min_frequency: int, limit: int) -> None:
    print("Board:")
    board.print()
    print()
    print(f"{len(moves):,} moves (min frequency {min_frequency})")
    for i, move in enumerate(moves[:limit], start=1):
        positions = ",".join(map(str, positions_from_bitmask(move.bitmask)))
        print(f"  {i:3d}. {move.word:<25} captures {move.capture_count:2d}  at {positions}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the Letterpress move finder."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "test-urls":
        for url in generate_test_urls(args.host, args.count, random.Random(args.seed)):
            print(url)
        return

    try:
        board = Board(args.board.strip().lower())
        if args.band is not None:
            min_frequency = band_frequency(args.band)
        elif args.min_frequency is not None:
            min_frequency = validate_frequency(args.min_frequency)
        else:
            min_frequency = DEFAULT_FREQUENCY
    except ValueError as e:
        parser.error(str(e))

    if args.parallel:
        with get_executor() as executor:
            moves = find_moves_parallel(executor, get_move_finder(), str(board), min_frequency)
    else:
        moves = get_moves_for_board(str(board), min_frequency)

    _print_moves(board, moves, min_frequency, args.limit)
    sys.stdout.flush()
