"""Utility functions for the Letterpress solver."""

import sys
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from functools import lru_cache
from time import time

from letterpress.solver.config import config as solver_config

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def vlog(msg: str, t0: float | None = None) -> None:
    """Print a timestamped message to stderr if verbose output is enabled.

    Args:
        msg (str): The message to print.
        t0 (float | None): Optional start time; if given, the elapsed time is appended.
    """
    if not solver_config.verbose:
        return
    timestamp = datetime.now().astimezone().strftime(TIMESTAMP_FMT)
    if t0 is not None:
        msg = f"{msg} (took {time() - t0:.3f}s)"
    print(f"[{timestamp}] {msg}", file=sys.stderr, flush=True)


@lru_cache(maxsize=300_000)
def canonicalize(letters: str) -> Counter[str]:
    """Return the canonical multiset (letter -> count) of a word or board.

    Note: the returned Counter is cached and must be treated as immutable.
    """
    return Counter(letters)


def is_subset(to_play: Counter[str], available: Counter[str]) -> bool:
    """Returns whether every letter count in `to_play` is covered by `available`.

    Args:
        to_play (Counter[str]): A counter of the letters needed.
        available (Counter[str]): A counter of the letters on offer.
    """
    return all(to_play[ch] <= available[ch] for ch in to_play)


def get_bitmask_for_positions(positions: Iterable[int]) -> int:
    """Produce a number whose on bits correspond to the given board positions.

    For example, positions `[0, 2, 3]` give `0b1101`.  The result does not depend on
    the order of `positions`.
    """
    bitmask = 0
    for p in positions:
        bitmask |= 1 << p
    return bitmask


def positions_from_bitmask(bitmask: int) -> tuple[int, ...]:
    """Return the ascending board positions whose bits are set in `bitmask`."""
    positions = []
    pos = 0
    while bitmask:
        if bitmask & 1:
            positions.append(pos)
        bitmask >>= 1
        pos += 1
    return tuple(positions)


def popcount(bitmask: int) -> int:
    """Count the number of 'on' bits in `bitmask`."""
    return bitmask.bit_count()
