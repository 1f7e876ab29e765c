"""Parallel move generation: fan out per-word placement enumeration to worker processes."""

import os
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor
from time import time

from letterpress.board import AdjacencyRule, PositionIndex
from letterpress.solver.config import config as solver_config
from letterpress.solver.moves import Move, MoveFinder, moves_for_word, rank_moves
from letterpress.solver.utils import vlog
from letterpress.wordlist import WordEntry


def get_executor(n_workers: int | None = None) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor.

    Args:
        n_workers (int | None): Number of worker processes to create.  If None, uses the
            configured `max_workers`, or else the number of CPU cores minus one.

    Returns:
        A ProcessPoolExecutor instance for worker processes.
    """
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        n_workers = solver_config.max_workers
    if n_workers is None:
        n_workers = max(1, cpus - 1)  # Leave one core free
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    return ProcessPoolExecutor(max_workers=n_workers)


def _moves_for_chunk(
    entries: Sequence[WordEntry],
    position_index: PositionIndex,
    adjacency: Sequence[AdjacencyRule],
) -> list[Move]:
    """Worker task: generate the moves for a chunk of playable words."""
    moves: list[Move] = []
    for entry in entries:
        moves.extend(moves_for_word(entry, position_index, adjacency))
    return moves


def find_moves_parallel(
    executor: Executor,
    finder: MoveFinder,
    board: str,
    min_frequency: int,
    *,
    chunk_size: int | None = None,
) -> tuple[Move, ...]:
    """Find ranked moves on `board`, enumerating placements on the executor's workers.

    The playable word list and position index come from `finder`'s caches, and the
    ranked result is stored in (or served from) its full-result cache.  Chunks are merged
    in word order before ranking, so the result equals
    `finder.get_moves_for_board(board, min_frequency)`.

    Args:
        executor (Executor): Executor whose workers run the enumeration.
        finder (MoveFinder): Move finder supplying the dictionary and caches.
        board (str): The board letters.
        min_frequency (int): Minimum word frequency.
        chunk_size (int | None): Words per task.  If None, uses the configured
            `parallel_chunk_size`.
    """
    if chunk_size is None:
        chunk_size = solver_config.parallel_chunk_size
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be positive, got {chunk_size}.")

    def compute() -> tuple[Move, ...]:
        t0 = time()
        playable = finder.playable_words(board, min_frequency)
        position_index = finder.position_index(board)
        chunks = [playable[i : i + chunk_size] for i in range(0, len(playable), chunk_size)]
        vlog(f"{board}@{min_frequency}: {len(playable)} words in {len(chunks)} tasks")

        try:
            results = executor.map(
                _moves_for_chunk,
                chunks,
                [position_index] * len(chunks),
                [finder.adjacency] * len(chunks),
            )
            moves = [move for chunk_moves in results for move in chunk_moves]
        except Exception:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

        ranked = rank_moves(moves)
        vlog(f"{board}@{min_frequency}: {len(ranked)} moves (parallel)", t0)
        return ranked

    return finder.cached_moves(board, min_frequency, compute)
