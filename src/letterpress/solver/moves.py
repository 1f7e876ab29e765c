"""Find, score and rank the moves available on a board."""

import threading
from collections.abc import Callable, Iterable, Sequence
from time import time
from typing import NamedTuple

from letterpress.board import ADJACENCY, AdjacencyRule, PositionIndex, build_position_index
from letterpress.solver.cache import CacheInfo, LRUCache
from letterpress.solver.placements import iter_placements
from letterpress.solver.utils import (
    canonicalize,
    get_bitmask_for_positions,
    is_subset,
    popcount,
    vlog,
)
from letterpress.wordlist import (
    DEFAULT_FREQUENCY,
    WordEntry,
    filter_by_frequency,
    load_word_list,
)


class Move(NamedTuple):
    """A word placed on a set of board cells."""

    bitmask: int
    """Bit i is set iff board position i is used by the move."""
    word: str
    captured: int
    """Bit i is set iff the move captures board position i."""

    @property
    def capture_count(self) -> int:
        """Number of cells captured by the move."""
        return popcount(self.captured)


def get_captured_bitmask(
    move_bitmask: int, adjacency: Sequence[AdjacencyRule] = ADJACENCY
) -> int:
    """Figure out which cells a move captures, considering only this move in isolation.

    A cell is captured when the move uses it and also uses every one of its neighbors
    in the adjacency table.  Other moves on the board are not considered.
    """
    captured_bitmask = 0
    for cell_bit, neighbor_mask in adjacency:
        if (cell_bit & move_bitmask) and (move_bitmask & neighbor_mask) == neighbor_mask:
            captured_bitmask |= cell_bit
    return captured_bitmask


def rank_key(move: Move) -> tuple[int, int]:
    """Sort key for moves: most captured cells first, then longest word first."""
    return (-popcount(move.captured), -len(move.word))


def rank_moves(moves: Iterable[Move]) -> tuple[Move, ...]:
    """Order moves by captured cell count, then word length, both descending.

    Moves with equal keys keep their input order.
    """
    return tuple(sorted(moves, key=rank_key))


def moves_for_word(
    entry: WordEntry,
    position_index: PositionIndex,
    adjacency: Sequence[AdjacencyRule] = ADJACENCY,
) -> list[Move]:
    """Generate a move for every placement of a (playable) word on the board."""
    moves = []
    for positions in iter_placements(entry.letters, position_index):
        bitmask = get_bitmask_for_positions(positions)
        moves.append(Move(bitmask, entry.word, get_captured_bitmask(bitmask, adjacency)))
    return moves


class MoveFinder:
    """Move generator bound to one dictionary and one adjacency table.

    Each pipeline stage is memoized by the value of its arguments:
    - frequency-filtered words, keyed by minimum frequency;
    - playable words, keyed by (board, minimum frequency);
    - board position index, keyed by board;
    - ranked moves, keyed by (board, minimum frequency).

    Cached values are tuples (or a dict that must be treated as immutable) so they can be
    shared between callers and threads.
    """

    def __init__(
        self,
        words: Iterable[WordEntry],
        *,
        adjacency: Sequence[AdjacencyRule] = ADJACENCY,
        cache_size: int | None = None,
    ) -> None:
        """Initialize the move finder.

        Args:
            words (Iterable[WordEntry]): The dictionary, in source order.
            adjacency (Sequence[AdjacencyRule]): Adjacency table used to compute captures.
            cache_size (int | None): Capacity of each cache.  If None (default), uses the
                configured `cache_size`.
        """
        self.words: tuple[WordEntry, ...] = tuple(words)
        self.adjacency: tuple[AdjacencyRule, ...] = tuple(adjacency)
        self._frequency_cache: LRUCache[tuple[WordEntry, ...]] = LRUCache(cache_size)
        self._playable_cache: LRUCache[tuple[WordEntry, ...]] = LRUCache(cache_size)
        self._position_cache: LRUCache[PositionIndex] = LRUCache(cache_size)
        self._moves_cache: LRUCache[tuple[Move, ...]] = LRUCache(cache_size)

    def min_frequency_words(self, min_frequency: int) -> tuple[WordEntry, ...]:
        """Get dictionary entries filtered for how common the words are."""
        return self._frequency_cache.get_or_compute(
            min_frequency, lambda: filter_by_frequency(self.words, min_frequency)
        )

    def playable_words(self, board: str, min_frequency: int) -> tuple[WordEntry, ...]:
        """Get the words at least as common as `min_frequency` that the board can spell."""

        def compute() -> tuple[WordEntry, ...]:
            board_letters = canonicalize(board)
            return tuple(
                w
                for w in self.min_frequency_words(min_frequency)
                if is_subset(w.letters, board_letters)
            )

        return self._playable_cache.get_or_compute((board, min_frequency), compute)

    def position_index(self, board: str) -> PositionIndex:
        """Get the letter -> board positions map for `board`."""
        return self._position_cache.get_or_compute(board, lambda: build_position_index(board))

    def get_moves_for_board(self, board: str, min_frequency: int) -> tuple[Move, ...]:
        """Find moves on this board using words at least as common as `min_frequency`.

        Returns:
            Every placement of every playable word, ranked by `rank_moves`.
        """
        return self.cached_moves(
            board, min_frequency, lambda: self._find_moves(board, min_frequency)
        )

    def cached_moves(
        self, board: str, min_frequency: int, compute: Callable[[], tuple[Move, ...]]
    ) -> tuple[Move, ...]:
        """Return the ranked moves cached under (board, min_frequency), or store `compute()`.

        Lets other pipelines (e.g. the parallel one) share the full-result cache.
        """
        return self._moves_cache.get_or_compute((board, min_frequency), compute)

    def _find_moves(self, board: str, min_frequency: int) -> tuple[Move, ...]:
        t0 = time()
        playable = self.playable_words(board, min_frequency)
        position_index = self.position_index(board)
        moves: list[Move] = []
        for entry in playable:
            moves.extend(moves_for_word(entry, position_index, self.adjacency))
        ranked = rank_moves(moves)
        vlog(f"{board}@{min_frequency}: {len(playable)} words, {len(ranked)} moves", t0)
        return ranked

    def cache_info(self) -> dict[str, CacheInfo]:
        """Return statistics for each cached stage."""
        return {
            "frequency": self._frequency_cache.cache_info(),
            "playable": self._playable_cache.cache_info(),
            "positions": self._position_cache.cache_info(),
            "moves": self._moves_cache.cache_info(),
        }

    def cache_clear(self) -> None:
        """Empty every cache."""
        self._frequency_cache.clear()
        self._playable_cache.clear()
        self._position_cache.clear()
        self._moves_cache.clear()


_default_finder: MoveFinder | None = None
_default_finder_lock = threading.Lock()


def get_move_finder() -> MoveFinder:
    """Return the process-wide move finder, loading the configured dictionary on first use."""
    global _default_finder  # noqa: PLW0603
    with _default_finder_lock:
        if _default_finder is None:
            _default_finder = MoveFinder(load_word_list())
        return _default_finder


def set_move_finder(finder: MoveFinder | None) -> None:
    """Replace the process-wide move finder (None resets it to the configured dictionary)."""
    global _default_finder  # noqa: PLW0603
    with _default_finder_lock:
        _default_finder = finder


def get_moves_for_board(board: str, min_frequency: int = DEFAULT_FREQUENCY) -> tuple[Move, ...]:
    """Find ranked moves on `board` with the process-wide dictionary."""
    return get_move_finder().get_moves_for_board(board, min_frequency)
