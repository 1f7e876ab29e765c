"""Classes and functions for representing the game board and its geometry."""

from typing import TextIO, TypeAlias

import numpy as np

N_ROWS = 5
N_COLS = 5
BOARD_SIZE = N_ROWS * N_COLS
FULL_BOARD_MASK = (1 << BOARD_SIZE) - 1
"""Bitmask with every board cell set."""

PositionIndex: TypeAlias = dict[str, tuple[int, ...]]
AdjacencyRule: TypeAlias = tuple[int, int]
"""(cell_bit, required_neighbor_mask) for a single board cell."""

VALID_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")


def validate_board(board: str) -> str:
    """Check that `board` holds exactly BOARD_SIZE lowercase letters and return it."""
    if not isinstance(board, str):
        raise ValueError(f"Board must be a string, got {type(board).__name__}.")
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} letters, got {len(board)}.")
    invalid = set(board) - VALID_LETTERS
    if invalid:
        raise ValueError(f"Board contains invalid characters: {''.join(sorted(invalid))}")
    return board


class Board:
    """Store the 5x5 letter grid as a 1D string, indexed by (row, col)."""

    def __init__(self, letters: str) -> None:
        self.letters = validate_board(letters)
        self.n_rows = N_ROWS
        self.n_cols = N_COLS

    def __str__(self) -> str:
        """Returns a string representation of the board."""
        return self.letters

    def __getitem__(self, idx: tuple[int, int]) -> str:
        """Get cell content by (row, col) index."""
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            return self.letters[self.get_1d_idx(row, col)]
        raise IndexError("Invalid index type for Board.")

    def get_1d_idx(self, row: int, col: int) -> int:
        """Convert a (row, col) tuple to a 1D index."""
        return row * self.n_cols + col

    def render(self, bitmask: int = 0) -> list[str]:
        """Return the board as rows of letters.

        Cells whose bit is set in `bitmask` are shown in uppercase.
        """
        rows = []
        for row in range(self.n_rows):
            cells = []
            for col in range(self.n_cols):
                ch = self[row, col]
                cell_bit = 1 << self.get_1d_idx(row, col)
                cells.append(ch.upper() if bitmask & cell_bit else ch)
            rows.append(" ".join(cells))
        return rows

    def print(self, bitmask: int = 0, *, file: TextIO | None = None) -> None:
        """Print the board to the console, highlighting the cells in `bitmask`."""
        for line in self.render(bitmask):
            print(line, file=file, flush=True)


def build_position_index(board: str) -> PositionIndex:
    """Map each letter to the board positions where it is used.

    e.g. given "aba", return `{"a": (0, 2), "b": (1,)}`.
    """
    positions: dict[str, list[int]] = {}
    for i, ch in enumerate(board):
        positions.setdefault(ch, []).append(i)
    return {ch: tuple(idxs) for ch, idxs in positions.items()}


def build_adjacency(n_rows: int = N_ROWS, n_cols: int = N_COLS) -> tuple[AdjacencyRule, ...]:
    """Build the adjacency table for a grid.

    Each entry is `(cell_bit, required_neighbor_mask)`, where the mask holds every
    in-bounds orthogonal neighbor (up, down, left, right) of the cell.  Entries are in
    row-major cell order.
    """
    rules: list[AdjacencyRule] = []
    for r, c in np.ndindex(n_rows, n_cols):
        neighbor_mask = 0
        for delta_r, delta_c in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            r_new, c_new = r + delta_r, c + delta_c
            if 0 <= r_new < n_rows and 0 <= c_new < n_cols:
                neighbor_mask |= 1 << (r_new * n_cols + c_new)
        rules.append((1 << (r * n_cols + c), neighbor_mask))
    return tuple(rules)


ADJACENCY: tuple[AdjacencyRule, ...] = build_adjacency()
"""Adjacency table for the standard 5x5 board, one entry per cell."""
