"""Enumerate the ways a word's letters can be placed on board cells.

Each letter is needed some number of times, and may appear several times on the
board.  For a word needing two "a" on a board with four "a", there are six choices
of cells for the "a" alone; the placements of the whole word are the cross-product
of the choices for each distinct letter.

e.g. for the board "abcb" and the word "cab", the per-letter choices are
`[[(2,)], [(0,)], [(1,), (3,)]]` and the placements are `(0, 1, 2)` and `(0, 2, 3)`.
"""

from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from itertools import combinations
from math import comb, prod

PositionAssignment = tuple[int, ...]


def _letter_groups(
    letter_counts: Counter[str], position_index: Mapping[str, Sequence[int]]
) -> list[tuple[Sequence[int], int]] | None:
    """Pair each letter's board positions with the count needed, or None if a letter runs out."""
    groups = []
    for ch, needed in letter_counts.items():
        positions = position_index.get(ch, ())
        if needed > len(positions):
            return None
        groups.append((positions, needed))
    return groups


def iter_placements(
    letter_counts: Counter[str], position_index: Mapping[str, Sequence[int]]
) -> Iterator[PositionAssignment]:
    """Yield every assignment of board positions for a word, depth-first.

    Only the current path through the letter groups is held in memory; the
    combinations for a letter are regenerated each time its group is reached.

    Args:
        letter_counts (Counter[str]): Letter -> count needed by the word.
        position_index (Mapping[str, Sequence[int]]): Letter -> ascending board positions.

    Yields:
        Ascending tuples of distinct board positions, one per placement.  Nothing is
        yielded if the board lacks a needed letter, or if the word is empty.
    """
    groups = _letter_groups(letter_counts, position_index)
    if not groups:
        return

    depth_last = len(groups) - 1

    def expand(depth: int, partial: tuple[int, ...]) -> Iterator[PositionAssignment]:
        positions, needed = groups[depth]
        for subset in combinations(positions, needed):
            current = partial + subset
            if depth == depth_last:
                yield tuple(sorted(current))
            else:
                yield from expand(depth + 1, current)

    yield from expand(0, ())


def count_placements(
    letter_counts: Counter[str], position_index: Mapping[str, Sequence[int]]
) -> int:
    """Return the number of placements `iter_placements` would yield, without enumerating."""
    if not letter_counts:
        return 0
    return prod(
        comb(len(position_index.get(ch, ())), needed) for ch, needed in letter_counts.items()
    )
