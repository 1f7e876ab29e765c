"""Module for dictionary management in Letterpress.

The dictionary file lists one word per line, followed by its frequency class, an
integer between 0 (rarest) and `MAX_FREQUENCY` (most common):

    cat 21
    zymurgy 2

Blank lines and lines starting with '#' are ignored.  Source order is preserved.
"""

import pathlib
from collections import Counter
from collections.abc import Iterable
from time import time
from typing import NamedTuple

from letterpress.solver.config import config as solver_config
from letterpress.solver.utils import canonicalize, vlog

MAX_FREQUENCY = 24
DEFAULT_FREQUENCY = 15

FREQUENCY_BANDS: dict[str, int] = {
    "basic": 18,
    "common": 15,
    "highbrow": 12,
    "obscure": 9,
    "sesquipedalian": 0,
}
"""Named minimum frequencies, from most to least common."""


class WordEntry(NamedTuple):
    """A dictionary word with its canonical letter multiset and frequency class."""

    word: str
    letters: Counter[str]
    """Letter -> count for the word.  Shared via a cache; must be treated as immutable."""
    frequency: int


def make_entry(word: str, frequency: int) -> WordEntry:
    """Create a WordEntry for `word`."""
    return WordEntry(word, canonicalize(word), frequency)


def validate_frequency(min_frequency: int) -> int:
    """Check that `min_frequency` is an integer in [0, MAX_FREQUENCY] and return it."""
    if isinstance(min_frequency, bool) or not isinstance(min_frequency, int):
        raise ValueError(f"Frequency must be an integer, got {min_frequency!r}.")
    if not 0 <= min_frequency <= MAX_FREQUENCY:
        raise ValueError(f"Frequency must be between 0 and {MAX_FREQUENCY}, got {min_frequency}.")
    return min_frequency


def band_frequency(band: str) -> int:
    """Return the minimum frequency for a named band (e.g. "common")."""
    try:
        return FREQUENCY_BANDS[band.lower()]
    except KeyError:
        names = ", ".join(FREQUENCY_BANDS)
        raise ValueError(f"Unknown frequency band '{band}'; expected one of: {names}.") from None


def find_word_list_file(name: str) -> pathlib.Path:
    """Locate the word list file.

    An absolute path, or a relative path that exists from the working directory, is used
    as is.  Otherwise, iterate up the directory tree from this package to find it.
    """
    path = pathlib.Path(name)
    if path.is_absolute() or path.is_file():
        return path
    current_dir = pathlib.Path(__file__).parent
    while True:
        candidate = current_dir / name
        if candidate.is_file():
            return candidate
        if current_dir.parent == current_dir:
            return path
        current_dir = current_dir.parent


def parse_word_list(lines: Iterable[str]) -> tuple[WordEntry, ...]:
    """Parse dictionary lines into word entries, in source order.

    Raises:
        ValueError: If a line is malformed, the word is not alphabetic, or the frequency
            is outside [0, MAX_FREQUENCY].
    """
    entries: list[WordEntry] = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split()
        if len(parts) != 2:
            raise ValueError(f"Line {line_no}: expected 'word frequency', got '{stripped}'")
        word, freq_str = parts
        word = word.lower()
        if not word.isascii() or not word.isalpha():
            raise ValueError(f"Line {line_no}: invalid word '{word}'")
        try:
            frequency = int(freq_str)
        except ValueError:
            raise ValueError(f"Line {line_no}: invalid frequency '{freq_str}'") from None
        if not 0 <= frequency <= MAX_FREQUENCY:
            raise ValueError(
                f"Line {line_no}: frequency {frequency} outside [0, {MAX_FREQUENCY}]"
            )
        entries.append(make_entry(word, frequency))
    return tuple(entries)


def load_word_list(path: str | pathlib.Path | None = None) -> tuple[WordEntry, ...]:
    """Load the dictionary from `path`, or from the configured file if not given.

    Returns:
        A tuple of WordEntry, in file order.
    """
    t0 = time()
    word_list_path = find_word_list_file(str(path or solver_config.word_list_path))
    if not word_list_path.is_file():
        raise FileNotFoundError(f"Word list file not found: {word_list_path}")

    with word_list_path.open("r", encoding="utf-8") as f:
        entries = parse_word_list(f)
    vlog(f"Loaded {len(entries)} words from {word_list_path}", t0)
    return entries


def filter_by_frequency(words: Iterable[WordEntry], min_frequency: int) -> tuple[WordEntry, ...]:
    """Get the dictionary entries at least as common as `min_frequency`, in source order."""
    return tuple(w for w in words if w.frequency >= min_frequency)
