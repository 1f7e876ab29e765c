import pytest

from letterpress.solver.moves import MoveFinder, set_move_finder
from letterpress.wordlist import make_entry

# Row by row:
#   t e a r s
#   g a r d e
#   n p r e s
#   s l e t t
#   e r z q x
BOARD = "tearsgardenpressletterzqx"

WORDS = [
    ("eat", 24),
    ("cat", 20),
    ("tea", 20),
    ("sat", 19),
    ("tears", 17),
    ("garden", 15),
    ("press", 15),
    ("letters", 14),
    ("zoo", 14),
    ("jazz", 13),
    ("zebra", 12),
    ("quiz", 13),
    ("aa", 10),
    ("zeds", 3),
]


@pytest.fixture
def words():
    return tuple(make_entry(w, f) for w, f in WORDS)


@pytest.fixture
def finder(words):
    return MoveFinder(words, cache_size=8)


@pytest.fixture
def default_finder(finder):
    set_move_finder(finder)
    yield finder
    set_move_finder(None)
