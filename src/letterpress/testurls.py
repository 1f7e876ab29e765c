"""Generate random request URLs for load testing a move-finder service (e.g. with siege)."""

import random
import string
from urllib.parse import urlencode

from letterpress.board import BOARD_SIZE, FULL_BOARD_MASK
from letterpress.wordlist import FREQUENCY_BANDS

DEFAULT_HOST = "http://localhost:3000"
DEFAULT_COUNT = 1001


def random_board(rng: random.Random) -> str:
    """Return a random board of BOARD_SIZE lowercase letters."""
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(BOARD_SIZE))


def generate_test_urls(
    proto_host_port: str = DEFAULT_HOST,
    count: int = DEFAULT_COUNT,
    rng: random.Random | None = None,
) -> list[str]:
    """Generate `count` URLs of the form `{proto_host_port}/api?board=...&minFrequency=...`.

    Each URL has a random board, a random frequency band threshold, and random
    `oursBitMask` / `theirsBitMask` occupancy masks.
    """
    rng = rng or random.Random()
    thresholds = list(FREQUENCY_BANDS.values())
    urls = []
    for _ in range(count):
        params = {
            "board": random_board(rng),
            "minFrequency": rng.choice(thresholds),
            "oursBitMask": rng.randrange(FULL_BOARD_MASK),
            "theirsBitMask": rng.randrange(FULL_BOARD_MASK),
        }
        urls.append(f"{proto_host_port.rstrip('/')}/api?{urlencode(params)}")
    return urls
