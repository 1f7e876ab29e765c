import threading

from letterpress.board import FULL_BOARD_MASK, build_position_index
from letterpress.solver.moves import (
    Move,
    MoveFinder,
    get_captured_bitmask,
    get_moves_for_board,
    rank_moves,
)
from letterpress.solver.placements import count_placements
from letterpress.solver.utils import canonicalize, get_bitmask_for_positions, is_subset
from letterpress.wordlist import MAX_FREQUENCY, make_entry

from conftest import BOARD


def test_captured_interior_cell():
    mask = get_bitmask_for_positions([7, 11, 12, 13, 17])
    assert get_captured_bitmask(mask) == 1 << 12
    missing = get_bitmask_for_positions([7, 11, 12, 13])
    assert get_captured_bitmask(missing) & (1 << 12) == 0


def test_captured_needs_cell_itself():
    # All four neighbors of cell 12, but not cell 12
    mask = get_bitmask_for_positions([7, 11, 13, 17])
    assert get_captured_bitmask(mask) == 0


def test_captured_corner_and_edge():
    assert get_captured_bitmask(get_bitmask_for_positions([0, 1, 5])) == 1 << 0
    # Cell 2 on the top edge needs 1, 3 and 7; cells 1 and 3 also get captured
    # once their own neighbors are present
    mask = get_bitmask_for_positions([0, 1, 2, 3, 4, 6, 7, 8])
    assert get_captured_bitmask(mask) == get_bitmask_for_positions([1, 2, 3])


def test_captured_full_board():
    assert get_captured_bitmask(FULL_BOARD_MASK) == FULL_BOARD_MASK


def test_captured_custom_adjacency():
    adjacency = [(0b1, 0b10), (0b10, 0b101)]
    assert get_captured_bitmask(0b11, adjacency) == 0b1
    assert get_captured_bitmask(0b111, adjacency) == 0b11


def test_rank_moves_by_capture_count_then_length():
    moves = [
        Move(0b1111, "abcd", 0),
        Move(0b111, "abc", 0b1),
        Move(0b11, "ab", 0b11),
        Move(0b111 << 22, "xyz", 1 << 24),
        Move(0b11111, "abcde", 0),
    ]
    ranked = rank_moves(moves)
    assert [m.word for m in ranked] == ["ab", "abc", "xyz", "abcde", "abcd"]


def test_rank_moves_ignores_raw_bitmask_value():
    low = Move(0b111, "abc", 0b11)
    high = Move(0b111 << 22, "xyz", 1 << 24)
    assert rank_moves([high, low]) == (low, high)


def test_rank_moves_keeps_input_order_for_ties():
    moves = [Move(1 << i, "ab", 0) for i in range(200)]
    assert rank_moves(moves) == tuple(moves)
    assert rank_moves(reversed(moves)) == tuple(reversed(moves))


def test_move_capture_count():
    assert Move(0b111, "abc", 0b101).capture_count == 2


def test_moves_invariants(finder):
    moves = finder.get_moves_for_board(BOARD, 0)
    assert moves
    for move in moves:
        assert move.bitmask.bit_count() == len(move.word)
        assert move.captured & ~FULL_BOARD_MASK == 0
        assert move.captured & ~move.bitmask == 0
        assert move.captured == get_captured_bitmask(move.bitmask)


def test_moves_count_matches_placements(finder, words):
    index = build_position_index(BOARD)
    board_letters = canonicalize(BOARD)
    expected = sum(
        count_placements(w.letters, index) for w in words if is_subset(w.letters, board_letters)
    )
    assert len(finder.get_moves_for_board(BOARD, 0)) == expected


def test_every_playable_word_has_a_move(finder, words):
    for min_frequency in [0, 10, 15, 20]:
        found = {m.word for m in finder.get_moves_for_board(BOARD, min_frequency)}
        expected = {
            w.word
            for w in words
            if w.frequency >= min_frequency and is_subset(w.letters, canonicalize(BOARD))
        }
        assert found == expected

    found = {m.word for m in finder.get_moves_for_board(BOARD, 0)}
    assert {"eat", "tea", "sat", "tears", "garden", "press", "letters", "aa"} <= found
    assert not found & {"cat", "zoo", "jazz", "zebra", "quiz"}


def test_word_placement_counts(finder):
    moves = finder.get_moves_for_board(BOARD, 0)
    words = [m.word for m in moves]
    assert words.count("letters") == 360
    assert words.count("press") == 60
    assert words.count("aa") == 1


def test_moves_are_ranked(finder):
    moves = finder.get_moves_for_board(BOARD, 0)
    keys = [(m.capture_count, len(m.word)) for m in moves]
    assert keys == sorted(keys, reverse=True)


def test_single_letter_word_board():
    finder = MoveFinder([make_entry("aa", 20)])
    moves = finder.get_moves_for_board("a" * 25, 15)
    assert len(moves) == 300
    assert len({m.bitmask for m in moves}) == 300
    assert all(m.word == "aa" for m in moves)


def test_no_moves_use_letters_missing_from_board():
    board = "tearsgardenpressletterqxy"
    finder = MoveFinder(
        [make_entry(w, 20) for w in ["zoo", "zebra", "jazz", "tea", "zeds", "press"]]
    )
    words = {m.word for m in finder.get_moves_for_board(board, 0)}
    assert words == {"tea", "press"}
    assert not any("z" in w for w in words)


def test_max_frequency_only_top_tier(finder):
    moves = finder.get_moves_for_board(BOARD, MAX_FREQUENCY)
    assert {m.word for m in moves} == {"eat"}
    assert len(moves) == 5 * 2 * 3


def test_max_frequency_no_words():
    finder = MoveFinder([make_entry("tea", 20)])
    assert finder.get_moves_for_board(BOARD, MAX_FREQUENCY) == ()


def test_moves_cached_by_value(finder):
    first = finder.get_moves_for_board(BOARD, 15)
    board_copy = "".join(list(BOARD))
    second = finder.get_moves_for_board(board_copy, 15)
    assert second is first
    info = finder.cache_info()
    assert info["moves"].hits == 1
    assert info["moves"].misses == 1


def test_stages_cached(finder):
    finder.get_moves_for_board(BOARD, 15)
    finder.get_moves_for_board(BOARD, 12)
    info = finder.cache_info()
    assert info["positions"].misses == 1
    assert info["positions"].hits == 1
    assert info["frequency"].misses == 2
    assert finder.min_frequency_words(15) is finder.min_frequency_words(15)
    assert finder.playable_words(BOARD, 15) == finder.playable_words(BOARD, 15)


def test_min_frequency_words_keep_source_order(finder, words):
    assert [w.word for w in finder.min_frequency_words(15)] == [
        w.word for w in words if w.frequency >= 15
    ]


def test_cache_clear(finder):
    finder.get_moves_for_board(BOARD, 15)
    finder.cache_clear()
    assert all(info.currsize == 0 for info in finder.cache_info().values())


def test_cache_eviction_recomputes_equal_result(words):
    finder = MoveFinder(words, cache_size=1)
    first = finder.get_moves_for_board(BOARD, 15)
    finder.get_moves_for_board("a" * 25, 15)
    again = finder.get_moves_for_board(BOARD, 15)
    assert again == first
    assert finder.cache_info()["moves"].misses == 3


def test_module_level_get_moves(default_finder):
    assert get_moves_for_board(BOARD, 15) == default_finder.get_moves_for_board(BOARD, 15)
    assert get_moves_for_board(BOARD) == default_finder.get_moves_for_board(BOARD, 15)


def test_concurrent_callers_share_one_result(finder):
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait(timeout=5)
        moves = finder.get_moves_for_board(BOARD, 0)
        with lock:
            results.append(moves)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(results) == 8
    assert all(r is results[0] for r in results)
    info = finder.cache_info()["moves"]
    assert info.misses == 1
    assert info.hits == 7
