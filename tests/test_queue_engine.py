"""
Queue Engine Tests
"""

import random

import pytest

from conftest import make_catalog, make_song
from core import queue_engine


class TestDeriveGenres:
    """Genre derivation tests"""

    def test_sorted_and_distinct(self, large_catalog):
        genres = queue_engine.derive_genres(large_catalog)
        assert genres == ["jazz", "pop", "rock"]

    def test_invariant_under_reordering(self, large_catalog):
        shuffled = list(large_catalog)
        random.Random(3).shuffle(shuffled)
        assert queue_engine.derive_genres(shuffled) == queue_engine.derive_genres(large_catalog)

    def test_empty_catalog(self):
        assert queue_engine.derive_genres([]) == []

    def test_lexicographic_order(self):
        catalog = [make_song(1, "b"), make_song(2, "B"), make_song(3, "a"), make_song(4, "b")]
        assert queue_engine.derive_genres(catalog) == ["B", "a", "b"]


class TestAvailableSongs:
    """Available song selection tests"""

    def test_excludes_queue_history_and_current(self, large_catalog):
        queue = list(large_catalog[1:4])
        history = list(large_catalog[4:6])
        current = large_catalog[0]

        available = queue_engine.available_songs(large_catalog, queue, history, current, [])

        used = {s.id for s in queue} | {s.id for s in history} | {current.id}
        assert all(s.id not in used for s in available)
        assert len(available) == len(large_catalog) - len(used)

    def test_keeps_catalog_order(self, large_catalog):
        available = queue_engine.available_songs(large_catalog, [], [], None, [])
        assert [s.id for s in available] == [s.id for s in large_catalog]

    def test_genre_filter(self, small_catalog):
        available = queue_engine.available_songs(small_catalog, [], [], small_catalog[0], ["jazz"])
        assert [s.id for s in available] == [4, 5]

    def test_multiple_genres(self, large_catalog):
        available = queue_engine.available_songs(large_catalog, [], [], None, {"jazz", "pop"})
        assert {s.genre for s in available} == {"jazz", "pop"}

    def test_unknown_genre_yields_nothing(self, small_catalog):
        assert queue_engine.available_songs(small_catalog, [], [], None, ["metal"]) == []


class TestShuffle:
    """Shuffle tests"""

    def test_is_permutation(self):
        items = list(range(20))
        shuffled = queue_engine.shuffle_songs(items, random.Random(1))
        assert sorted(shuffled) == items

    def test_input_not_mutated(self):
        items = [1, 2, 3, 4, 5]
        queue_engine.shuffle_songs(items, random.Random(1))
        assert items == [1, 2, 3, 4, 5]

    def test_seeded_source_is_reproducible(self):
        items = list(range(10))
        first = queue_engine.shuffle_songs(items, random.Random(42))
        second = queue_engine.shuffle_songs(items, random.Random(42))
        assert first == second

    def test_uses_injected_source(self):
        class AlwaysZero:
            def randrange(self, stop):
                return 0

        # j is always 0: each step swaps position i with the head
        assert queue_engine.shuffle_songs([1, 2, 3, 4], AlwaysZero()) == [2, 3, 4, 1]

    def test_empty_and_single(self):
        assert queue_engine.shuffle_songs([]) == []
        assert queue_engine.shuffle_songs(["x"]) == ["x"]


class TestRefillQueue:
    """Queue replenishment tests"""

    def test_full_queue_returned_unchanged(self, large_catalog):
        queue = list(large_catalog[:10])
        result = queue_engine.refill_queue(large_catalog, queue, [], None, [])
        assert result is queue

    def test_fills_to_target_keeping_prefix(self, large_catalog):
        queue = list(large_catalog[5:8])
        result = queue_engine.refill_queue(
            large_catalog, queue, [], large_catalog[0], [], rng=random.Random(5)
        )

        assert len(result) == 10
        assert result[:3] == queue
        assert len({s.id for s in result}) == 10
        assert large_catalog[0] not in result

    def test_does_not_mutate_input(self, large_catalog):
        queue = list(large_catalog[:2])
        queue_engine.refill_queue(large_catalog, queue, [], None, [])
        assert len(queue) == 2

    @pytest.mark.parametrize("before", [0, 3, 9])
    def test_length_formula(self, large_catalog, before):
        queue = list(large_catalog[:before])
        history = list(large_catalog[20:30])
        available = len(queue_engine.available_songs(large_catalog, queue, history, None, ["jazz"]))

        result = queue_engine.refill_queue(large_catalog, queue, history, None, ["jazz"])

        assert len(result) == min(10, before + available)
        assert result[:before] == queue

    def test_short_when_catalog_exhausted(self, small_catalog):
        result = queue_engine.refill_queue(small_catalog, [], [], small_catalog[0], [])
        assert sorted(s.id for s in result) == [2, 3, 4, 5]

    def test_respects_filter(self, large_catalog):
        result = queue_engine.refill_queue(large_catalog, [], [], None, ["pop"])
        assert len(result) == 10
        assert all(s.genre == "pop" for s in result)

    def test_custom_target_length(self, large_catalog):
        result = queue_engine.refill_queue(large_catalog, [], [], None, [], target_length=4)
        assert len(result) == 4

    def test_deterministic_with_seeded_rng(self, large_catalog):
        first = queue_engine.refill_queue(large_catalog, [], [], None, [], rng=random.Random(9))
        second = queue_engine.refill_queue(large_catalog, [], [], None, [], rng=random.Random(9))
        assert first == second


class TestRebuildOnGenreChange:
    """Genre change rebuild tests"""

    def test_only_matching_songs(self, small_catalog):
        current = small_catalog[0]
        result = queue_engine.rebuild_queue_on_genre_change(small_catalog, current, [], ["jazz"])
        assert sorted(s.id for s in result) == [4, 5]

    def test_excludes_history(self, small_catalog):
        result = queue_engine.rebuild_queue_on_genre_change(
            small_catalog, small_catalog[0], [small_catalog[3]], ["jazz"]
        )
        assert [s.id for s in result] == [5]

    def test_empty_filter_uses_whole_catalog(self, large_catalog):
        result = queue_engine.rebuild_queue_on_genre_change(large_catalog, None, [], [])
        assert len(result) == 10


class TestInitialState:
    """Initial state tests"""

    def test_first_song_plays_rest_queued_in_order(self):
        catalog = make_catalog(15)
        current, queue = queue_engine.initial_state(catalog)
        assert current.id == 1
        assert [s.id for s in queue] == list(range(2, 12))

    def test_small_catalog(self, small_catalog):
        current, queue = queue_engine.initial_state(small_catalog)
        assert current.id == 1
        assert [s.id for s in queue] == [2, 3, 4, 5]

    def test_empty_catalog(self):
        assert queue_engine.initial_state(()) == (None, [])


class TestListHelpers:
    """History, removal and genre toggle helper tests"""

    def test_push_history_caps_length(self):
        history = [make_song(i) for i in range(1, 11)]
        new_song = make_song(99)

        result = queue_engine.push_history(history, new_song)

        assert result[0] is new_song
        assert len(result) == 10
        assert result[-1].id == 9

    def test_remove_song(self, small_catalog):
        queue = list(small_catalog)
        result = queue_engine.remove_song(queue, 3)
        assert [s.id for s in result] == [1, 2, 4, 5]
        assert len(queue) == 5

    def test_remove_missing_song_keeps_identity(self, small_catalog):
        queue = list(small_catalog)
        assert queue_engine.remove_song(queue, 999) is queue

    def test_toggle_genre_twice_restores(self):
        selected = ["rock"]
        once = queue_engine.toggle_genre(selected, "jazz")
        assert once == ["rock", "jazz"]
        assert queue_engine.toggle_genre(once, "jazz") == ["rock"]
