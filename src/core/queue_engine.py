"""
Queue Engine Module

Pure functions that derive queue, history and current-song transitions
and replenish the queue from the catalog.

None of these functions mutate their arguments. Callers own the state and
replace it with the returned values.
"""

from __future__ import annotations

import random
from typing import (
    TYPE_CHECKING,
    Collection,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)

if TYPE_CHECKING:
    from models.song import Song

T = TypeVar("T")

DEFAULT_TARGET_LENGTH = 10
DEFAULT_HISTORY_LIMIT = 10


class RandomSource(Protocol):
    """Anything with a ``randrange`` like ``random.Random``"""

    def randrange(self, stop: int) -> int:
        ...


def derive_genres(catalog: Sequence["Song"]) -> List[str]:
    """
    Get the distinct genres of a catalog

    Returns:
        List[str]: Genre values sorted ascending, without duplicates
    """
    return sorted({song.genre for song in catalog})


def available_songs(
    catalog: Sequence["Song"],
    queue: Sequence["Song"],
    history: Sequence["Song"],
    current: Optional["Song"],
    selected_genres: Collection[str],
) -> List["Song"]:
    """
    Get catalog songs that are free to be queued

    A song is available when it is not queued, not in history and not
    playing. When ``selected_genres`` is non-empty only songs of those
    genres qualify.

    Returns:
        List[Song]: Available songs in catalog order
    """
    used_ids = {s.id for s in queue}
    used_ids.update(s.id for s in history)
    if current is not None:
        used_ids.add(current.id)

    available = [song for song in catalog if song.id not in used_ids]

    if selected_genres:
        genres = set(selected_genres)
        available = [song for song in available if song.genre in genres]

    return available


def shuffle_songs(items: Sequence[T], rng: Optional[RandomSource] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of ``items`` (Fisher-Yates)

    Args:
        items: Sequence to shuffle, left untouched
        rng: Random source; defaults to the module-level generator
    """
    source = rng if rng is not None else random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def refill_queue(
    catalog: Sequence["Song"],
    queue: List["Song"],
    history: Sequence["Song"],
    current: Optional["Song"],
    selected_genres: Collection[str],
    target_length: int = DEFAULT_TARGET_LENGTH,
    rng: Optional[RandomSource] = None,
) -> List["Song"]:
    """
    Top the queue back up to ``target_length``

    Existing entries keep their order; randomly chosen available songs are
    appended after them. If the catalog or filter runs out the result is
    shorter than the target.

    Returns:
        List[Song]: ``queue`` itself when it is already long enough, otherwise a new list
    """
    if len(queue) >= target_length:
        return queue

    available = available_songs(catalog, queue, history, current, selected_genres)
    shuffled = shuffle_songs(available, rng)
    needed = target_length - len(queue)

    return list(queue) + shuffled[:needed]


def rebuild_queue_on_genre_change(
    catalog: Sequence["Song"],
    current: Optional["Song"],
    history: Sequence["Song"],
    selected_genres: Collection[str],
    target_length: int = DEFAULT_TARGET_LENGTH,
    rng: Optional[RandomSource] = None,
) -> List["Song"]:
    """
    Build a fresh queue for a new genre filter

    The previous queue is discarded entirely, including songs that would
    still match the new filter.
    """
    return refill_queue(catalog, [], history, current, selected_genres, target_length, rng)


def initial_state(
    catalog: Sequence["Song"],
    target_length: int = DEFAULT_TARGET_LENGTH,
) -> Tuple[Optional["Song"], List["Song"]]:
    """
    Get the state right after the catalog loads

    The first catalog song plays and the following ``target_length`` songs
    are queued in catalog order.

    Returns:
        Tuple[Optional[Song], List[Song]]: (current, queue)
    """
    if not catalog:
        return None, []
    return catalog[0], list(catalog[1:1 + target_length])


def push_history(
    history: Sequence["Song"],
    song: "Song",
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> List["Song"]:
    """Prepend ``song`` to history, keeping at most ``limit`` entries"""
    return [song, *history][:limit]


def remove_song(queue: List["Song"], song_id: int) -> List["Song"]:
    """
    Remove the entry with ``song_id`` from the queue

    Returns:
        List[Song]: ``queue`` itself when the id is absent, otherwise a new list
    """
    if not any(s.id == song_id for s in queue):
        return queue
    return [s for s in queue if s.id != song_id]


def toggle_genre(selected_genres: Sequence[str], genre: str) -> List[str]:
    """Add ``genre`` if absent, remove it if present; insertion order is kept"""
    if genre in selected_genres:
        return [g for g in selected_genres if g != genre]
    return [*selected_genres, genre]
