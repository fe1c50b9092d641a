"""
Queue state snapshot model
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from .song import Song


@dataclass(frozen=True)
class QueueSnapshot:
    """
    Read-only view of the queue state

    Published with queue events so that observers never hold a reference
    to the service's mutable lists.
    """

    current: Optional[Song] = None
    queue: Tuple[Song, ...] = ()
    history: Tuple[Song, ...] = ()
    selected_genres: Tuple[str, ...] = ()
    genres: Tuple[str, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def queue_ids(self) -> Tuple[int, ...]:
        return tuple(s.id for s in self.queue)

    @property
    def history_ids(self) -> Tuple[int, ...]:
        return tuple(s.id for s in self.history)

    @property
    def used_ids(self) -> FrozenSet[int]:
        """Ids of every song currently playing, queued or in history"""
        ids = set(self.queue_ids) | set(self.history_ids)
        if self.current is not None:
            ids.add(self.current.id)
        return frozenset(ids)

    @property
    def is_filtered(self) -> bool:
        return bool(self.selected_genres)
