"""
Queue Service Module

Owns the now-playing song, the upcoming queue, the play history and the
genre filter, and applies user actions to them.
"""

from typing import List, Optional, Tuple
import logging
import threading

from core import queue_engine
from core.errors import CatalogLoadError
from core.event_bus import EventBus, EventType
from core.queue_engine import RandomSource
from models.queue_state import QueueSnapshot
from models.song import Song
from services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class QueueService:
    """
    Queue Service

    The single owner of queue state. Each user action is a method; after a
    change the service publishes events carrying a QueueSnapshot and tops
    the queue back up to its target length whenever the catalog allows.

    Example:
        service = QueueService(catalog_service, event_bus)

        # Load the catalog (first song plays, next ten are queued)
        service.load_catalog()

        # Next song
        service.advance()

        # Only jazz from now on
        service.toggle_genre("jazz")
    """

    def __init__(
        self,
        catalog_service: CatalogService,
        event_bus: Optional[EventBus] = None,
        target_length: int = queue_engine.DEFAULT_TARGET_LENGTH,
        history_limit: int = queue_engine.DEFAULT_HISTORY_LIMIT,
        rng: Optional[RandomSource] = None,
    ):
        self._catalog_service = catalog_service
        self._event_bus = event_bus or EventBus()
        self._target_length = target_length
        self._history_limit = history_limit
        self._rng = rng

        self._lock = threading.RLock()

        # Catalog
        self._catalog: Tuple[Song, ...] = ()
        self._genres: List[str] = []
        self._loaded = False
        self._is_loading = False
        self._error: Optional[str] = None

        # Playback state
        self._current: Optional[Song] = None
        self._queue: List[Song] = []
        self._history: List[Song] = []
        self._selected_genres: List[str] = []

    # ===== State Access =====

    @property
    def current(self) -> Optional[Song]:
        return self._current

    @property
    def queue(self) -> List[Song]:
        """Get upcoming queue"""
        with self._lock:
            return self._queue.copy()

    @property
    def history(self) -> List[Song]:
        """Get play history, most recent first"""
        with self._lock:
            return self._history.copy()

    @property
    def selected_genres(self) -> List[str]:
        with self._lock:
            return self._selected_genres.copy()

    @property
    def genres(self) -> List[str]:
        with self._lock:
            return self._genres.copy()

    @property
    def catalog(self) -> Tuple[Song, ...]:
        return self._catalog

    @property
    def is_loaded(self) -> bool:
        """Whether a catalog was loaded, even an empty one"""
        return self._loaded

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def target_length(self) -> int:
        return self._target_length

    def snapshot(self) -> QueueSnapshot:
        """Get a read-only copy of the current state"""
        with self._lock:
            return QueueSnapshot(
                current=self._current,
                queue=tuple(self._queue),
                history=tuple(self._history),
                selected_genres=tuple(self._selected_genres),
                genres=tuple(self._genres),
                is_loading=self._is_loading,
                error=self._error,
            )

    # ===== Catalog =====

    def load_catalog(self) -> bool:
        """
        Load the catalog and set up the initial state

        The first catalog song becomes current and the following songs fill
        the queue. A failure is terminal: the error message is kept, the
        catalog stays empty and later calls do nothing.

        Returns:
            bool: Whether a catalog is available
        """
        if self._error is not None:
            logger.warning("Catalog load already failed, not retrying: %s", self._error)
            return False
        if self.is_loaded:
            logger.debug("Catalog already loaded")
            return True

        self._is_loading = True
        self._event_bus.publish(EventType.CATALOG_LOADING, self.snapshot())
        try:
            songs = self._catalog_service.load()
        except CatalogLoadError as e:
            with self._lock:
                self._is_loading = False
                self._error = str(e) or "Failed to load songs"
            logger.error("Catalog load failed: %s", self._error)
            self._event_bus.publish(EventType.CATALOG_LOAD_FAILED, self._error)
            self._event_bus.publish(EventType.ERROR_OCCURRED, {
                "source": "QueueService",
                "error": self._error,
            })
            return False
        finally:
            self._is_loading = False

        with self._lock:
            self._catalog = songs
            self._loaded = True
            self._genres = queue_engine.derive_genres(songs)
            self._current, self._queue = queue_engine.initial_state(songs, self._target_length)

        self._event_bus.publish(EventType.CATALOG_LOADED, self.snapshot())
        self._publish_current_changed()
        self._publish_queue_changed()
        self.maintain_queue_length()
        return True

    def maintain_queue_length(self) -> bool:
        """
        Refill the queue up to the target length

        Does nothing before the catalog is loaded or when the queue is
        already full.

        Returns:
            bool: Whether songs were added
        """
        with self._lock:
            if not self._catalog or len(self._queue) >= self._target_length:
                return False

            before = len(self._queue)
            self._queue = queue_engine.refill_queue(
                self._catalog,
                self._queue,
                self._history,
                self._current,
                self._selected_genres,
                self._target_length,
                self._rng,
            )
            added = len(self._queue) - before

        if added == 0:
            logger.debug("No songs available to refill queue (%d/%d)", before, self._target_length)
            return False

        logger.debug("Refilled queue with %d songs", added)
        self._publish_queue_changed()
        return True

    # ===== Playback Transitions =====

    def advance(self) -> Optional[Song]:
        """
        Play the next song

        Returns:
            Song: The new current song, or None if the queue was empty
        """
        with self._lock:
            if not self._queue:
                return None

            history_changed = self._current is not None
            if self._current is not None:
                self._history = queue_engine.push_history(
                    self._history, self._current, self._history_limit
                )
            self._current = self._queue[0]
            self._queue = self._queue[1:]
            current = self._current

        logger.debug("Advanced to %s", current.display_name)
        self._publish_transition(history_changed)
        return current

    def go_back(self) -> Optional[Song]:
        """
        Play the previous song

        The interrupted song goes back to the front of the queue. If that
        pushes the queue past its target length the tail is dropped.

        Returns:
            Song: The new current song, or None if history was empty
        """
        with self._lock:
            if not self._history:
                return None

            if self._current is not None:
                self._queue = [self._current, *self._queue][:self._target_length]
            self._current = self._history[0]
            self._history = self._history[1:]
            current = self._current

        logger.debug("Went back to %s", current.display_name)
        self._publish_transition(history_changed=True)
        return current

    def play_from_queue(self, song_id: int) -> Optional[Song]:
        """
        Play a queued song immediately

        Args:
            song_id: Id of a song in the queue

        Returns:
            Song: The new current song, or None if the id is not queued
        """
        with self._lock:
            song = next((s for s in self._queue if s.id == song_id), None)
            if song is None:
                logger.debug("play_from_queue: song %s not in queue", song_id)
                return None

            history_changed = self._current is not None
            if self._current is not None:
                self._history = queue_engine.push_history(
                    self._history, self._current, self._history_limit
                )
            self._current = song
            self._queue = queue_engine.remove_song(self._queue, song_id)

        logger.debug("Playing %s from queue", song.display_name)
        self._publish_transition(history_changed)
        return song

    def remove_from_queue(self, song_id: int) -> bool:
        """
        Remove a song from the queue

        Args:
            song_id: Id of the song to remove

        Returns:
            bool: Whether the song was queued and removed
        """
        with self._lock:
            new_queue = queue_engine.remove_song(self._queue, song_id)
            if new_queue is self._queue:
                logger.debug("remove_from_queue: song %s not in queue", song_id)
                return False
            self._queue = new_queue

        self._publish_queue_changed()
        self.maintain_queue_length()
        return True

    def toggle_genre(self, genre: str) -> List[str]:
        """
        Add or remove a genre from the filter and rebuild the queue

        The existing queue is discarded, including songs that still match.

        Returns:
            List[str]: The selected genres after the toggle
        """
        with self._lock:
            self._selected_genres = queue_engine.toggle_genre(self._selected_genres, genre)
            self._queue = queue_engine.rebuild_queue_on_genre_change(
                self._catalog,
                self._current,
                self._history,
                self._selected_genres,
                self._target_length,
                self._rng,
            )
            selected = self._selected_genres.copy()

        logger.debug("Genre filter is now %s", selected or "off")
        self._event_bus.publish(EventType.GENRE_FILTER_CHANGED, self.snapshot())
        self._publish_queue_changed()
        return selected

    # ===== Events =====

    def _publish_transition(self, history_changed: bool) -> None:
        self._publish_current_changed()
        if history_changed:
            self._event_bus.publish(EventType.HISTORY_CHANGED, self.snapshot())
        self._publish_queue_changed()
        self.maintain_queue_length()

    def _publish_current_changed(self) -> None:
        self._event_bus.publish(EventType.CURRENT_CHANGED, self.snapshot())

    def _publish_queue_changed(self) -> None:
        self._event_bus.publish(EventType.QUEUE_CHANGED, self.snapshot())
