"""
Music Queue Core Module
"""

from .errors import QueueManagerError, CatalogLoadError, CatalogFormatError
from .event_bus import EventBus, EventType
from .catalog_source import (
    CatalogSource,
    JsonFileCatalogSource,
    HttpCatalogSource,
    create_catalog_source,
)
from .queue_engine import (
    RandomSource,
    derive_genres,
    available_songs,
    shuffle_songs,
    refill_queue,
    rebuild_queue_on_genre_change,
)

__all__ = [
    'QueueManagerError',
    'CatalogLoadError',
    'CatalogFormatError',
    'EventBus',
    'EventType',
    'CatalogSource',
    'JsonFileCatalogSource',
    'HttpCatalogSource',
    'create_catalog_source',
    'RandomSource',
    'derive_genres',
    'available_songs',
    'shuffle_songs',
    'refill_queue',
    'rebuild_queue_on_genre_change',
]
