"""
Catalog Service Module

Loads the song catalog once per session and turns raw records into Songs.
"""

from typing import Optional, Tuple
import logging

from core.catalog_source import CatalogSource, create_catalog_source
from core.errors import CatalogFormatError
from models.song import Song
from services.config_service import ConfigService

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Catalog Service

    Wraps a CatalogSource. The result of ``load`` is all-or-nothing: either
    every record parses into a Song or CatalogLoadError is raised.

    Example:
        catalog_service = CatalogService(JsonFileCatalogSource("songs.json"))
        songs = catalog_service.load()
    """

    def __init__(self, source: CatalogSource):
        self._source = source

    @staticmethod
    def from_config(config: ConfigService, location: Optional[str] = None) -> "CatalogService":
        """Create a catalog service from the configuration service."""
        location = location or str(config.get("catalog.source", "songs.json"))
        timeout_seconds = float(config.get("catalog.timeout_seconds", 10.0))
        return CatalogService(create_catalog_source(location, timeout_seconds))

    @property
    def source(self) -> CatalogSource:
        return self._source

    def load(self) -> Tuple[Song, ...]:
        """
        Fetch and validate the catalog

        Returns:
            Tuple[Song, ...]: Songs in source order

        Raises:
            CatalogLoadError: The source could not be read
            CatalogFormatError: A record is malformed or an id is repeated
        """
        logger.info("Loading catalog from %s", self._source.location)
        records = self._source.fetch()

        songs = []
        seen_ids = set()
        for index, record in enumerate(records):
            try:
                song = Song.from_dict(record)
            except CatalogFormatError as e:
                raise CatalogFormatError(f"Invalid song record at index {index}: {e}") from e

            if song.id in seen_ids:
                raise CatalogFormatError(f"Duplicate song id {song.id} at index {index}")
            seen_ids.add(song.id)
            songs.append(song)

        logger.info("Loaded %d songs", len(songs))
        return tuple(songs)
