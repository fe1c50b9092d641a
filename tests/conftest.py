"""
Test Configuration File

Unified setup for Python path, avoiding sys.path.insert in each test file.
Provides song catalog fixtures shared by the queue tests.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class StaticCatalogSource:
    """Catalog source returning fixed records, or raising a fixed error."""

    def __init__(self, records=None, error=None):
        self._records = records or []
        self._error = error
        self.fetch_count = 0

    @property
    def location(self):
        return "memory://catalog"

    def fetch(self):
        self.fetch_count += 1
        if self._error is not None:
            raise self._error
        return list(self._records)


def make_song(song_id, genre="rock", title=None):
    from models.song import Song

    return Song(
        id=song_id,
        title=title or f"Song {song_id}",
        artist=f"Artist {song_id}",
        album=f"Album {song_id}",
        genre=genre,
        cover_image=f"https://example.com/covers/{song_id}.jpg",
    )


def make_catalog(count, genres=("rock", "jazz", "pop")):
    return tuple(make_song(i, genres[(i - 1) % len(genres)]) for i in range(1, count + 1))


@pytest.fixture
def small_catalog():
    """3 rock songs (ids 1-3) and 2 jazz songs (ids 4-5)."""
    return (
        make_song(1, "rock"),
        make_song(2, "rock"),
        make_song(3, "rock"),
        make_song(4, "jazz"),
        make_song(5, "jazz"),
    )


@pytest.fixture
def large_catalog():
    """30 songs cycling through rock, jazz and pop."""
    return make_catalog(30)


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    from services.config_service import ConfigService

    ConfigService.reset_instance()
    yield
    ConfigService.reset_instance()
