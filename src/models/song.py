"""
Song data model
"""

from dataclasses import dataclass
from typing import Any, Dict

from core.errors import CatalogFormatError


@dataclass(frozen=True)
class Song:
    """
    Song data model

    Represents one immutable catalog entry. Songs are created once when the
    catalog loads and are never mutated afterwards.
    """

    id: int
    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    cover_image: str = ""

    @property
    def display_name(self) -> str:
        """Display name"""
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title

    def to_dict(self) -> dict:
        """Convert to the catalog wire shape"""
        return {
            'id': self.id,
            'title': self.title,
            'artist': self.artist,
            'album': self.album,
            'genre': self.genre,
            'coverImage': self.cover_image,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Song':
        """
        Create a Song from a catalog record

        Args:
            data: Record with keys id, title, artist, album, genre, coverImage

        Raises:
            CatalogFormatError: If the record is not a mapping or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise CatalogFormatError(f"Song record must be an object, got {type(data).__name__}")

        song_id = data.get('id')
        # bool is an int subclass; reject it explicitly
        if not isinstance(song_id, int) or isinstance(song_id, bool):
            raise CatalogFormatError(f"Song id must be an integer: {song_id!r}")

        fields = {}
        for key, attr in (
            ('title', 'title'),
            ('artist', 'artist'),
            ('album', 'album'),
            ('genre', 'genre'),
            ('coverImage', 'cover_image'),
        ):
            value = data.get(key, '')
            if not isinstance(value, str):
                raise CatalogFormatError(f"Song {song_id} field '{key}' must be a string: {value!r}")
            fields[attr] = value

        return cls(id=song_id, **fields)
