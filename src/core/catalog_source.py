"""
Catalog Source Abstraction Layer

Defines where the song catalog comes from. A source only fetches raw
records; validation into Song objects happens in CatalogService.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from core.errors import CatalogFormatError, CatalogLoadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class CatalogSource(ABC):
    """Catalog source abstract interface"""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable location, used in log and error messages"""
        ...

    @abstractmethod
    def fetch(self) -> List[Dict[str, Any]]:
        """Fetch the raw catalog records

        Returns:
            The decoded JSON array of song records

        Raises:
            CatalogLoadError: When the catalog cannot be read
            CatalogFormatError: When the payload is not a JSON array
        """
        ...


def _decode_catalog(raw: bytes, location: str) -> List[Dict[str, Any]]:
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CatalogFormatError(f"Catalog at {location} is not valid UTF-8: {e}") from e
    except ValueError as e:
        raise CatalogFormatError(f"Catalog at {location} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogFormatError(
            f"Catalog at {location} must be a JSON array, got {type(data).__name__}"
        )
    return data


class JsonFileCatalogSource(CatalogSource):
    """Reads the catalog from a local JSON file"""

    def __init__(self, path: str):
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def fetch(self) -> List[Dict[str, Any]]:
        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise CatalogLoadError(f"Failed to read catalog {self._path}: {e}") from e
        return _decode_catalog(raw, self.location)


class HttpCatalogSource(CatalogSource):
    """Fetches the catalog with a single HTTP GET

    Any non-success status is a failure; there is no retry.
    """

    def __init__(self, url: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self._url = url
        self._timeout = timeout_seconds

    @property
    def location(self) -> str:
        return self._url

    def fetch(self) -> List[Dict[str, Any]]:
        req = Request(self._url, headers={"Accept": "application/json"}, method="GET")
        logger.debug("Catalog request to %s", self._url)

        try:
            with urlopen(req, timeout=self._timeout) as resp:
                status = getattr(resp, "status", 200)
                if not 200 <= status < 300:
                    raise CatalogLoadError(f"Failed to fetch songs: HTTP {status}")
                raw = resp.read()
        except HTTPError as e:
            raise CatalogLoadError(f"Failed to fetch songs: HTTP {e.code} {e.reason}") from e
        except URLError as e:
            raise CatalogLoadError(f"Failed to fetch songs: {e.reason}") from e
        except OSError as e:
            # socket timeouts surface as plain OSError
            raise CatalogLoadError(f"Failed to fetch songs: {e}") from e

        return _decode_catalog(raw, self.location)


def create_catalog_source(location: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> CatalogSource:
    """Pick an HTTP source for http(s) URLs, a file source otherwise"""
    if location.startswith(("http://", "https://")):
        return HttpCatalogSource(location, timeout_seconds)
    return JsonFileCatalogSource(location)
