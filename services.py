import logging
from typing import Dict, List, Optional, Set
from urllib.parse import quote

import httpx

from models import Artist, RawArtist

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised by the transport for any failed search request."""


class InvalidURL(ServiceError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class BadResponse(ServiceError):
    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Unexpected status {status}")


class DecodingFailure(ServiceError):
    pass


class NetworkFailure(ServiceError):
    pass


class ArtistSearchTransport:
    """A service performing one HTTP GET per artist search."""
    def __init__(self, base_url: str, search_path: str, timeout: float = 10.0,
                 client: Optional[httpx.Client] = None):
        self.base_url = base_url
        self.search_path = search_path
        self.timeout = timeout
        self._client = client or httpx.Client()

    def build_url(self, query: str) -> httpx.URL:
        """Percent-encodes the query into the search path and validates the result."""
        url_string = f"{self.base_url}{self.search_path}?q={quote(query, safe='')}"
        try:
            url = httpx.URL(url_string)
        except httpx.InvalidURL as e:
            raise InvalidURL(url_string) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURL(url_string)
        return url

    def fetch(self, query: str) -> List[RawArtist]:
        """Fetches and decodes the artists matching the query."""
        url = self.build_url(query)
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise NetworkFailure(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("Search for %r returned status %d", query, response.status_code)
            raise BadResponse(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodingFailure(f"Invalid JSON: {e}, data: {response.text[:200]}") from e
        return self._parse_envelope(payload)

    def _parse_envelope(self, payload) -> List[RawArtist]:
        """Parses the {"data": [...]} envelope into RawArtist items."""
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise DecodingFailure(f"Expected an object with a 'data' list, got: {str(payload)[:200]}")
        return [self._parse_item(item) for item in payload["data"]]

    def _parse_item(self, item) -> RawArtist:
        if not isinstance(item, dict):
            raise DecodingFailure(f"Expected an artist object, got: {item!r}")
        artist_id, title = item.get("id"), item.get("title")
        # bool is an int subclass
        if not isinstance(artist_id, int) or isinstance(artist_id, bool):
            raise DecodingFailure(f"Artist has no integer 'id': {item!r}")
        if not isinstance(title, str):
            raise DecodingFailure(f"Artist {artist_id} has no string 'title'")
        return RawArtist(id=artist_id, title=title)

    def close(self):
        self._client.close()


class SelectionStore:
    """Keeps the selected artists for the lifetime of the app, in selection order."""
    def __init__(self):
        self._artists: Dict[int, Artist] = {}

    def save(self, artist: Artist) -> Artist:
        """Stores a selected copy of the artist. Re-saving an id keeps its position."""
        stored = Artist(id=artist.id, title=artist.title, selected=True)
        self._artists[artist.id] = stored
        return stored

    def remove(self, artist_id: int) -> None:
        self._artists.pop(artist_id, None)

    def list_ids(self) -> Set[int]:
        return set(self._artists)

    def list(self) -> List[Artist]:
        return [Artist(a.id, a.title, a.selected) for a in self._artists.values()]

    def clear(self) -> None:
        self._artists.clear()

    def __len__(self) -> int:
        return len(self._artists)

    def __contains__(self, artist_id: object) -> bool:
        return artist_id in self._artists
