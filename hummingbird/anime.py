"""Anime methods of the Hummingbird API."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List
from urllib.parse import quote

from .models import Anime, list_of

if TYPE_CHECKING:
    from .client import HummingbirdClient

logger = logging.getLogger(__name__)


def escape_segment(value: str) -> str:
    """Percent-escape a user supplied path segment.

    Existing escapes are kept as they are, so a malformed one such as
    ``%foo`` is rejected when the request is built.
    """
    return quote(value, safe="%")


class AnimeService:
    """Anime lookup and search. Neither method requires authentication."""

    def __init__(self, client: "HummingbirdClient") -> None:
        self._client = client

    def get(self, anime_id: str, title_language_preference: str = "") -> Anime:
        """Fetch an anime by ID or slug.

        `title_language_preference` is one of "canonical", "english" or
        "romanized"; the API uses "canonical" when it is empty.
        """
        params = None
        if title_language_preference:
            params = {"title_language_preference": title_language_preference}
        return self._client.call(
            "GET",
            f"anime/{escape_segment(str(anime_id))}",
            params=params,
            decode=Anime.from_dict,
        )

    def search(self, query: str) -> List[Anime]:
        """Fuzzy search anime by title; the API returns at most five, without genres."""
        results = self._client.call(
            "GET",
            "search/anime",
            params={"query": query},
            decode=list_of(Anime.from_dict),
        )
        logger.debug("Search for %r returned %d anime", query, len(results))
        return results
