"""Library methods of the Hummingbird API."""
from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Optional

from .anime import escape_segment
from .models import Entry, LibraryEntry, expect

if TYPE_CHECKING:
    from .client import HummingbirdClient

logger = logging.getLogger(__name__)


class LibraryService:
    """Library entry updates. Both methods require an authentication token.

    When `auth_token` is omitted the token cached by
    ``client.user.authenticate`` is used, and an empty one is sent if there
    is none (the API then answers 401).
    """

    def __init__(self, client: "HummingbirdClient") -> None:
        self._client = client

    def _token(self, auth_token: Optional[str]) -> str:
        if auth_token is not None:
            return auth_token
        return self._client.user.token or ""

    def update(
        self,
        anime_id: str,
        entry: Optional[Entry] = None,
        auth_token: Optional[str] = None,
    ) -> LibraryEntry:
        """Add an anime to the user's library or update its entry.

        Only the fields set on `entry` are sent; a new entry gets the status
        "currently-watching" from the API when none is given.
        """
        body = dataclasses.replace(
            entry or Entry(),
            id=anime_id,
            auth_token=self._token(auth_token),
        )
        result = self._client.call(
            "POST",
            f"libraries/{escape_segment(anime_id)}",
            body=body,
            decode=LibraryEntry.from_dict,
        )
        logger.debug("Updated library entry for %s", anime_id)
        return result

    def remove(self, anime_id: str, auth_token: Optional[str] = None) -> bool:
        """Remove an anime from the user's library; returns whether it was removed."""
        return self._client.call(
            "POST",
            f"libraries/{escape_segment(anime_id)}/remove",
            body={"id": anime_id, "auth_token": self._token(auth_token)},
            decode=expect(bool),
        )
