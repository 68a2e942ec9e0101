"""User methods of the Hummingbird API."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from .anime import escape_segment
from .models import STATUS_CURRENTLY_WATCHING, Anime, LibraryEntry, Story, User, expect, list_of

if TYPE_CHECKING:
    from .client import HummingbirdClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    username: str = ""
    email: str = ""
    password: str = ""

    def to_dict(self) -> dict:
        return {"username": self.username, "email": self.email, "password": self.password}


class UserService:
    """User profile, feed, favorites, library and authentication.

    The token returned by the last successful `authenticate` call is kept
    so library updates can fall back to it. Credentials and token are
    guarded by a lock so concurrent callers always see a consistent value.
    """

    def __init__(self, client: "HummingbirdClient") -> None:
        self._client = client
        self._lock = threading.Lock()
        self._credentials: Optional[Credentials] = None
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        """Token cached by the most recent successful `authenticate`."""
        with self._lock:
            return self._token

    @property
    def has_credentials(self) -> bool:
        with self._lock:
            return self._credentials is not None

    def set_credentials(self, username: str = "", email: str = "", password: str = "") -> None:
        """Store credentials for `authenticate()`. Only one of username and email is needed."""
        with self._lock:
            self._credentials = Credentials(username, email, password)

    def authenticate(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str:
        """Exchange credentials for an authentication token.

        Without arguments the credentials from `set_credentials` are used.

        Raises:
            ValueError: no credentials were given or stored.
        """
        if username is None and email is None and password is None:
            with self._lock:
                credentials = self._credentials
            if credentials is None:
                raise ValueError("credentials are not set")
        else:
            credentials = Credentials(username or "", email or "", password or "")

        token = self._client.call(
            "POST",
            "users/authenticate",
            body=credentials.to_dict(),
            decode=expect(str),
        )
        with self._lock:
            self._token = token
        logger.info("Authenticated Hummingbird user %s", credentials.username or credentials.email)
        return token

    def get(self, username: str) -> User:
        """Fetch a user's profile. Does not require authentication."""
        return self._client.call("GET", f"users/{escape_segment(username)}", decode=User.from_dict)

    def feed(self, username: str) -> List[Story]:
        """Fetch a user's activity feed."""
        return self._client.call(
            "GET",
            f"users/{escape_segment(username)}/feed",
            decode=list_of(Story.from_dict),
        )

    def favorite_anime(self, username: str) -> List[Anime]:
        """Fetch a user's favorite anime, ranked by ``fav_rank``."""
        return self._client.call(
            "GET",
            f"users/{escape_segment(username)}/favorite_anime",
            decode=list_of(Anime.from_dict),
        )

    def library(self, username: str, status: str = "") -> List[LibraryEntry]:
        """Fetch the library entries of a user having `status`.

        `status` defaults to "currently-watching".
        """
        return self._client.call(
            "GET",
            f"users/{escape_segment(username)}/library",
            params={"status": status or STATUS_CURRENTLY_WATCHING},
            decode=list_of(LibraryEntry.from_dict),
        )
