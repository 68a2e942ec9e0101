"""
Hummingbird API client implementation.

Provides the shared request plumbing used by every resource method: URL
building against a base address, JSON body encoding, sending through a
`requests.Session`, and translating non-2xx responses into errors.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

from .anime import AnimeService
from .errors import DecodeError, EncodeError, HTTPStatusError, InvalidURLError, TransportError
from .library import LibraryService
from .users import UserService

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://hummingbird.me/api/v1/"
DEFAULT_SECURE_BASE_URL = "https://hummingbird.me/api/v1/"
DEFAULT_TIMEOUT = 10.0

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]]]


class HummingbirdClient:
    """Synchronous client for the Hummingbird API.

    Attributes:
        anime: Anime lookup and search.
        user: User profile, feed, favorites, library and authentication.
        library: Library entry update and removal.

    The base address and timeout are fixed at construction, so one client
    may be shared between threads as far as its own configuration goes.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        parts = urlsplit(base_url)
        if not parts.scheme or not parts.netloc:
            raise InvalidURLError(f"base URL must be absolute: {base_url!r}")
        self._base_url = base_url
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._timeout = timeout

        self.anime = AnimeService(self)
        self.user = UserService(self)
        self.library = LibraryService(self)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "HummingbirdClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --------------------------------------------------------------------- #
    # Request plumbing
    # --------------------------------------------------------------------- #
    def build_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[QueryParams] = None,
    ) -> requests.PreparedRequest:
        """Build a request for `path` relative to the base URL.

        Path segments taken from user input must already be percent-escaped.
        When `params` is given it replaces any query string in `path`. A
        `body` other than None is sent as JSON followed by a newline.

        Raises:
            InvalidURLError: `path` has a malformed percent-escape.
            EncodeError: `body` cannot be serialized.
        """
        url = self._resolve(path)
        if params is not None:
            scheme, netloc, url_path, _, fragment = urlsplit(url)
            url = urlunsplit((scheme, netloc, url_path, urlencode(params), fragment))

        headers = CaseInsensitiveDict(self.session.headers)
        headers["Accept"] = "application/json"
        data: Optional[bytes] = None
        if body is not None:
            data = self._encode_body(body)
            headers["Content-Type"] = "application/json"

        # Session params are not merged: the query string is exactly `params`.
        request = requests.Request(
            method=method.upper(),
            url=url,
            headers=headers,
            data=data,
            auth=self.session.auth,
            cookies=self.session.cookies,
        )
        try:
            return request.prepare()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as exc:
            raise InvalidURLError(f"invalid URL {url!r}: {exc}") from exc

    def execute(
        self,
        request: requests.PreparedRequest,
        decode: Optional[Callable[[Any], Any]] = None,
    ) -> Tuple[requests.Response, Any]:
        """Send `request` and decode a successful body with `decode`.

        Returns the response together with the decoded value (None when no
        decoder is given). Every error raised after a response arrived
        carries it as `response`.

        Raises:
            TransportError: the request could not be sent.
            HTTPStatusError: the status code is outside 200-299.
            DecodeError: a successful body does not match `decode`.
        """
        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = self.session.send(request, timeout=self._timeout, stream=True)
        except requests.RequestException as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        with response:
            try:
                content = response.content
            except requests.RequestException as exc:
                raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        logger.debug("%s %s returned %d", request.method, request.url, response.status_code)
        if not 200 <= response.status_code <= 299:
            message = self._extract_error_message(content)
            logger.warning(
                "Hummingbird request failed: %s %s: %d %s",
                request.method,
                request.url,
                response.status_code,
                message,
            )
            raise HTTPStatusError(
                str(request.method),
                str(request.url),
                response.status_code,
                message,
                response=response,
            )

        if decode is None:
            return response, None
        try:
            payload = json.loads(content)
        except ValueError as exc:
            raise DecodeError(
                f"{request.method} {request.url}: response is not valid JSON: {exc}",
                response=response,
            ) from exc
        try:
            result = decode(payload)
        except (TypeError, ValueError, KeyError) as exc:
            raise DecodeError(
                f"{request.method} {request.url}: unexpected response shape: {exc}",
                response=response,
            ) from exc
        return response, result

    def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[QueryParams] = None,
        decode: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """Build and execute a request, returning only the decoded value."""
        request = self.build_request(method, path, body, params=params)
        _, result = self.execute(request, decode)
        return result

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resolve(self, path: str) -> str:
        bad = _BAD_ESCAPE.search(path)
        if bad:
            raise InvalidURLError(
                f"invalid URL escape {path[bad.start():bad.start() + 3]!r} in {path!r}"
            )
        try:
            return urljoin(self._base_url, path)
        except ValueError as exc:
            raise InvalidURLError(f"cannot parse URL path {path!r}: {exc}") from exc

    def _encode_body(self, body: Any) -> bytes:
        if hasattr(body, "to_dict"):
            body = body.to_dict()
        try:
            text = json.dumps(body, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"cannot encode request body: {exc}") from exc
        return (text + "\n").encode("utf-8")

    @staticmethod
    def _extract_error_message(content: bytes) -> str:
        text = content.decode("utf-8", errors="replace")
        try:
            payload = json.loads(text)
        except ValueError:
            return text.strip()
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, str):
                return error
        if isinstance(payload, str):
            return payload
        return text.strip()
