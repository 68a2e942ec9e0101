"""
Exceptions raised by the Hummingbird client.

Every error derives from `HummingbirdError`; most also derive from the
closest builtin so callers may catch either.
"""
from __future__ import annotations

from typing import Optional

import requests


class HummingbirdError(RuntimeError):
    """Base class for Hummingbird API invocation errors."""


class InvalidURLError(HummingbirdError, ValueError):
    """Endpoint path could not be parsed or has a malformed escape."""


class EncodeError(HummingbirdError, TypeError):
    """Request body could not be serialized to JSON."""


class TransportError(HummingbirdError, ConnectionError):
    """Request could not be sent or its response could not be read.

    No response is available, so `response` is always None.
    """

    response: Optional[requests.Response] = None


class HTTPStatusError(HummingbirdError):
    """The API answered with a status code outside 200-299."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        message: str = "",
        response: Optional[requests.Response] = None,
    ) -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.message = message
        self.response = response
        text = f"{method} {url}: {status_code}"
        if message:
            text = f"{text} {message}"
        super().__init__(text)


class DecodeError(HummingbirdError, ValueError):
    """A successful response body did not match the expected shape."""

    def __init__(self, message: str, response: Optional[requests.Response] = None) -> None:
        super().__init__(message)
        self.response = response
