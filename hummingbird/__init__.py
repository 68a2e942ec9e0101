"""
Hummingbird API client package.

This package contains:
- `client`: request plumbing shared by every API method
- `anime`, `users`, `library`: per-resource API methods
- `models`: typed API payloads
- `errors`: exception hierarchy
- `config`: environment configuration
- `cli`: command line interface
"""

from .client import DEFAULT_BASE_URL, DEFAULT_SECURE_BASE_URL, HummingbirdClient
from .errors import (
    DecodeError,
    EncodeError,
    HTTPStatusError,
    HummingbirdError,
    InvalidURLError,
    TransportError,
)
from .models import (
    STATUS_COMPLETED,
    STATUS_CURRENTLY_WATCHING,
    STATUS_DROPPED,
    STATUS_ON_HOLD,
    STATUS_PLAN_TO_WATCH,
    Anime,
    Entry,
    Favorite,
    Genre,
    LibraryEntry,
    LibraryEntryRating,
    Story,
    Substory,
    User,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SECURE_BASE_URL",
    "HummingbirdClient",
    "DecodeError",
    "EncodeError",
    "HTTPStatusError",
    "HummingbirdError",
    "InvalidURLError",
    "TransportError",
    "STATUS_COMPLETED",
    "STATUS_CURRENTLY_WATCHING",
    "STATUS_DROPPED",
    "STATUS_ON_HOLD",
    "STATUS_PLAN_TO_WATCH",
    "Anime",
    "Entry",
    "Favorite",
    "Genre",
    "LibraryEntry",
    "LibraryEntryRating",
    "Story",
    "Substory",
    "User",
]
