"""
Command line access to the Hummingbird API.

Example:
    python -m hummingbird anime log-horizon --title-language english
    python -m hummingbird library cybrox --status completed
    HUMMINGBIRD_USERNAME=me HUMMINGBIRD_PASSWORD=secret python -m hummingbird update nichijou --increment
"""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Optional, Sequence

from .client import HummingbirdClient
from .config import Settings
from .errors import HummingbirdError
from .models import LIBRARY_STATUSES, TITLE_CANONICAL, TITLE_ENGLISH, TITLE_ROMANIZED, Entry, Model

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the Hummingbird anime tracking API.")
    parser.add_argument("--base-url", help="API base URL (default: env HUMMINGBIRD_BASE_URL)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    anime = sub.add_parser("anime", help="show an anime by ID or slug")
    anime.add_argument("anime_id")
    anime.add_argument(
        "--title-language",
        default="",
        choices=[TITLE_CANONICAL, TITLE_ENGLISH, TITLE_ROMANIZED],
        help="title language preference",
    )
    anime.set_defaults(func=do_anime)

    search = sub.add_parser("search", help="search anime by title")
    search.add_argument("query")
    search.set_defaults(func=do_search)

    user = sub.add_parser("user", help="show a user profile")
    user.add_argument("username")
    user.set_defaults(func=do_user)

    feed = sub.add_parser("feed", help="show a user's activity feed")
    feed.add_argument("username")
    feed.set_defaults(func=do_feed)

    favorites = sub.add_parser("favorites", help="list a user's favorite anime")
    favorites.add_argument("username")
    favorites.set_defaults(func=do_favorites)

    library = sub.add_parser("library", help="list a user's library entries")
    library.add_argument("username")
    library.add_argument("--status", default="", choices=LIBRARY_STATUSES)
    library.set_defaults(func=do_library)

    auth = sub.add_parser("authenticate", help="print an authentication token")
    auth.set_defaults(func=do_authenticate)

    update = sub.add_parser("update", help="add or update a library entry")
    update.add_argument("anime_id")
    update.add_argument("--token", help="authentication token (default: authenticate from env)")
    update.add_argument("--status", choices=LIBRARY_STATUSES)
    update.add_argument("--privacy", choices=["public", "private"])
    update.add_argument("--rating", type=float)
    update.add_argument("--episodes", type=int, dest="episodes_watched")
    update.add_argument("--increment", action="store_true", help="increment episodes watched by one")
    update.add_argument("--rewatching", action="store_true", default=None)
    update.add_argument("--rewatched-times", type=int)
    update.add_argument("--notes")
    update.set_defaults(func=do_update)

    remove = sub.add_parser("remove", help="remove an anime from the library")
    remove.add_argument("anime_id")
    remove.add_argument("--token", help="authentication token (default: authenticate from env)")
    remove.set_defaults(func=do_remove)

    return parser.parse_args(argv)


def _dump(value: Any) -> None:
    if isinstance(value, Model):
        value = value.to_dict()
    elif isinstance(value, list):
        value = [item.to_dict() if isinstance(item, Model) else item for item in value]
    print(json.dumps(value, ensure_ascii=False, indent=2))


def _token(client: HummingbirdClient, args: argparse.Namespace) -> Optional[str]:
    if args.token:
        return args.token
    if not client.user.has_credentials:
        logger.warning("No token given and no credentials configured; sending an empty token")
        return None
    return client.user.authenticate()


def do_anime(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.anime.get(args.anime_id, args.title_language))


def do_search(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.anime.search(args.query))


def do_user(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.user.get(args.username))


def do_feed(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.user.feed(args.username))


def do_favorites(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.user.favorite_anime(args.username))


def do_library(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.user.library(args.username, args.status))


def do_authenticate(client: HummingbirdClient, args: argparse.Namespace) -> None:
    print(client.user.authenticate())


def do_update(client: HummingbirdClient, args: argparse.Namespace) -> None:
    entry = Entry(
        status=args.status,
        privacy=args.privacy,
        rating=args.rating,
        rewatching=args.rewatching,
        rewatched_times=args.rewatched_times,
        notes=args.notes,
        episodes_watched=args.episodes_watched,
        increment_episodes=True if args.increment else None,
    )
    _dump(client.library.update(args.anime_id, entry, auth_token=_token(client, args)))


def do_remove(client: HummingbirdClient, args: argparse.Namespace) -> None:
    _dump(client.library.remove(args.anime_id, auth_token=_token(client, args)))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if args.base_url:
        settings = dataclasses.replace(settings, base_url=args.base_url)
    if args.timeout is not None:
        settings = dataclasses.replace(settings, timeout=args.timeout)

    try:
        with settings.client() as client:
            args.func(client, args)
    except (HummingbirdError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
