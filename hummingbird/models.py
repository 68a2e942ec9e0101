"""
Typed structures for Hummingbird API payloads.

Fields default to None and are left out of serialized output while unset,
so a decoded value only carries what the API actually sent.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

STATUS_CURRENTLY_WATCHING = "currently-watching"
STATUS_PLAN_TO_WATCH = "plan-to-watch"
STATUS_COMPLETED = "completed"
STATUS_ON_HOLD = "on-hold"
STATUS_DROPPED = "dropped"

LIBRARY_STATUSES = (
    STATUS_CURRENTLY_WATCHING,
    STATUS_PLAN_TO_WATCH,
    STATUS_COMPLETED,
    STATUS_ON_HOLD,
    STATUS_DROPPED,
)

TITLE_CANONICAL = "canonical"
TITLE_ENGLISH = "english"
TITLE_ROMANIZED = "romanized"

T = TypeVar("T")
M = TypeVar("M", bound="Model")


def parse_time(value: Any) -> datetime:
    """Parse an API timestamp such as ``2014-06-21T19:28:00.443Z``."""
    if not isinstance(value, str):
        raise TypeError(f"expected a timestamp string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def list_of(decode: Callable[[Any], T]) -> Callable[[Any], List[T]]:
    """Wrap an item decoder so it decodes a JSON array of items."""

    def decode_list(data: Any) -> List[T]:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [decode(item) for item in data]

    return decode_list


def expect(kind: Type[T]) -> Callable[[Any], T]:
    """Decoder for a bare JSON primitive such as the token string."""

    def decode_primitive(data: Any) -> T:
        if not isinstance(data, kind):
            raise TypeError(f"expected a JSON {kind.__name__}, got {type(data).__name__}")
        return data

    return decode_primitive


def _nested(decode: Callable[[Any], Any]) -> Any:
    return field(default=None, metadata={"decode": decode})


def _matches(hint: Any, value: Any) -> bool:
    """Check a plain JSON value against a field annotation."""
    if get_origin(hint) is Union:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) != 1:
            return True
        hint = args[0]
    kind = get_origin(hint) or hint
    # bool is an int subclass; JSON true is never a count.
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind in (bool, str, list, dict):
        return isinstance(value, kind)
    return True


def _encode(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


@dataclass
class Model:
    """Base for API payloads: decode from and encode to JSON objects."""

    # Fields serialized even when unset.
    always_sent: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def from_dict(cls: Type[M], data: Any) -> M:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}")
        hints = get_type_hints(cls)
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            decode = f.metadata.get("decode")
            if value is None:
                pass
            elif decode is not None:
                value = decode(value)
            elif not _matches(hints[f.name], value):
                raise TypeError(
                    f"{cls.__name__}.{f.name}: unexpected JSON {type(value).__name__} {value!r}"
                )
            values[f.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name not in self.always_sent:
                continue
            payload[f.name] = _encode(value)
        return payload


@dataclass
class Genre(Model):
    name: Optional[str] = None


@dataclass
class Anime(Model):
    """An anime as returned by the anime, search and favorites methods.

    ``fav_id`` and ``fav_rank`` are only present for user favorites.
    """

    id: Optional[int] = None
    slug: Optional[str] = None
    status: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    alternate_title: Optional[str] = None
    episode_count: Optional[int] = None
    episode_length: Optional[int] = None
    cover_image: Optional[str] = None
    synopsis: Optional[str] = None
    show_type: Optional[str] = None
    started_airing: Optional[str] = None
    finished_airing: Optional[str] = None
    community_rating: Optional[float] = None
    age_rating: Optional[str] = None
    genres: Optional[List[Genre]] = _nested(list_of(Genre.from_dict))
    fav_id: Optional[int] = None
    fav_rank: Optional[int] = None


@dataclass
class Favorite(Model):
    id: Optional[int] = None
    user_id: Optional[int] = None
    item_id: Optional[int] = None
    item_type: Optional[str] = None
    created_at: Optional[datetime] = _nested(parse_time)
    updated_at: Optional[datetime] = _nested(parse_time)
    fav_rank: Optional[int] = None


@dataclass
class User(Model):
    name: Optional[str] = None
    waifu: Optional[str] = None
    waifu_or_husbando: Optional[str] = None
    waifu_slug: Optional[str] = None
    waifu_char_id: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    avatar: Optional[str] = None
    cover_image: Optional[str] = None
    about: Optional[str] = None
    bio: Optional[str] = None
    karma: Optional[int] = None
    life_spent_on_anime: Optional[int] = None
    show_adult_content: Optional[bool] = None
    title_language_preference: Optional[str] = None
    last_library_update: Optional[datetime] = _nested(parse_time)
    online: Optional[bool] = None
    following: Optional[bool] = None
    favorites: Optional[List[Favorite]] = _nested(list_of(Favorite.from_dict))


@dataclass
class LibraryEntryRating(Model):
    """Rating of a library entry.

    With type "simple" the value is one of "negative", "neutral" or
    "positive"; with type "advanced" it is a number between "0.0" and "5.0".
    """

    type: Optional[str] = None
    value: Optional[str] = None


@dataclass
class LibraryEntry(Model):
    id: Optional[int] = None
    episodes_watched: Optional[int] = None
    last_watched: Optional[datetime] = _nested(parse_time)
    updated_at: Optional[datetime] = _nested(parse_time)
    rewatched_times: Optional[int] = None
    notes: Optional[str] = None
    notes_present: Optional[bool] = None
    status: Optional[str] = None
    private: Optional[bool] = None
    rewatching: Optional[bool] = None
    anime: Optional[Anime] = _nested(Anime.from_dict)
    rating: Optional[LibraryEntryRating] = _nested(LibraryEntryRating.from_dict)


@dataclass
class Entry(Model):
    """Body of a library update.

    ``id`` and ``auth_token`` are always sent; everything else only when set.
    """

    always_sent: ClassVar[Tuple[str, ...]] = ("id", "auth_token")

    id: str = ""
    auth_token: str = ""
    status: Optional[str] = None
    privacy: Optional[str] = None
    rating: Optional[float] = None
    sane_rating_update: Optional[float] = None
    rewatching: Optional[bool] = None
    rewatched_times: Optional[int] = None
    notes: Optional[str] = None
    episodes_watched: Optional[int] = None
    increment_episodes: Optional[bool] = None


@dataclass
class StoryUser(Model):
    name: Optional[str] = None
    url: Optional[str] = None
    avatar: Optional[str] = None
    avatar_small: Optional[str] = None
    nb: Optional[bool] = None


@dataclass
class Substory(Model):
    id: Optional[int] = None
    substory_type: Optional[str] = None
    created_at: Optional[datetime] = _nested(parse_time)
    comment: Optional[str] = None
    episode_number: Optional[int] = None
    followed_user: Optional[StoryUser] = _nested(StoryUser.from_dict)
    new_status: Optional[str] = None
    service: Optional[str] = None
    permissions: Optional[Dict[str, Any]] = None


@dataclass
class Story(Model):
    """An activity feed item."""

    id: Optional[int] = None
    story_type: Optional[str] = None
    user: Optional[StoryUser] = _nested(StoryUser.from_dict)
    updated_at: Optional[datetime] = _nested(parse_time)
    self_post: Optional[bool] = None
    poster: Optional[StoryUser] = _nested(StoryUser.from_dict)
    media: Optional[Anime] = _nested(Anime.from_dict)
    substories_count: Optional[int] = None
    substories: Optional[List[Substory]] = _nested(list_of(Substory.from_dict))
