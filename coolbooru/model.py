"""Data models for Coolbooru.

Plain records mirroring the JSON shapes returned by the Derpibooru API. Each
record is built with from_dict() and serialized back with to_dict(). Unknown
JSON keys are ignored and missing ones fall back to the field default.
Values that cannot be coerced to the declared type raise ParseError, so a
record is either fully parsed or not returned at all.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import ParseError


# ============================================================================
# Coercion helpers
# ============================================================================

def _require_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object for {what}, got {type(data).__name__}")
    return data


def _int(data: Dict[str, Any], key: str, default: Optional[int] = 0) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ParseError(f"Field {key!r} is not an integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ParseError(f"Field {key!r} is not an integer: {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ParseError(f"Field {key!r} is not an integer: {value!r}") from None


def _float(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    value = data.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ParseError(f"Field {key!r} is not a number: {value!r}") from None


def _bool(data: Dict[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ParseError(f"Field {key!r} is not a boolean: {value!r}")


def _str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ParseError(f"Field {key!r} is not a string: {value!r}")
    return str(value)


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"Field {key!r} is not a list: {type(value).__name__}")
    return value


def _str_list(data: Dict[str, Any], key: str) -> List[str]:
    values = _list(data, key)
    for v in values:
        if v is None or isinstance(v, (dict, list)):
            raise ParseError(f"Field {key!r} has a non-string entry: {v!r}")
    return [str(v) for v in values]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the API.

    A trailing 'Z' is accepted; naive timestamps are taken as UTC.

    Raises:
        ParseError: If the value is not a parseable timestamp string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"Timestamp is not a string: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise ParseError(f"Invalid timestamp: {value!r}") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _timestamp(data: Dict[str, Any], key: str) -> Optional[datetime]:
    return parse_timestamp(data.get(key))


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ============================================================================
# Records
# ============================================================================

@dataclass
class Representations:
    """URLs of an item's thumbnail and image variants, smallest first."""

    thumb_tiny: Optional[str] = None
    thumb_small: Optional[str] = None
    thumb: Optional[str] = None
    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None
    tall: Optional[str] = None
    full: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Representations":
        d = _require_dict(data, "representations")
        return cls(**{name: _str(d, name) for name in cls.__dataclass_fields__})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_ITEM_TIMESTAMPS = ("created_at", "updated_at", "first_seen_at")


@dataclass
class Item:
    """An image post.

    Attributes:
        id: Derpibooru id of the image
        created_at, updated_at, first_seen_at: Timestamps (timezone aware)
        duplicate_reports: Opaque list, passed through untouched
        uploader_id, uploader: Uploader identity
        score, upvotes, downvotes, faves, comment_count: Engagement counters
        width, height, aspect_ratio: Dimensions
        file_name, mime_type, original_format: File metadata
        sha512_hash, orig_sha512_hash: Hash of the served and the uploaded file
        description: Image description
        image: Image page URI without scheme
        tags: Comma-separated tag names
        tag_ids: Ids of the tags on the image
        source_url: Source URL, if provided
        representations: Thumbnail and image variant URLs
        is_rendered, is_optimized: Processing flags
    """

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    first_seen_at: Optional[datetime] = None
    duplicate_reports: List[Any] = field(default_factory=list)
    uploader_id: Optional[str] = None
    uploader: Optional[str] = None
    score: int = 0
    upvotes: int = 0
    downvotes: int = 0
    faves: int = 0
    comment_count: int = 0
    width: int = 0
    height: int = 0
    aspect_ratio: float = 0.0
    file_name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[str] = None
    tag_ids: List[str] = field(default_factory=list)
    original_format: Optional[str] = None
    mime_type: Optional[str] = None
    sha512_hash: Optional[str] = None
    orig_sha512_hash: Optional[str] = None
    source_url: Optional[str] = None
    representations: Optional[Representations] = None
    is_rendered: bool = False
    is_optimized: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Item":
        d = _require_dict(data, "item")
        reps = d.get("representations")
        return cls(
            id=_str(d, "id"),
            created_at=_timestamp(d, "created_at"),
            updated_at=_timestamp(d, "updated_at"),
            first_seen_at=_timestamp(d, "first_seen_at"),
            duplicate_reports=list(_list(d, "duplicate_reports")),
            uploader_id=_str(d, "uploader_id"),
            uploader=_str(d, "uploader"),
            score=_int(d, "score"),
            upvotes=_int(d, "upvotes"),
            downvotes=_int(d, "downvotes"),
            faves=_int(d, "faves"),
            comment_count=_int(d, "comment_count"),
            width=_int(d, "width"),
            height=_int(d, "height"),
            aspect_ratio=_float(d, "aspect_ratio"),
            file_name=_str(d, "file_name"),
            description=_str(d, "description"),
            image=_str(d, "image"),
            tags=_str(d, "tags"),
            tag_ids=_str_list(d, "tag_ids"),
            original_format=_str(d, "original_format"),
            mime_type=_str(d, "mime_type"),
            sha512_hash=_str(d, "sha512_hash"),
            orig_sha512_hash=_str(d, "orig_sha512_hash"),
            source_url=_str(d, "source_url"),
            representations=Representations.from_dict(reps) if reps is not None else None,
            is_rendered=_bool(d, "is_rendered"),
            is_optimized=_bool(d, "is_optimized"),
        )

    @property
    def tag_list(self) -> List[str]:
        """Tag names split out of the comma-separated tags string."""
        if not self.tags:
            return []
        return [t.strip() for t in self.tags.split(",") if t.strip()]

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        for key in _ITEM_TIMESTAMPS:
            d[key] = _iso(getattr(self, key))
        return d


def _items(data: Dict[str, Any], key: str) -> List[Item]:
    return [Item.from_dict(entry) for entry in _list(data, key)]


@dataclass
class SearchResult:
    """Result of a search: one page of items plus the total hit count."""

    search: List[Item] = field(default_factory=list)
    total: int = 0
    interactions: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SearchResult":
        d = _require_dict(data, "search result")
        return cls(
            search=_items(d, "search"),
            total=_int(d, "total"),
            interactions=list(_list(d, "interactions")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search": [i.to_dict() for i in self.search],
            "total": self.total,
            "interactions": list(self.interactions),
        }


@dataclass
class ListsSnapshot:
    """The default lists: top scoring, top commented and all-time top scoring."""

    top_scoring: List[Item] = field(default_factory=list)
    top_commented: List[Item] = field(default_factory=list)
    all_time_top_scoring: List[Item] = field(default_factory=list)
    interactions: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ListsSnapshot":
        d = _require_dict(data, "lists")
        return cls(
            top_scoring=_items(d, "top_scoring"),
            top_commented=_items(d, "top_commented"),
            all_time_top_scoring=_items(d, "all_time_top_scoring"),
            interactions=list(_list(d, "interactions")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "top_scoring": [i.to_dict() for i in self.top_scoring],
            "top_commented": [i.to_dict() for i in self.top_commented],
            "all_time_top_scoring": [i.to_dict() for i in self.all_time_top_scoring],
            "interactions": list(self.interactions),
        }


@dataclass
class ListResult:
    """One page of a named list."""

    images: List[Item] = field(default_factory=list)
    interactions: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ListResult":
        d = _require_dict(data, "list")
        # Older responses used the singular key
        key = "images" if "images" in d else "image"
        return cls(
            images=_items(d, key),
            interactions=list(_list(d, "interactions")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [i.to_dict() for i in self.images],
            "interactions": list(self.interactions),
        }


@dataclass
class ImageCollection:
    """One page of front-page images."""

    images: List[Item] = field(default_factory=list)
    interactions: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ImageCollection":
        d = _require_dict(data, "images")
        return cls(
            images=_items(d, "images"),
            interactions=list(_list(d, "interactions")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [i.to_dict() for i in self.images],
            "interactions": list(self.interactions),
        }


@dataclass
class Gallery:
    """Metadata of a user gallery (the images themselves are not included)."""

    id: int = 0
    title: Optional[str] = None
    description: Optional[str] = None
    creator_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    image_count: int = 0
    spoiler_warning: Optional[str] = None
    watcher_count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Gallery":
        d = _require_dict(data, "gallery")
        return cls(
            id=_int(d, "id"),
            title=_str(d, "title"),
            description=_str(d, "description"),
            creator_id=_int(d, "creator_id"),
            created_at=_timestamp(d, "created_at"),
            updated_at=_timestamp(d, "updated_at"),
            image_count=_int(d, "image_count"),
            spoiler_warning=_str(d, "spoiler_warning"),
            watcher_count=_int(d, "watcher_count"),
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["created_at"] = _iso(self.created_at)
        d["updated_at"] = _iso(self.updated_at)
        return d


def parse_galleries(data: Any) -> List[Gallery]:
    """Parse the array returned by the user galleries endpoint."""
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of galleries, got {type(data).__name__}")
    return [Gallery.from_dict(entry) for entry in data]


@dataclass
class EmbedInfo:
    """oEmbed metadata for one item."""

    version: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    author_url: Optional[str] = None
    author_name: Optional[str] = None
    provider_name: Optional[str] = None
    provider_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    cache_age: int = 0
    derpibooru_id: int = 0
    derpibooru_score: int = 0
    derpibooru_comments: int = 0
    derpibooru_tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EmbedInfo":
        d = _require_dict(data, "oembed response")
        return cls(
            version=_str(d, "version"),
            type=_str(d, "type"),
            title=_str(d, "title"),
            author_url=_str(d, "author_url"),
            author_name=_str(d, "author_name"),
            provider_name=_str(d, "provider_name"),
            provider_url=_str(d, "provider_url"),
            thumbnail_url=_str(d, "thumbnail_url"),
            cache_age=_int(d, "cache_age"),
            derpibooru_id=_int(d, "derpibooru_id"),
            derpibooru_score=_int(d, "derpibooru_score"),
            derpibooru_comments=_int(d, "derpibooru_comments"),
            derpibooru_tags=_str_list(d, "derpibooru_tags"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
