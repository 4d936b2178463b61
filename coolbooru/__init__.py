"""Coolbooru: a client for the Derpibooru JSON API.

Key modules:
- derpibooru_api: One function per endpoint (search, item, lists, ...)
- queries: Query objects holding request parameters
- urls: Pure URL construction from query objects
- model: Dataclass records for the API's JSON responses
- exceptions: Error hierarchy
- core: Configuration and HTTP transport

Usage:
    import coolbooru
    result = coolbooru.search("pinkie pie", page=2)
    for item in result.search:
        print(item.id, item.score)
"""

__version__ = "0.1.0"

# Re-export commonly used symbols for convenience
from .derpibooru_api import (
    embed,
    images,
    item,
    list_images,
    lists,
    search,
    user_galleries,
    user_gallery,
)
from .exceptions import (
    CoolbooruError,
    HTTPStatusError,
    InvalidArgumentError,
    NetworkError,
    ParseError,
)
from .model import (
    EmbedInfo,
    Gallery,
    ImageCollection,
    Item,
    ListResult,
    ListsSnapshot,
    Representations,
    SearchResult,
)
from .queries import (
    CONSTRAINT_CREATED,
    CONSTRAINT_ID,
    CONSTRAINT_UPDATED,
    ORDER_ASCENDING,
    ORDER_DESCENDING,
    SORT_CREATED_AT,
    SORT_HEIGHT,
    SORT_RANDOM,
    SORT_RELEVANCE,
    SORT_SCORE,
    SORT_WIDTH,
    GalleryQuery,
    ImageQuery,
    ListQuery,
    SearchQuery,
)

__all__ = [
    "search",
    "item",
    "lists",
    "list_images",
    "user_galleries",
    "user_gallery",
    "images",
    "embed",
    "CoolbooruError",
    "HTTPStatusError",
    "InvalidArgumentError",
    "NetworkError",
    "ParseError",
    "EmbedInfo",
    "Gallery",
    "ImageCollection",
    "Item",
    "ListResult",
    "ListsSnapshot",
    "Representations",
    "SearchResult",
    "SearchQuery",
    "ListQuery",
    "GalleryQuery",
    "ImageQuery",
    "CONSTRAINT_ID",
    "CONSTRAINT_CREATED",
    "CONSTRAINT_UPDATED",
    "SORT_CREATED_AT",
    "SORT_SCORE",
    "SORT_RELEVANCE",
    "SORT_WIDTH",
    "SORT_HEIGHT",
    "SORT_RANDOM",
    "ORDER_ASCENDING",
    "ORDER_DESCENDING",
]
