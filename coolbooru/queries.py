"""Query objects for Coolbooru endpoints.

Each query object is a mutable parameter holder for one request. Free-text
fields that end up in the URL (search query, sort field) are percent-escaped
when they are assigned, so the stored value is already URL safe. The image
query's sort order is validated on assignment.
"""
from __future__ import annotations

from typing import Optional

from .exceptions import InvalidArgumentError
from .query_helpers import escape_query_value

# Range constraints for the front-page image endpoint
CONSTRAINT_ID = "id"
CONSTRAINT_UPDATED = "updated"
CONSTRAINT_CREATED = "created"

# Sort fields for search
SORT_CREATED_AT = "created_at"
SORT_SCORE = "score"
SORT_RELEVANCE = "relevance"
SORT_WIDTH = "width"
SORT_HEIGHT = "height"
SORT_RANDOM = "random"

ORDER_ASCENDING = "a"
ORDER_DESCENDING = "d"
_VALID_ORDERS = (ORDER_ASCENDING, ORDER_DESCENDING, None)


class SearchQuery:
    """Arguments to a search.

    Attributes:
        query: Search expression, stored percent-escaped (defaults to "*", all tags)
        page: Page of results to return (1-based)
        api_key: Derpibooru API key, if any
        sort_format: Sort field (see SORT_* constants), stored percent-escaped
        include_comments: Ask the API to embed comments (expensive)
        include_favorited_by: Ask the API to embed favorited-by users (expensive)
    """

    def __init__(
        self,
        query: str = "*",
        page: int = 1,
        api_key: Optional[str] = None,
        sort_format: Optional[str] = None,
        include_comments: bool = False,
        include_favorited_by: bool = False,
    ):
        self.query = query
        self.page = page
        self.api_key = api_key
        self.sort_format = sort_format
        self.include_comments = include_comments
        self.include_favorited_by = include_favorited_by

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str) -> None:
        self._query = escape_query_value(value)

    @property
    def sort_format(self) -> Optional[str]:
        return self._sort_format

    @sort_format.setter
    def sort_format(self, value: Optional[str]) -> None:
        self._sort_format = escape_query_value(value) if value is not None else None

    def __repr__(self) -> str:
        return f"SearchQuery(query={self.query!r}, page={self.page!r}, sort_format={self.sort_format!r})"


class ListQuery:
    """Arguments to a named list request.

    Attributes:
        list_name: List to fetch (e.g. "top_scoring")
        page: Page of results to return (1-based)
        api_key: Derpibooru API key, if any
        sampling_period: Window the list is built from, in hours (3h), days (2d) or weeks (1w)
        include_comments: Ask the API to embed comments
        include_favorited_by: Ask the API to embed favorited-by users
    """

    def __init__(
        self,
        list_name: str,
        page: int = 1,
        api_key: Optional[str] = None,
        sampling_period: Optional[str] = None,
        include_comments: bool = False,
        include_favorited_by: bool = False,
    ):
        self.list_name = list_name
        self.page = page
        self.api_key = api_key
        self.sampling_period = sampling_period
        self.include_comments = include_comments
        self.include_favorited_by = include_favorited_by

    def __repr__(self) -> str:
        return f"ListQuery(list_name={self.list_name!r}, page={self.page!r})"


class GalleryQuery:
    """Arguments to a user gallery request.

    At least one of user and gallery_id must be set.
    """

    def __init__(
        self,
        user: Optional[str] = None,
        gallery_id: Optional[int] = None,
        page: int = 1,
        api_key: Optional[str] = None,
        include_images: bool = False,
    ):
        self.user = user
        self.gallery_id = gallery_id
        self.page = page
        self.api_key = api_key
        # Returns each gallery's image ids in owner order, ignoring content filters
        self.include_images = include_images

    def __repr__(self) -> str:
        return f"GalleryQuery(user={self.user!r}, gallery_id={self.gallery_id!r}, page={self.page!r})"


class ImageQuery:
    """Arguments to a front-page image request.

    The constraint selects which field the range bounds apply to: the id_*
    bounds go with CONSTRAINT_ID, the time_* bounds with CONSTRAINT_CREATED
    and CONSTRAINT_UPDATED. Only one bound is sent per request; when several
    are set the first of gt, gte, lt, lte wins.

    Attributes:
        page: Page of results to return (1-based)
        api_key: Derpibooru API key, if any
        constraint: Field to filter and sort by (see CONSTRAINT_* constants)
        id_gt, id_gte, id_lt, id_lte: Integer bounds for the id constraint
        time_gt, time_gte, time_lt, time_lte: Timestamp bounds for created/updated
        order: "a" for ascending, "d" for descending, or None
        deleted: Include deleted and duplicate images (limited metadata)
        include_comments: Ask the API to embed comments
        include_favorited_by: Ask the API to embed favorited-by users
        sort_randomly: Return images in random order
    """

    def __init__(
        self,
        page: int = 1,
        api_key: Optional[str] = None,
        constraint: Optional[str] = None,
        id_gt: Optional[int] = None,
        id_gte: Optional[int] = None,
        id_lt: Optional[int] = None,
        id_lte: Optional[int] = None,
        time_gt: Optional[str] = None,
        time_gte: Optional[str] = None,
        time_lt: Optional[str] = None,
        time_lte: Optional[str] = None,
        order: Optional[str] = None,
        deleted: bool = False,
        include_comments: bool = False,
        include_favorited_by: bool = False,
        sort_randomly: bool = False,
    ):
        self.page = page
        self.api_key = api_key
        self.constraint = constraint
        self.id_gt = id_gt
        self.id_gte = id_gte
        self.id_lt = id_lt
        self.id_lte = id_lte
        self.time_gt = time_gt
        self.time_gte = time_gte
        self.time_lt = time_lt
        self.time_lte = time_lte
        self.order = order
        self.deleted = deleted
        self.include_comments = include_comments
        self.include_favorited_by = include_favorited_by
        self.sort_randomly = sort_randomly

    @property
    def order(self) -> Optional[str]:
        return self._order

    @order.setter
    def order(self, value: Optional[str]) -> None:
        if value not in _VALID_ORDERS:
            raise InvalidArgumentError(
                f"order must be 'a' for ascending, 'd' for descending, or None; got {value!r}"
            )
        self._order = value

    def __repr__(self) -> str:
        return (
            f"ImageQuery(page={self.page!r}, constraint={self.constraint!r}, "
            f"order={self.order!r})"
        )
