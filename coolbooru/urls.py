"""Request builder for the Derpibooru JSON API.

Pure functions mapping a query object (or a scalar) to a fully qualified URL.
Nothing here performs I/O. Optional clauses are appended in a fixed order and
only when the corresponding field is set.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from .core.config import DEFAULT_BASE_URL
from .exceptions import InvalidArgumentError
from .queries import (
    CONSTRAINT_CREATED,
    CONSTRAINT_ID,
    CONSTRAINT_UPDATED,
    GalleryQuery,
    ImageQuery,
    ListQuery,
    SearchQuery,
)
from .query_helpers import escape_query_value, escape_url_param

logger = logging.getLogger(__name__)

BASE_URL = DEFAULT_BASE_URL

_BOUND_NAMES = ("gt", "gte", "lt", "lte")


def _base(base_url: Optional[str]) -> str:
    return (base_url or BASE_URL).rstrip("/")


def _common_clauses(api_key: Optional[str], include_comments: bool, include_favorited_by: bool) -> List[str]:
    clauses = []
    if api_key is not None:
        clauses.append(f"key={escape_query_value(api_key)}")
    if include_comments:
        clauses.append("comments=true")
    if include_favorited_by:
        clauses.append("fav=true")
    return clauses


def _join(path: str, clauses: List[str]) -> str:
    if not clauses:
        return path
    return path + "?" + "&".join(clauses)


def search_url(query: SearchQuery, *, base_url: Optional[str] = None) -> str:
    """Build the search URL.

    Clause order: q, page, key, comments, fav, sf.

    Args:
        query: Populated SearchQuery (query and sort_format already escaped)
        base_url: API host, defaults to BASE_URL

    Returns:
        Fully qualified URL
    """
    clauses = [f"q={query.query}", f"page={query.page}"]
    clauses += _common_clauses(query.api_key, query.include_comments, query.include_favorited_by)
    if query.sort_format is not None:
        clauses.append(f"sf={query.sort_format}")
    return _join(f"{_base(base_url)}/search.json", clauses)


def item_url(item_id: Union[int, str], *, base_url: Optional[str] = None) -> str:
    """Build the URL for a single item."""
    return f"{_base(base_url)}/{item_id}.json"


def lists_url(*, base_url: Optional[str] = None) -> str:
    """Build the URL for the default lists snapshot."""
    return f"{_base(base_url)}/lists.json"


def list_url(query: ListQuery, *, base_url: Optional[str] = None) -> str:
    """Build the URL for a named list.

    Clause order: page, key, comments, fav, last.
    """
    clauses = [f"page={query.page}"]
    clauses += _common_clauses(query.api_key, query.include_comments, query.include_favorited_by)
    if query.sampling_period:
        clauses.append(f"last={escape_query_value(query.sampling_period)}")
    return _join(f"{_base(base_url)}/lists/{escape_query_value(query.list_name)}.json", clauses)


def galleries_url(query: GalleryQuery, *, base_url: Optional[str] = None) -> str:
    """Build the URL for a user's galleries or a single gallery.

    The path is /galleries/<user>/<id>.json when both are set, otherwise
    /galleries/<user>.json or /galleries/<id>.json.

    Raises:
        InvalidArgumentError: If neither user nor gallery_id is set
    """
    if query.user is None and query.gallery_id is None:
        raise InvalidArgumentError("gallery query needs a user, a gallery id, or both")

    parts = []
    if query.user is not None:
        parts.append(escape_query_value(query.user))
    if query.gallery_id is not None:
        parts.append(str(query.gallery_id))
    path = f"{_base(base_url)}/galleries/{'/'.join(parts)}.json"

    clauses = [f"page={query.page}"]
    if query.include_images:
        clauses.append("include_images=true")
    if query.api_key is not None:
        clauses.append(f"key={escape_query_value(query.api_key)}")
    return _join(path, clauses)


def _range_clause(query: ImageQuery) -> Optional[str]:
    """Pick the single range bound to send for the query's constraint.

    Priority is gt > gte > lt > lte; lower-priority bounds are dropped.
    """
    if query.constraint == CONSTRAINT_ID:
        bounds = (query.id_gt, query.id_gte, query.id_lt, query.id_lte)
    elif query.constraint in (CONSTRAINT_CREATED, CONSTRAINT_UPDATED):
        bounds = (query.time_gt, query.time_gte, query.time_lt, query.time_lte)
    else:
        return None

    chosen = None
    for name, value in zip(_BOUND_NAMES, bounds):
        if value is None:
            continue
        if chosen is None:
            chosen = f"{name}={escape_query_value(str(value))}"
        else:
            logger.debug("Ignoring %s bound for constraint %s; %s takes priority", name, query.constraint, chosen)
    return chosen


def images_url(query: Optional[ImageQuery] = None, *, base_url: Optional[str] = None) -> str:
    """Build the URL for the front-page images.

    Without a query this is the bare /images.json. Clause order with a query:
    page, key, constraint, bound, order, deleted, comments, fav, random_image.
    """
    path = f"{_base(base_url)}/images.json"
    if query is None:
        return path

    clauses = [f"page={query.page}"]
    if query.api_key is not None:
        clauses.append(f"key={escape_query_value(query.api_key)}")
    if query.constraint in (CONSTRAINT_ID, CONSTRAINT_CREATED, CONSTRAINT_UPDATED):
        clauses.append(f"constraint={query.constraint}")
        bound = _range_clause(query)
        if bound:
            clauses.append(bound)
    elif query.constraint is not None:
        logger.debug("Unknown constraint %r; no range clause added", query.constraint)
    if query.order is not None:
        clauses.append(f"order={query.order}")
    if query.deleted:
        clauses.append("deleted=true")
    if query.include_comments:
        clauses.append("comments=true")
    if query.include_favorited_by:
        clauses.append("fav=true")
    if query.sort_randomly:
        clauses.append("random_image=true")
    return _join(path, clauses)


def embed_url(target: Union[int, str], *, base_url: Optional[str] = None) -> str:
    """Build the oEmbed URL for an item id or an arbitrary page URL.

    An int is expanded to the item's page URL on the same host.
    """
    base = _base(base_url)
    if isinstance(target, int) and not isinstance(target, bool):
        page_url = f"{base}/{target}"
    else:
        page_url = escape_url_param(target)
    return f"{base}/oembed.json?url={page_url}"
