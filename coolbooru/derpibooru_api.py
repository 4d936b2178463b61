"""Connector for the Derpibooru JSON API.

One function per endpoint. Each accepts either scalar arguments or a
pre-built query object in its first parameter, builds the URL with
coolbooru.urls, performs a single GET and returns the typed model. Errors
propagate unchanged (see coolbooru.exceptions).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

import requests

from .core.config import get_api_key, get_base_url, get_config, get_timeout, get_user_agent
from .core.network import fetch_json
from .model import (
    EmbedInfo,
    Gallery,
    ImageCollection,
    Item,
    ListResult,
    ListsSnapshot,
    SearchResult,
    parse_galleries,
)
from .queries import GalleryQuery, ImageQuery, ListQuery, SearchQuery
from .query_helpers import unescape_query_value
from .urls import (
    embed_url,
    galleries_url,
    images_url,
    item_url,
    list_url,
    lists_url,
    search_url,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _fetch(
    url: str,
    parser: Callable[[Any], T],
    session: Optional[requests.Session],
    config: Dict[str, Any],
) -> T:
    data = fetch_json(
        url,
        session=session,
        timeout=get_timeout(config),
        user_agent=get_user_agent(config),
    )
    return parser(data)


def search(
    query: Union[str, SearchQuery] = "*",
    page: int = 1,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> SearchResult:
    """Search Derpibooru by tag expression.

    See https://derpibooru.org/search/syntax for the search syntax.

    Args:
        query: Search expression (e.g. "pinkie pie") or a SearchQuery
        page: Page of results; ignored when query is a SearchQuery
        session: Optional requests session to reuse
        config: Configuration dict (defaults to get_config())

    Returns:
        SearchResult with the page of items and the total hit count
    """
    cfg = config if config is not None else get_config()
    if isinstance(query, SearchQuery):
        q = query
    else:
        q = SearchQuery(query, page=page, api_key=get_api_key(cfg))

    logger.info("Searching Derpibooru for: %s (page %s)", unescape_query_value(q.query), q.page)
    return _fetch(search_url(q, base_url=get_base_url(cfg)), SearchResult.from_dict, session, cfg)


def item(
    item_id: Union[int, str],
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Item:
    """Fetch a single image post by id."""
    cfg = config if config is not None else get_config()
    logger.info("Fetching Derpibooru item %s", item_id)
    return _fetch(item_url(item_id, base_url=get_base_url(cfg)), Item.from_dict, session, cfg)


def lists(
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> ListsSnapshot:
    """Fetch the top scoring, top commented and all-time top scoring lists."""
    cfg = config if config is not None else get_config()
    return _fetch(lists_url(base_url=get_base_url(cfg)), ListsSnapshot.from_dict, session, cfg)


def list_images(
    list_name: Union[str, ListQuery],
    page: int = 1,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> ListResult:
    """Fetch one page of a named list (e.g. "top_scoring").

    Args:
        list_name: List name or a ListQuery
        page: Page of results; ignored when list_name is a ListQuery
    """
    cfg = config if config is not None else get_config()
    if isinstance(list_name, ListQuery):
        q = list_name
    else:
        q = ListQuery(list_name, page=page, api_key=get_api_key(cfg))

    logger.info("Fetching Derpibooru list %s (page %s)", q.list_name, q.page)
    return _fetch(list_url(q, base_url=get_base_url(cfg)), ListResult.from_dict, session, cfg)


def user_galleries(
    user: Union[str, GalleryQuery],
    page: int = 1,
    include_images: bool = False,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> List[Gallery]:
    """Fetch the galleries owned by a user.

    Args:
        user: Username or a GalleryQuery (its gallery_id should be unset)
        page: Page of results
        include_images: Ask for each gallery's image ids
    """
    cfg = config if config is not None else get_config()
    if isinstance(user, GalleryQuery):
        q = user
    else:
        q = GalleryQuery(user=user, page=page, api_key=get_api_key(cfg), include_images=include_images)

    logger.info("Fetching galleries of %s (page %s)", q.user, q.page)
    return _fetch(galleries_url(q, base_url=get_base_url(cfg)), parse_galleries, session, cfg)


def user_gallery(
    user: Union[str, GalleryQuery, None],
    gallery_id: Optional[int] = None,
    page: int = 1,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Gallery:
    """Fetch a single gallery.

    Args:
        user: Owning username, None to address the gallery by id alone, or a GalleryQuery
        gallery_id: Gallery id
        page: Page of results

    Raises:
        InvalidArgumentError: If neither user nor gallery_id is given
    """
    cfg = config if config is not None else get_config()
    if isinstance(user, GalleryQuery):
        q = user
    else:
        q = GalleryQuery(user=user, gallery_id=gallery_id, page=page, api_key=get_api_key(cfg))

    logger.info("Fetching gallery %s of %s", q.gallery_id, q.user)
    return _fetch(galleries_url(q, base_url=get_base_url(cfg)), Gallery.from_dict, session, cfg)


def images(
    query: Optional[ImageQuery] = None,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> ImageCollection:
    """Fetch front-page images, optionally filtered by an ImageQuery."""
    cfg = config if config is not None else get_config()
    return _fetch(images_url(query, base_url=get_base_url(cfg)), ImageCollection.from_dict, session, cfg)


def embed(
    target: Union[int, str],
    *,
    session: Optional[requests.Session] = None,
    config: Optional[Dict[str, Any]] = None,
) -> EmbedInfo:
    """Fetch oEmbed information for an item id or an image page URL."""
    cfg = config if config is not None else get_config()
    return _fetch(embed_url(target, base_url=get_base_url(cfg)), EmbedInfo.from_dict, session, cfg)
