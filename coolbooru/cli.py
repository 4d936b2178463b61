"""CLI entry point for Coolbooru.

Thin command-line front end over coolbooru.derpibooru_api: one subcommand per
endpoint, results printed as JSON, optional CSV export of the returned items.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import derpibooru_api as api
from .core.config import get_api_key, get_config
from .exceptions import CoolbooruError
from .export import write_items_csv
from .model import Item, ListsSnapshot
from .queries import (
    CONSTRAINT_CREATED,
    CONSTRAINT_ID,
    CONSTRAINT_UPDATED,
    GalleryQuery,
    ImageQuery,
    ListQuery,
    SearchQuery,
)

logger = logging.getLogger(__name__)


def create_cli_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser with one subcommand per endpoint
    """
    parser = argparse.ArgumentParser(
        prog="coolbooru",
        description="Coolbooru - query the Derpibooru JSON API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search and print the result as JSON
  coolbooru search "pinkie pie" --page 2

  # Export the front page, oldest first, to CSV
  coolbooru images --order a --csv front.csv

  # oEmbed info for an image
  coolbooru embed 1234
        """
    )
    parser.add_argument("--config", default=None, help="Path to JSON config file.")
    parser.add_argument("--api-key", default=None, help="Derpibooru API key (overrides config).")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Search by tag expression.")
    p.add_argument("query", nargs="?", default="*", help="Search expression (default: *)")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--sort", default=None, help="Sort field (created_at, score, relevance, width, height, random)")
    p.add_argument("--comments", action="store_true", help="Include comments.")
    p.add_argument("--fav", action="store_true", help="Include favorited-by users.")
    p.add_argument("--csv", default=None, help="Write returned items to this CSV file.")

    p = sub.add_parser("item", help="Fetch one image post.")
    p.add_argument("item_id", type=int)

    p = sub.add_parser("lists", help="Fetch the default lists.")
    p.add_argument("--csv", default=None, help="Write all listed items to this CSV file.")

    p = sub.add_parser("list", help="Fetch a named list.")
    p.add_argument("name", help="List name, e.g. top_scoring")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--last", default=None, help="Sampling period, e.g. 3h, 2d, 1w")
    p.add_argument("--comments", action="store_true")
    p.add_argument("--fav", action="store_true")
    p.add_argument("--csv", default=None)

    p = sub.add_parser("galleries", help="Fetch a user's galleries.")
    p.add_argument("user")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--include-images", action="store_true")

    p = sub.add_parser("gallery", help="Fetch a single gallery.")
    p.add_argument("gallery_id", type=int)
    p.add_argument("--user", default=None)
    p.add_argument("--page", type=int, default=1)

    p = sub.add_parser("images", help="Fetch front-page images.")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--constraint", choices=[CONSTRAINT_ID, CONSTRAINT_CREATED, CONSTRAINT_UPDATED])
    for bound in ("gt", "gte", "lt", "lte"):
        p.add_argument(f"--{bound}", default=None, help=f"Range bound ({bound}) for the constraint")
    p.add_argument("--order", choices=["a", "d"], default=None)
    p.add_argument("--deleted", action="store_true")
    p.add_argument("--comments", action="store_true")
    p.add_argument("--fav", action="store_true")
    p.add_argument("--random", action="store_true")
    p.add_argument("--csv", default=None)

    p = sub.add_parser("embed", help="Fetch oEmbed info for an item id or URL.")
    p.add_argument("target", help="Item id or image page URL")

    return parser


def _image_query(args: argparse.Namespace, api_key: Optional[str]) -> ImageQuery:
    q = ImageQuery(
        page=args.page,
        api_key=api_key,
        constraint=args.constraint,
        order=args.order,
        deleted=args.deleted,
        include_comments=args.comments,
        include_favorited_by=args.fav,
        sort_randomly=args.random,
    )
    for bound in ("gt", "gte", "lt", "lte"):
        value = getattr(args, bound)
        if value is None:
            continue
        if args.constraint == CONSTRAINT_ID:
            setattr(q, f"id_{bound}", int(value))
        else:
            setattr(q, f"time_{bound}", value)
    return q


def run_command(args: argparse.Namespace, config: Dict[str, Any]) -> Any:
    """Dispatch a parsed command to the API and return the model."""
    api_key = get_api_key(config)
    cmd = args.command

    if cmd == "search":
        q = SearchQuery(
            args.query,
            page=args.page,
            api_key=api_key,
            sort_format=args.sort,
            include_comments=args.comments,
            include_favorited_by=args.fav,
        )
        return api.search(q, config=config)
    if cmd == "item":
        return api.item(args.item_id, config=config)
    if cmd == "lists":
        return api.lists(config=config)
    if cmd == "list":
        q = ListQuery(
            args.name,
            page=args.page,
            api_key=api_key,
            sampling_period=args.last,
            include_comments=args.comments,
            include_favorited_by=args.fav,
        )
        return api.list_images(q, config=config)
    if cmd == "galleries":
        return api.user_galleries(args.user, page=args.page, include_images=args.include_images, config=config)
    if cmd == "gallery":
        q = GalleryQuery(user=args.user, gallery_id=args.gallery_id, page=args.page, api_key=api_key)
        return api.user_gallery(q, config=config)
    if cmd == "images":
        return api.images(_image_query(args, api_key), config=config)
    if cmd == "embed":
        target = int(args.target) if args.target.isdigit() else args.target
        return api.embed(target, config=config)
    raise ValueError(f"Unknown command: {cmd}")


def _items_of(result: Any) -> List[Item]:
    if isinstance(result, ListsSnapshot):
        return result.top_scoring + result.top_commented + result.all_time_top_scoring
    for attr in ("search", "images"):
        items = getattr(result, attr, None)
        if isinstance(items, list):
            return items
    return []


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, list):
        return [r.to_dict() for r in result]
    return result.to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Process exit status (0 on success, 2 on API or usage errors)
    """
    args = create_cli_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.ERROR)

    config = dict(get_config(args.config, force_reload=True))
    if args.api_key:
        config["api_key"] = args.api_key

    try:
        result = run_command(args, config)
    except CoolbooruError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"[!] Invalid argument: {e}", file=sys.stderr)
        return 2

    csv_path = getattr(args, "csv", None)
    if csv_path:
        write_items_csv(_items_of(result), csv_path)

    print(json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False))
    return 0
