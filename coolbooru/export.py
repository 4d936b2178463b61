"""Tabular export of items for Coolbooru.

Flattens Item records into a pandas DataFrame, one row per item, and writes
it as CSV.
"""
from __future__ import annotations

import logging
import os
from typing import Iterable, List

import pandas as pd

from .model import Item

logger = logging.getLogger(__name__)

ITEM_COLUMNS: List[str] = [
    "id",
    "created_at",
    "uploader",
    "score",
    "upvotes",
    "downvotes",
    "faves",
    "comment_count",
    "width",
    "height",
    "mime_type",
    "tags",
    "source_url",
    "full_url",
]


def items_to_frame(items: Iterable[Item]) -> pd.DataFrame:
    """Build a DataFrame with ITEM_COLUMNS from items.

    Args:
        items: Items to flatten

    Returns:
        DataFrame with one row per item (empty frame with the columns if none)
    """
    rows = []
    for it in items:
        rows.append({
            "id": it.id,
            "created_at": it.created_at.isoformat() if it.created_at else pd.NA,
            "uploader": it.uploader,
            "score": it.score,
            "upvotes": it.upvotes,
            "downvotes": it.downvotes,
            "faves": it.faves,
            "comment_count": it.comment_count,
            "width": it.width,
            "height": it.height,
            "mime_type": it.mime_type,
            "tags": it.tags,
            "source_url": it.source_url,
            "full_url": it.representations.full if it.representations else None,
        })
    return pd.DataFrame(rows, columns=ITEM_COLUMNS)


def write_items_csv(items: Iterable[Item], csv_path: str) -> int:
    """Write items to a CSV file.

    Returns:
        Number of rows written
    """
    df = items_to_frame(items)
    parent = os.path.dirname(csv_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    df.to_csv(csv_path, index=False)
    logger.info("Wrote %d item(s) to %s", len(df), csv_path)
    return len(df)
