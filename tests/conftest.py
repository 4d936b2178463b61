"""Pytest configuration and shared fixtures for Coolbooru tests."""
from __future__ import annotations

import copy
import json
import os
import shutil
import tempfile
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest


# ============================================================================
# Path and Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test files."""
    dirpath = tempfile.mkdtemp(prefix="coolbooru_test_")
    yield dirpath
    shutil.rmtree(dirpath, ignore_errors=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_config_cache():
    """Start every test from the default configuration."""
    from coolbooru.core import config
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Return a sample configuration dictionary."""
    return {
        "base_url": "https://booru.example.org/",
        "user_agent": "CoolbooruTests/1.0",
        "api_key": "abc123",
        "timeout_s": 5,
    }


@pytest.fixture
def config_file(temp_dir: str, sample_config: Dict[str, Any]) -> str:
    """Create a temporary config file."""
    config_path = os.path.join(temp_dir, "coolbooru.json")
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f)
    return config_path


# ============================================================================
# API Payload Fixtures
# ============================================================================

_ITEM: Dict[str, Any] = {
    "id": "1234",
    "created_at": "2012-01-02T03:12:33+00:00",
    "updated_at": "2015-06-07T08:09:10+00:00",
    "first_seen_at": "2012-01-02T03:12:33+00:00",
    "duplicate_reports": [{"id": 9, "state": "rejected"}],
    "uploader_id": "42",
    "uploader": "Background Pony",
    "score": 310,
    "upvotes": 330,
    "downvotes": 20,
    "faves": 150,
    "comment_count": 12,
    "width": 1920,
    "height": 1080,
    "aspect_ratio": 1.7777777777777777,
    "file_name": "pinkie_party",
    "description": "Party time!",
    "image": "//derpicdn.net/img/view/2012/1/2/1234.png",
    "tags": "safe, pinkie pie, party",
    "tag_ids": ["40482", "27141", "33983"],
    "original_format": "png",
    "mime_type": "image/png",
    "sha512_hash": "d41d8cd98f00b204",
    "orig_sha512_hash": "e3b0c44298fc1c14",
    "source_url": "https://example.com/art/1",
    "representations": {
        "thumb_tiny": "//derpicdn.net/img/2012/1/2/1234/thumb_tiny.png",
        "thumb_small": "//derpicdn.net/img/2012/1/2/1234/thumb_small.png",
        "thumb": "//derpicdn.net/img/2012/1/2/1234/thumb.png",
        "small": "//derpicdn.net/img/2012/1/2/1234/small.png",
        "medium": "//derpicdn.net/img/2012/1/2/1234/medium.png",
        "large": "//derpicdn.net/img/2012/1/2/1234/large.png",
        "tall": "//derpicdn.net/img/2012/1/2/1234/tall.png",
        "full": "//derpicdn.net/img/view/2012/1/2/1234.png",
    },
    "is_rendered": True,
    "is_optimized": False,
    "unknown_future_field": {"ignored": True},
}


@pytest.fixture
def sample_item_data() -> Dict[str, Any]:
    """Return a well-formed item payload."""
    return copy.deepcopy(_ITEM)


@pytest.fixture
def sample_search_data(sample_item_data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a search payload with two items."""
    second = copy.deepcopy(sample_item_data)
    second["id"] = "5678"
    second["score"] = 5
    return {
        "search": [sample_item_data, second],
        "total": 4821,
        "interactions": [{"image_id": 1234, "interaction_type": "faved"}],
    }


@pytest.fixture
def sample_lists_data(sample_item_data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a lists snapshot payload."""
    return {
        "top_scoring": [sample_item_data],
        "top_commented": [],
        "all_time_top_scoring": [sample_item_data, sample_item_data],
        "interactions": [],
    }


@pytest.fixture
def sample_gallery_data() -> Dict[str, Any]:
    """Return a gallery payload."""
    return {
        "id": 77,
        "title": "Favourite parties",
        "description": "Everything Pinkie",
        "creator_id": 42,
        "created_at": "2014-03-04T05:06:07+00:00",
        "updated_at": "2016-03-04T05:06:07+00:00",
        "image_count": 120,
        "spoiler_warning": "",
        "watcher_count": 3,
    }


@pytest.fixture
def sample_embed_data() -> Dict[str, Any]:
    """Return an oEmbed payload."""
    return {
        "version": "1.0",
        "type": "photo",
        "title": "#1234 - safe, pinkie pie, party - Derpibooru",
        "author_url": "https://example.com/art/1",
        "author_name": "some artist",
        "provider_name": "Derpibooru",
        "provider_url": "https://derpibooru.org",
        "cache_age": 7200,
        "derpibooru_id": 1234,
        "derpibooru_score": 310,
        "derpibooru_comments": 12,
        "derpibooru_tags": ["safe", "pinkie pie", "party"],
        "thumbnail_url": "https://derpicdn.net/img/2012/1/2/1234/thumb.png",
    }


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""
    def _make(status_code: int = 200, body: Any = None, text: str | None = None) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.reason = "OK" if status_code < 400 else "Error"
        resp.text = text if text is not None else json.dumps(body)
        return resp
    return _make
