"""Integration tests for the Derpibooru connector with mocked responses."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import coolbooru
from coolbooru.exceptions import HTTPStatusError, InvalidArgumentError, ParseError
from coolbooru.model import EmbedInfo, Gallery, ImageCollection, Item, ListResult, ListsSnapshot, SearchResult
from coolbooru.queries import CONSTRAINT_ID, GalleryQuery, ImageQuery, ListQuery, SearchQuery

BASE = "https://derpibooru.org"


def _called_url(mock: MagicMock) -> str:
    return mock.call_args.args[0]


class TestSearch:
    """Tests for search()."""

    def test_scalar_arguments(self, sample_search_data):
        """search(str, page) builds the URL and returns a SearchResult."""
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_search_data) as mock:
            result = coolbooru.search("pinkie pie", page=2)

        assert _called_url(mock) == f"{BASE}/search.json?q=pinkie%20pie&page=2"
        assert isinstance(result, SearchResult)
        assert result.total == 4821
        assert len(result.search) == 2

    def test_query_object(self, sample_search_data):
        q = SearchQuery("fluttershy", api_key="KEY", include_comments=True)
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_search_data) as mock:
            coolbooru.search(q)

        assert _called_url(mock) == f"{BASE}/search.json?q=fluttershy&page=1&key=KEY&comments=true"

    def test_config_applies_host_key_and_transport(self, sample_search_data, sample_config):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_search_data) as mock:
            coolbooru.search("x", config=sample_config)

        assert _called_url(mock) == "https://booru.example.org/search.json?q=x&page=1&key=abc123"
        assert mock.call_args.kwargs["timeout"] == 5.0
        assert mock.call_args.kwargs["user_agent"] == "CoolbooruTests/1.0"

    def test_session_passed_through(self, sample_search_data):
        session = MagicMock()
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_search_data) as mock:
            coolbooru.search("x", session=session)

        assert mock.call_args.kwargs["session"] is session


class TestOtherEndpoints:
    """Tests for the remaining endpoint functions."""

    def test_item(self, sample_item_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_item_data) as mock:
            result = coolbooru.item(1234)

        assert _called_url(mock) == f"{BASE}/1234.json"
        assert isinstance(result, Item)
        assert result.uploader == "Background Pony"

    def test_lists(self, sample_lists_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_lists_data) as mock:
            result = coolbooru.lists()

        assert _called_url(mock) == f"{BASE}/lists.json"
        assert isinstance(result, ListsSnapshot)

    def test_list_images_scalar(self, sample_item_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value={"images": [sample_item_data]}) as mock:
            result = coolbooru.list_images("top_scoring", page=3)

        assert _called_url(mock) == f"{BASE}/lists/top_scoring.json?page=3"
        assert isinstance(result, ListResult)
        assert len(result.images) == 1

    def test_list_images_query(self):
        q = ListQuery("top_commented", include_favorited_by=True)
        with patch("coolbooru.derpibooru_api.fetch_json", return_value={"images": []}) as mock:
            coolbooru.list_images(q)

        assert _called_url(mock) == f"{BASE}/lists/top_commented.json?page=1&fav=true"

    def test_user_galleries(self, sample_gallery_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=[sample_gallery_data]) as mock:
            result = coolbooru.user_galleries("somebody", include_images=True)

        assert _called_url(mock) == f"{BASE}/galleries/somebody.json?page=1&include_images=true"
        assert isinstance(result[0], Gallery)

    def test_user_gallery(self, sample_gallery_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_gallery_data) as mock:
            result = coolbooru.user_gallery("somebody", 77)

        assert _called_url(mock) == f"{BASE}/galleries/somebody/77.json?page=1"
        assert result.id == 77

    def test_user_gallery_by_id_only(self, sample_gallery_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_gallery_data) as mock:
            coolbooru.user_gallery(None, 77, page=2)

        assert _called_url(mock) == f"{BASE}/galleries/77.json?page=2"

    def test_user_gallery_query_object(self, sample_gallery_data):
        q = GalleryQuery(user="somebody", gallery_id=77, api_key="KEY")
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_gallery_data) as mock:
            coolbooru.user_gallery(q)

        assert _called_url(mock) == f"{BASE}/galleries/somebody/77.json?page=1&key=KEY"

    def test_user_gallery_without_user_or_id(self):
        with patch("coolbooru.derpibooru_api.fetch_json") as mock:
            with pytest.raises(InvalidArgumentError):
                coolbooru.user_gallery(None)
        mock.assert_not_called()

    def test_images_default(self, sample_item_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value={"images": [sample_item_data]}) as mock:
            result = coolbooru.images()

        assert _called_url(mock) == f"{BASE}/images.json"
        assert isinstance(result, ImageCollection)

    def test_images_query(self):
        q = ImageQuery(constraint=CONSTRAINT_ID, id_gt=100, id_lte=200, order="a")
        with patch("coolbooru.derpibooru_api.fetch_json", return_value={"images": []}) as mock:
            coolbooru.images(q)

        assert _called_url(mock) == f"{BASE}/images.json?page=1&constraint=id&gt=100&order=a"

    def test_embed_by_id(self, sample_embed_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_embed_data) as mock:
            result = coolbooru.embed(1234)

        assert _called_url(mock) == f"{BASE}/oembed.json?url={BASE}/1234"
        assert isinstance(result, EmbedInfo)
        assert result.derpibooru_score == 310

    def test_embed_by_url(self, sample_embed_data):
        with patch("coolbooru.derpibooru_api.fetch_json", return_value=sample_embed_data) as mock:
            coolbooru.embed("https://derpibooru.org/images/1234")

        assert _called_url(mock) == f"{BASE}/oembed.json?url=https://derpibooru.org/images/1234"


class TestFailures:
    """Failures propagate and never yield a partial model."""

    def test_http_500_propagates(self, make_response):
        """An HTTP 500 from the server raises instead of returning a model."""
        session = MagicMock()
        session.get.return_value = make_response(500, text="Internal Server Error")

        with pytest.raises(HTTPStatusError):
            coolbooru.search("x", session=session)

    def test_unparsable_body_propagates(self, make_response):
        session = MagicMock()
        session.get.return_value = make_response(200, text="<html>maintenance</html>")

        with pytest.raises(ParseError):
            coolbooru.item(1, session=session)

    def test_wrong_shape_propagates(self, make_response):
        """A JSON array where an object is expected is a parse error."""
        session = MagicMock()
        session.get.return_value = make_response(200, [1, 2, 3])

        with pytest.raises(ParseError):
            coolbooru.lists(session=session)

    def test_fresh_session_used_by_default(self, make_response, sample_item_data):
        """Without a session the call goes through a freshly built requests session."""
        with patch("coolbooru.core.network.requests.Session.get", return_value=make_response(200, sample_item_data)) as mock_get:
            result = coolbooru.item(1234)

        assert result.id == "1234"
        assert mock_get.call_args.args[0] == f"{BASE}/1234.json"
