"""
Tests for image acquisition (images.py)
"""

import httpx
import pytest
from unittest.mock import MagicMock, patch

from vintage_eval_core.domain.entities import GroundTruthItem
from vintage_eval_core.domain.exceptions import ImageUnavailableError
from vintage_eval_core.infrastructure.images import ImageSource, placeholder_image

URL = "https://example.org/images/eames.jpg"


def _item(make_expected, image_url=URL):
    return GroundTruthItem(id="furn-001", expected=make_expected(), image_url=image_url)


def _response(status_code=200, content=b"\x89PNG", content_type="image/png", reason="OK"):
    response = MagicMock()
    response.is_success = 200 <= status_code < 300
    response.status_code = status_code
    response.reason_phrase = reason
    response.content = content
    response.headers = {"content-type": content_type}
    return response


class TestLocalImages:
    """Local files under the image directory"""

    def test_jpg(self, tmp_path, make_expected):
        (tmp_path / "furn-001.jpg").write_bytes(b"jpeg-bytes")
        payload = ImageSource(tmp_path).load(_item(make_expected))
        assert payload.data == b"jpeg-bytes"
        assert payload.mime_type == "image/jpeg"
        assert payload.source == str(tmp_path / "furn-001.jpg")

    def test_png_fallback(self, tmp_path, make_expected):
        (tmp_path / "furn-001.png").write_bytes(b"png-bytes")
        payload = ImageSource(tmp_path).load(_item(make_expected))
        assert payload.mime_type == "image/png"

    def test_jpg_preferred_over_png(self, tmp_path, make_expected):
        (tmp_path / "furn-001.jpg").write_bytes(b"jpeg-bytes")
        (tmp_path / "furn-001.png").write_bytes(b"png-bytes")
        assert ImageSource(tmp_path).load(_item(make_expected)).data == b"jpeg-bytes"

    @patch("vintage_eval_core.infrastructure.images.httpx.get")
    def test_local_file_skips_network(self, mock_get, tmp_path, make_expected):
        (tmp_path / "furn-001.jpg").write_bytes(b"jpeg-bytes")
        ImageSource(tmp_path)(_item(make_expected))
        mock_get.assert_not_called()


class TestRemoteImages:
    """HTTP fallback when no local file exists"""

    @patch("vintage_eval_core.infrastructure.images.httpx.get")
    def test_fetch(self, mock_get, tmp_path, make_expected):
        mock_get.return_value = _response(content_type="image/png; charset=binary")

        source = ImageSource(tmp_path, timeout_seconds=5, user_agent="test-agent")
        payload = source.load(_item(make_expected))

        assert payload.data == b"\x89PNG"
        assert payload.mime_type == "image/png"
        assert payload.source == URL
        args, kwargs = mock_get.call_args
        assert args == (URL,)
        assert kwargs["headers"]["User-Agent"] == "test-agent"
        assert kwargs["timeout"] == 5
        assert kwargs["follow_redirects"] is True

    @patch("vintage_eval_core.infrastructure.images.httpx.get")
    def test_http_error_status(self, mock_get, tmp_path, make_expected):
        mock_get.return_value = _response(status_code=404, reason="Not Found")
        with pytest.raises(ImageUnavailableError, match="Failed to fetch image: HTTP 404 Not Found"):
            ImageSource(tmp_path).load(_item(make_expected))

    @patch("vintage_eval_core.infrastructure.images.httpx.get")
    def test_transport_error(self, mock_get, tmp_path, make_expected):
        mock_get.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(ImageUnavailableError, match="connection refused"):
            ImageSource(tmp_path).load(_item(make_expected))

    def test_no_url(self, tmp_path, make_expected):
        with pytest.raises(ImageUnavailableError, match="no image URL for item: furn-001"):
            ImageSource(tmp_path).load(_item(make_expected, image_url=""))


def test_placeholder_image(make_item):
    payload = placeholder_image(make_item("x"))
    assert payload.item_id == "x"
    assert payload.data == b""
    assert payload.source == "placeholder"
