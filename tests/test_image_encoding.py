"""
Tests for upload encoding helpers.
"""

import base64

import pytest

from viral_or_vile.services.image_encoding import (
    encode_data_url,
    encode_image_base64,
    is_image_content_type,
)


class TestEncoding:
    """Base64 and data URL encoding."""

    def test_base64_is_ascii_text(self, png_bytes):
        encoded = encode_image_base64(png_bytes)

        assert isinstance(encoded, str)
        assert base64.b64decode(encoded) == png_bytes

    def test_data_url_keeps_image_mime(self, png_bytes):
        url = encode_data_url(png_bytes, "image/png")

        assert url.startswith("data:image/png;base64,")

    @pytest.mark.parametrize("mime", [None, "", "application/octet-stream"])
    def test_data_url_defaults_to_jpeg(self, png_bytes, mime):
        assert encode_data_url(png_bytes, mime).startswith("data:image/jpeg;base64,")

    def test_data_url_drops_parameters_and_case(self, png_bytes):
        url = encode_data_url(png_bytes, "Image/WEBP; q=0.9")

        assert url.startswith("data:image/webp;base64,")


class TestContentType:
    """Which declared content types count as images."""

    @pytest.mark.parametrize(
        "content_type",
        [None, "", "image/png", "image/jpeg; charset=binary", "IMAGE/GIF", "application/octet-stream"],
    )
    def test_accepted(self, content_type):
        assert is_image_content_type(content_type) is True

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "video/mp4"])
    def test_rejected(self, content_type):
        assert is_image_content_type(content_type) is False
