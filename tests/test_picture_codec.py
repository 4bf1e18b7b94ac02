"""Tests for image decoding."""

from __future__ import annotations

from pathlib import Path

import pytest

from metadata_editor.errors import NotFoundError, UnsupportedError
from metadata_editor.picture_codec import MIME_JPEG, MIME_PNG, decode_picture, sniff_image_mime


def test_decode_png(png_image: Path):
    decoded = decode_picture(png_image)
    assert decoded.mime_type == MIME_PNG
    assert decoded.data == png_image.read_bytes()
    assert len(decoded) == png_image.stat().st_size


def test_decode_jpeg(jpeg_image: Path):
    decoded = decode_picture(str(jpeg_image))
    assert decoded.mime_type == MIME_JPEG


def test_content_wins_over_extension(tmp_path: Path, make_image):
    """A JPEG saved with a .png name is still a JPEG."""
    path = make_image("misnamed.png", "JPEG")
    assert decode_picture(path).mime_type == MIME_JPEG


def test_extension_fallback(tmp_path: Path):
    path = tmp_path / "opaque.jpeg"
    path.write_bytes(b"not really an image")

    assert sniff_image_mime(path) is None
    assert decode_picture(path).mime_type == MIME_JPEG


def test_gif_is_unsupported(gif_image: Path):
    with pytest.raises(UnsupportedError):
        decode_picture(gif_image)


def test_unknown_content_and_extension(tmp_path: Path):
    path = tmp_path / "cover.bmpx"
    path.write_bytes(b"???")
    with pytest.raises(UnsupportedError):
        decode_picture(path)


def test_missing_image(tmp_path: Path):
    with pytest.raises(NotFoundError):
        decode_picture(tmp_path / "missing.png")


def test_directory_is_not_an_image(tmp_path: Path):
    with pytest.raises(NotFoundError):
        decode_picture(tmp_path)
