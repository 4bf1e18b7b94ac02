"""Pytest configuration and shared fixtures for metadata-editor tests."""

from __future__ import annotations

import struct
from collections.abc import Callable
from pathlib import Path

import pytest

from metadata_editor.legacy_tag import LegacyTag

# =============================================================================
# Audio File Builders
# =============================================================================

# MPEG-1 Layer III, 128 kbit/s, 44.1 kHz: 417-byte frames
MPEG_FRAME = b"\xff\xfb\x90\x00" + b"\x00" * 413
# ID3v2.4 header with an empty body
ID3V24_HEADER = b"ID3\x04\x00\x00\x00\x00\x00\x00"


def write_mp3(
    path: Path,
    *,
    id3v2: bool = True,
    legacy: LegacyTag | None = None,
    frame_count: int = 8,
) -> Path:
    """Write a short MP3 stream, optionally with ID3v2 header and ID3v1 trailer."""
    with open(path, "wb") as f:
        if id3v2:
            f.write(ID3V24_HEADER)
        f.write(MPEG_FRAME * frame_count)
        if legacy is not None:
            f.write(legacy.render())
    return path


def _atom(name: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", 8 + len(payload)) + name + payload


def write_mp4(path: Path) -> Path:
    """Write an MP4 file with ftyp, a moov holding only mvhd, and mdat."""
    ftyp = _atom(b"ftyp", b"M4A \x00\x00\x00\x00M4A mp42isom")
    # version/flags, created, modified, timescale=1000, duration=0, remainder
    mvhd = _atom(
        b"mvhd",
        b"\x00\x00\x00\x00" + b"\x00" * 8 + struct.pack(">LL", 1000, 0) + b"\x00" * 80,
    )
    moov = _atom(b"moov", mvhd)
    mdat = _atom(b"mdat", b"\x00" * 16)

    with open(path, "wb") as f:
        f.write(ftyp)
        f.write(moov)
        f.write(mdat)
    return path


def write_image(path: Path, image_format: str, color: str = "red") -> Path:
    """Write a tiny image in the given Pillow format."""
    from PIL import Image

    Image.new("RGB", (2, 2), color).save(path, image_format)
    return path


# =============================================================================
# Audio Fixtures
# =============================================================================


@pytest.fixture
def mp3_file(tmp_path: Path) -> Path:
    """MP3 with an empty ID3v2 tag and no ID3v1 tag."""
    return write_mp3(tmp_path / "song.mp3")


@pytest.fixture
def bare_mp3_file(tmp_path: Path) -> Path:
    """MP3 without any tag."""
    return write_mp3(tmp_path / "bare.mp3", id3v2=False)


@pytest.fixture
def legacy_mp3_file(tmp_path: Path) -> Path:
    """MP3 carrying only a populated ID3v1 tag."""
    legacy = LegacyTag(
        title="Old Title",
        artist="Old Artist",
        album="Old Album",
        comment="Old comment",
        genre="Rock",
        year=1987,
        track=3,
    )
    return write_mp3(tmp_path / "legacy.mp3", id3v2=False, legacy=legacy)


@pytest.fixture
def mp4_file(tmp_path: Path) -> Path:
    """MP4 without an item list."""
    return write_mp4(tmp_path / "song.mp4")


# =============================================================================
# Image Fixtures
# =============================================================================


@pytest.fixture
def png_image(tmp_path: Path) -> Path:
    return write_image(tmp_path / "cover.png", "PNG")


@pytest.fixture
def jpeg_image(tmp_path: Path) -> Path:
    return write_image(tmp_path / "cover.jpg", "JPEG", color="blue")


@pytest.fixture
def gif_image(tmp_path: Path) -> Path:
    return write_image(tmp_path / "cover.gif", "GIF")


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[[str, str, str], Path]:
    """Build images with distinct names and colors."""

    def _make(name: str, image_format: str, color: str = "green") -> Path:
        return write_image(tmp_path / name, image_format, color)

    return _make


@pytest.fixture
def make_mp3(tmp_path: Path) -> Callable[..., Path]:
    """Build MP3 files; keyword arguments as for ``write_mp3``."""

    def _make(name: str = "track.mp3", **kwargs: object) -> Path:
        return write_mp3(tmp_path / name, **kwargs)  # type: ignore[arg-type]

    return _make
