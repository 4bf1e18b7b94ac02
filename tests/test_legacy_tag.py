"""Tests for the ID3v1 tag model."""

from __future__ import annotations

from pathlib import Path

import pytest

from metadata_editor.legacy_tag import ID3V1_SIZE, LegacyTag, atoi

# atoi tests


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1991", 1991),
        ("7/12", 7),
        ("1991-05-01", 1991),
        (" 42", 42),
        ("-3", -3),
        ("abc", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_atoi(text, expected):
    assert atoi(text) == expected


# LegacyTag tests


def test_empty_tag():
    assert LegacyTag().is_empty
    assert not LegacyTag(year=1999).is_empty
    assert not LegacyTag(comment="x").is_empty


def test_render_and_parse():
    """Test that rendered blocks decode back to the same fields."""
    tag = LegacyTag(
        title="Smells Like Teen Spirit",
        artist="Nirvana",
        album="Nevermind",
        comment="Grunge",
        genre="Rock",
        year=1991,
        track=1,
    )

    block = tag.render()
    assert len(block) == ID3V1_SIZE
    assert block.startswith(b"TAG")
    assert LegacyTag.parse(block) == tag


def test_render_skips_out_of_range_track():
    block = LegacyTag(title="x", track=300).render()
    parsed = LegacyTag.parse(block)
    assert parsed is not None
    assert parsed.track == 0


def test_render_unknown_genre_is_unset():
    block = LegacyTag(title="x", genre="Not A Genre").render()
    parsed = LegacyTag.parse(block)
    assert parsed is not None
    assert parsed.genre == ""


def test_parse_rejects_non_tag_blocks():
    assert LegacyTag.parse(b"\x00" * ID3V1_SIZE) is None
    assert LegacyTag.parse(b"TAG") is None


def test_read_from_file(tmp_path: Path):
    path = tmp_path / "song.mp3"
    path.write_bytes(b"\xff\xfb\x90\x00" * 200 + LegacyTag(artist="Miles").render())

    tag = LegacyTag.read(path)
    assert tag is not None
    assert tag.artist == "Miles"


def test_read_without_tag(tmp_path: Path):
    path = tmp_path / "song.mp3"
    path.write_bytes(b"\xff\xfb\x90\x00" * 200)
    assert LegacyTag.read(path) is None


def test_read_short_file(tmp_path: Path):
    path = tmp_path / "short.mp3"
    path.write_bytes(b"TAG")
    assert LegacyTag.read(path) is None
