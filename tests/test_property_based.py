"""Property-based tests for metadata-editor.

Uses hypothesis to check the attribute write/read rules and the integer
coercion of both container kinds on in-memory tags.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from mutagen.id3 import ID3
from mutagen.mp4 import MP4Tags

from metadata_editor.dual_tag import DualTagSync
from metadata_editor.errors import InvalidParameterError
from metadata_editor.frames import FrameMapper
from metadata_editor.legacy_tag import LegacyTag, atoi
from metadata_editor.backends.flat_map import FlatItemMapper
from metadata_editor.safe_logging import hash_path

non_empty_text = st.text(min_size=1, max_size=60)


def populated_legacy() -> LegacyTag:
    return LegacyTag(title="t", artist="a", album="b", comment="c", genre="Rock", year=1999, track=1)


# Flexible tag properties


@given(
    st.sampled_from(["TPE1", "TIT2", "TALB", "TCOM", "TCOP", "TDRC", "TIT3", "TPE3", "COMM", "USLT"]),
    non_empty_text,
)
@settings(max_examples=100)
def test_frame_write_then_read(frame_id: str, value: str):
    """Property: a non-empty value written to a frame reads back unchanged."""
    mapper = FrameMapper(ID3())
    mapper.set(frame_id, value)
    assert mapper.get(frame_id) == value


@given(st.sampled_from(["TPE1", "COMM", "USLT"]), non_empty_text)
@settings(max_examples=50)
def test_frame_delete_reads_absent(frame_id: str, value: str):
    mapper = FrameMapper(ID3())
    mapper.set(frame_id, value)
    mapper.set(frame_id, "")
    assert mapper.get(frame_id) is None


# Dual tag properties


@given(st.sampled_from(["TPE1", "TIT2", "TALB", "COMM"]), non_empty_text)
@settings(max_examples=100)
def test_twin_text_is_mirrored(frame_id: str, value: str):
    """Property: twin text attributes read back and reach the legacy tag."""
    legacy = populated_legacy()
    sync = DualTagSync(FrameMapper(ID3()), legacy)

    sync.write(frame_id, value)

    assert sync.read(frame_id) == value
    field = {"TPE1": "artist", "TIT2": "title", "TALB": "album", "COMM": "comment"}[frame_id]
    assert getattr(legacy, field) == value


@given(non_empty_text)
@settings(max_examples=50)
def test_genre_never_mirrored(value: str):
    legacy = populated_legacy()
    sync = DualTagSync(FrameMapper(ID3()), legacy)
    sync.write("TCON", value)
    assert legacy.genre == ""


@given(st.text(max_size=20))
@settings(max_examples=200)
def test_legacy_number_mirror_never_fails(value: str):
    """Property: legacy numeric mirrors coerce any text to a non-negative int."""
    legacy = populated_legacy()
    sync = DualTagSync(FrameMapper(ID3()), legacy)
    sync.write("TRCK", value)
    assert legacy.track >= 0
    if value:
        assert legacy.track == max(atoi(value), 0)


# Flat map properties


@given(st.integers(min_value=0, max_value=65535))
@settings(max_examples=100)
def test_flat_integer_round_trip(number: int):
    items = FlatItemMapper(MP4Tags())
    items.set_integer("trkn", str(number))
    assert items.get_integer("trkn") == str(number)


@given(non_empty_text.filter(lambda s: not ("0" <= s[0] <= "9")))
@settings(max_examples=100)
def test_flat_integer_rejects_non_digit_prefix(value: str):
    """Property: the flat map rejects what the legacy tag would coerce to 0."""
    items = FlatItemMapper(MP4Tags())
    with pytest.raises(InvalidParameterError):
        items.set_integer("trkn", value)
    assert items.get_integer("trkn") is None


@given(st.sampled_from(["\xa9ART", "\xa9nam", "cprt", "desc", "cond", "\xa9lyr"]), non_empty_text)
@settings(max_examples=100)
def test_flat_string_write_then_read(key: str, value: str):
    items = FlatItemMapper(MP4Tags())
    items.set_string(key, value)
    assert items.get_string(key) == value


# Logging properties


@given(st.text(min_size=1, max_size=200))
@settings(max_examples=100)
def test_hash_path_deterministic(path: str):
    assert hash_path(path) == hash_path(path)
    assert len(hash_path(path)) == 12
