"""Tests for attributes, binding tables and error kinds."""

from __future__ import annotations

import pytest

from metadata_editor.attributes import (
    BINDINGS,
    FLAT_MAP_BINDINGS,
    LEGACY_FRAME_BINDINGS,
    AccessStrategy,
    Attribute,
    ContainerKind,
    binding_for,
)
from metadata_editor.errors import (
    ErrorKind,
    InvalidParameterError,
    MetadataEditorError,
    NotFoundError,
    OperationFailedError,
    OutOfMemoryError,
    PermissionDeniedError,
    UnsupportedError,
)

# Attribute tests


def test_attribute_order():
    """Test the attribute enumeration order and size."""
    assert [a.value for a in Attribute] == [
        "artist",
        "title",
        "album",
        "genre",
        "author",
        "copyright",
        "date",
        "description",
        "comment",
        "track_number",
        "picture_count",
        "conductor",
        "unsynced_lyrics",
    ]


def test_attribute_parse():
    assert Attribute.parse("artist") is Attribute.ARTIST
    assert Attribute.parse("Track-Number") is Attribute.TRACK_NUMBER
    assert Attribute.parse(Attribute.GENRE) is Attribute.GENRE


def test_attribute_parse_unknown():
    with pytest.raises(InvalidParameterError):
        Attribute.parse("bpm")


# Binding table tests


@pytest.mark.parametrize("table", [LEGACY_FRAME_BINDINGS, FLAT_MAP_BINDINGS])
def test_binding_tables_are_exhaustive(table):
    """Every attribute has exactly one binding per supported container kind."""
    assert set(table) == set(Attribute)
    for attribute, binding in table.items():
        assert binding.attribute is attribute


def test_legacy_frame_bindings():
    assert binding_for(ContainerKind.LEGACY_FRAME, Attribute.ARTIST).key == "TPE1"
    assert binding_for(ContainerKind.LEGACY_FRAME, Attribute.COMMENT).key == "COMM"
    assert (
        binding_for(ContainerKind.LEGACY_FRAME, Attribute.AUTHOR).strategy
        == AccessStrategy.FLEXIBLE_ONLY
    )
    assert (
        binding_for(ContainerKind.LEGACY_FRAME, Attribute.UNSYNCED_LYRICS).strategy
        == AccessStrategy.DERIVED_LYRICS
    )


def test_flat_map_bindings():
    assert binding_for(ContainerKind.FLAT_MAP, Attribute.TITLE).key == "\xa9nam"
    assert binding_for(ContainerKind.FLAT_MAP, Attribute.CONDUCTOR).key == "cond"
    track = binding_for(ContainerKind.FLAT_MAP, Attribute.TRACK_NUMBER)
    assert track.key == "trkn"
    assert track.strategy == AccessStrategy.FLAT_INTEGER


def test_picture_count_is_read_only():
    for kind in BINDINGS:
        assert binding_for(kind, Attribute.PICTURE_COUNT).read_only
        assert not binding_for(kind, Attribute.ARTIST).read_only


def test_binding_for_unsupported_kind():
    with pytest.raises(InvalidParameterError):
        binding_for(ContainerKind.UNSUPPORTED, Attribute.ARTIST)


# Error tests


@pytest.mark.parametrize(
    ("error_class", "kind", "builtin"),
    [
        (InvalidParameterError, ErrorKind.INVALID_PARAMETER, ValueError),
        (PermissionDeniedError, ErrorKind.PERMISSION_DENIED, PermissionError),
        (NotFoundError, ErrorKind.NOT_FOUND, FileNotFoundError),
        (UnsupportedError, ErrorKind.UNSUPPORTED, MetadataEditorError),
        (OutOfMemoryError, ErrorKind.OUT_OF_MEMORY, MemoryError),
        (OperationFailedError, ErrorKind.OPERATION_FAILED, MetadataEditorError),
    ],
)
def test_error_kinds(error_class, kind, builtin):
    err = error_class("boom")
    assert err.kind == kind
    assert isinstance(err, MetadataEditorError)
    assert isinstance(err, builtin)
    assert str(err) == "boom"


def test_error_default_message():
    assert str(UnsupportedError()) == "unsupported"
