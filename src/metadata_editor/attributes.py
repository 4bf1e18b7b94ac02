"""Semantic attributes and their per-container bindings.

The binding tables are static and exhaustive: every attribute a container kind
can hold has exactly one entry, and a lookup for anything else is an
invalid-parameter error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from metadata_editor.errors import InvalidParameterError


class Attribute(StrEnum):
    """Format-agnostic metadata attributes."""

    ARTIST = "artist"
    TITLE = "title"
    ALBUM = "album"
    GENRE = "genre"
    AUTHOR = "author"
    COPYRIGHT = "copyright"
    DATE = "date"
    DESCRIPTION = "description"
    COMMENT = "comment"
    TRACK_NUMBER = "track_number"
    PICTURE_COUNT = "picture_count"
    CONDUCTOR = "conductor"
    UNSYNCED_LYRICS = "unsynced_lyrics"

    @classmethod
    def parse(cls, value: Attribute | str) -> Attribute:
        """Coerce a name such as ``"artist"`` or ``"track-number"`` to an Attribute."""
        if isinstance(value, Attribute):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError as e:
            raise InvalidParameterError(f"Unknown attribute: {value!r}") from e


class ContainerKind(StrEnum):
    """Tag container families the editor can bind to."""

    LEGACY_FRAME = "legacy_frame"  # ID3v1 + ID3v2 (MP3)
    FLAT_MAP = "flat_map"  # MP4 item list
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class AccessStrategy(StrEnum):
    """How an attribute is read and written inside its container."""

    TWIN = "twin"  # legacy fixed field + flexible frame
    FLEXIBLE_ONLY = "flexible_only"
    FLAT_STRING = "flat_string"
    FLAT_INTEGER = "flat_integer"
    DERIVED_COUNT = "derived_count"
    DERIVED_LYRICS = "derived_lyrics"


@dataclass(frozen=True)
class FrameBinding:
    """Native key and access strategy for one attribute in one container kind."""

    attribute: Attribute
    key: str
    strategy: AccessStrategy

    @property
    def read_only(self) -> bool:
        return self.strategy == AccessStrategy.DERIVED_COUNT


def _table(*rows: tuple[Attribute, str, AccessStrategy]) -> dict[Attribute, FrameBinding]:
    return {attr: FrameBinding(attr, key, strategy) for attr, key, strategy in rows}


LEGACY_FRAME_BINDINGS = _table(
    (Attribute.ARTIST, "TPE1", AccessStrategy.TWIN),
    (Attribute.TITLE, "TIT2", AccessStrategy.TWIN),
    (Attribute.ALBUM, "TALB", AccessStrategy.TWIN),
    (Attribute.GENRE, "TCON", AccessStrategy.TWIN),
    (Attribute.AUTHOR, "TCOM", AccessStrategy.FLEXIBLE_ONLY),
    (Attribute.COPYRIGHT, "TCOP", AccessStrategy.FLEXIBLE_ONLY),
    (Attribute.DATE, "TDRC", AccessStrategy.TWIN),
    (Attribute.DESCRIPTION, "TIT3", AccessStrategy.FLEXIBLE_ONLY),
    (Attribute.COMMENT, "COMM", AccessStrategy.TWIN),
    (Attribute.TRACK_NUMBER, "TRCK", AccessStrategy.TWIN),
    (Attribute.PICTURE_COUNT, "APIC", AccessStrategy.DERIVED_COUNT),
    (Attribute.CONDUCTOR, "TPE3", AccessStrategy.FLEXIBLE_ONLY),
    (Attribute.UNSYNCED_LYRICS, "USLT", AccessStrategy.DERIVED_LYRICS),
)

FLAT_MAP_BINDINGS = _table(
    (Attribute.ARTIST, "\xa9ART", AccessStrategy.FLAT_STRING),
    (Attribute.TITLE, "\xa9nam", AccessStrategy.FLAT_STRING),
    (Attribute.ALBUM, "\xa9alb", AccessStrategy.FLAT_STRING),
    (Attribute.GENRE, "\xa9gen", AccessStrategy.FLAT_STRING),
    (Attribute.AUTHOR, "\xa9wrt", AccessStrategy.FLAT_STRING),
    (Attribute.COPYRIGHT, "cprt", AccessStrategy.FLAT_STRING),
    (Attribute.DATE, "\xa9day", AccessStrategy.FLAT_STRING),
    (Attribute.DESCRIPTION, "desc", AccessStrategy.FLAT_STRING),
    (Attribute.COMMENT, "\xa9cmt", AccessStrategy.FLAT_STRING),
    (Attribute.TRACK_NUMBER, "trkn", AccessStrategy.FLAT_INTEGER),
    (Attribute.PICTURE_COUNT, "covr", AccessStrategy.DERIVED_COUNT),
    (Attribute.CONDUCTOR, "cond", AccessStrategy.FLAT_STRING),
    (Attribute.UNSYNCED_LYRICS, "\xa9lyr", AccessStrategy.FLAT_STRING),
)

BINDINGS: dict[ContainerKind, dict[Attribute, FrameBinding]] = {
    ContainerKind.LEGACY_FRAME: LEGACY_FRAME_BINDINGS,
    ContainerKind.FLAT_MAP: FLAT_MAP_BINDINGS,
}


def binding_for(kind: ContainerKind, attribute: Attribute) -> FrameBinding:
    """Look up the binding of ``attribute`` for ``kind``.

    Raises:
        InvalidParameterError: If the kind has no binding for the attribute
    """
    try:
        return BINDINGS[kind][attribute]
    except KeyError as e:
        raise InvalidParameterError(f"No binding for {attribute} in {kind} container") from e
