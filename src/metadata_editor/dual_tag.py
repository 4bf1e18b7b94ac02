"""Synchronization of twin attributes between the ID3v1 and ID3v2 tags.

Reads prefer the flexible ID3v2 frame and fall back to the legacy ID3v1 field
only when the frame is absent or empty. Writes run as a two-step pipeline:

1. write the primary ID3v2 frame (create, replace or delete);
2. mirror the value into the ID3v1 field, or clear that field, provided an
   ID3v1 tag exists and is not empty.

Genre is the one deviation: ID3v1 stores genre as an index into a fixed list,
so writing a genre always clears the legacy genre instead of translating it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from metadata_editor.errors import InvalidParameterError
from metadata_editor.frames import FrameMapper
from metadata_editor.legacy_tag import LegacyTag, atoi

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegacyField:
    """Where a twin frame lives in the ID3v1 tag."""

    name: str
    kind: Literal["text", "number"]
    mirrored: bool = True


# ID3v2 frame id -> ID3v1 field
LEGACY_FIELDS: dict[str, LegacyField] = {
    "TPE1": LegacyField("artist", "text"),
    "TIT2": LegacyField("title", "text"),
    "TALB": LegacyField("album", "text"),
    "TCON": LegacyField("genre", "text", mirrored=False),
    "COMM": LegacyField("comment", "text"),
    "TDRC": LegacyField("year", "number"),
    "TRCK": LegacyField("track", "number"),
}


class DualTagSync:
    """Reads and writes twin attributes of an MP3 file."""

    def __init__(self, mapper: FrameMapper, legacy: LegacyTag | None) -> None:
        self.mapper = mapper
        self.legacy = legacy

    @staticmethod
    def _field(frame_id: str) -> LegacyField:
        try:
            return LEGACY_FIELDS[frame_id]
        except KeyError as e:
            raise InvalidParameterError(f"{frame_id} has no ID3v1 counterpart") from e

    @property
    def has_legacy(self) -> bool:
        return self.legacy is not None and not self.legacy.is_empty

    def read(self, frame_id: str) -> str | None:
        field = self._field(frame_id)

        value = self.mapper.get(frame_id)
        if value is not None:
            return value

        if not self.has_legacy:
            logger.debug(f"{frame_id} is empty in both ID3v2 and ID3v1")
            return None

        logger.debug(f"Reading {frame_id} from ID3v1 {field.name}")
        legacy_value = getattr(self.legacy, field.name)
        if field.kind == "number":
            # A non-empty ID3v1 tag always has a year and a track, 0 included
            return str(legacy_value)
        return legacy_value or None

    def write(self, frame_id: str, value: str | None) -> None:
        field = self._field(frame_id)
        self._write_primary(frame_id, value)
        self._mirror_or_clear(field, value)

    def _write_primary(self, frame_id: str, value: str | None) -> None:
        self.mapper.set(frame_id, value)

    def _mirror_or_clear(self, field: LegacyField, value: str | None) -> None:
        if not self.has_legacy:
            return
        assert self.legacy is not None

        if not value or not field.mirrored:
            cleared: str | int = 0 if field.kind == "number" else ""
            logger.debug(f"Clearing ID3v1 {field.name}")
            setattr(self.legacy, field.name, cleared)
            return

        mirrored: str | int = max(atoi(value), 0) if field.kind == "number" else value
        logger.debug(f"Mirroring {field.name} into ID3v1")
        setattr(self.legacy, field.name, mirrored)
