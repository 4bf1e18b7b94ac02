"""ID3v1 fixed-field tag model.

mutagen folds ID3v1 data into the ID3v2 frame set when it loads a file. The
editor keeps the two tags apart, so the trailing 128-byte block is read and
written here through mutagen's ``ParseID3v1``/``MakeID3v1`` codecs.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ID3V1_SIZE = 128
ID3V1_MARKER = b"TAG"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def atoi(value: str | None) -> int:
    """Parse the leading decimal integer of ``value``; anything else is 0."""
    if not value:
        return 0
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


@dataclass
class LegacyTag:
    """In-memory ID3v1.1 tag.

    Numeric fields use 0 for "unset", string fields use "".
    """

    title: str = ""
    artist: str = ""
    album: str = ""
    comment: str = ""
    genre: str = ""
    year: int = 0
    track: int = 0

    @property
    def is_empty(self) -> bool:
        return (
            not any((self.title, self.artist, self.album, self.comment, self.genre))
            and self.year == 0
            and self.track == 0
        )

    @classmethod
    def from_frames(cls, frames: dict[str, Any]) -> LegacyTag:
        """Build from the frame dict returned by ``mutagen.id3.ParseID3v1``."""

        def text(frame_id: str) -> str:
            frame = frames.get(frame_id)
            return str(frame.text[0]) if frame is not None and frame.text else ""

        genre = ""
        tcon = frames.get("TCON")
        if tcon is not None and tcon.genres:
            genre = tcon.genres[0]

        return cls(
            title=text("TIT2"),
            artist=text("TPE1"),
            album=text("TALB"),
            comment=text("COMM"),
            genre=genre,
            year=atoi(text("TDRC") or text("TYER")),
            track=atoi(text("TRCK")),
        )

    @classmethod
    def parse(cls, block: bytes) -> LegacyTag | None:
        """Decode a 128-byte ID3v1 block, or return None if it is not one."""
        from mutagen.id3 import ParseID3v1

        if len(block) != ID3V1_SIZE or not block.startswith(ID3V1_MARKER):
            return None
        frames = ParseID3v1(block)
        if frames is None:
            return None
        return cls.from_frames(frames)

    @classmethod
    def read(cls, file_path: Path) -> LegacyTag | None:
        """Read the ID3v1 tag at the end of ``file_path``, if present."""
        with open(file_path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() < ID3V1_SIZE:
                return None
            f.seek(-ID3V1_SIZE, os.SEEK_END)
            block = f.read(ID3V1_SIZE)

        tag = cls.parse(block)
        if tag is not None:
            logger.debug(f"Found ID3v1 tag in {file_path}")
        return tag

    def to_frames(self) -> dict[str, Any]:
        """Express the fields as ID3v2 frames for ``MakeID3v1``."""
        from mutagen.id3 import COMM, TALB, TCON, TDRC, TIT2, TPE1, TRCK

        frames: dict[str, Any] = {}
        if self.title:
            frames["TIT2"] = TIT2(encoding=0, text=[self.title])
        if self.artist:
            frames["TPE1"] = TPE1(encoding=0, text=[self.artist])
        if self.album:
            frames["TALB"] = TALB(encoding=0, text=[self.album])
        if self.comment:
            frames["COMM"] = COMM(encoding=0, lang="eng", desc="", text=[self.comment])
        if self.genre:
            frames["TCON"] = TCON(encoding=0, text=[self.genre])
        if self.year > 0:
            frames["TDRC"] = TDRC(encoding=0, text=[str(self.year)[:4]])
        if 0 < self.track < 256:
            frames["TRCK"] = TRCK(encoding=0, text=[str(self.track)])
        return frames

    def render(self) -> bytes:
        """Encode as a 128-byte ID3v1.1 block."""
        from mutagen.id3 import MakeID3v1

        return MakeID3v1(self.to_frames())
