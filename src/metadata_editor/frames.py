"""Flexible-tag (ID3v2) frame mapper.

Gets, creates, replaces and deletes single named frames. Text frames hold a
list of values; the comment (COMM) and unsynchronized lyrics (USLT) frames
carry language and description sub-fields and are handled separately.
Recording times (TDRC) are stored as the text the caller gave.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from mutagen.id3 import Frames, Frames_2_2, TextFrame

if TYPE_CHECKING:
    from mutagen.id3 import ID3

logger = logging.getLogger(__name__)

COMMENT_FRAME = "COMM"
LYRICS_FRAME = "USLT"
PICTURE_FRAME = "APIC"

# Language and description used for newly created COMM/USLT frames
DEFAULT_LANGUAGE = "eng"
DEFAULT_DESCRIPTION = ""

# Newly created frames are always UTF-8
UTF8 = 3

DATE_FRAME = "TDRC"

# Dates that ID3v2.3's TYER + TDAT pair stores without loss
_V23_DATE = re.compile(r"(\d{4})(?:-(\d{2})-(\d{2}))?\Z", re.ASCII)


class TDRC(TextFrame):
    """Recording time kept as the exact text that was written or read.

    Unlike mutagen's TDRC, the text is never parsed into ``ID3TimeStamp``.
    """


# Frame classes for loading; v2.2 ids have three letters, v2.3/v2.4 ids four
KNOWN_FRAMES: dict[str, type] = {**Frames_2_2, **Frames, DATE_FRAME: TDRC}


def fits_v23_date(text: str) -> bool:
    """True when ``text`` survives the TDRC -> TYER/TDAT split of ID3v2.3."""
    match = _V23_DATE.match(text)
    return match is not None and all(int(part) for part in match.groups() if part)


def prepare_dates_for_v23(tags: ID3) -> list[Any]:
    """Get free-text dates ready for ``ID3.update_to_v23``.

    Dates that TYER/TDAT can hold are swapped for mutagen's timestamp TDRC so
    that ``update_to_v23`` splits them. Any other date is removed from
    ``tags`` and returned; the caller adds it back after the conversion so
    the text is written verbatim as a TDRC frame.
    """
    from mutagen.id3 import TDRC as TimestampTDRC

    frames = tags.getall(DATE_FRAME)
    if not frames or not isinstance(frames[0], TDRC):
        return []

    frame = frames[0]
    if all(fits_v23_date(str(text)) for text in frame.text):
        tags.setall(DATE_FRAME, [TimestampTDRC(encoding=frame.encoding, text=list(frame.text))])
        return []

    logger.debug(f"Keeping date {str(frame)!r} as a TDRC frame in the ID3v2.3 tag")
    tags.delall(DATE_FRAME)
    return [frame]


def _first_text(frame: Any) -> str:
    """Decode the first value of a frame to text."""
    text = frame.text
    if isinstance(text, str):
        # USLT stores a single string rather than a list
        return text
    if not text:
        return ""
    return str(text[0])


class FrameMapper:
    """Reads and writes individual frames of an ID3v2 tag."""

    def __init__(self, tags: ID3) -> None:
        self.tags = tags

    def frames(self, frame_id: str) -> list[Any]:
        """All frames with ``frame_id`` in tag order."""
        return self.tags.getall(frame_id)

    def has_value(self, frame_id: str) -> bool:
        return self.get(frame_id) is not None

    def get(self, frame_id: str) -> str | None:
        """Return the first value of the first ``frame_id`` frame.

        Absent frames and frames whose first value is empty both yield None.
        """
        frames = self.frames(frame_id)
        if not frames:
            logger.debug(f"Frame {frame_id} does not exist")
            return None

        value = _first_text(frames[0])
        if not value:
            logger.debug(f"Frame {frame_id} is empty")
            return None
        return value

    def set(self, frame_id: str, value: str | None) -> None:
        """Create, replace or (for empty input) delete a frame."""
        if not value:
            logger.debug(f"Deleting frame {frame_id}")
            self.tags.delall(frame_id)
            return

        if frame_id == COMMENT_FRAME:
            self._set_comment(value)
        elif frame_id == LYRICS_FRAME:
            self._set_lyrics(value)
        else:
            self._set_text(frame_id, value)

    def _set_text(self, frame_id: str, value: str) -> None:
        frame_class = KNOWN_FRAMES[frame_id]

        existing = self.frames(frame_id)
        if existing and type(existing[0]) is frame_class:
            logger.debug(f"Frame {frame_id} exists, replacing its value")
            frame = existing[0]
            frame.encoding = UTF8
            frame.text = [value]
            return

        # A frame of another class (e.g. a timestamp TDRC) is swapped out whole
        logger.debug(f"Writing a new {frame_id} frame")
        self.tags.setall(frame_id, [frame_class(encoding=UTF8, text=[value])])

    def _set_comment(self, value: str) -> None:
        from mutagen.id3 import COMM

        existing = self.frames(COMMENT_FRAME)
        if existing:
            frame = existing[0]
            frame.encoding = UTF8
            frame.text = [value]
            return

        self.tags.add(
            COMM(encoding=UTF8, lang=DEFAULT_LANGUAGE, desc=DEFAULT_DESCRIPTION, text=[value])
        )

    def _set_lyrics(self, value: str) -> None:
        from mutagen.id3 import USLT

        existing = self.frames(LYRICS_FRAME)
        if existing:
            frame = existing[0]
            frame.encoding = UTF8
            frame.text = value
            return

        self.tags.add(
            USLT(encoding=UTF8, lang=DEFAULT_LANGUAGE, desc=DEFAULT_DESCRIPTION, text=value)
        )

    def picture_count(self) -> str | None:
        """Number of attached pictures as text, None when there are none."""
        count = len(self.frames(PICTURE_FRAME))
        return str(count) if count else None
