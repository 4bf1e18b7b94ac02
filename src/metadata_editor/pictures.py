"""Index-addressed picture stores over the native picture collections.

ID3v2 keeps pictures as APIC frames, MP4 keeps them as the ``covr`` item's
cover list. Both are exposed through the same append/get/remove contract with
0-based indices in append order.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from metadata_editor.errors import InvalidParameterError, OperationFailedError
from metadata_editor.picture_codec import MIME_JPEG, MIME_PNG, DecodedPicture

if TYPE_CHECKING:
    from mutagen.id3 import ID3
    from mutagen.mp4 import MP4Tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Picture:
    """A copy of one embedded picture."""

    data: bytes
    mime_type: str | None
    index: int

    def __len__(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        if self.mime_type == MIME_PNG:
            return "png"
        if self.mime_type == MIME_JPEG:
            return "jpg"
        return "bin"


class PictureStore(ABC):
    """Ordered picture list backed by a container's native representation."""

    @abstractmethod
    def _entries(self) -> list[Any]:
        """Native picture entries in append order."""

    @abstractmethod
    def _to_picture(self, entry: Any, index: int) -> Picture:
        """Copy a native entry into a Picture."""

    @abstractmethod
    def _append_entry(self, decoded: DecodedPicture) -> None:
        pass

    @abstractmethod
    def _remove_entry(self, entries: list[Any], index: int) -> None:
        pass

    def count(self) -> int:
        return len(self._entries())

    def _checked_entries(self, index: int) -> list[Any]:
        entries = self._entries()
        if not entries:
            raise OperationFailedError("No pictures in file")
        if index < 0 or index >= len(entries):
            raise InvalidParameterError(
                f"Picture index {index} out of range (0..{len(entries) - 1})"
            )
        return entries

    def get(self, index: int) -> Picture:
        """Return a copy of the picture at ``index``.

        Raises:
            OperationFailedError: If there are no pictures or the picture is empty
            InvalidParameterError: If the index is out of range
        """
        entries = self._checked_entries(index)
        picture = self._to_picture(entries[index], index)
        if len(picture) == 0:
            logger.warning(f"Picture {index} has zero size")
            raise OperationFailedError(f"Picture {index} has zero size")
        return picture

    def append(self, decoded: DecodedPicture) -> None:
        """Add a picture after the existing ones."""
        self._append_entry(decoded)
        logger.debug(f"Appended {decoded.mime_type} picture ({len(decoded)} bytes)")

    def remove(self, index: int) -> None:
        """Remove the picture at ``index``; later pictures shift down by one."""
        entries = self._checked_entries(index)
        self._remove_entry(entries, index)
        logger.debug(f"Removed picture {index}")

    def pictures(self) -> list[Picture]:
        return [self._to_picture(entry, i) for i, entry in enumerate(self._entries())]


class ApicPictureStore(PictureStore):
    """Pictures held as ID3v2 APIC frames."""

    FRAME_ID = "APIC"

    def __init__(self, tags: ID3) -> None:
        self.tags = tags

    def _entries(self) -> list[Any]:
        return self.tags.getall(self.FRAME_ID)

    def _to_picture(self, entry: Any, index: int) -> Picture:
        mime = entry.mime if entry.mime in (MIME_JPEG, MIME_PNG) else None
        return Picture(data=bytes(entry.data), mime_type=mime, index=index)

    def _append_entry(self, decoded: DecodedPicture) -> None:
        from mutagen.id3 import APIC, PictureType

        frame = APIC(
            encoding=3,
            mime=decoded.mime_type,
            type=PictureType.COVER_FRONT,
            desc="",
            data=decoded.data,
        )
        # Frames sharing a description are told apart by their salt
        while frame.HashKey in self.tags:
            frame.salt += " "
        self.tags.add(frame)

    def _remove_entry(self, entries: list[Any], index: int) -> None:
        del self.tags[entries[index].HashKey]


class CoverPictureStore(PictureStore):
    """Pictures held in the MP4 ``covr`` item."""

    ITEM_KEY = "covr"

    def __init__(self, tags: MP4Tags) -> None:
        self.tags = tags

    @staticmethod
    def cover_format(mime_type: str) -> int:
        """Map a MIME type to the MP4 cover format, IMPLICIT when unknown."""
        from mutagen.mp4 import AtomDataType, MP4Cover

        if mime_type == MIME_JPEG:
            return MP4Cover.FORMAT_JPEG
        if mime_type == MIME_PNG:
            return MP4Cover.FORMAT_PNG
        return AtomDataType.IMPLICIT

    @staticmethod
    def cover_mime(imageformat: int) -> str | None:
        from mutagen.mp4 import MP4Cover

        if imageformat == MP4Cover.FORMAT_JPEG:
            return MIME_JPEG
        if imageformat == MP4Cover.FORMAT_PNG:
            return MIME_PNG
        return None

    def _entries(self) -> list[Any]:
        return list(self.tags.get(self.ITEM_KEY, []))

    def _to_picture(self, entry: Any, index: int) -> Picture:
        from mutagen.mp4 import MP4Cover

        imageformat = getattr(entry, "imageformat", MP4Cover.FORMAT_JPEG)
        return Picture(data=bytes(entry), mime_type=self.cover_mime(imageformat), index=index)

    def _append_entry(self, decoded: DecodedPicture) -> None:
        from mutagen.mp4 import MP4Cover

        cover = MP4Cover(decoded.data, imageformat=self.cover_format(decoded.mime_type))
        self.tags[self.ITEM_KEY] = self._entries() + [cover]

    def _remove_entry(self, entries: list[Any], index: int) -> None:
        remaining = entries[:index] + entries[index + 1 :]
        if remaining:
            self.tags[self.ITEM_KEY] = remaining
        else:
            del self.tags[self.ITEM_KEY]
