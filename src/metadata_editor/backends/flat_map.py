"""
Flat-Map backend: MP4 files with an iTunes-style item list.

Every attribute maps to one item key. Strings are stored as one-element text
lists, the track number as a ``(track, total)`` pair and pictures as the
``covr`` cover list.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from metadata_editor.attributes import AccessStrategy, ContainerKind, FrameBinding
from metadata_editor.backends.base import AttributeBackend
from metadata_editor.errors import InvalidParameterError, OperationFailedError
from metadata_editor.pictures import CoverPictureStore

if TYPE_CHECKING:
    from mutagen.mp4 import MP4, MP4Tags

    from metadata_editor.config import EditorConfig

logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\d+", re.ASCII)

# MP4 numeric pairs are 16-bit
MAX_ITEM_NUMBER = 0xFFFF


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class FlatItemMapper:
    """Typed get/set over an MP4 item map with delete-on-empty semantics."""

    def __init__(self, tags: MP4Tags) -> None:
        self.tags = tags

    def get_string(self, key: str) -> str | None:
        values = self.tags.get(key)
        if not values:
            logger.debug(f"No item <{key}> in file")
            return None
        return _as_text(values[0]) or None

    def get_integer(self, key: str) -> str | None:
        values = self.tags.get(key)
        if not values:
            logger.debug(f"No item <{key}> in file")
            return None
        first = values[0]
        number = first[0] if isinstance(first, tuple) else int(first)
        return str(number)

    def remove(self, key: str) -> None:
        if key in self.tags:
            logger.debug(f"Deleting item <{key}>")
            del self.tags[key]

    def set_string(self, key: str, value: str | None) -> None:
        if not value:
            self.remove(key)
            return
        self.tags[key] = [value]

    def set_integer(self, key: str, value: str | None) -> None:
        """Store a number given as text.

        Raises:
            InvalidParameterError: If the text does not start with a digit or
                the number does not fit the item
        """
        from mutagen.mp4 import MP4MetadataValueError

        if not value:
            self.remove(key)
            return

        match = _LEADING_DIGITS.match(value)
        if match is None:
            raise InvalidParameterError(f"Value {value!r} for <{key}> is not a number")
        number = int(match.group())
        if number > MAX_ITEM_NUMBER:
            raise InvalidParameterError(f"Value {number} for <{key}> is out of range")

        total = 0
        existing = self.tags.get(key)
        if existing and isinstance(existing[0], tuple) and len(existing[0]) > 1:
            total = existing[0][1]

        try:
            self.tags[key] = [(number, total)]
        except MP4MetadataValueError as e:
            raise InvalidParameterError(f"Invalid value for <{key}>: {e}") from e

    def picture_count(self, key: str) -> str | None:
        covers = self.tags.get(key)
        if not covers:
            return None
        return str(len(covers))


class FlatMapBackend(AttributeBackend):
    """Attribute access for MP4 containers."""

    kind = ContainerKind.FLAT_MAP

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)
        self.audio = self._load(file_path)
        self.items = FlatItemMapper(self.audio.tags)  # pyright: ignore[reportArgumentType]
        self._pictures = CoverPictureStore(self.audio.tags)  # pyright: ignore[reportArgumentType]

    @staticmethod
    def _load(file_path: Path) -> MP4:
        from mutagen import MutagenError
        from mutagen.mp4 import MP4

        try:
            audio = MP4(file_path)
        except (MutagenError, OSError) as e:
            raise OperationFailedError(f"Cannot parse MP4 container: {e}") from e

        if audio.tags is None:
            logger.debug(f"No item list in {file_path}, creating one")
            audio.add_tags()
        return audio

    @property
    def pictures(self) -> CoverPictureStore:
        return self._pictures

    def _get(self, binding: FrameBinding) -> str | None:
        if binding.strategy == AccessStrategy.FLAT_INTEGER:
            return self.items.get_integer(binding.key)
        if binding.strategy == AccessStrategy.DERIVED_COUNT:
            return self.items.picture_count(binding.key)
        return self.items.get_string(binding.key)

    def _set(self, binding: FrameBinding, value: str | None) -> None:
        if binding.strategy == AccessStrategy.FLAT_INTEGER:
            self.items.set_integer(binding.key, value)
        else:
            self.items.set_string(binding.key, value)

    def save(self, config: EditorConfig) -> None:
        from mutagen import MutagenError

        try:
            self.audio.save(self.file_path)
        except (MutagenError, OSError) as e:
            raise OperationFailedError(f"Saving tags failed: {e}") from e
        logger.info("Saved MP4 item list to %s", self.file_path)

    def close(self) -> None:
        if self.audio.tags is not None:
            self.audio.tags.clear()
