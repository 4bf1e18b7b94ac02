"""
Legacy-Frame backend: MP3 files with an ID3v2 tag and an optional ID3v1 tag.

Twin attributes go through the dual-tag synchronizer, ID3v2-only attributes
straight through the frame mapper, pictures through APIC frames.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from metadata_editor.attributes import AccessStrategy, ContainerKind, FrameBinding
from metadata_editor.backends.base import AttributeBackend
from metadata_editor.dual_tag import DualTagSync
from metadata_editor.errors import OperationFailedError
from metadata_editor.frames import KNOWN_FRAMES, FrameMapper, prepare_dates_for_v23
from metadata_editor.legacy_tag import LegacyTag
from metadata_editor.pictures import ApicPictureStore

if TYPE_CHECKING:
    from mutagen.id3 import ID3

    from metadata_editor.config import EditorConfig

logger = logging.getLogger(__name__)


def load_id3(file_path: Path) -> ID3:
    """Load the ID3v2 tag without merging ID3v1 data into it.

    Recording times keep their raw text. A file without an ID3v2 header gets
    an empty tag that is created on save.
    """
    from mutagen import MutagenError
    from mutagen.id3 import ID3, ID3NoHeaderError

    try:
        return ID3(file_path, known_frames=KNOWN_FRAMES, load_v1=False)
    except ID3NoHeaderError:
        logger.debug(f"No ID3v2 header in {file_path}, starting with an empty tag")
        return ID3()
    except (MutagenError, OSError) as e:
        raise OperationFailedError(f"Cannot parse ID3v2 tag: {e}") from e


class LegacyFrameBackend(AttributeBackend):
    """Attribute access for ID3v1 + ID3v2 tagged MPEG files."""

    kind = ContainerKind.LEGACY_FRAME

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)
        self._load()

    def _load(self) -> None:
        self.tags = load_id3(self.file_path)
        try:
            self.legacy = LegacyTag.read(self.file_path)
        except OSError as e:
            raise OperationFailedError(f"Cannot read ID3v1 tag: {e}") from e

        self.frames = FrameMapper(self.tags)
        self.sync = DualTagSync(self.frames, self.legacy)
        self._pictures = ApicPictureStore(self.tags)

    @property
    def pictures(self) -> ApicPictureStore:
        return self._pictures

    def _get(self, binding: FrameBinding) -> str | None:
        if binding.strategy == AccessStrategy.TWIN:
            return self.sync.read(binding.key)
        if binding.strategy == AccessStrategy.DERIVED_COUNT:
            return self.frames.picture_count()
        return self.frames.get(binding.key)

    def _set(self, binding: FrameBinding, value: str | None) -> None:
        if binding.strategy == AccessStrategy.TWIN:
            self.sync.write(binding.key, value)
        else:
            self.frames.set(binding.key, value)

    def save(self, config: EditorConfig) -> None:
        """Write ID3v2, then append ID3v1 only if it still holds data."""
        from mutagen import MutagenError
        from mutagen.id3 import ID3v1SaveOptions

        id3_config = config.id3
        legacy = self.legacy if id3_config.keep_legacy_tag and self.sync.has_legacy else None

        try:
            if id3_config.v2_version == 3:
                kept_dates = prepare_dates_for_v23(self.tags)
                self.tags.update_to_v23()
                for frame in kept_dates:
                    self.tags.add(frame)
            self.tags.save(
                self.file_path,
                v1=ID3v1SaveOptions.REMOVE,
                v2_version=id3_config.v2_version,
                v23_sep=id3_config.v23_separator,
            )
            if legacy is not None:
                with open(self.file_path, "ab") as f:
                    f.write(legacy.render())
        except (MutagenError, OSError, ValueError) as e:
            raise OperationFailedError(f"Saving tags failed: {e}") from e

        logger.info(
            "Saved ID3v2.%s tag%s to %s",
            id3_config.v2_version,
            " and ID3v1 tag" if legacy is not None else "",
            self.file_path,
        )

        if id3_config.v2_version == 3:
            # update_to_v23 rewrote frames in memory; reload the v2.4 view
            self._load()

    def close(self) -> None:
        self.tags.clear()
        self.legacy = self.sync.legacy = None
