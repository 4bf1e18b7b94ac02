"""Format classifier: map a file to the tag container family that handles it.

Content sniffing goes through mutagen's format detection; when that fails the
filename extension decides. Classification never raises: an unreadable or
unrecognized file is reported as ``ContainerKind.UNSUPPORTED``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from metadata_editor.attributes import ContainerKind

logger = logging.getLogger(__name__)

EXTENSION_KINDS = {
    "mp3": ContainerKind.LEGACY_FRAME,
    "mp4": ContainerKind.FLAT_MAP,
}


def sniff_mime_types(file_path: Path) -> list[str] | None:
    """Return the MIME types mutagen associates with the file's content.

    Returns None when mutagen cannot identify or parse the file.
    """
    from mutagen import File, MutagenError

    try:
        audio = File(file_path)
    except (MutagenError, OSError) as e:
        logger.debug(f"Content sniffing failed for {file_path}: {e}")
        return None

    if audio is None:
        return None
    return list(audio.mime)


def kind_from_mime(mime_types: list[str]) -> ContainerKind:
    """Categorize a MIME type list.

    ``mp4`` is matched before ``mpeg`` because MP4 audio also advertises
    ``audio/mpeg4``.
    """
    if any("mp4" in mime for mime in mime_types):
        return ContainerKind.FLAT_MAP
    if any("mpeg" in mime for mime in mime_types):
        return ContainerKind.LEGACY_FRAME
    return ContainerKind.UNSUPPORTED


def kind_from_extension(file_path: Path) -> ContainerKind:
    """Categorize by filename extension (case-insensitive)."""
    suffix = file_path.suffix.lower().lstrip(".")
    return EXTENSION_KINDS.get(suffix, ContainerKind.UNSUPPORTED)


def classify(file_path: Path | str) -> ContainerKind:
    """Classify ``file_path`` into a ContainerKind.

    The caller is expected to have verified that the path exists and is
    readable.
    """
    path = Path(file_path)

    mime_types = sniff_mime_types(path)
    if mime_types:
        kind = kind_from_mime(mime_types)
        logger.debug(f"Sniffed {path} as {mime_types[0]} -> {kind}")
        return kind

    kind = kind_from_extension(path)
    logger.debug(f"Falling back to extension for {path} -> {kind}")
    return kind
