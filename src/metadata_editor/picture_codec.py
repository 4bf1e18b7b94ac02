"""Decode still-image files into bytes plus a MIME type.

Only JPEG and PNG are accepted. The type comes from the file content when
Pillow recognizes it, otherwise from the extension.
"""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass
from pathlib import Path

from metadata_editor.errors import (
    NotFoundError,
    OutOfMemoryError,
    PermissionDeniedError,
    UnsupportedError,
)

logger = logging.getLogger(__name__)

MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"
SUPPORTED_MIME_TYPES = (MIME_JPEG, MIME_PNG)

EXTENSION_MIME_TYPES = {
    "jpg": MIME_JPEG,
    "jpeg": MIME_JPEG,
    "png": MIME_PNG,
}


@dataclass(frozen=True)
class DecodedPicture:
    """Image bytes ready to be embedded."""

    data: bytes
    mime_type: str

    def __len__(self) -> int:
        return len(self.data)


def sniff_image_mime(file_path: Path) -> str | None:
    """Return the MIME type Pillow detects from content, or None."""
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(file_path) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError) as e:
        logger.debug(f"Pillow could not identify {file_path}: {e}")
        return None

    if not image_format:
        return None
    return Image.MIME.get(image_format.upper())


def resolve_mime_type(file_path: Path) -> str:
    """Resolve the MIME type of an image file.

    Raises:
        UnsupportedError: If the image is neither JPEG nor PNG
    """
    mime_type = sniff_image_mime(file_path)
    if mime_type is None:
        suffix = file_path.suffix.lower().lstrip(".")
        mime_type = EXTENSION_MIME_TYPES.get(suffix)
        if mime_type is None:
            raise UnsupportedError(f"Cannot determine a supported image type for {file_path.name}")
        logger.debug(f"Using extension-derived type {mime_type} for {file_path}")

    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedError(f"Unsupported image type {mime_type}")
    return mime_type


def _read_bytes(file_path: Path) -> bytes:
    try:
        return file_path.read_bytes()
    except MemoryError as e:
        raise OutOfMemoryError(f"Not enough memory to read {file_path.name}") from e
    except OSError as e:
        if e.errno in (errno.EACCES, errno.EPERM):
            raise PermissionDeniedError(f"No permission to read {file_path.name}") from e
        raise NotFoundError(f"Cannot read image {file_path.name}: {e.strerror}") from e


def decode_picture(file_path: Path | str) -> DecodedPicture:
    """Read an image file for embedding.

    Args:
        file_path: Path to a JPEG or PNG file

    Returns:
        DecodedPicture with the raw file bytes and MIME type

    Raises:
        NotFoundError: If the image file does not exist
        PermissionDeniedError: If the image file cannot be read
        UnsupportedError: If the image is not JPEG or PNG
    """
    path = Path(file_path)
    if not path.is_file():
        raise NotFoundError(f"Image not found: {path}")

    mime_type = resolve_mime_type(path)
    data = _read_bytes(path)
    logger.debug(f"Decoded {path} ({mime_type}, {len(data)} bytes)")
    return DecodedPicture(data=data, mime_type=mime_type)
