"""
Factory for attribute backends.

Maps a classified container kind to the backend that handles it.
"""

from __future__ import annotations

from pathlib import Path

from metadata_editor.attributes import ContainerKind
from metadata_editor.backends.base import AttributeBackend
from metadata_editor.errors import UnsupportedError


def open_backend(kind: ContainerKind | str, file_path: Path) -> AttributeBackend:
    """
    Open a backend for a file of the given container kind.

    Args:
        kind: Container kind from the classifier
        file_path: File to parse

    Returns:
        Backend holding the parsed tags

    Raises:
        UnsupportedError: If the kind has no backend
        OperationFailedError: If the file cannot be parsed
    """
    kind_enum = ContainerKind(kind) if isinstance(kind, str) else kind

    if kind_enum == ContainerKind.LEGACY_FRAME:
        from metadata_editor.backends.legacy_frame import LegacyFrameBackend

        return LegacyFrameBackend(file_path)

    elif kind_enum == ContainerKind.FLAT_MAP:
        from metadata_editor.backends.flat_map import FlatMapBackend

        return FlatMapBackend(file_path)

    else:
        raise UnsupportedError(f"No tag backend for container kind: {kind_enum}")
