"""
Abstract attribute backend.

A backend wraps one opened tag container and answers attribute reads and
writes for it. The session selects a backend once at bind time; after that
every call goes straight to the backend without looking at the container kind
again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from metadata_editor.attributes import Attribute, ContainerKind, FrameBinding, binding_for
from metadata_editor.errors import InvalidParameterError

if TYPE_CHECKING:
    from metadata_editor.config import EditorConfig
    from metadata_editor.pictures import PictureStore


class AttributeBackend(ABC):
    """
    Container-specific attribute access.

    Implementations hold the parsed native container in memory; nothing is
    written to disk until ``save`` is called.
    """

    kind: ContainerKind = ContainerKind.UNKNOWN

    def __init__(self, file_path: Path) -> None:
        self.file_path = file_path

    def binding(self, attribute: Attribute) -> FrameBinding:
        return binding_for(self.kind, attribute)

    def get(self, attribute: Attribute) -> str | None:
        """Read an attribute as text, None when it has no value."""
        return self._get(self.binding(attribute))

    def set(self, attribute: Attribute, value: str | None) -> None:
        """Write an attribute; None or "" deletes it.

        Raises:
            InvalidParameterError: If the attribute is derived or has no binding
        """
        binding = self.binding(attribute)
        if binding.read_only:
            raise InvalidParameterError(f"{attribute} is derived and cannot be set")
        self._set(binding, value)

    @abstractmethod
    def _get(self, binding: FrameBinding) -> str | None:
        pass

    @abstractmethod
    def _set(self, binding: FrameBinding, value: str | None) -> None:
        pass

    @property
    @abstractmethod
    def pictures(self) -> PictureStore:
        """Picture store over the container's native picture list."""

    @abstractmethod
    def save(self, config: EditorConfig) -> None:
        """
        Serialize pending changes to ``file_path``.

        Raises:
            OperationFailedError: If the native save fails
        """

    def close(self) -> None:
        """Release the parsed container."""
