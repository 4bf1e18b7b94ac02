"""Error kinds raised by the metadata editor.

Every failure crossing a public boundary is a MetadataEditorError subclass
carrying an ErrorKind, so callers can branch on ``err.kind`` or catch the
specific subclass. Reads that find nothing return ``None`` instead of raising.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categories of editor failures."""

    INVALID_PARAMETER = "invalid_parameter"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    UNSUPPORTED = "unsupported"
    OUT_OF_MEMORY = "out_of_memory"
    OPERATION_FAILED = "operation_failed"


class MetadataEditorError(Exception):
    """Base class for all metadata editor errors."""

    kind: ErrorKind = ErrorKind.OPERATION_FAILED

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value.replace("_", " "))
        self.message = message


class InvalidParameterError(MetadataEditorError, ValueError):
    """Malformed or out-of-range input, or an attribute the container cannot hold."""

    kind = ErrorKind.INVALID_PARAMETER


class PermissionDeniedError(MetadataEditorError, PermissionError):
    """The file cannot be opened or the container denies the operation."""

    kind = ErrorKind.PERMISSION_DENIED


class NotFoundError(MetadataEditorError, FileNotFoundError):
    """The path does not resolve to a file."""

    kind = ErrorKind.NOT_FOUND


class UnsupportedError(MetadataEditorError):
    """The container or image type is not supported."""

    kind = ErrorKind.UNSUPPORTED


class OutOfMemoryError(MetadataEditorError, MemoryError):
    """Allocation failed while copying tag data."""

    kind = ErrorKind.OUT_OF_MEMORY


class OperationFailedError(MetadataEditorError):
    """Native parse/save failure, read-only session, or corrupt stored data."""

    kind = ErrorKind.OPERATION_FAILED
