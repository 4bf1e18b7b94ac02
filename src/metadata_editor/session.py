"""
Edit sessions over a single audio file.

An EditSession binds to one file at a time, exposes the 13 semantic attributes
and the embedded picture list, and writes everything back on ``commit``.

Example:
    with EditSession() as session:
        session.bind("song.mp3")
        session.set("artist", "Nirvana")
        session.commit()
"""

from __future__ import annotations

import errno
import logging
import os
from enum import StrEnum
from pathlib import Path
from types import TracebackType

from metadata_editor.attributes import Attribute, ContainerKind
from metadata_editor.backends import AttributeBackend, open_backend
from metadata_editor.classifier import classify
from metadata_editor.config import EditorConfig
from metadata_editor.errors import (
    InvalidParameterError,
    NotFoundError,
    OperationFailedError,
    PermissionDeniedError,
    UnsupportedError,
)
from metadata_editor.picture_codec import decode_picture
from metadata_editor.pictures import Picture

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    """Lifecycle states of an EditSession."""

    UNBOUND = "unbound"
    BOUND = "bound"
    DESTROYED = "destroyed"


def _check_readable(path: Path) -> None:
    """Open ``path`` for reading once and translate the failure, if any."""
    if not path.is_file():
        raise NotFoundError(f"No such file: {path}")
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        if e.errno in (errno.EACCES, errno.EPERM):
            raise PermissionDeniedError(f"No permission to read {path}") from e
        raise NotFoundError(f"Cannot open {path}: {e.strerror}") from e


class EditSession:
    """
    Handle for reading and editing the metadata of one audio file.

    Changes are held in memory until ``commit``. A session is not thread-safe;
    use one session per thread.
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config if config is not None else EditorConfig()
        self.state = SessionState.UNBOUND
        self.kind = ContainerKind.UNKNOWN
        self.path: Path | None = None
        self.is_read_only = False
        self._backend: AttributeBackend | None = None

    def __enter__(self) -> EditSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.state != SessionState.DESTROYED:
            self.destroy()

    def __repr__(self) -> str:
        return f"EditSession(state={self.state}, kind={self.kind}, path={self.path})"

    @property
    def is_open(self) -> bool:
        return self._backend is not None

    # ----------------------------------------------------------------
    # Lifecycle
    # ----------------------------------------------------------------

    def bind(self, file_path: Path | str, read_only: bool = False) -> None:
        """
        Bind the session to an audio file, releasing any previous binding.

        Args:
            file_path: File to edit
            read_only: Refuse mutations even if the file is writable

        Raises:
            NotFoundError: If the path is missing or not a regular file
            PermissionDeniedError: If the file cannot be opened for reading
            UnsupportedError: If the file is neither MP3 nor MP4
            OperationFailedError: If the tags cannot be parsed
        """
        self._require_alive()
        self._release()

        path = Path(file_path)
        _check_readable(path)

        kind = classify(path)
        if kind in (ContainerKind.UNSUPPORTED, ContainerKind.UNKNOWN):
            raise UnsupportedError(f"Unsupported file type: {path.name}")

        self._backend = open_backend(kind, path)
        self.kind = kind
        self.path = path
        self.is_read_only = read_only or not os.access(path, os.W_OK)
        self.state = SessionState.BOUND

        logger.info(
            "Bound %s as %s%s", path, kind, " (read-only)" if self.is_read_only else ""
        )

    set_path = bind

    def commit(self) -> None:
        """
        Write all pending changes to the bound file.

        Raises:
            OperationFailedError: If the session is read-only or the save fails
        """
        backend = self._require_writable()
        backend.save(self.config)

    update = commit

    def destroy(self) -> None:
        """Release the bound file; the session cannot be used afterwards."""
        self._require_alive()
        self._release()
        self.state = SessionState.DESTROYED
        logger.debug("Session destroyed")

    def _release(self) -> None:
        if self._backend is not None:
            logger.debug(f"Releasing {self.kind} backend")
            self._backend.close()
        self._backend = None
        self.kind = ContainerKind.UNKNOWN
        self.path = None
        self.is_read_only = False
        if self.state == SessionState.BOUND:
            self.state = SessionState.UNBOUND

    # ----------------------------------------------------------------
    # State guards
    # ----------------------------------------------------------------

    def _require_alive(self) -> None:
        if self.state == SessionState.DESTROYED:
            raise InvalidParameterError("Session has been destroyed")

    def _require_bound(self) -> AttributeBackend:
        self._require_alive()
        if self._backend is None:
            raise InvalidParameterError("No file bound to session")
        return self._backend

    def _require_writable(self) -> AttributeBackend:
        backend = self._require_bound()
        if self.is_read_only:
            raise OperationFailedError(f"Session for {self.path} is read-only")
        return backend

    # ----------------------------------------------------------------
    # Attributes
    # ----------------------------------------------------------------

    def get(self, attribute: Attribute | str) -> str | None:
        """Read an attribute; None when the file has no value for it."""
        backend = self._require_bound()
        return backend.get(Attribute.parse(attribute))

    def set(self, attribute: Attribute | str, value: str | None) -> None:
        """Set an attribute in memory; None or "" deletes it.

        Raises:
            InvalidParameterError: For picture_count, unknown attributes or
                malformed values
            OperationFailedError: If the session is read-only
        """
        backend = self._require_writable()
        backend.set(Attribute.parse(attribute), value)

    # ----------------------------------------------------------------
    # Pictures
    # ----------------------------------------------------------------

    @property
    def picture_count(self) -> int:
        return self._require_bound().pictures.count()

    def get_picture(self, index: int) -> Picture:
        return self._require_bound().pictures.get(index)

    def append_picture(self, image_path: Path | str) -> None:
        """Embed a JPEG or PNG image after the existing pictures.

        The image is read and validated before the file's picture list is
        touched.
        """
        backend = self._require_writable()
        decoded = decode_picture(image_path)
        backend.pictures.append(decoded)

    def remove_picture(self, index: int) -> None:
        self._require_writable().pictures.remove(index)


def create_session(config: EditorConfig | None = None) -> EditSession:
    """Create an unbound EditSession."""
    return EditSession(config)
