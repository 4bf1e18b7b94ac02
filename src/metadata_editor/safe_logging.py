"""Keep file-system paths and personal data out of log output.

Sessions log the audio and image files they touch. The formatter here
replaces path arguments with a short form (``album/song.mp3``) or an opaque
``file:<hash>`` token, and scrubs e-mail addresses that comment and copyright
tags tend to carry.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

EMAIL_PATTERN = re.compile(r"\b[\w.%+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}\b")

# Extensions treated as file names when found in plain string log arguments
PATH_SUFFIXES = frozenset({".mp3", ".mp4", ".m4a", ".jpg", ".jpeg", ".png", ".gif", ".toml"})

LIBRARY_ROOT_ENV = "METADATA_EDITOR_LIBRARY_ROOT"


def hash_path(file_path: Path | str, length: int = 12) -> str:
    """Return the first ``length`` hex digits of the SHA-256 of the path text."""
    digest = hashlib.sha256(os.fspath(file_path).encode("utf-8", "surrogatepass"))
    return digest.hexdigest()[:length]


def relativize_path(file_path: Path | str, library_root: Path | str | None = None) -> str:
    """Shorten a path for display.

    Paths below ``library_root`` are shown relative to it; anything else keeps
    only its parent directory and name.
    """
    path = PurePath(file_path)
    if library_root and path.is_relative_to(library_root):
        return path.relative_to(library_root).as_posix()
    return PurePath(path.parent.name, path.name).as_posix()


def safe_path(
    file_path: Path | str,
    library_root: Path | str | None = None,
    use_hash: bool = False,
) -> str:
    if use_hash:
        return f"file:{hash_path(file_path)}"
    return relativize_path(file_path, library_root)


def sanitize_message(message: str) -> str:
    return EMAIL_PATTERN.sub("[EMAIL]", message)


def looks_like_path(value: Any) -> bool:
    """True for Path objects and for strings naming a media, image or config file."""
    if isinstance(value, PurePath):
        return True
    return isinstance(value, str) and "/" in value and PurePath(value).suffix.lower() in PATH_SUFFIXES


@dataclass(frozen=True)
class PathRedactor:
    """Rewrites path-like log arguments."""

    library_root: Path | None = None
    use_hash: bool = False

    @classmethod
    def from_env(cls, use_hash: bool = False) -> PathRedactor:
        root = os.environ.get(LIBRARY_ROOT_ENV)
        return cls(Path(root) if root else None, use_hash)

    def __call__(self, value: Any) -> Any:
        if looks_like_path(value):
            return safe_path(value, self.library_root, use_hash=self.use_hash)
        return value


class SafeLogFormatter(logging.Formatter):
    """Formatter that redacts path arguments and e-mail addresses."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        sanitize_messages: bool = True,
        hash_paths: bool = False,
    ):
        super().__init__(fmt, datefmt)
        self.sanitize_messages = sanitize_messages
        self.hash_paths = hash_paths
        self.redact = PathRedactor.from_env(use_hash=hash_paths)

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers must still see the untouched record
        record = logging.makeLogRecord(vars(record))

        if self.sanitize_messages:
            record.msg = sanitize_message(str(record.msg))

        args = record.args
        if isinstance(args, Mapping):
            record.args = {key: self.redact(value) for key, value in args.items()}
        elif args:
            record.args = tuple(self.redact(arg) for arg in args)

        return super().format(record)


def configure_rich_logging(
    level: int = logging.WARNING,
    hash_paths: bool = False,
    show_time: bool = True,
    show_path: bool = False,
    console: Console | None = None,
) -> Console:
    """Route root logging through a RichHandler on stderr.

    A RichHandler installed by an earlier call is replaced, so invoking the
    CLI several times in one process does not duplicate log lines.

    Returns:
        The console for regular command output (stdout)
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=show_time,
        show_path=show_path,
        markup=False,
        rich_tracebacks=level <= logging.DEBUG,
    )
    # Time and level columns come from RichHandler
    handler.setFormatter(SafeLogFormatter(fmt="%(message)s", hash_paths=hash_paths))

    root_logger = logging.getLogger()
    for stale in [h for h in root_logger.handlers if isinstance(h, RichHandler)]:
        root_logger.removeHandler(stale)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    return console or Console()
