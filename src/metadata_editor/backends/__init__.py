"""
Tag container backends.

Supports two container kinds:
- Legacy-Frame: MP3 with ID3v2 frames and an optional ID3v1 tag
- Flat-Map: MP4 with an iTunes-style item list
"""

from __future__ import annotations

from metadata_editor.backends.base import AttributeBackend
from metadata_editor.backends.factory import open_backend

__all__ = [
    "AttributeBackend",
    "open_backend",
]
