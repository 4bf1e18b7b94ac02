__all__ = (
    "EditSession",
    "create_session",
    "EditorConfig",
    # Attributes
    "Attribute",
    "ContainerKind",
    "classify",
    # Pictures
    "Picture",
    "DecodedPicture",
    "decode_picture",
    # Errors
    "ErrorKind",
    "MetadataEditorError",
    "InvalidParameterError",
    "PermissionDeniedError",
    "NotFoundError",
    "UnsupportedError",
    "OutOfMemoryError",
    "OperationFailedError",
)

from metadata_editor.attributes import Attribute, ContainerKind
from metadata_editor.classifier import classify
from metadata_editor.config import EditorConfig
from metadata_editor.errors import (
    ErrorKind,
    InvalidParameterError,
    MetadataEditorError,
    NotFoundError,
    OperationFailedError,
    OutOfMemoryError,
    PermissionDeniedError,
    UnsupportedError,
)
from metadata_editor.picture_codec import DecodedPicture, decode_picture
from metadata_editor.pictures import Picture
from metadata_editor.session import EditSession, create_session
