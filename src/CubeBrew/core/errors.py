"""Error taxonomy for cubemap assembly."""

from typing import Optional


class CubemapError(RuntimeError):
    """Base class for failures that abort a cubemap run."""

    def __init__(self, message: str, face_index: Optional[int] = None,
                 path: Optional[str] = None):
        super().__init__(message)
        self.face_index = face_index
        self.path = path


class CubemapIOError(CubemapError):
    """Raised when an input cannot be read or the output cannot be written."""


class FormatError(CubemapError):
    """Raised when a buffer is not a DDS container (short or missing magic)."""


class ValidationError(CubemapError):
    """Raised when a face header is structurally unusable for a cubemap."""
