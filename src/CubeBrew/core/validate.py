"""Per-face and cross-face structural checks for cubemap inputs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import FormatError, ValidationError
from .faces import FACE_COUNT, face_label
from .header import (
    DDS_HEADER_SIZE,
    DDS_PIXELFORMAT_SIZE,
    DDS_PREFIX_SIZE,
    DDSHeader,
    expected_mip_count,
)


class FaceStatus(Enum):
    """Outcome kind for one validated face."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class MipWarning:
    """Stored mip count differs from a complete chain. Never blocks assembly."""

    face_index: int
    mip_map_count: int
    expected: int

    def __str__(self) -> str:
        return (
            f"incomplete mipmap level set {self.mip_map_count} "
            f"(expected {self.expected})"
        )


@dataclass
class FaceOutcome:
    """Result of validating one face header."""

    face_index: int
    header: Optional[DDSHeader] = None
    warnings: List[MipWarning] = field(default_factory=list)
    error: Optional[str] = None
    # True when the error means "not a DDS container" rather than a bad header.
    format_error: bool = False

    @property
    def status(self) -> FaceStatus:
        if self.error is not None:
            return FaceStatus.ERROR
        if self.warnings:
            return FaceStatus.WARNING
        return FaceStatus.OK

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, path: Optional[str] = None):
        """Raise the FormatError/ValidationError this outcome describes, if any."""
        if self.error is None:
            return
        exc_cls = FormatError if self.format_error else ValidationError
        raise exc_cls(self.error, face_index=self.face_index, path=path)


def validate_face(header: DDSHeader, face_index: int, buffer_length: int,
                  first_header: Optional[DDSHeader] = None) -> FaceOutcome:
    """Check one decoded face header.

    ``first_header`` is the already-validated face 0 header; it is required
    for faces 1-5 and ignored for face 0. Checks run in a fixed order and stop
    at the first error. A mip count mismatch is recorded as a warning and does
    not stop the remaining checks.
    """
    if not 0 <= face_index < FACE_COUNT:
        raise ValueError(f"face_index must be in 0..{FACE_COUNT - 1}, got {face_index}")
    if face_index > 0 and first_header is None:
        raise ValueError(f"face {face_label(face_index)} needs the face 0 header")

    outcome = FaceOutcome(face_index=face_index, header=header)

    if buffer_length < DDS_PREFIX_SIZE:
        outcome.error = (
            f"not a DDS container ({buffer_length} bytes, "
            f"need at least {DDS_PREFIX_SIZE})"
        )
        outcome.format_error = True
        return outcome

    if header.size != DDS_HEADER_SIZE:
        outcome.error = f"header size is {header.size}, expected {DDS_HEADER_SIZE}"
        return outcome
    if header.pixel_format.size != DDS_PIXELFORMAT_SIZE:
        outcome.error = (
            f"pixel format size is {header.pixel_format.size}, "
            f"expected {DDS_PIXELFORMAT_SIZE}"
        )
        return outcome
    if header.width == 0 or header.height == 0:
        outcome.error = f"zero-sized surface {header.width}x{header.height}"
        return outcome

    expected = expected_mip_count(header.width, header.height)
    if expected != header.mip_map_count:
        outcome.warnings.append(MipWarning(face_index, header.mip_map_count, expected))

    if header.width != header.height:
        outcome.error = (
            f"{header.width}x{header.height} is not square, "
            f"not suitable for cubemap"
        )
        return outcome

    if face_index > 0:
        mismatches = []
        if header.width != first_header.width or header.height != first_header.height:
            mismatches.append(
                f"size {header.width}x{header.height} != "
                f"{first_header.width}x{first_header.height}"
            )
        if header.fourcc != first_header.fourcc:
            mismatches.append(
                f"compression {header.fourcc_str or '-'} != "
                f"{first_header.fourcc_str or '-'}"
            )
        if mismatches:
            outcome.error = (
                "inconsistent definition with face "
                f"{face_label(0)}: " + ", ".join(mismatches)
            )
    return outcome
