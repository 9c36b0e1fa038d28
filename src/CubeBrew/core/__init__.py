"""Core utilities -- re-exports all public symbols for convenience."""

from .errors import CubemapError, CubemapIOError, FormatError, ValidationError
from .faces import FACE_COUNT, CubeFace, CubeFaces, face_label
from .header import (
    DDS_MAGIC,
    DDS_HEADER_SIZE,
    DDS_PIXELFORMAT_SIZE,
    DDS_PREFIX_SIZE,
    DDSCAPS2_CUBEMAP_ALLFACES,
    DDSHeader,
    PixelFormat,
    decode_header,
    encode_header,
    expected_mip_count,
)
from .validate import FaceOutcome, FaceStatus, MipWarning, validate_face
from .io import OutputSink, read_all
from .logging import setup_logging

__all__ = [
    "CubemapError", "CubemapIOError", "FormatError", "ValidationError",
    "FACE_COUNT", "CubeFace", "CubeFaces", "face_label",
    "DDS_MAGIC", "DDS_HEADER_SIZE", "DDS_PIXELFORMAT_SIZE", "DDS_PREFIX_SIZE",
    "DDSCAPS2_CUBEMAP_ALLFACES",
    "DDSHeader", "PixelFormat", "decode_header", "encode_header",
    "expected_mip_count",
    "FaceOutcome", "FaceStatus", "MipWarning", "validate_face",
    "OutputSink", "read_all",
    "setup_logging",
]
