"""Fixed-layout DDS header codec.

The on-disk prefix is the 4-byte magic ``b"DDS "`` followed by a 124-byte
header with a nested 32-byte pixel-format block. Every field is a
little-endian ``uint32`` except the fourCC tag, which is kept as raw bytes.
"""

import dataclasses
import struct
from dataclasses import dataclass, field
from typing import Tuple

from .errors import FormatError

DDS_MAGIC = b"DDS "
DDS_HEADER_SIZE = 124
DDS_PIXELFORMAT_SIZE = 32
DDS_PREFIX_SIZE = len(DDS_MAGIC) + DDS_HEADER_SIZE  # 128

# caps2: DDSCAPS2_CUBEMAP | all six DDSCAPS2_CUBEMAP_{POSITIVE,NEGATIVE}{X,Y,Z}
DDSCAPS2_CUBEMAP_ALLFACES = 0xFE00

_RESERVED1_WORDS = 11

# size, flags, height, width, pitchOrLinearSize, depth, mipMapCount
_HEAD_FMT = "7I"
# reserved1[11]
_RESERVED_FMT = f"{_RESERVED1_WORDS}I"
# ddspf: size, flags, fourCC, rgbBitCount, r/g/b/a masks
_PIXELFORMAT_FMT = "2I4s5I"
# caps, caps2, caps3, caps4, reserved2
_TAIL_FMT = "5I"

_HEADER_STRUCT = struct.Struct(
    "<" + _HEAD_FMT + _RESERVED_FMT + _PIXELFORMAT_FMT + _TAIL_FMT
)
assert _HEADER_STRUCT.size == DDS_HEADER_SIZE


@dataclass
class PixelFormat:
    """DDS_PIXELFORMAT block embedded in the header."""

    size: int = DDS_PIXELFORMAT_SIZE
    flags: int = 0
    fourcc: bytes = b"\x00\x00\x00\x00"
    rgb_bit_count: int = 0
    r_bit_mask: int = 0
    g_bit_mask: int = 0
    b_bit_mask: int = 0
    a_bit_mask: int = 0


@dataclass
class DDSHeader:
    """Decoded DDS_HEADER (the 124 bytes after the magic)."""

    size: int = DDS_HEADER_SIZE
    flags: int = 0
    height: int = 0
    width: int = 0
    pitch_or_linear_size: int = 0
    depth: int = 0
    mip_map_count: int = 0
    reserved1: Tuple[int, ...] = (0,) * _RESERVED1_WORDS
    pixel_format: PixelFormat = field(default_factory=PixelFormat)
    caps: int = 0
    caps2: int = 0
    caps3: int = 0
    caps4: int = 0
    reserved2: int = 0

    @property
    def fourcc(self) -> bytes:
        return self.pixel_format.fourcc

    @property
    def fourcc_str(self) -> str:
        """Printable form of the fourCC tag (NUL padding stripped)."""
        return self.fourcc.rstrip(b"\x00").decode("ascii", errors="replace")

    @property
    def is_complete_cubemap(self) -> bool:
        return (self.caps2 & DDSCAPS2_CUBEMAP_ALLFACES) != 0

    def with_cubemap_flag(self) -> "DDSHeader":
        """Return a copy with every complete-cubemap caps2 bit set."""
        return dataclasses.replace(
            self,
            pixel_format=dataclasses.replace(self.pixel_format),
            caps2=self.caps2 | DDSCAPS2_CUBEMAP_ALLFACES,
        )


def expected_mip_count(width: int, height: int) -> int:
    """Return the level count of a complete mip chain down to 1x1."""
    return max(width, height).bit_length()


def decode_header(data: bytes) -> DDSHeader:
    """Decode the DDS magic and header from the start of ``data``.

    Raises FormatError when the buffer is shorter than the 128-byte prefix or
    does not start with ``b"DDS "``. Bytes past the prefix are ignored.
    """
    if len(data) < DDS_PREFIX_SIZE:
        raise FormatError(
            f"buffer holds {len(data)} bytes, DDS prefix needs {DDS_PREFIX_SIZE}"
        )
    if bytes(data[:4]) != DDS_MAGIC:
        raise FormatError(f"missing DDS magic (got {bytes(data[:4])!r})")

    v = _HEADER_STRUCT.unpack_from(data, len(DDS_MAGIC))
    pixel_format = PixelFormat(
        size=v[18],
        flags=v[19],
        fourcc=v[20],
        rgb_bit_count=v[21],
        r_bit_mask=v[22],
        g_bit_mask=v[23],
        b_bit_mask=v[24],
        a_bit_mask=v[25],
    )
    return DDSHeader(
        size=v[0],
        flags=v[1],
        height=v[2],
        width=v[3],
        pitch_or_linear_size=v[4],
        depth=v[5],
        mip_map_count=v[6],
        reserved1=tuple(v[7:18]),
        pixel_format=pixel_format,
        caps=v[26],
        caps2=v[27],
        caps3=v[28],
        caps4=v[29],
        reserved2=v[30],
    )


def encode_header(header: DDSHeader) -> bytes:
    """Encode ``header`` as the 128-byte magic + header prefix."""
    pf = header.pixel_format
    if len(header.reserved1) != _RESERVED1_WORDS:
        raise FormatError(
            f"reserved1 must hold {_RESERVED1_WORDS} words, "
            f"got {len(header.reserved1)}"
        )
    if not isinstance(pf.fourcc, (bytes, bytearray)) or len(pf.fourcc) != 4:
        raise FormatError(f"fourCC must be 4 bytes, got {pf.fourcc!r}")
    try:
        packed = _HEADER_STRUCT.pack(
            header.size,
            header.flags,
            header.height,
            header.width,
            header.pitch_or_linear_size,
            header.depth,
            header.mip_map_count,
            *header.reserved1,
            pf.size,
            pf.flags,
            bytes(pf.fourcc),
            pf.rgb_bit_count,
            pf.r_bit_mask,
            pf.g_bit_mask,
            pf.b_bit_mask,
            pf.a_bit_mask,
            header.caps,
            header.caps2,
            header.caps3,
            header.caps4,
            header.reserved2,
        )
    except struct.error as exc:
        raise FormatError(f"header field out of uint32 range: {exc}") from exc
    return DDS_MAGIC + packed
