"""Build small synthetic DDS face files for tests."""

import os

from CubeBrew.core import DDSHeader, PixelFormat, encode_header, expected_mip_count

DDPF_FOURCC = 0x4
DDSD_CAPS_HEIGHT_WIDTH_PIXELFORMAT = 0x1 | 0x2 | 0x4 | 0x1000
DDSCAPS_TEXTURE = 0x1000


def make_header(width=16, height=None, fourcc=b"DXT1", mips=None, caps2=0):
    height = width if height is None else height
    if mips is None:
        mips = expected_mip_count(width, height)
    return DDSHeader(
        flags=DDSD_CAPS_HEIGHT_WIDTH_PIXELFORMAT,
        height=height,
        width=width,
        pitch_or_linear_size=max(1, (width + 3) // 4) * max(1, (height + 3) // 4) * 8,
        mip_map_count=mips,
        pixel_format=PixelFormat(flags=DDPF_FOURCC, fourcc=fourcc),
        caps=DDSCAPS_TEXTURE,
        caps2=caps2,
    )


def payload_for(face_index, length=40):
    """Distinct, recognisable payload bytes per face."""
    return bytes((face_index * 37 + i) % 256 for i in range(length))


def make_face_bytes(face_index=0, payload=None, **header_kwargs):
    header = make_header(**header_kwargs)
    if payload is None:
        payload = payload_for(face_index)
    return encode_header(header) + payload


def make_cube(**header_kwargs):
    """Six matching face buffers in PX NX PY NY PZ NZ order."""
    return [make_face_bytes(i, **header_kwargs) for i in range(6)]


def write_faces(directory, buffers, names=("px", "nx", "py", "ny", "pz", "nz")):
    paths = []
    for name, data in zip(names, buffers):
        path = os.path.join(directory, f"{name}.dds")
        with open(path, "wb") as f:
            f.write(data)
        paths.append(path)
    return paths
