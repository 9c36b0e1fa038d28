"""Cube face identities and the fixed six-face ordering."""

from enum import Enum
from typing import Generic, NamedTuple, Sequence, TypeVar

T = TypeVar("T")


class CubeFace(Enum):
    """Enumerate cube faces in DDS cubemap storage order."""

    PX = 0
    NX = 1
    PY = 2
    NY = 3
    PZ = 4
    NZ = 5

    @property
    def index(self) -> int:
        return self.value


FACE_COUNT = len(CubeFace)


def face_label(face_index: int) -> str:
    """Return ``"#2 PY"`` style label used in diagnostics."""
    return f"#{face_index} {CubeFace(face_index).name}"


class CubeFaces(NamedTuple, Generic[T]):
    """Six per-face items in storage order: +X, -X, +Y, -Y, +Z, -Z."""

    px: T
    nx: T
    py: T
    ny: T
    pz: T
    nz: T

    @classmethod
    def from_sequence(cls, items: Sequence[T]) -> "CubeFaces[T]":
        """Build from a positional sequence, rejecting anything but six items."""
        if isinstance(items, cls):
            return items
        items = list(items)
        if len(items) != FACE_COUNT:
            raise ValueError(
                f"a cubemap needs exactly {FACE_COUNT} faces "
                f"(PX NX PY NY PZ NZ), got {len(items)}"
            )
        return cls(*items)

    def get(self, face: CubeFace) -> T:
        return self[face.index]
