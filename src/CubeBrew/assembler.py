"""Assemble six DDS faces into one cubemap stream.

`CubemapAssembler` is a small state machine fed one face buffer at a time in
PX, NX, PY, NY, PZ, NZ order. Face 0 contributes the output header (with the
complete-cubemap caps2 bits set); every face contributes its payload, the
bytes after the 128-byte prefix, unchanged.
"""

from enum import Enum
from typing import Iterable, Iterator, List, Optional

from .core.errors import CubemapError, FormatError
from .core.faces import FACE_COUNT, CubeFace
from .core.header import DDS_PREFIX_SIZE, DDSHeader, decode_header, encode_header
from .core.validate import FaceOutcome, MipWarning, validate_face


class AssemblerState(Enum):
    """Lifecycle of one assembly run."""

    INIT = "init"
    HEADER_EMITTED = "header_emitted"
    DONE = "done"
    FAILED = "failed"


class CubemapAssembler:
    """Validate faces in order and produce the output chunks."""

    def __init__(self):
        self._state = AssemblerState.INIT
        self._next_face = 0
        self._first_header: Optional[DDSHeader] = None
        self._output_header: Optional[DDSHeader] = None
        self._outcomes: List[FaceOutcome] = []

    @property
    def state(self) -> AssemblerState:
        return self._state

    @property
    def next_face(self) -> Optional[CubeFace]:
        """Face expected by the next `feed()` call, or None once finished."""
        if self._state in (AssemblerState.DONE, AssemblerState.FAILED):
            return None
        return CubeFace(self._next_face)

    @property
    def output_header(self) -> Optional[DDSHeader]:
        return self._output_header

    @property
    def outcomes(self) -> List[FaceOutcome]:
        return list(self._outcomes)

    @property
    def warnings(self) -> List[MipWarning]:
        return [w for outcome in self._outcomes for w in outcome.warnings]

    def feed(self, buffer: bytes, path: Optional[str] = None) -> bytes:
        """Consume the next face and return the bytes to append to the output.

        Raises FormatError or ValidationError (with ``face_index`` set) and
        moves to FAILED on the first bad face.
        """
        if self._state is AssemblerState.FAILED:
            raise RuntimeError("assembler already failed; start a new run")
        if self._state is AssemblerState.DONE:
            raise RuntimeError(f"all {FACE_COUNT} faces were already supplied")

        face_index = self._next_face
        try:
            chunk = self._consume(face_index, buffer, path)
        except CubemapError:
            self._state = AssemblerState.FAILED
            raise

        self._next_face += 1
        if self._next_face == FACE_COUNT:
            self._state = AssemblerState.DONE
        return chunk

    def _consume(self, face_index: int, buffer: bytes, path: Optional[str]) -> bytes:
        try:
            header = decode_header(buffer)
        except FormatError as exc:
            exc.face_index = face_index
            exc.path = path
            self._outcomes.append(FaceOutcome(
                face_index=face_index, error=str(exc), format_error=True,
            ))
            raise

        outcome = validate_face(header, face_index, len(buffer), self._first_header)
        self._outcomes.append(outcome)
        outcome.raise_for_error(path)

        payload = bytes(buffer[DDS_PREFIX_SIZE:])
        if self._state is AssemblerState.INIT:
            self._first_header = header
            self._output_header = header.with_cubemap_flag()
            self._state = AssemblerState.HEADER_EMITTED
            return encode_header(self._output_header) + payload
        return payload

    def finish(self):
        """Confirm that all six faces were accepted."""
        if self._state is not AssemblerState.DONE:
            raise RuntimeError(
                f"cubemap incomplete: {self._next_face} of {FACE_COUNT} faces "
                f"accepted (state={self._state.value})"
            )


def iter_cubemap_chunks(faces: Iterable[bytes],
                        assembler: Optional[CubemapAssembler] = None) -> Iterator[bytes]:
    """Yield the output header+payload chunk, then five payload chunks.

    ``faces`` may be lazy; each buffer is pulled only when its turn comes.
    """
    assembler = assembler or CubemapAssembler()
    count = 0
    for buffer in faces:
        if count == FACE_COUNT:
            raise ValueError(f"more than {FACE_COUNT} faces supplied")
        yield assembler.feed(buffer)
        count += 1
    if count != FACE_COUNT:
        raise ValueError(f"a cubemap needs exactly {FACE_COUNT} faces, got {count}")
    assembler.finish()


def assemble_cubemap(faces: Iterable[bytes]) -> bytes:
    """Return the complete cubemap container built from six face buffers."""
    return b"".join(iter_cubemap_chunks(faces))
