"""Run a cubemap build end-to-end over files on disk.

`build_cubemap` reads the six faces one at a time, drives the assembler,
streams the chunks into an `OutputSink`, and reports exactly one
`AssemblyStatus` for the whole run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from .assembler import CubemapAssembler
from .config import CubemapConfig
from .core import (
    CubeFace,
    CubeFaces,
    CubemapError,
    CubemapIOError,
    DDSHeader,
    FaceOutcome,
    FormatError,
    MipWarning,
    OutputSink,
    ValidationError,
    decode_header,
    face_label,
    expected_mip_count,
    read_all,
)

logger = logging.getLogger("cubemap.pipeline")


class AssemblyStatus(Enum):
    """Single outcome reported for a cubemap run."""

    SUCCESS = "success"
    FORMAT_ERROR = "format_error"
    VALIDATION_ERROR = "validation_error"
    IO_ERROR = "io_error"


_STATUS_BY_ERROR = (
    (CubemapIOError, AssemblyStatus.IO_ERROR),
    (FormatError, AssemblyStatus.FORMAT_ERROR),
    (ValidationError, AssemblyStatus.VALIDATION_ERROR),
)


@dataclass
class AssemblyResult:
    """Structured outcome of `build_cubemap`."""

    status: AssemblyStatus
    output_path: str
    detail: str = ""
    face_index: Optional[int] = None
    path: Optional[str] = None
    outcomes: List[FaceOutcome] = field(default_factory=list)
    bytes_written: int = 0

    @property
    def ok(self) -> bool:
        return self.status is AssemblyStatus.SUCCESS

    @property
    def warnings(self) -> List[MipWarning]:
        return [w for outcome in self.outcomes for w in outcome.warnings]


def _status_for(exc: CubemapError) -> AssemblyStatus:
    for exc_cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_cls):
            return status
    return AssemblyStatus.IO_ERROR


def _log_face(face_index: int, path: str, outcome: FaceOutcome, report_mips: bool):
    header = outcome.header
    if header is not None:
        logger.info(
            "Side %s %dx%d Compr: %s NbMips: %d (%s)",
            face_label(face_index), header.width, header.height,
            header.fourcc_str or "-", header.mip_map_count, path,
        )
    if report_mips:
        for warning in outcome.warnings:
            logger.warning("Face %s: %s", face_label(face_index), warning)


def build_cubemap(paths: Union[CubeFaces, Sequence[str]], output_path: str,
                  config: Optional[CubemapConfig] = None) -> AssemblyResult:
    """Assemble the DDS files in ``paths`` (PX NX PY NY PZ NZ) into ``output_path``.

    Never raises for I/O, format, or validation failures; those are returned
    as the result status. A failed run leaves no output file unless
    ``config.keep_partial_output`` is set.
    """
    config = config or CubemapConfig()
    faces = CubeFaces.from_sequence(paths)
    assembler = CubemapAssembler()
    sink = OutputSink(
        output_path,
        overwrite=config.overwrite,
        keep_partial=config.keep_partial_output,
    )
    result = AssemblyResult(status=AssemblyStatus.SUCCESS, output_path=output_path)

    current_path = None
    try:
        with sink:
            bar = tqdm(
                list(zip(CubeFace, faces)),
                desc="Cubemap faces",
                unit="face",
                disable=not config.show_progress,
            )
            for face, path in bar:
                current_path = path
                buffer = read_all(path)
                chunk = assembler.feed(buffer, path=path)
                _log_face(face.index, path, assembler.outcomes[-1],
                          config.report_mip_warnings)
                sink.write(chunk)
            assembler.finish()
    except CubemapError as exc:
        rejected = assembler.outcomes[-1] if assembler.outcomes else None
        if rejected is not None and exc.face_index is not None \
                and rejected.face_index == exc.face_index:
            _log_face(rejected.face_index, current_path, rejected,
                      config.report_mip_warnings)
        result.status = _status_for(exc)
        result.detail = str(exc)
        result.face_index = exc.face_index
        result.path = exc.path if exc.path is not None else current_path
    finally:
        result.outcomes = assembler.outcomes
        result.bytes_written = sink.bytes_written

    if result.ok:
        logger.info(
            "Wrote cubemap %s (%d bytes, %d mip warning(s))",
            output_path, result.bytes_written, len(result.warnings),
        )
    else:
        where = ""
        if result.face_index is not None:
            where = f" at face {face_label(result.face_index)}"
        logger.debug("Cubemap build failed%s: %s", where, result.detail)
    return result


def inspect_files(paths: Sequence[str]) -> List[Tuple[str, Union[DDSHeader, CubemapError]]]:
    """Decode the header of each file, pairing it with the header or the error."""
    results = []
    for path in paths:
        try:
            results.append((path, decode_header(read_all(path))))
        except FormatError as exc:
            exc.path = path
            results.append((path, exc))
        except CubemapIOError as exc:
            results.append((path, exc))
    return results


def describe_header(header: DDSHeader) -> str:
    """One-line header summary used by `--inspect`."""
    return (
        f"{header.width}x{header.height} Compr: {header.fourcc_str or '-'} "
        f"NbMips: {header.mip_map_count} "
        f"(complete chain {expected_mip_count(header.width, header.height)}) "
        f"caps2: 0x{header.caps2:08X}"
        + (" cubemap" if header.is_complete_cubemap else "")
    )
