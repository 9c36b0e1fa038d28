"""File I/O collaborators: whole-file reads and a sequential output sink."""

import logging
import os
import threading

from .errors import CubemapIOError

logger = logging.getLogger("cubemap.io")


def read_all(path: str) -> bytes:
    """Read a whole file into memory, wrapping OS failures in CubemapIOError."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise CubemapIOError(
            f"unable to read file '{path}': {exc.strerror or exc}", path=path
        ) from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


class OutputSink:
    """Sequential writer that publishes the target file only on success.

    Bytes are written to ``<path>.tmp.<pid>.<tid>`` and moved over ``path``
    by ``close()``. Leaving a ``with`` block through an exception discards the
    temp file, or publishes it as-is when ``keep_partial`` is set.
    """

    def __init__(self, path: str, overwrite: bool = True, keep_partial: bool = False):
        self.path = path
        self.overwrite = overwrite
        self.keep_partial = keep_partial
        self.bytes_written = 0
        self._tmp_path = f"{path}.tmp.{os.getpid()}.{threading.get_ident()}"
        self._file = None
        self._closed = False

    def open(self):
        if self._file is not None:
            return self
        if not self.overwrite and os.path.exists(self.path):
            raise CubemapIOError(
                f"result file '{self.path}' already exists", path=self.path
            )
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            self._file = open(self._tmp_path, "wb")
        except OSError as exc:
            raise CubemapIOError(
                f"unable to write result file '{self.path}': {exc.strerror or exc}",
                path=self.path,
            ) from exc
        logger.debug("Opened temp output %s", self._tmp_path)
        return self

    def write(self, data: bytes):
        if self._closed:
            raise CubemapIOError(f"result file '{self.path}' is already closed",
                                 path=self.path)
        self.open()
        try:
            self._file.write(data)
        except OSError as exc:
            raise CubemapIOError(
                f"unable to write result file '{self.path}': {exc.strerror or exc}",
                path=self.path,
            ) from exc
        self.bytes_written += len(data)

    def close(self):
        """Flush and atomically publish the output file."""
        if self._closed:
            return
        self.open()
        try:
            self._file.close()
            os.replace(self._tmp_path, self.path)
        except OSError as exc:
            self._discard()
            raise CubemapIOError(
                f"unable to write result file '{self.path}': {exc.strerror or exc}",
                path=self.path,
            ) from exc
        finally:
            self._closed = True
        logger.debug("Wrote %d bytes to %s", self.bytes_written, self.path)

    def abort(self):
        """Drop the in-progress output (or keep it when ``keep_partial``)."""
        if self._closed:
            return
        self._closed = True
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as exc:
            logger.warning("Failed to close temp output %s: %s", self._tmp_path, exc)
        if self.keep_partial:
            try:
                os.replace(self._tmp_path, self.path)
                logger.info("Kept partial output at %s", self.path)
                return
            except OSError as exc:
                logger.warning("Failed to keep partial output %s: %s", self.path, exc)
        self._discard()

    def _discard(self):
        if os.path.exists(self._tmp_path):
            try:
                os.remove(self._tmp_path)
            except OSError as exc:
                logger.warning("Failed to remove temp output %s: %s", self._tmp_path, exc)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.abort()
        return False
