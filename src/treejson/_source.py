"""File-backed byte source used by the path-based entry points."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from ._errors import SourceOpenError

logger = logging.getLogger(__name__)


class FileSource:
    """
    A file on disk exposed as a readable and writable byte source.

    The file is open only for the duration of a single read or write.
    Failing to open it raises SourceOpenError before any bytes move.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"

    def _open(self, mode: str) -> IO[bytes]:
        try:
            return open(self.path, mode)  # noqa: SIM115
        except OSError as e:
            purpose = "reading" if "r" in mode else "writing"
            raise SourceOpenError(
                e.errno,
                f"could not open {self.path} for {purpose}",
                str(self.path),
            ) from e

    @contextmanager
    def open_for_read(self) -> Iterator[IO[bytes]]:
        """Yields a binary stream positioned at the start of the file."""
        with self._open("rb") as stream:
            yield stream

    @contextmanager
    def open_for_write(self) -> Iterator[IO[bytes]]:
        """Yields a binary stream that truncates the file."""
        with self._open("wb") as stream:
            yield stream

    def read_all(self) -> bytes:
        with self.open_for_read() as stream:
            data = stream.read()
        logger.debug("Read %d bytes from %s", len(data), self.path)
        return data

    def write_all(self, data: bytes) -> None:
        with self.open_for_write() as stream:
            stream.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), self.path)
