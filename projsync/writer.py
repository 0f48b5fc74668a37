"""Change-aware writing of generated files."""

from __future__ import annotations

import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .logging import get_logger


class WriteFailure(RuntimeError):
    """Raised when a generated file cannot be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path
        self.cause = cause


class FileIO(ABC):
    """File access used by the writer."""

    @abstractmethod
    def read_bytes(self, path: Path) -> Optional[bytes]:
        """Return the file content or ``None`` when it does not exist."""

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace the whole content of ``path``."""


class LocalFileIO(FileIO):
    """Disk-backed file access with atomic replacement."""

    def read_bytes(self, path: Path) -> Optional[bytes]:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def write_bytes(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = _target_mode(path)
        fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.chmod(temp_name, mode)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise


def _target_mode(path: Path) -> int:
    """Keep the mode of an existing file, otherwise follow the process umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class Writer:
    """Writes text only when it differs from what is already on disk."""

    def __init__(self, file_io: FileIO | None = None, *, encoding: str = "utf-8") -> None:
        self.file_io = file_io or LocalFileIO()
        self.encoding = encoding
        self.write_count = 0
        self.logger = get_logger("writer")

    def write_if_changed(self, path: Path, text: str) -> bool:
        """Write ``text`` to ``path`` unless identical content exists.

        Returns True when a write happened.
        """
        data = text.encode(self.encoding)
        try:
            existing = self.file_io.read_bytes(path)
        except OSError as exc:
            raise WriteFailure(path, exc) from exc
        if existing == data:
            self.logger.debug("Unchanged %s", path)
            return False
        try:
            self.file_io.write_bytes(path, data)
        except OSError as exc:
            raise WriteFailure(path, exc) from exc
        self.write_count += 1
        self.logger.debug("Wrote %s", path)
        return True


__all__ = ["FileIO", "LocalFileIO", "WriteFailure", "Writer"]
