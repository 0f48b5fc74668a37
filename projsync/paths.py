"""Path classification and projection into project-file conventions."""

from __future__ import annotations

import ntpath
import posixpath
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Sequence, Tuple

PRIMARY_EXTENSION = "cs"

AUXILIARY_EXTENSIONS: Tuple[str, ...] = (
    "uxml",
    "uss",
    "shader",
    "compute",
    "cginc",
    "hlsl",
    "glslinc",
    "template",
    "raytrace",
)

DEFAULT_USER_EXTENSIONS: Tuple[str, ...] = ("txt", "xml", "fnt", "cd", "asmdef", "asmref", "rsp")

DEFAULT_PACKAGE_ROOTS: Tuple[str, ...] = ("Packages/", "Library/PackageCache/")

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("'", "&apos;"),
    ('"', "&quot;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


class UnsupportedPathError(ValueError):
    """Raised when a path carries no usable file extension."""


class FileRole(str, Enum):
    """How a file participates in a generated project."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    NON_SOURCE = "non_source"
    UNSUPPORTED = "unsupported"


def escape(text: str) -> str:
    """Escape the five predefined XML entities."""
    for raw, replacement in _XML_ESCAPES:
        text = text.replace(raw, replacement)
    return text


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def _is_absolute(path: str) -> bool:
    return posixpath.isabs(path) or ntpath.isabs(path) or bool(ntpath.splitdrive(path)[0])


class PathMapper:
    """Maps host paths onto the project-file path convention."""

    def __init__(
        self,
        project_root: str,
        *,
        primary_extension: str = PRIMARY_EXTENSION,
        auxiliary_extensions: Iterable[str] = AUXILIARY_EXTENSIONS,
        user_extensions: Iterable[str] = (),
        package_roots: Sequence[str] = DEFAULT_PACKAGE_ROOTS,
    ) -> None:
        self.project_root = to_posix(project_root).rstrip("/")
        self.primary_extension = normalize_extension(primary_extension)
        self.auxiliary_extensions = frozenset(
            normalize_extension(ext) for ext in auxiliary_extensions
        )
        self.user_extensions = frozenset(normalize_extension(ext) for ext in user_extensions)
        self.package_roots = tuple(
            to_posix(root).rstrip("/") + "/" for root in package_roots if root.strip()
        )

    # ------------------------------------------------------------------
    # Classification

    def extension_of(self, path: str) -> str:
        suffix = PurePosixPath(to_posix(path)).suffix
        extension = normalize_extension(suffix)
        if not extension:
            raise UnsupportedPathError(f"{path} has no file extension")
        return extension

    def classify(self, path: str) -> FileRole:
        try:
            extension = self.extension_of(path)
        except UnsupportedPathError:
            return FileRole.UNSUPPORTED
        if extension == self.primary_extension:
            return FileRole.PRIMARY
        if extension in self.auxiliary_extensions:
            return FileRole.SECONDARY
        if extension in self.user_extensions:
            return FileRole.NON_SOURCE
        return FileRole.UNSUPPORTED

    def is_package_path(self, path: str) -> bool:
        relative = self.relative(path)
        return any(relative.startswith(root) for root in self.package_roots)

    # ------------------------------------------------------------------
    # Projection

    def relative(self, path: str) -> str:
        """Return ``path`` relative to the project root when it lies under it.

        The result always uses ``/`` separators and is the key form used for
        change tracking.
        """
        normalized = to_posix(path)
        if not _is_absolute(normalized) or not self.project_root:
            return normalized[2:] if normalized.startswith("./") else normalized
        prefix = self.project_root + "/"
        if normalized.startswith(prefix):
            return normalized[len(prefix):]
        return normalized

    def project_path(self, path: str) -> str:
        """Render an item path: root-relative, backslash separated, escaped."""
        return escape(self.relative(path).replace("/", "\\"))

    def hint_path(self, path: str) -> str:
        """Render a binary reference hint path with forward slashes."""
        return escape(to_posix(path))


__all__ = [
    "AUXILIARY_EXTENSIONS",
    "DEFAULT_PACKAGE_ROOTS",
    "DEFAULT_USER_EXTENSIONS",
    "FileRole",
    "PRIMARY_EXTENSION",
    "PathMapper",
    "UnsupportedPathError",
    "escape",
    "normalize_extension",
    "to_posix",
]
