"""Resolution of module references into binary or project references."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, List, Optional, Sequence, Set, Tuple

from .guids import guid_for
from .models import BinaryRef, Module, ProjectRef, Reference, ResponseFileOptions
from .paths import PathMapper, escape, to_posix

PROJECT_FILE_EXTENSION = ".csproj"


def project_file_name(module_name: str) -> str:
    return f"{module_name}{PROJECT_FILE_EXTENSION}"


class ReferenceResolver:
    """Decides how each dependency of a module is linked.

    A referenced module that gets its own project file is linked by project
    reference only; otherwise its compiled output is referenced as a binary.
    """

    def __init__(self, mapper: PathMapper, is_projected: Callable[[Module], bool]) -> None:
        self.mapper = mapper
        self._is_projected = is_projected

    def resolve_module(self, reference: Module) -> Reference:
        if self._is_projected(reference):
            return ProjectRef(
                name=escape(reference.name),
                guid=guid_for(reference.name),
                path=escape(project_file_name(reference.name)),
            )
        return self.binary(reference.output_path, name=reference.name)

    def binary(self, path: str, *, name: Optional[str] = None) -> BinaryRef:
        stem = name if name is not None else PurePosixPath(to_posix(path)).stem
        return BinaryRef(name=escape(stem), hint_path=self.mapper.hint_path(path))

    def resolve(
        self, module: Module, options: Optional[ResponseFileOptions] = None
    ) -> Tuple[List[BinaryRef], List[ProjectRef]]:
        binaries: List[BinaryRef] = []
        projects: List[ProjectRef] = []
        seen_hints: Set[str] = set()

        def _add_binary(ref: BinaryRef) -> None:
            if ref.hint_path in seen_hints:
                return
            seen_hints.add(ref.hint_path)
            binaries.append(ref)

        for path in module.compiled_references:
            _add_binary(self.binary(path))

        seen_projects: Set[str] = set()
        for reference in module.module_references:
            resolved = self.resolve_module(reference)
            if isinstance(resolved, ProjectRef):
                if resolved.guid not in seen_projects:
                    seen_projects.add(resolved.guid)
                    projects.append(resolved)
            else:
                _add_binary(resolved)

        full_paths: Sequence[str] = options.full_path_references if options else ()
        for path in full_paths:
            _add_binary(self.binary(path))

        return binaries, projects


__all__ = ["PROJECT_FILE_EXTENSION", "ReferenceResolver", "project_file_name"]
