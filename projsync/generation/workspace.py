"""Assembly of the aggregate workspace (solution) descriptor."""

from __future__ import annotations

from typing import Iterable

from ..guids import guid_for
from ..models import WorkspaceDescriptor, WorkspaceEntry
from ..references import project_file_name

WORKSPACE_FILE_EXTENSION = ".sln"


class WorkspaceBuilder:
    """Lists every generated project in a stable order."""

    def build(self, name: str, module_names: Iterable[str]) -> WorkspaceDescriptor:
        ordered = sorted(set(module_names), key=lambda item: (item.lower(), item))
        entries = [
            WorkspaceEntry(name=module_name, guid=guid_for(module_name), path=project_file_name(module_name))
            for module_name in ordered
        ]
        return WorkspaceDescriptor(
            name=name,
            path=f"{name}{WORKSPACE_FILE_EXTENSION}",
            entries=entries,
        )


__all__ = ["WORKSPACE_FILE_EXTENSION", "WorkspaceBuilder"]
