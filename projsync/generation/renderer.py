"""Jinja2 rendering of project and workspace descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..guids import CSHARP_PROJECT_TYPE_GUID
from ..models import ProjectDescriptor, WorkspaceDescriptor

PROJECT_TEMPLATE = "project.csproj.j2"
WORKSPACE_TEMPLATE = "solution.sln.j2"
TARGET_FRAMEWORK = "v4.7.1"
NEWLINE = "\r\n"


@dataclass(frozen=True)
class BuildConfiguration:
    """Per-configuration build settings written into each project."""

    name: str
    debug_symbols: bool
    debug_type: str
    optimize: bool
    output_path: str


DEFAULT_CONFIGURATIONS: Sequence[BuildConfiguration] = (
    BuildConfiguration(
        name="Debug",
        debug_symbols=True,
        debug_type="full",
        optimize=False,
        output_path="Temp\\bin\\Debug\\",
    ),
    BuildConfiguration(
        name="Release",
        debug_symbols=False,
        debug_type="pdbonly",
        optimize=True,
        output_path="Temp\\bin\\Release\\",
    ),
)


class TemplateRenderer:
    """Renders descriptors through the bundled (or user supplied) templates."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        configurations: Sequence[BuildConfiguration] = DEFAULT_CONFIGURATIONS,
    ) -> None:
        self.templates_dir = templates_dir
        self.configurations = list(configurations)
        self._env = self._create_env(templates_dir)

    def render_project(self, project: ProjectDescriptor) -> str:
        template = self._env.get_template(PROJECT_TEMPLATE)
        return template.render(
            project=project,
            configurations=self.configurations,
            target_framework=TARGET_FRAMEWORK,
        )

    def render_workspace(self, workspace: WorkspaceDescriptor) -> str:
        template = self._env.get_template(WORKSPACE_TEMPLATE)
        return template.render(
            workspace=workspace,
            configurations=self.configurations,
            project_type_guid=CSHARP_PROJECT_TYPE_GUID,
        )

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence=NEWLINE,
            undefined=StrictUndefined,
        )


__all__ = [
    "BuildConfiguration",
    "DEFAULT_CONFIGURATIONS",
    "NEWLINE",
    "TemplateRenderer",
]
