"""Core data models shared across projsync components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Module:
    """A compiled unit of the host build graph.

    Modules are immutable snapshots handed over by the host; the engine never
    mutates them. ``module_references`` holds the referenced ``Module`` objects
    themselves so the reference resolver can inspect their sources.
    """

    name: str
    output_path: str
    source_files: Tuple[str, ...] = ()
    module_references: Tuple["Module", ...] = ()
    compiled_references: Tuple[str, ...] = ()
    defines: Tuple[str, ...] = ()
    unsafe_allowed: bool = False
    root_namespace: str = ""
    warning_level: Optional[int] = None
    lang_version: Optional[str] = None
    treat_warnings_as_errors: Optional[bool] = None


@dataclass(frozen=True)
class ResponseFile:
    """A compiler argument file associated with a module."""

    path: str
    content: str


@dataclass
class ResponseFileOptions:
    """Structured options parsed from one response file.

    List fields keep first-seen order. Rulesets and documentation files keep
    one entry per occurrence; every other list drops duplicates. Scalar fields
    stay ``None`` when the response file does not mention them.
    """

    defines: List[str] = field(default_factory=list)
    analyzer_paths: List[str] = field(default_factory=list)
    additional_file_paths: List[str] = field(default_factory=list)
    ruleset_paths: List[str] = field(default_factory=list)
    documentation_paths: List[str] = field(default_factory=list)
    no_warn_codes: List[str] = field(default_factory=list)
    warn_as_error_codes: List[str] = field(default_factory=list)
    full_path_references: List[str] = field(default_factory=list)
    treat_all_warnings_as_errors: Optional[bool] = None
    warning_level: Optional[int] = None
    lang_version: Optional[str] = None
    unsafe: Optional[bool] = None
    nullable: Optional[str] = None
    malformed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BinaryRef:
    """Reference to a compiled binary."""

    name: str
    hint_path: str


@dataclass(frozen=True)
class ProjectRef:
    """Reference to another generated project descriptor."""

    name: str
    guid: str
    path: str


Reference = Union[BinaryRef, ProjectRef]


@dataclass
class ProjectDescriptor:
    """Render-ready view of one module's project file.

    Every path and free-text value is already escaped for XML output.
    """

    name: str
    path: str
    guid: str
    assembly_name: str
    root_namespace: str
    defines: List[str]
    compile_items: List[str]
    non_compile_items: List[str]
    references: List[BinaryRef]
    project_references: List[ProjectRef]
    analyzers: List[str]
    additional_files: List[str]
    rulesets: List[str]
    documentation_files: List[str]
    no_warn: List[str]
    warn_as_errors: List[str]
    treat_warnings_as_errors: bool
    warning_level: int
    lang_version: str
    allow_unsafe: bool
    nullable: Optional[str] = None


@dataclass(frozen=True)
class WorkspaceEntry:
    """One project listed in the workspace file."""

    name: str
    guid: str
    path: str


@dataclass
class WorkspaceDescriptor:
    """Aggregate listing of every generated project."""

    name: str
    path: str
    entries: List[WorkspaceEntry] = field(default_factory=list)


__all__ = [
    "BinaryRef",
    "Module",
    "ProjectDescriptor",
    "ProjectRef",
    "Reference",
    "ResponseFile",
    "ResponseFileOptions",
    "WorkspaceDescriptor",
    "WorkspaceEntry",
]
