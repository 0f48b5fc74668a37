"""Assembly of per-module project descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from ..guids import guid_for
from ..models import Module, ProjectDescriptor, ResponseFileOptions
from ..paths import FileRole, PathMapper, escape
from ..references import ReferenceResolver, project_file_name

BASE_DEFINES = ("DEBUG", "TRACE")
BASE_NO_WARN = ("0169",)
DEFAULT_WARNING_LEVEL = 4
DEFAULT_LANG_VERSION = "latest"

T = TypeVar("T")


@dataclass
class ModuleFiles:
    """Files of one module after classification and projection filtering."""

    compile: List[str] = field(default_factory=list)
    non_compile: List[str] = field(default_factory=list)

    @property
    def produces_descriptor(self) -> bool:
        return bool(self.compile)


class DescriptorBuilder:
    """Builds :class:`ProjectDescriptor` objects from modules.

    ``include_path`` filters host paths before classification (package
    contents are hidden unless everything is generated). ``assets_for`` yields
    the non-script files the host assigns to a module. ``is_projected``
    overrides how referenced modules are checked for a project file of
    their own.
    """

    def __init__(
        self,
        mapper: PathMapper,
        *,
        include_path: Callable[[str], bool] | None = None,
        assets_for: Callable[[str], Sequence[str]] | None = None,
        is_projected: Callable[[Module], bool] | None = None,
    ) -> None:
        self.mapper = mapper
        self._include_path = include_path or (lambda path: True)
        self._assets_for = assets_for or (lambda name: ())
        self.resolver = ReferenceResolver(mapper, is_projected or self.produces_descriptor)

    def files_for(self, module: Module) -> ModuleFiles:
        files = ModuleFiles()
        seen: set[str] = set()
        candidates = list(module.source_files) + list(self._assets_for(module.name))
        for path in candidates:
            key = self.mapper.relative(path)
            if key in seen or not self._include_path(path):
                continue
            seen.add(key)
            role = self.mapper.classify(path)
            if role is FileRole.PRIMARY:
                files.compile.append(path)
            elif role in (FileRole.SECONDARY, FileRole.NON_SOURCE):
                files.non_compile.append(path)
        return files

    def produces_descriptor(self, module: Module) -> bool:
        return self.files_for(module).produces_descriptor

    def build(
        self, module: Module, options: Optional[ResponseFileOptions] = None
    ) -> Optional[ProjectDescriptor]:
        """Return the descriptor for ``module`` or ``None`` without primary sources."""
        files = self.files_for(module)
        if not files.produces_descriptor:
            return None
        options = options or ResponseFileOptions()
        references, project_references = self.resolver.resolve(module, options)
        project_path = self.mapper.project_path

        return ProjectDescriptor(
            name=module.name,
            path=project_file_name(module.name),
            guid=guid_for(module.name),
            assembly_name=escape(module.name),
            root_namespace=escape(module.root_namespace),
            defines=_escaped(_union(BASE_DEFINES, module.defines, options.defines)),
            compile_items=[project_path(path) for path in files.compile],
            non_compile_items=[project_path(path) for path in files.non_compile],
            references=references,
            project_references=project_references,
            analyzers=_mapped(options.analyzer_paths, project_path),
            additional_files=_mapped(options.additional_file_paths, project_path),
            rulesets=[project_path(path) for path in options.ruleset_paths],
            documentation_files=[project_path(path) for path in options.documentation_paths],
            no_warn=_escaped(_union(BASE_NO_WARN, options.no_warn_codes)),
            warn_as_errors=_escaped(_union(options.warn_as_error_codes)),
            treat_warnings_as_errors=_first_set(
                options.treat_all_warnings_as_errors,
                module.treat_warnings_as_errors,
                False,
            ),
            warning_level=_first_set(
                options.warning_level, module.warning_level, DEFAULT_WARNING_LEVEL
            ),
            lang_version=escape(
                _first_set(options.lang_version, module.lang_version, DEFAULT_LANG_VERSION)
            ),
            allow_unsafe=_first_set(options.unsafe, module.unsafe_allowed, False),
            nullable=escape(options.nullable) if options.nullable else None,
        )


def _first_set(*values: Optional[T]) -> T:
    for value in values:
        if value is not None:
            return value
    raise ValueError("no default supplied")


def _union(*sources: Iterable[str]) -> List[str]:
    merged: List[str] = []
    for source in sources:
        for value in source:
            if value and value not in merged:
                merged.append(value)
    return merged


def _escaped(values: Iterable[str]) -> List[str]:
    return [escape(value) for value in values]


def _mapped(paths: Iterable[str], mapper: Callable[[str], str]) -> List[str]:
    return _union(mapper(path) for path in paths)


__all__ = [
    "BASE_DEFINES",
    "BASE_NO_WARN",
    "DEFAULT_LANG_VERSION",
    "DEFAULT_WARNING_LEVEL",
    "DescriptorBuilder",
    "ModuleFiles",
]
