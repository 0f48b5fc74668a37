"""Host module graph interface and file-based loader."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

import yaml

from .logging import get_logger
from .models import Module, ResponseFile

logger = get_logger("graph")


class GraphError(ValueError):
    """Raised when a module graph description is invalid."""


class DuplicateModuleNameError(GraphError):
    """Raised when two modules share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate module name '{name}'")
        self.name = name


class ModuleGraph(ABC):
    """Read-only view of the host build graph for one synchronization pass."""

    project_root: str

    @abstractmethod
    def modules(self) -> Sequence[Module]:
        """Return the current modules."""

    @abstractmethod
    def response_file(self, module_name: str) -> Optional[ResponseFile]:
        """Return the response file associated with a module, if any."""

    @abstractmethod
    def asset_paths(self) -> Sequence[str]:
        """Return project files that are not part of any module's sources."""

    @abstractmethod
    def owner_of(self, path: str) -> Optional[str]:
        """Return the name of the module an asset belongs to."""

    def assets_for(self, module_name: str) -> List[str]:
        return [path for path in self.asset_paths() if self.owner_of(path) == module_name]


class StaticModuleGraph(ModuleGraph):
    """In-memory module graph snapshot."""

    def __init__(
        self,
        project_root: str,
        modules: Iterable[Module],
        *,
        response_files: Mapping[str, ResponseFile] | None = None,
        assets: Mapping[str, str] | None = None,
    ) -> None:
        self.project_root = project_root
        self._modules: List[Module] = []
        seen: Set[str] = set()
        for module in modules:
            if module.name in seen:
                raise DuplicateModuleNameError(module.name)
            seen.add(module.name)
            self._modules.append(module)
        self._response_files: Dict[str, ResponseFile] = dict(response_files or {})
        self._assets: Dict[str, str] = dict(assets or {})

    def modules(self) -> Sequence[Module]:
        return list(self._modules)

    def response_file(self, module_name: str) -> Optional[ResponseFile]:
        return self._response_files.get(module_name)

    def asset_paths(self) -> Sequence[str]:
        return list(self._assets)

    def owner_of(self, path: str) -> Optional[str]:
        return self._assets.get(path)

    def assets_for(self, module_name: str) -> List[str]:
        return [path for path, owner in self._assets.items() if owner == module_name]


def load_graph(graph_file: Path, project_root: Path | None = None) -> StaticModuleGraph:
    """Build a :class:`StaticModuleGraph` from a YAML or JSON description.

    Response file paths are resolved against ``project_root`` (defaults to
    the graph file's directory) and read from disk.
    """
    root = (project_root or graph_file.parent).resolve()
    try:
        data = yaml.safe_load(graph_file.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise GraphError(f"Failed to parse {graph_file.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise GraphError(f"{graph_file.name} must contain a mapping at the root")

    raw_modules = data.get("modules") or []
    if not isinstance(raw_modules, list):
        raise GraphError("'modules' must be a list")

    specs: Dict[str, Dict[str, Any]] = {}
    order: List[str] = []
    for entry in raw_modules:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise GraphError("Every module needs a string 'name'")
        name = entry["name"]
        if name in specs:
            raise DuplicateModuleNameError(name)
        specs[name] = entry
        order.append(name)

    built: Dict[str, Module] = {}

    def _build(name: str, visiting: Set[str]) -> Module:
        if name in built:
            return built[name]
        if name in visiting:
            raise GraphError(f"Cyclic module reference involving '{name}'")
        if name not in specs:
            raise GraphError(f"Unknown module reference '{name}'")
        visiting.add(name)
        entry = specs[name]
        references = tuple(_build(ref, visiting) for ref in _as_str_list(entry.get("references")))
        visiting.discard(name)
        module = Module(
            name=name,
            output_path=str(entry.get("output") or f"Library/ScriptAssemblies/{name}.dll"),
            source_files=tuple(_as_str_list(entry.get("sources"))),
            module_references=references,
            compiled_references=tuple(_as_str_list(entry.get("compiled_references"))),
            defines=tuple(_as_str_list(entry.get("defines"))),
            unsafe_allowed=bool(entry.get("unsafe", False)),
            root_namespace=str(entry.get("root_namespace") or ""),
            warning_level=_as_int(entry.get("warning_level")),
            lang_version=_as_optional_str(entry.get("lang_version")),
            treat_warnings_as_errors=_as_optional_bool(entry.get("treat_warnings_as_errors")),
        )
        built[name] = module
        return module

    modules = [_build(name, set()) for name in order]

    response_files: Dict[str, ResponseFile] = {}
    for name in order:
        rsp = specs[name].get("response_file")
        if not isinstance(rsp, str) or not rsp:
            continue
        rsp_path = Path(rsp) if Path(rsp).is_absolute() else root / rsp
        try:
            content = rsp_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Response file %s for module %s not found", rsp, name)
            continue
        response_files[name] = ResponseFile(path=rsp, content=content)

    assets_data = data.get("assets") or {}
    if not isinstance(assets_data, dict):
        raise GraphError("'assets' must map asset paths to module names")
    assets = {str(path): str(owner) for path, owner in assets_data.items() if owner}

    return StaticModuleGraph(
        str(root),
        modules,
        response_files=response_files,
        assets=assets,
    )


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_optional_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_optional_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


__all__ = [
    "DuplicateModuleNameError",
    "GraphError",
    "ModuleGraph",
    "StaticModuleGraph",
    "load_graph",
]
