"""Configuration loading for projsync (.projsync.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .paths import DEFAULT_PACKAGE_ROOTS, DEFAULT_USER_EXTENSIONS

CONFIG_FILE_NAME = ".projsync.yml"
DEFAULT_GRAPH_FILE = "projsync-graph.yml"
DEFAULT_STATE_PATH = Path(".projsync") / "state.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectConfig:
    """Where generated files go and what the workspace is called."""

    output_dir: Optional[Path] = None
    solution_name: Optional[str] = None
    graph_file: Optional[Path] = None


@dataclass
class ExtensionConfig:
    """Extra file extensions listed as non-compile items."""

    user: List[str] = field(default_factory=lambda: list(DEFAULT_USER_EXTENSIONS))


@dataclass
class PackageConfig:
    """Which paths count as dependency package contents."""

    roots: List[str] = field(default_factory=lambda: list(DEFAULT_PACKAGE_ROOTS))
    generate_all: bool = False


@dataclass
class ProjSyncConfig:
    """Represents the settings defined in .projsync.yml."""

    root: Path
    project: ProjectConfig = field(default_factory=ProjectConfig)
    extensions: ExtensionConfig = field(default_factory=ExtensionConfig)
    packages: PackageConfig = field(default_factory=PackageConfig)
    templates_dir: Optional[Path] = None
    state_path: Optional[Path] = None

    @property
    def output_dir(self) -> Path:
        return self.project.output_dir or self.root

    @property
    def solution_name(self) -> str:
        return self.project.solution_name or self.root.name or "Workspace"

    @property
    def graph_file(self) -> Path:
        return self.project.graph_file or self.root / DEFAULT_GRAPH_FILE

    @property
    def resolved_state_path(self) -> Path:
        return self.state_path or self.root / DEFAULT_STATE_PATH


def load_config(config_path: Path) -> ProjSyncConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProjSyncConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    project_data = _as_dict(data.get("project"))
    project = ProjectConfig()
    if project_data:
        output_dir = _as_str(project_data.get("output_dir"))
        graph_file = _as_str(project_data.get("graph_file"))
        project.output_dir = root / output_dir if output_dir else None
        project.graph_file = root / graph_file if graph_file else None
        project.solution_name = _as_str(project_data.get("solution_name"))

    extension_data = _as_dict(data.get("extensions"))
    extensions = ExtensionConfig()
    if extension_data and "user" in extension_data:
        extensions.user = _as_str_list(extension_data.get("user"))

    package_data = _as_dict(data.get("packages"))
    packages = PackageConfig()
    if package_data:
        if "roots" in package_data:
            packages.roots = _as_str_list(package_data.get("roots"))
        packages.generate_all = _as_bool(package_data.get("generate_all")) or False

    templates_data = _as_dict(data.get("templates"))
    templates_dir_str = _as_str(templates_data.get("dir")) if templates_data else None
    templates_dir = root / templates_dir_str if templates_dir_str else None

    state_data = _as_dict(data.get("state"))
    state_path_str = _as_str(state_data.get("path")) if state_data else None
    state_path = root / state_path_str if state_path_str else None

    return ProjSyncConfig(
        root=root,
        project=project,
        extensions=extensions,
        packages=packages,
        templates_dir=templates_dir,
        state_path=state_path,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.name != CONFIG_FILE_NAME:
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ExtensionConfig",
    "PackageConfig",
    "ProjSyncConfig",
    "ProjectConfig",
    "load_config",
]
