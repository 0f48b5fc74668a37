"""Synchronization of generated project files with the host module graph."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .config import ProjSyncConfig
from .generation import DescriptorBuilder, TemplateRenderer, WorkspaceBuilder
from .graph import ModuleGraph
from .logging import get_logger
from .models import Module, ProjectDescriptor, ResponseFileOptions
from .parsing import ResponseFileParser
from .paths import DEFAULT_PACKAGE_ROOTS, DEFAULT_USER_EXTENSIONS, PathMapper
from .references import project_file_name
from .stores import MembershipStore
from .tracking import ChangeTracker, MembershipSnapshot, build_snapshot
from .writer import Writer


class Synchronizer:
    """Keeps one project file per module and one solution file up to date.

    The generate-all toggle is instance state: while it is off, files under
    the configured package roots are neither projected nor able to trigger an
    incremental sync.
    """

    def __init__(
        self,
        graph: ModuleGraph,
        *,
        output_dir: Path | None = None,
        solution_name: str | None = None,
        user_extensions: Iterable[str] = DEFAULT_USER_EXTENSIONS,
        package_roots: Sequence[str] = DEFAULT_PACKAGE_ROOTS,
        generate_all: bool = False,
        writer: Writer | None = None,
        renderer: TemplateRenderer | None = None,
        parser: ResponseFileParser | None = None,
        store: MembershipStore | None = None,
    ) -> None:
        self.graph = graph
        self.project_directory = output_dir or Path(graph.project_root)
        self.solution_name = solution_name or Path(graph.project_root).name or "Workspace"
        self.mapper = PathMapper(
            graph.project_root,
            user_extensions=user_extensions,
            package_roots=package_roots,
        )
        self.writer = writer or Writer()
        self.renderer = renderer or TemplateRenderer()
        self.parser = parser or ResponseFileParser()
        self.store = store
        self.builder = DescriptorBuilder(
            self.mapper,
            include_path=self._include_path,
            assets_for=graph.assets_for,
            is_projected=self._is_projected,
        )
        self.workspace_builder = WorkspaceBuilder()
        previous = store.load() if store is not None else None
        self.tracker = ChangeTracker(self.mapper, previous)
        self._generate_all = generate_all
        self._projected: Set[str] = set()
        self.logger = get_logger("synchronizer")

    @classmethod
    def from_config(
        cls,
        graph: ModuleGraph,
        config: ProjSyncConfig,
        *,
        writer: Writer | None = None,
    ) -> "Synchronizer":
        return cls(
            graph,
            output_dir=config.output_dir,
            solution_name=config.solution_name,
            user_extensions=config.extensions.user,
            package_roots=config.packages.roots,
            generate_all=config.packages.generate_all,
            writer=writer,
            renderer=TemplateRenderer(config.templates_dir),
            store=MembershipStore(config.resolved_state_path),
        )

    # ------------------------------------------------------------------
    # Public operations

    def generate_all(self, enabled: bool) -> None:
        """Toggle projection of files inside dependency packages."""
        self._generate_all = bool(enabled)
        self.logger.debug("Generate-all %s", "enabled" if enabled else "disabled")

    @property
    def generate_all_enabled(self) -> bool:
        return self._generate_all

    @property
    def solution_file(self) -> Path:
        return self.project_directory / f"{self.solution_name}.sln"

    def project_file(self, module_name: str) -> Path:
        return self.project_directory / project_file_name(module_name)

    def sync(self) -> None:
        """Regenerate every project file and the solution file."""
        modules = list(self.graph.modules())
        snapshot = self._snapshot(modules)
        writes_before = self.writer.write_count

        for module in modules:
            self._write_module(module)
        self._write_workspace(snapshot.projected)

        self._commit(snapshot)
        self.logger.info(
            "Synchronized %d project(s); %d file(s) written",
            len(snapshot.projected),
            self.writer.write_count - writes_before,
        )

    def sync_if_needed(self, changed: Iterable[str], deleted: Iterable[str]) -> bool:
        """Regenerate only the project files affected by the given paths.

        Returns True when at least one module was affected.
        """
        paths = self.tracker.relevant_paths(
            list(changed) + list(deleted), include_packages=self.generate_all_enabled
        )
        if not paths:
            return False

        modules = list(self.graph.modules())
        snapshot = self._snapshot(modules)
        dirty = self.tracker.dirty_modules(paths, snapshot)
        flipped = self.tracker.eligibility_changes(snapshot)
        if not dirty and not flipped:
            self.logger.debug("No module owns any of %d changed path(s)", len(paths))
            return False

        if flipped:
            references_of = {
                module.name: [reference.name for reference in module.module_references]
                for module in modules
            }
            dirty |= flipped | self.tracker.dependents(flipped, references_of)

        for module in modules:
            if module.name in dirty:
                self._write_module(module)
        self._write_workspace(snapshot.projected)

        self._commit(snapshot)
        self.logger.info(
            "Resynchronized %d module(s) after %d change(s)", len(dirty), len(paths)
        )
        return True

    # ------------------------------------------------------------------
    # Internal helpers

    def _is_projected(self, module: Module) -> bool:
        return module.name in self._projected

    def _include_path(self, path: str) -> bool:
        return self.generate_all_enabled or not self.mapper.is_package_path(path)

    def _options_for(self, module: Module) -> Optional[ResponseFileOptions]:
        response_file = self.graph.response_file(module.name)
        if response_file is None:
            return None
        return self.parser.parse(response_file.content, source=response_file.path)

    def _snapshot(self, modules: Sequence[Module]) -> MembershipSnapshot:
        members: Dict[str, List[str]] = {}
        projected: Set[str] = set()
        for module in modules:
            files = self.builder.files_for(module)
            paths = files.compile + files.non_compile
            response_file = self.graph.response_file(module.name)
            if response_file is not None:
                paths.append(response_file.path)
            members[module.name] = paths
            if files.produces_descriptor:
                projected.add(module.name)
        self._projected = projected
        return build_snapshot(members, projected, self.mapper.relative)

    def _build(self, module: Module) -> Optional[ProjectDescriptor]:
        return self.builder.build(module, self._options_for(module))

    def _write_module(self, module: Module) -> None:
        descriptor = self._build(module)
        if descriptor is None:
            self.logger.debug("Module %s has no script sources; skipping", module.name)
            return
        text = self.renderer.render_project(descriptor)
        self.writer.write_if_changed(self.project_file(descriptor.name), text)

    def _write_workspace(self, projected: Iterable[str]) -> None:
        workspace = self.workspace_builder.build(self.solution_name, projected)
        text = self.renderer.render_workspace(workspace)
        self.writer.write_if_changed(self.solution_file, text)

    def _commit(self, snapshot: MembershipSnapshot) -> None:
        self.tracker.commit(snapshot)
        if self.store is not None:
            self.store.save(snapshot)


__all__ = ["Synchronizer"]
