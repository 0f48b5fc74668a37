"""Change tracking between synchronization passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Set

from .logging import get_logger
from .paths import PathMapper


@dataclass
class MembershipSnapshot:
    """File membership observed during one synchronization pass.

    ``files`` maps a root-relative ``/``-separated path to the names of the
    modules it belongs to. ``projected`` holds the modules that produced a
    project file.
    """

    files: Dict[str, Set[str]] = field(default_factory=dict)
    projected: Set[str] = field(default_factory=set)

    def add(self, path: str, module_name: str) -> None:
        self.files.setdefault(path, set()).add(module_name)

    def modules_for(self, path: str) -> Set[str]:
        return self.files.get(path, set())


class ChangeTracker:
    """Maps changed paths to the modules whose project files are stale."""

    def __init__(
        self,
        mapper: PathMapper,
        previous: MembershipSnapshot | None = None,
    ) -> None:
        self.mapper = mapper
        self.previous = previous or MembershipSnapshot()
        self.has_history = previous is not None
        self.logger = get_logger("tracking")

    def relevant_paths(
        self,
        paths: Iterable[str],
        *,
        include_packages: bool,
    ) -> List[str]:
        """Return root-relative keys for paths that may affect generation."""
        relevant: List[str] = []
        for path in paths:
            key = self.mapper.relative(path)
            if not include_packages and self.mapper.is_package_path(key):
                self.logger.debug("Ignoring package path %s", key)
                continue
            if key not in relevant:
                relevant.append(key)
        return relevant

    def dirty_modules(self, paths: Iterable[str], current: MembershipSnapshot) -> Set[str]:
        """Modules owning any of ``paths`` now or during the previous pass."""
        dirty: Set[str] = set()
        for path in paths:
            dirty.update(self.previous.modules_for(path))
            dirty.update(current.modules_for(path))
        return dirty

    def eligibility_changes(self, current: MembershipSnapshot) -> Set[str]:
        """Modules that started or stopped producing a project file.

        Without a previous pass there is nothing to compare against.
        """
        if not self.has_history:
            return set()
        return self.previous.projected.symmetric_difference(current.projected)

    @staticmethod
    def dependents(
        changed: Set[str], references_of: Dict[str, Iterable[str]]
    ) -> Set[str]:
        """Modules whose references include any of ``changed``."""
        return {
            name
            for name, references in references_of.items()
            if changed.intersection(references)
        }

    def commit(self, snapshot: MembershipSnapshot) -> None:
        self.previous = snapshot
        self.has_history = True


def build_snapshot(
    module_files: Dict[str, Iterable[str]],
    projected: Iterable[str],
    relative: Callable[[str], str],
) -> MembershipSnapshot:
    snapshot = MembershipSnapshot(projected=set(projected))
    for name, paths in module_files.items():
        for path in paths:
            snapshot.add(relative(path), name)
    return snapshot


__all__ = ["ChangeTracker", "MembershipSnapshot", "build_snapshot"]
