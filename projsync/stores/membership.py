"""Persistent store for module file membership between runs."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..tracking import MembershipSnapshot

_STATE_VERSION = 1


class MembershipStore:
    """Saves the tracker snapshot so incremental syncs survive process restarts."""

    def __init__(self, path: Path | None) -> None:
        self._path = path

    def load(self) -> Optional[MembershipSnapshot]:
        if self._path is None:
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(data, dict) or data.get("version") != _STATE_VERSION:
            return None
        files_payload = data.get("files")
        projected_payload = data.get("projected")
        if not isinstance(files_payload, dict) or not isinstance(projected_payload, list):
            return None
        files: Dict[str, Set[str]] = {}
        for path, names in files_payload.items():
            if not isinstance(path, str) or not isinstance(names, list):
                continue
            valid = {name for name in names if isinstance(name, str)}
            if valid:
                files[path] = valid
        projected = {name for name in projected_payload if isinstance(name, str)}
        return MembershipSnapshot(files=files, projected=projected)

    def save(self, snapshot: MembershipSnapshot) -> None:
        if self._path is None:
            return
        files: Dict[str, List[str]] = {
            path: sorted(names) for path, names in snapshot.files.items()
        }
        payload = {
            "version": _STATE_VERSION,
            "files": files,
            "projected": sorted(snapshot.projected),
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )

    def clear(self) -> None:
        if self._path is not None:
            self._path.unlink(missing_ok=True)


__all__ = ["MembershipStore"]
