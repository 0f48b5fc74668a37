"""Deterministic project identifiers."""

from __future__ import annotations

import hashlib

# Project type identifier for C# projects in solution files.
CSHARP_PROJECT_TYPE_GUID = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"


def guid_for(name: str) -> str:
    """Return a stable GUID-shaped identifier derived only from ``name``."""
    digest = hashlib.md5(name.encode("utf-8")).hexdigest().upper()
    return "-".join(
        (digest[0:8], digest[8:12], digest[12:16], digest[16:20], digest[20:32])
    )


__all__ = ["CSHARP_PROJECT_TYPE_GUID", "guid_for"]
