from __future__ import annotations

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder() -> ProjectBuilder:
    """Provide a builder for an in-memory project rooted at /project."""
    return ProjectBuilder()
