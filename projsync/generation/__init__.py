"""Descriptor assembly and rendering."""

from .descriptor import DescriptorBuilder, ModuleFiles
from .renderer import BuildConfiguration, TemplateRenderer
from .workspace import WorkspaceBuilder

__all__ = [
    "BuildConfiguration",
    "DescriptorBuilder",
    "ModuleFiles",
    "TemplateRenderer",
    "WorkspaceBuilder",
]
