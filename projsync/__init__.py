"""Keep IDE project files in sync with a host build system's module graph."""

from .graph import DuplicateModuleNameError, GraphError, ModuleGraph, StaticModuleGraph, load_graph
from .models import Module, ResponseFile, ResponseFileOptions
from .parsing import MalformedOptionError
from .paths import UnsupportedPathError
from .synchronizer import Synchronizer
from .writer import WriteFailure

__version__ = "0.1.0"

__all__ = [
    "DuplicateModuleNameError",
    "GraphError",
    "MalformedOptionError",
    "Module",
    "ModuleGraph",
    "ResponseFile",
    "ResponseFileOptions",
    "StaticModuleGraph",
    "Synchronizer",
    "UnsupportedPathError",
    "WriteFailure",
    "load_graph",
]
