# SPDX-License-Identifier: MIT
"""
mkdeps: generate Makefile dependency rules from C/C++ includes.

mkdeps scans a directory of sources, follows their local #include
directives transitively and writes one Makefile rule per source listing
everything it depends on, so make rebuilds an object whenever any header
it uses changes.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
from mkdeps.configure.config import Configure  # noqa: E402
from mkdeps.core.errors import (  # noqa: E402
    IncludeFileError,
    MissingFileError,
    MkdepsError,
    UnreadableFileError,
)
from mkdeps.core.graph import DependencyGraph, build_graph  # noqa: E402
from mkdeps.core.includes import extract_includes  # noqa: E402
from mkdeps.core.resolver import Resolver, resolve_prerequisites  # noqa: E402
from mkdeps.core.scanner import SourceFile, discover_sources  # noqa: E402
from mkdeps.generators.makefile import MakefileGenerator  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Core
    "Configure",
    "DependencyGraph",
    "Resolver",
    "SourceFile",
    "build_graph",
    "discover_sources",
    "extract_includes",
    "resolve_prerequisites",
    # Errors
    "IncludeFileError",
    "MissingFileError",
    "MkdepsError",
    "UnreadableFileError",
    # Generators
    "MakefileGenerator",
]
