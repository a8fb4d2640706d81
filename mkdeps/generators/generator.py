# SPDX-License-Identifier: MIT
"""Generator protocol for build file generation.

Generators take a resolved DependencyGraph and render build system
files from it (currently Makefiles).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from mkdeps.core.errors import GenerateError

if TYPE_CHECKING:
    from mkdeps.core.graph import DependencyGraph

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    """Protocol for build file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'make')."""
        ...

    def generate(self, graph: DependencyGraph, output: TextIO) -> None:
        """Render build rules for ``graph`` to ``output``."""
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        """Initialize a generator.

        Args:
            name: Generator name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, graph: DependencyGraph, output: TextIO) -> None:
        """Render build rules. Subclasses must implement."""
        raise NotImplementedError

    def write(self, graph: DependencyGraph, path: Path | str) -> Path:
        """Render build rules into the file at ``path``.

        Parent directories are created as needed.

        Raises:
            GenerateError: If the file cannot be written.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", newline="\n") as f:
                self.generate(graph, f)
        except OSError as e:
            raise GenerateError(f"cannot write {path}: {e}") from e
        logger.info("Wrote %s", path)
        return path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
