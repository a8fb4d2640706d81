# SPDX-License-Identifier: MIT
"""Dependency graph construction.

Resolves every discovered source file once, each with its own visited
set, and collects the results into a DependencyGraph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from mkdeps.core.errors import IncludeFileError
from mkdeps.core.resolver import unique
from mkdeps.core.scanner import SourceFile

if TYPE_CHECKING:
    from mkdeps.core.resolver import Resolver

logger = logging.getLogger(__name__)


class DependencyGraph(Mapping[str, tuple[str, ...]]):
    """Mapping from source path to its prerequisites.

    Each prerequisite list starts with the source itself. Iteration
    follows insertion order, which is the order rules are emitted in.

    Attributes:
        failures: Sources skipped because they could not be resolved,
            mapped to the error (only filled when building with keep_going).
    """

    def __init__(self) -> None:
        self._prereqs: dict[str, tuple[str, ...]] = {}
        self.failures: dict[str, IncludeFileError] = {}

    def add(self, source: str, prereqs: Iterable[str]) -> None:
        """Record ``source`` with ``prereqs``. Each source is added once."""
        if source in self._prereqs:
            raise ValueError(f"source already in graph: {source}")
        self._prereqs[source] = tuple(prereqs)

    @property
    def sources(self) -> list[str]:
        return list(self._prereqs)

    def __getitem__(self, source: str) -> tuple[str, ...]:
        return self._prereqs[source]

    def __iter__(self) -> Iterator[str]:
        return iter(self._prereqs)

    def __len__(self) -> int:
        return len(self._prereqs)

    def __repr__(self) -> str:
        return f"DependencyGraph({self._prereqs!r})"


def build_graph(
    sources: Iterable[SourceFile | str],
    resolver: Resolver,
    *,
    keep_going: bool = False,
) -> DependencyGraph:
    """Resolve each source and build the dependency graph.

    Args:
        sources: Discovered source files.
        resolver: Resolver used for every source.
        keep_going: If True, a source whose includes cannot be read is
            logged, recorded in ``graph.failures`` and left out. Otherwise
            the first such error aborts the whole build.

    Raises:
        IncludeFileError: On the first unreadable include, unless keep_going.
    """
    graph = DependencyGraph()

    for source in sources:
        path = source.path if isinstance(source, SourceFile) else source
        if path in graph:
            logger.warning("Skipping duplicate source %s", path)
            continue

        try:
            prereqs = resolver.resolve(path, {path})
        except IncludeFileError as e:
            if not keep_going:
                raise
            logger.error("Skipping %s: %s", path, e)
            graph.failures[path] = e
            continue

        logger.debug("%s: %s", path, " ".join(prereqs))
        graph.add(path, unique([path, *prereqs]))

    return graph
