# SPDX-License-Identifier: MIT
"""Prerequisite resolution for source files.

The Resolver computes, for one file, every file it depends on through
(transitive) include directives:

1. Direct include targets are extracted in file order.
2. Each target not yet visited is expanded recursively, sharing one
   visited set for the whole top-level call. Its prerequisites are
   appended after everything already listed.
3. The result is deduplicated (first occurrence wins) and any target
   sharing the file's stem (its "self header", e.g. foo.h for foo.c) is
   moved to the front.

Include targets are compared as raw strings: "./foo.h" and "foo.h" are
different files. They are only joined onto the root directory to find
them on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePath

from mkdeps.core.includes import scan_file

logger = logging.getLogger(__name__)


def is_self_header(target: str, file: str) -> bool:
    """Whether ``target`` shares ``file``'s base name but is another file."""
    return target != file and PurePath(target).stem == PurePath(file).stem


def unique(items: Iterable[str]) -> list[str]:
    """Deduplicate, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


def promote_self_headers(prereqs: list[str], file: str) -> list[str]:
    """Move self headers of ``file`` to the front, keeping relative order."""
    own = [p for p in prereqs if is_self_header(p, file)]
    if not own:
        return prereqs
    return own + [p for p in prereqs if not is_self_header(p, file)]


class Resolver:
    """Resolves the transitive include prerequisites of files.

    A Resolver holds no per-resolution state; the visited set is passed
    explicitly so independent top-level calls cannot interfere.

    Example:
        resolver = Resolver("src")
        resolver.resolve("main.c")   # ['main.h', 'util.h', ...]

    Attributes:
        root_dir: Directory include targets are looked up in.
        follow_system: If True, angle-bracket includes are resolved too.
            By default only quoted (local) includes are followed.
    """

    def __init__(self, root_dir: Path | str = ".", *, follow_system: bool = False):
        self.root_dir = Path(root_dir)
        self.follow_system = follow_system

    def resolve(self, file: str, visited: set[str] | None = None) -> list[str]:
        """Return the prerequisites of ``file``.

        Args:
            file: Path of the file to resolve, relative to ``root_dir``.
            visited: Files already expanded in this top-level call. When
                None or empty, it is seeded with ``file``. The set is
                updated in place with every file expanded.

        Returns:
            Deduplicated prerequisites, self headers first. ``file`` itself
            is only listed if it includes itself directly.

        Raises:
            MissingFileError: If ``file`` or any included file is missing.
            UnreadableFileError: If one of them cannot be read.
        """
        if visited is None:
            visited = set()
        if not visited:
            visited.add(file)
        return self._resolve(file, visited, None, (file,))

    def direct_includes(self, file: str, referenced_by: str | None = None) -> list[str]:
        """Return the include targets ``file`` names directly, in file order."""
        directives = scan_file(self.root_dir / file, referenced_by, name=file)
        return [d.target for d in directives if self.follow_system or not d.system]

    def _resolve(
        self,
        file: str,
        visited: set[str],
        referenced_by: str | None,
        stack: tuple[str, ...],
    ) -> list[str]:
        targets = self.direct_includes(file, referenced_by)
        prereqs = list(targets)

        for target in targets:
            if target in visited:
                if target in stack:
                    logger.debug(
                        "Include cycle: %s -> %s", " -> ".join(stack), target
                    )
                continue
            visited.add(target)
            nested = self._resolve(target, visited, file, stack + (target,))
            # A cycle back to this file does not make it its own prerequisite
            prereqs.extend(p for p in nested if p != file)

        # Promotion is a stable partition, so doing it once after expansion
        # orders direct and transitive self headers alike.
        return promote_self_headers(unique(prereqs), file)

    def __repr__(self) -> str:
        return f"Resolver({str(self.root_dir)!r}, follow_system={self.follow_system})"


def resolve_prerequisites(
    file: str,
    visited: set[str] | None = None,
    *,
    root_dir: Path | str = ".",
    follow_system: bool = False,
) -> list[str]:
    """Resolve ``file`` with a one-off Resolver. See Resolver.resolve."""
    return Resolver(root_dir, follow_system=follow_system).resolve(file, visited)
