# SPDX-License-Identifier: MIT
"""Source file discovery.

Lists the compilable sources in a single directory. Only the top level
is scanned; sources are identified by suffix.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from mkdeps.core.errors import MissingFileError, UnreadableFileError

logger = logging.getLogger(__name__)

C_SUFFIXES: tuple[str, ...] = (".c",)
CXX_SUFFIXES: tuple[str, ...] = (".c", ".cc", ".cpp", ".cxx")


@dataclass(frozen=True)
class SourceFile:
    """A compilable source file.

    Attributes:
        path: Path as discovered, relative to the scanned directory.
        suffix: File extension including the dot (e.g. ".c").
    """

    path: str
    suffix: str

    @classmethod
    def from_path(cls, path: str) -> SourceFile:
        return cls(path, Path(path).suffix)

    @property
    def stem(self) -> str:
        """Base name without directory or extension."""
        return Path(self.path).stem

    def __str__(self) -> str:
        return self.path


def discover_sources(
    directory: Path | str = ".",
    suffixes: Iterable[str] = C_SUFFIXES,
) -> list[SourceFile]:
    """Find source files directly inside ``directory``.

    Args:
        directory: Directory to list.
        suffixes: Extensions (with the dot) that mark a compilable source.

    Returns:
        Sources sorted by name, with paths relative to ``directory``.

    Raises:
        MissingFileError: If ``directory`` does not exist.
        UnreadableFileError: If it cannot be listed.
    """
    directory = Path(directory)
    wanted = set(suffixes)

    try:
        entries = sorted(directory.iterdir())
    except FileNotFoundError as e:
        raise MissingFileError(str(directory)) from e
    except OSError as e:
        raise UnreadableFileError(str(directory)) from e

    sources = [
        SourceFile.from_path(entry.name)
        for entry in entries
        if entry.suffix in wanted and entry.is_file()
    ]
    logger.info("Found %d source file(s) in %s", len(sources), directory)
    return sources
