# SPDX-License-Identifier: MIT
"""Include directive extraction.

Scans C/C++ text line by line for ``#include "path"`` and
``#include <path>`` directives. This is a textual scan only: there is
no macro expansion, no continuation-line joining and no comment
awareness, so a directive inside a block comment is still reported.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from mkdeps.core.errors import MissingFileError, UnreadableFileError

logger = logging.getLogger(__name__)

INCLUDE_RE = re.compile(r'^\s*#\s*include\s*(?:"([^"]+)"|<([^>]+)>)')


@dataclass(frozen=True)
class IncludeDirective:
    """A single ``#include`` found in a file.

    Attributes:
        target: The path exactly as written between the delimiters.
        system: True for the angle-bracket form.
        line: 1-based line number of the directive.
    """

    target: str
    system: bool = False
    line: int = 0


def extract_includes(lines: str | Iterable[str]) -> list[IncludeDirective]:
    """Return the include directives in ``lines``, in file order.

    Args:
        lines: Full file text, or an iterable of lines (e.g. an open file).
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    directives: list[IncludeDirective] = []
    for lineno, line in enumerate(lines, start=1):
        match = INCLUDE_RE.match(line)
        if match is None:
            continue
        quoted, angled = match.groups()
        if quoted is not None:
            directives.append(IncludeDirective(quoted, system=False, line=lineno))
        else:
            directives.append(IncludeDirective(angled, system=True, line=lineno))
    return directives


def scan_file(
    path: Path | str,
    referenced_by: str | None = None,
    *,
    name: str | None = None,
) -> list[IncludeDirective]:
    """Open ``path`` and extract its include directives.

    Args:
        path: File to scan.
        referenced_by: File that included ``path``, used in error messages.
        name: Name reported in errors instead of ``path``; the include
            target as written when ``path`` was joined onto a directory.

    Raises:
        MissingFileError: If the file does not exist.
        UnreadableFileError: If the file exists but cannot be read.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            directives = extract_includes(f)
    except FileNotFoundError as e:
        raise MissingFileError(name or str(path), referenced_by) from e
    except OSError as e:
        raise UnreadableFileError(name or str(path), referenced_by) from e

    logger.debug("Scanned %s: %d include(s)", path, len(directives))
    return directives
