# SPDX-License-Identifier: MIT
"""Custom exceptions for mkdeps.

All mkdeps exceptions inherit from MkdepsError. File access failures
share IncludeFileError so callers can treat a missing file and an
unreadable one the same way.
"""

from __future__ import annotations


class MkdepsError(Exception):
    """Base class for all mkdeps exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigureError(MkdepsError):
    """Invalid configuration (bad config file or variable value)."""


class GenerateError(MkdepsError):
    """Error while writing generated build files."""


class IncludeFileError(MkdepsError):
    """A source or include file could not be scanned.

    Attributes:
        path: The path that could not be read, as written in the include.
        referenced_by: The file whose include directive named ``path``,
            or None for a top-level source.
    """

    reason = "cannot read file"

    def __init__(self, path: str, referenced_by: str | None = None) -> None:
        self.path = path
        self.referenced_by = referenced_by
        message = f"{self.reason}: {path}"
        if referenced_by is not None:
            message += f" (included from {referenced_by})"
        super().__init__(message)


class MissingFileError(IncludeFileError):
    """File does not exist on disk."""

    reason = "file not found"


class UnreadableFileError(IncludeFileError):
    """File exists but could not be opened or read."""

    reason = "cannot read file"
