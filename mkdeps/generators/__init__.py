# SPDX-License-Identifier: MIT
"""Build file generators for mkdeps."""

from mkdeps.generators.generator import BaseGenerator, Generator
from mkdeps.generators.makefile import MakefileGenerator

__all__ = [
    "BaseGenerator",
    "Generator",
    "MakefileGenerator",
]
