# SPDX-License-Identifier: MIT
"""Makefile generator.

Produces a Makefile fragment with:
- a SOURCES variable listing every resolved source,
- a fixed preamble that builds $(TARGET_OUTPUT) (or $(OUTPUT)) from the
  objects, expecting TARGET, TARGET_CC, TARGET_CFLAGS, TARGET_LDFLAGS,
  LDFLAGS and CFLAGS to be defined by the including Makefile,
- one rule per source whose prerequisites are the source and every
  header it includes, transitively.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING, TextIO

from mkdeps.configure.config import MakefileVariables
from mkdeps.generators.generator import BaseGenerator

if TYPE_CHECKING:
    from mkdeps.core.graph import DependencyGraph

PREAMBLE_TEMPLATE = """\
OBJECT_PREFIX:={object_prefix}
OBJECTS:=$(addprefix $(OBJECT_PREFIX),$(addsuffix .o,$(basename $(SOURCES))))
OUTPUT_PREFIX:={output_prefix}
{output}:=$(addprefix $(OUTPUT_PREFIX),$({output}))

all: prepare_build $({output})

prepare_build:
\tmkdir -p $(OBJECT_PREFIX)
\tmkdir -p $(OUTPUT_PREFIX)
.PHONY: all prepare_build

$({output}): $(OBJECTS)
\t$(TARGET_CC) $(TARGET_CFLAGS) $(TARGET_LDFLAGS) $(LDFLAGS) $(CFLAGS) $^ -o $@
"""

COMPILE_COMMAND = "\t$(TARGET_CC) $(TARGET_CFLAGS) $(CFLAGS) -c -o $@ $<"

# Indent of continued SOURCES lines, lining up under the first value
SOURCES_CONTINUATION = " \\\n        "


class MakefileGenerator(BaseGenerator):
    """Generator that writes Makefile dependency rules.

    Example output for a single source:
        $(addprefix $(OBJECT_PREFIX),main.o): main.c main.h util.h
        \t$(TARGET_CC) $(TARGET_CFLAGS) $(CFLAGS) -c -o $@ $<

    Usage:
        generator = MakefileGenerator(config.makefile_variables())
        generator.generate(graph, sys.stdout)
    """

    def __init__(self, variables: MakefileVariables | None = None) -> None:
        super().__init__("make")
        self.variables = variables or MakefileVariables()

    def generate(self, graph: DependencyGraph, output: TextIO) -> None:
        """Write the complete Makefile text for ``graph`` to ``output``."""
        output.write(self.sources_assignment(graph.sources))
        output.write(self.preamble())
        for source, prereqs in graph.items():
            output.write(f"\n{self.rule(source, prereqs)}\n")

    def sources_assignment(self, sources: list[str]) -> str:
        """The SOURCES= assignment, followed by a blank line."""
        return f"SOURCES={SOURCES_CONTINUATION.join(sources)}\n\n"

    def preamble(self) -> str:
        """The fixed object/output/link rules."""
        return PREAMBLE_TEMPLATE.format(
            object_prefix=self.variables.object_prefix,
            output_prefix=self.variables.output_prefix,
            output=self.variables.output_var,
        )

    def object_name(self, source: str) -> str:
        """Rule target for ``source``: its stem with a .o suffix."""
        name = f"{PurePath(source).stem}.o"
        if self.variables.prefix_objects:
            return f"$(addprefix $(OBJECT_PREFIX),{name})"
        return name

    def rule(self, source: str, prereqs: tuple[str, ...] | list[str]) -> str:
        """The dependency line and compile command for one source."""
        line = f"{self.object_name(source)}:"
        if prereqs:
            line += " " + " ".join(prereqs)
        return f"{line}\n{COMPILE_COMMAND}"
