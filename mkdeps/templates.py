# SPDX-License-Identifier: MIT
"""Boilerplate generation for new C modules.

``write_module("maths/vec3")`` creates maths/vec3.c and maths/vec3.h:
a source that defines its own guard macro and includes its header, and
a header with an include guard, S_INLINE boilerplate and extern "C"
wrappers for C++ callers.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePath

from mkdeps.configure.config import TemplateVariables

logger = logging.getLogger(__name__)

SOURCE_TEMPLATE = """\
#define {c_guard}

#include "{header}"

#ifdef __cplusplus
extern "C" {{
#endif /* __cplusplus */



#ifdef __cplusplus
}}
#endif /* __cplusplus */
"""

HEADER_TEMPLATE = """\
#ifndef {h_guard}
#define {h_guard} 1

/* Includes */
#include <{config_header}>

/* Inline boilerplate */
#ifdef {c_guard}
#define S_INLINE
#else
#define S_INLINE inline
#endif /* {c_guard} */
/* End inline boilerplate */

#ifdef __cplusplus
extern "C" {{
#endif /* __cplusplus */



#ifdef __cplusplus
}}
#endif /* __cplusplus */

/* Undefine S_INLINE */
#include <inline.end>

#endif /* end {h_guard} include guard */
"""


def guard_name(module: str) -> str:
    """Macro-safe name for ``module``: upper-cased base name, with runs of
    other characters replaced by an underscore."""
    return re.sub(r"[^a-zA-Z0-9]+", "_", PurePath(module).name.upper())


def _guards(module: str, variables: TemplateVariables) -> tuple[str, str]:
    name = guard_name(module)
    prefix = variables.guard_prefix
    return f"__{prefix}__{name}_H__", f"__{prefix}__{name}_C__"


def render_source(module: str, variables: TemplateVariables | None = None) -> str:
    """Text of ``module``.c."""
    variables = variables or TemplateVariables()
    _, c_guard = _guards(module, variables)
    return SOURCE_TEMPLATE.format(c_guard=c_guard, header=f"{module}.h")


def render_header(module: str, variables: TemplateVariables | None = None) -> str:
    """Text of ``module``.h."""
    variables = variables or TemplateVariables()
    h_guard, c_guard = _guards(module, variables)
    return HEADER_TEMPLATE.format(
        h_guard=h_guard,
        c_guard=c_guard,
        config_header=variables.config_header,
    )


def write_module(
    module: str,
    directory: Path | str = ".",
    *,
    variables: TemplateVariables | None = None,
    force: bool = False,
) -> list[Path]:
    """Write boilerplate for ``module`` into ``directory``.

    Existing files are left alone unless ``force`` is set.

    Args:
        module: Module path without extension (e.g. "maths/vec3").
        directory: Directory the module path is relative to.
        variables: Guard prefix and config header settings.
        force: Overwrite existing files.

    Returns:
        The files that were written.
    """
    directory = Path(directory)
    written: list[Path] = []

    for suffix, render in ((".c", render_source), (".h", render_header)):
        path = directory / f"{module}{suffix}"
        if path.exists() and not force:
            logger.warning("'%s' already exists, skipping", path)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render(module, variables))
        logger.info("Wrote %s", path)
        written.append(path)

    return written
