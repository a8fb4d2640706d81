# SPDX-License-Identifier: MIT
"""Configuration for mkdeps.

The Configure class collects settings from, in order of precedence:

1. Variables given on the command line (``mkdeps OBJECT_PREFIX=obj/``)
2. Environment variables prefixed with MKDEPS_ (``MKDEPS_OBJECT_PREFIX``)
3. The ``[mkdeps]`` table of ``mkdeps.toml`` in the source directory
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mkdeps.core.errors import ConfigureError

logger = logging.getLogger(__name__)

CONFIG_FILE = "mkdeps.toml"
ENV_PREFIX = "MKDEPS_"

DEFAULTS: dict[str, str] = {
    "OBJECT_PREFIX": "../obj/$(TARGET)/",
    "OUTPUT_PREFIX": "../bin/",
    "OUTPUT_VAR": "TARGET_OUTPUT",
    "PREFIX_OBJECTS": "1",
    "GUARD_PREFIX": "SNOW",
    "CONFIG_HEADER": "snow-config.h",
}

OUTPUT_VARS = ("TARGET_OUTPUT", "OUTPUT")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class MakefileVariables:
    """Settings that parameterize the emitted Makefile.

    Attributes:
        object_prefix: Directory object files are written to.
        output_prefix: Directory the linked output is written to.
        output_var: Make variable naming the linked output.
        prefix_objects: If True, rule targets are wrapped in
            ``$(addprefix $(OBJECT_PREFIX),...)``.
    """

    object_prefix: str = DEFAULTS["OBJECT_PREFIX"]
    output_prefix: str = DEFAULTS["OUTPUT_PREFIX"]
    output_var: str = DEFAULTS["OUTPUT_VAR"]
    prefix_objects: bool = True


@dataclass(frozen=True)
class TemplateVariables:
    """Settings for generated module boilerplate.

    Attributes:
        guard_prefix: Leading component of include guard macros.
        config_header: Header included by every generated header.
    """

    guard_prefix: str = DEFAULTS["GUARD_PREFIX"]
    config_header: str = DEFAULTS["CONFIG_HEADER"]


def parse_bool(key: str, value: str) -> bool:
    """Parse a boolean setting value."""
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigureError(f"invalid boolean for {key}: {value!r}")


class Configure:
    """Layered configuration for one mkdeps run.

    Example:
        config = Configure(source_dir=Path("src"), variables={"OUTPUT_VAR": "OUTPUT"})
        gen = MakefileGenerator(config.makefile_variables())

    Attributes:
        source_dir: Directory searched for mkdeps.toml.
    """

    def __init__(
        self,
        *,
        source_dir: Path | str = ".",
        variables: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
        config_file: str = CONFIG_FILE,
    ) -> None:
        """Create a configuration.

        Args:
            source_dir: Directory containing the optional config file.
            variables: Command-line KEY=value settings.
            environ: Environment to read MKDEPS_ variables from
                (default: os.environ).
            config_file: Name of the config file within source_dir.
        """
        self.source_dir = Path(source_dir)
        self._config_file = config_file
        self._cli = dict(variables or {})
        self._env = {
            key[len(ENV_PREFIX) :]: value
            for key, value in (os.environ if environ is None else environ).items()
            if key.startswith(ENV_PREFIX)
        }
        self._file = self._load_file()

    def _config_path(self) -> Path:
        return self.source_dir / self._config_file

    def _load_file(self) -> dict[str, str]:
        """Load the [mkdeps] table from the config file if it exists."""
        path = self._config_path()
        if not path.is_file():
            return {}

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigureError(f"invalid config file {path}: {e}") from e
        except OSError as e:
            raise ConfigureError(f"cannot read config file {path}: {e}") from e

        table: Any = data.get("mkdeps", {})
        if not isinstance(table, dict):
            raise ConfigureError(f"[mkdeps] in {path} must be a table")

        logger.info("Loaded configuration from %s", path)
        return {str(key).upper(): _to_str(value) for key, value in table.items()}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a setting, honoring precedence.

        Args:
            key: Setting name (e.g. "OBJECT_PREFIX").
            default: Returned if no layer (including defaults) sets it.
        """
        for layer in (self._cli, self._env, self._file, DEFAULTS):
            if key in layer:
                return layer[key]
        return default

    def _require(self, key: str) -> str:
        value = self.get(key)
        return DEFAULTS[key] if value is None else value

    def makefile_variables(self) -> MakefileVariables:
        """Build the emitter settings.

        Raises:
            ConfigureError: If OUTPUT_VAR or PREFIX_OBJECTS is invalid.
        """
        output_var = self._require("OUTPUT_VAR")
        if output_var not in OUTPUT_VARS:
            raise ConfigureError(
                f"OUTPUT_VAR must be one of {', '.join(OUTPUT_VARS)}, got {output_var!r}"
            )
        return MakefileVariables(
            object_prefix=self._require("OBJECT_PREFIX"),
            output_prefix=self._require("OUTPUT_PREFIX"),
            output_var=output_var,
            prefix_objects=parse_bool("PREFIX_OBJECTS", self._require("PREFIX_OBJECTS")),
        )

    def template_variables(self) -> TemplateVariables:
        """Build the boilerplate template settings."""
        return TemplateVariables(
            guard_prefix=self._require("GUARD_PREFIX"),
            config_header=self._require("CONFIG_HEADER"),
        )


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)
