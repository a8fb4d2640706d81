# SPDX-License-Identifier: MIT
"""Tests for mkdeps CLI."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import pytest

from mkdeps.cli import insert_default_command, main, parse_variables, setup_logging
from mkdeps.generators.makefile import COMPILE_COMMAND


def run_mkdeps(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "mkdeps", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small source directory with a shared header."""
    (tmp_path / "main.c").write_text('#include "util.h"\n#include <stdio.h>\n')
    (tmp_path / "util.c").write_text('#include "common.h"\n#include "util.h"\n')
    (tmp_path / "util.h").write_text('#include "common.h"\n')
    (tmp_path / "common.h").write_text("")
    return tmp_path


class TestParseVariables:
    def test_splits_variables(self) -> None:
        variables, remaining = parse_variables(["src", "OUTPUT_VAR=OUTPUT", "A=b=c"])
        assert variables == {"OUTPUT_VAR": "OUTPUT", "A": "b=c"}
        assert remaining == ["src"]

    def test_empty_key_kept(self) -> None:
        variables, remaining = parse_variables(["=x", "-D=1"])
        assert variables == {}
        assert remaining == ["=x", "-D=1"]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_normal(self) -> None:
        setup_logging(verbose=False, debug=False)

    def test_setup_logging_verbose(self) -> None:
        setup_logging(verbose=True, debug=False)

    def test_setup_logging_debug(self) -> None:
        setup_logging(verbose=False, debug=True)


class TestGenerate:
    def test_generate_stdout(self, project: Path, capsys) -> None:
        assert main(["generate", str(project), "PREFIX_OBJECTS=0"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("SOURCES=main.c \\\n        util.c\n\n")
        assert "\nmain.o: main.c util.h common.h\n" + COMPILE_COMMAND + "\n" in out
        assert "\nutil.o: util.c util.h common.h\n" + COMPILE_COMMAND + "\n" in out

    def test_generate_is_default_command(self, project: Path, capsys) -> None:
        assert main([str(project)]) == 0
        out = capsys.readouterr().out
        assert "$(addprefix $(OBJECT_PREFIX),main.o): main.c util.h common.h" in out

    def test_generate_output_file(self, project: Path, tmp_path: Path, capsys) -> None:
        target = tmp_path / "build" / "deps.mk"
        assert main(["generate", "-o", str(target), str(project)]) == 0
        assert capsys.readouterr().out == ""
        assert target.read_text().startswith("SOURCES=main.c")

    def test_generate_cxx(self, project: Path, capsys) -> None:
        (project / "widget.cpp").write_text('#include "util.h"\n')
        assert main(["generate", "--cxx", str(project)]) == 0
        assert "widget.o" in capsys.readouterr().out

    def test_generate_system_includes(self, project: Path, capsys) -> None:
        (project / "stdio.h").write_text("")
        assert main(["generate", "--system", "PREFIX_OBJECTS=no", str(project)]) == 0
        assert "main.o: main.c util.h stdio.h common.h" in capsys.readouterr().out

    def test_generate_config_file(self, project: Path, capsys) -> None:
        (project / "mkdeps.toml").write_text('[mkdeps]\nOUTPUT_VAR = "OUTPUT"\n')
        assert main(["generate", str(project)]) == 0
        assert "$(OUTPUT): $(OBJECTS)" in capsys.readouterr().out

    def test_generate_missing_include(self, project: Path, capsys) -> None:
        (project / "x.c").write_text('#include "missing.h"\n')
        assert main(["generate", str(project)]) == 1

        err = capsys.readouterr().err
        assert "missing.h" in err
        assert "x.c" in err

    def test_generate_keep_going(self, project: Path, capsys) -> None:
        (project / "x.c").write_text('#include "missing.h"\n')
        assert main(["generate", "-k", str(project)]) == 1

        out = capsys.readouterr().out
        assert "main.o" in out
        assert "x.o" not in out

    def test_generate_missing_directory(self, tmp_path: Path) -> None:
        assert main(["generate", str(tmp_path / "nope")]) == 1

    def test_generate_too_many_directories(self, tmp_path: Path) -> None:
        assert main(["generate", str(tmp_path), str(tmp_path)]) == 1


class TestTopLevelOptions:
    """Tests for options given before the command."""

    def test_verbose_before_command(self, project: Path, capsys) -> None:
        assert main(["-v", "deps", "-C", str(project), "main.c"]) == 0
        assert capsys.readouterr().out == "main.c: util.h common.h\n"
        assert logging.getLogger().level == logging.INFO

    def test_debug_before_generate(self, project: Path, capsys) -> None:
        assert main(["--debug", "generate", str(project)]) == 0
        assert capsys.readouterr().out.startswith("SOURCES=main.c")
        assert logging.getLogger().level == logging.DEBUG

    def test_verbose_after_command(self, project: Path) -> None:
        assert main(["deps", "-v", "-C", str(project), "main.c"]) == 0
        assert logging.getLogger().level == logging.INFO

    def test_verbose_without_command(self, project: Path, capsys) -> None:
        assert main(["-v", str(project)]) == 0
        assert capsys.readouterr().out.startswith("SOURCES=main.c")
        assert logging.getLogger().level == logging.INFO

    def test_default_is_quiet(self, project: Path) -> None:
        assert main(["deps", "-C", str(project), "main.c"]) == 0
        assert logging.getLogger().level == logging.WARNING


class TestInsertDefaultCommand:
    def test_no_arguments(self) -> None:
        assert insert_default_command([]) == ["generate"]

    def test_directory_only(self) -> None:
        assert insert_default_command(["src"]) == ["generate", "src"]

    def test_after_top_level_flags(self) -> None:
        assert insert_default_command(["-v", "-o", "deps.mk", "src"]) == [
            "-v",
            "generate",
            "-o",
            "deps.mk",
            "src",
        ]

    def test_command_given(self) -> None:
        assert insert_default_command(["--debug", "deps", "x.c"]) == [
            "--debug",
            "deps",
            "x.c",
        ]

    def test_help_and_version_untouched(self) -> None:
        assert insert_default_command(["--help"]) == ["--help"]
        assert insert_default_command(["-v", "--version"]) == ["-v", "--version"]

    def test_flags_only(self) -> None:
        assert insert_default_command(["--debug"]) == ["--debug", "generate"]


class TestDeps:
    def test_deps(self, project: Path, capsys) -> None:
        assert main(["deps", "-C", str(project), "main.c", "util.c"]) == 0
        out = capsys.readouterr().out
        assert out == "main.c: util.h common.h\nutil.c: util.h common.h\n"

    def test_deps_no_includes(self, project: Path, capsys) -> None:
        assert main(["deps", "-C", str(project), "common.h"]) == 0
        assert capsys.readouterr().out == "common.h:\n"

    def test_deps_missing(self, project: Path) -> None:
        assert main(["deps", "-C", str(project), "nope.c"]) == 1


class TestNew:
    def test_new_modules(self, tmp_path: Path, capsys) -> None:
        assert main(["new", "-C", str(tmp_path), "list", "maths/quat"]) == 0
        for name in ["list.c", "list.h", "maths/quat.c", "maths/quat.h"]:
            assert (tmp_path / name).exists()
        assert "Writing" in capsys.readouterr().out

    def test_new_with_variables(self, tmp_path: Path) -> None:
        assert main(["new", "-C", str(tmp_path), "GUARD_PREFIX=GAME", "entity"]) == 0
        assert "__GAME__ENTITY_H__" in (tmp_path / "entity.h").read_text()
        assert not (tmp_path / "GUARD_PREFIX=GAME.c").exists()

    def test_new_existing_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "list.c").write_text("/* mine */\n")
        assert main(["new", "-C", str(tmp_path), "list"]) == 0
        assert (tmp_path / "list.c").read_text() == "/* mine */\n"

        assert main(["new", "-C", str(tmp_path), "--force", "list"]) == 0
        assert (tmp_path / "list.c").read_text() != "/* mine */\n"

    def test_new_requires_module(self, tmp_path: Path) -> None:
        assert main(["new", "-C", str(tmp_path)]) == 1


class TestCLICommands:
    """Tests running the CLI as a subprocess."""

    def test_mkdeps_help(self) -> None:
        result = run_mkdeps("--help")
        assert result.returncode == 0
        assert "mkdeps" in result.stdout
        assert "generate" in result.stdout
        assert "deps" in result.stdout
        assert "new" in result.stdout

    def test_mkdeps_version(self) -> None:
        from mkdeps import __version__

        result = run_mkdeps("--version")
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_mkdeps_in_current_directory(self, project: Path) -> None:
        result = run_mkdeps(cwd=project)
        assert result.returncode == 0
        assert result.stdout.startswith("SOURCES=main.c")
        assert result.stderr == ""

    def test_mkdeps_missing_include_exit_status(self, project: Path) -> None:
        (project / "x.c").write_text('#include "missing.h"\n')
        result = run_mkdeps("generate", cwd=project)
        assert result.returncode != 0
        assert "file not found: missing.h (included from x.c)" in result.stderr
