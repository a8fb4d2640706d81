# SPDX-License-Identifier: MIT
"""Command-line interface for mkdeps."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mkdeps.configure.config import Configure
from mkdeps.core.errors import MkdepsError
from mkdeps.core.graph import build_graph
from mkdeps.core.resolver import Resolver
from mkdeps.core.scanner import C_SUFFIXES, CXX_SUFFIXES, discover_sources
from mkdeps.generators.makefile import MakefileGenerator
from mkdeps.templates import write_module

# Set up logging
logger = logging.getLogger("mkdeps")

COMMANDS = ("generate", "deps", "new")
TOP_LEVEL_FLAGS = ("-v", "--verbose", "--debug", "-h", "--help", "--version")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level.

    Warnings and errors (missing includes, skipped sources) always show;
    -v adds progress messages such as files found and written, and --debug
    adds per-file scan results and include cycle reports, tagged with the
    logger name. Everything goes to stderr so stdout stays Makefile text.
    """
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt, force=True)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split KEY=value settings from other positional arguments.

    Settings such as OBJECT_PREFIX=obj/ or GUARD_PREFIX=GAME override the
    environment and mkdeps.toml (see mkdeps.configure.config). Everything
    else (the source directory, module names) is returned unchanged.

    Args:
        args: Positional arguments of a command.

    Returns:
        Tuple of (settings dict, remaining args).
    """
    settings: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        key, sep, value = arg.partition("=")
        # "-D=1" and "=x" are not settings
        if sep and key and not arg.startswith("-"):
            settings[key] = value
        else:
            remaining.append(arg)

    return settings, remaining


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a Makefile for a source directory.

    This command:
    1. Lists the sources in the directory
    2. Resolves each source's include prerequisites
    3. Writes the Makefile to stdout (or --output)
    """
    setup_logging(args.verbose, args.debug)

    variables, remaining = parse_variables(getattr(args, "extra", []))
    if len(remaining) > 1:
        logger.error("Expected one source directory, got: %s", " ".join(remaining))
        return 1
    source_dir = Path(remaining[0]) if remaining else Path(".")

    config = Configure(source_dir=source_dir, variables=variables)
    generator = MakefileGenerator(config.makefile_variables())

    suffixes = CXX_SUFFIXES if args.cxx else C_SUFFIXES
    sources = discover_sources(source_dir, suffixes)
    resolver = Resolver(source_dir, follow_system=args.system)
    graph = build_graph(sources, resolver, keep_going=args.keep_going)

    if args.output:
        generator.write(graph, args.output)
    else:
        generator.generate(graph, sys.stdout)

    if graph.failures:
        logger.error("%d source file(s) skipped", len(graph.failures))
        return 1
    return 0


def cmd_deps(args: argparse.Namespace) -> int:
    """Print the resolved prerequisites of individual files."""
    setup_logging(args.verbose, args.debug)

    resolver = Resolver(args.directory, follow_system=args.system)
    for file in args.files:
        prereqs = resolver.resolve(file)
        print(f"{file}: {' '.join(prereqs)}".rstrip())

    return 0


def cmd_new(args: argparse.Namespace) -> int:
    """Create .c/.h boilerplate for new modules.

    Existing files are skipped unless --force is given.
    """
    setup_logging(args.verbose, args.debug)

    variables, modules = parse_variables(args.modules)
    if not modules:
        logger.error("No module names given")
        return 1

    config = Configure(source_dir=args.directory, variables=variables)
    template_vars = config.template_variables()

    for module in modules:
        for path in write_module(
            module, args.directory, variables=template_vars, force=args.force
        ):
            print(f"Writing '{path}'")

    return 0


def add_common_args(parser: argparse.ArgumentParser, *, top_level: bool = False) -> None:
    """Add common arguments to a parser.

    Options given before the command land on the top-level parser; the
    command parsers use SUPPRESS defaults so they do not reset them.
    """
    default = False if top_level else argparse.SUPPRESS
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=default, help="Verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", default=default, help="Debug output"
    )


def add_resolve_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments controlling include resolution."""
    parser.add_argument(
        "--system",
        action="store_true",
        help="Also follow <angle-bracket> includes",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="mkdeps",
        description="Generate Makefile rules from C/C++ include dependencies.",
        epilog="Run 'mkdeps <command> --help' for command-specific help.",
    )
    from mkdeps import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    add_common_args(parser, top_level=True)

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # mkdeps generate
    gen_parser = subparsers.add_parser(
        "generate", help="Write a Makefile for a source directory (default)"
    )
    add_common_args(gen_parser)
    add_resolve_args(gen_parser)
    gen_parser.add_argument(
        "--cxx",
        action="store_true",
        help="Also treat .cc, .cpp and .cxx files as sources",
    )
    gen_parser.add_argument(
        "-o", "--output", metavar="FILE", help="Write to FILE instead of stdout"
    )
    gen_parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help="Skip sources with missing includes instead of stopping",
    )
    gen_parser.add_argument(
        "extra",
        nargs="*",
        help="Source directory (default: .) and variables (KEY=value)",
    )
    gen_parser.set_defaults(func=cmd_generate)

    # mkdeps deps
    deps_parser = subparsers.add_parser(
        "deps", help="Print the prerequisites of files"
    )
    add_common_args(deps_parser)
    add_resolve_args(deps_parser)
    deps_parser.add_argument(
        "-C",
        "--directory",
        default=".",
        help="Directory include paths are relative to (default: .)",
    )
    deps_parser.add_argument("files", nargs="+", help="Files to resolve")
    deps_parser.set_defaults(func=cmd_deps)

    # mkdeps new
    new_parser = subparsers.add_parser("new", help="Create boilerplate for modules")
    add_common_args(new_parser)
    new_parser.add_argument(
        "-f", "--force", action="store_true", help="Overwrite existing files"
    )
    new_parser.add_argument(
        "-C",
        "--directory",
        default=".",
        help="Directory to create modules in (default: .)",
    )
    new_parser.add_argument(
        "modules",
        nargs="*",
        help="Module paths without extension, and variables (KEY=value)",
    )
    new_parser.set_defaults(func=cmd_new)

    return parser


def insert_default_command(argv: list[str]) -> list[str]:
    """Insert "generate" after the top-level options if no command is given.

    ``mkdeps -v src`` becomes ``mkdeps -v generate src``; a bare
    ``--help`` or ``--version`` is left for the top-level parser.
    """
    index = 0
    while index < len(argv) and argv[index] in TOP_LEVEL_FLAGS:
        index += 1

    if index < len(argv):
        if argv[index] in COMMANDS:
            return argv
    elif any(a in ("-h", "--help", "--version") for a in argv):
        return argv

    return [*argv[:index], "generate", *argv[index:]]


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the mkdeps CLI."""
    if argv is None:
        argv = sys.argv[1:]

    argv = insert_default_command(argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        result: int = args.func(args)
    except MkdepsError as e:
        logger.error("%s", e)
        return 1
    return result


if __name__ == "__main__":
    sys.exit(main())
