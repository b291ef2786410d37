# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the featurelang command-line interface."""

import argparse
import logging
import re
import sys
from pathlib import Path

from yachalk import chalk

from featurelang.compiler.build import FEATURE_SUFFIX, CompilerError, compile_files
from featurelang.parser.lexer import LexError, Token, TokenType, tokenize
from featurelang.parser.parser import ParseError, parse
from featurelang.workspace.config import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    ProjectConfigError,
    find_project_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the featurelang CLI."""
    parser = argparse.ArgumentParser(
        prog="featurelang",
        description="featurelang - compile .feature files into test scaffolding",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser transitions and compiler cache activity",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new featurelang project",
        description=f"Write a default {CONFIG_FILE_NAME} into a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the project in (default: current directory)",
    )

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the token stream of a feature file",
        description="Tokenize a .feature file and print one token per line.",
    )
    tokens_parser.add_argument("file", help="Path to the .feature file")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check every feature file of a project",
        description="Lex and parse all .feature files below a directory.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the feature files (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a pytest scaffold from a feature file",
        description="Parse a .feature file and write a pytest module with one test per scenario.",
    )
    generate_parser.add_argument("file", help="Path to the .feature file")
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output path (default: <output-directory>/test_<name>.py of the current project)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "tokens":
        return _cmd_tokens(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: project already exists at '{config_file}'.", file=sys.stderr)
        return 1

    defaults = ProjectConfig()
    config_content = (
        "# featurelang project configuration\n"
        f"build-directory: {defaults.build_directory}\n"
        f"output-directory: {defaults.output_directory}\n"
        f"tab-size: {defaults.tab_size}\n"
    )
    config_file.write_text(config_content, encoding="utf-8")
    print(f"Initialized featurelang project at '{config_file}'.")
    return 0


def _cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens subcommand."""
    path = Path(args.file)
    try:
        config = find_project_config(Path.cwd())
        tokens = tokenize(_read(path), tab_size=config.tab_size)
    except (OSError, UnicodeDecodeError, ProjectConfigError, LexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for token in tokens:
        print(_format_token(token))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    try:
        config = find_project_config(directory)
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    build_dir = directory / config.build_directory
    feature_files = sorted(f for f in directory.rglob(f"*{FEATURE_SUFFIX}") if build_dir not in f.parents)
    if not feature_files:
        print("No .feature files found.")
        return 0

    print(f"Checking {len(feature_files)} feature file(s)...")
    try:
        compiled = compile_files(feature_files, build_dir, directory, tab_size=config.tab_size)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    features = [feature for feature_map in compiled.values() for feature in feature_map.values()]
    scenarios = sum(len(feature.scenarios) for feature in features)
    print(f"Found {len(features)} feature(s) with {scenarios} scenario(s).")
    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    path = Path(args.file)
    try:
        config = find_project_config(Path.cwd())
        generator = parse(tokenize(_read(path), tab_size=config.tab_size))
    except (OSError, UnicodeDecodeError, ProjectConfigError, LexError, ParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    module_name = _module_name(path)
    if args.output is not None:
        output = Path(args.output)
    else:
        output = Path.cwd() / config.output_directory / f"test_{module_name}.py"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generator.render(module_name), encoding="utf-8")
    print(f"Wrote {len(generator.test_names())} test(s) to '{output}'.")
    return 0


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _module_name(path: Path) -> str:
    return re.sub(r"[^0-9a-zA-Z]+", "_", path.name.removesuffix(FEATURE_SUFFIX)).strip("_").lower() or "features"


_TOKEN_STYLES = {
    TokenType.FEATURE: chalk.magenta,
    TokenType.SCENARIO: chalk.magenta,
    TokenType.SCENARIO_OUTLINE: chalk.magenta,
    TokenType.EXAMPLES: chalk.magenta,
    TokenType.OPERATOR: chalk.blue,
    TokenType.SENTENCE: chalk.green,
    TokenType.EXAMPLE_ROW: chalk.cyan,
}


def _format_token(token: Token) -> str:
    """Format a token as ``line  TYPE  value`` with the type colorized."""
    style = _TOKEN_STYLES.get(token.type, chalk.gray)
    value = "" if token.value is None else repr(token.value)
    return f"{token.line:>4}  {style(token.type.value):<16}  {value}".rstrip()
