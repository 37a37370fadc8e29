"""Main CLI entry point for tigerlink.

Provides commands: codegen, link, chain
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from tigerlink import __version__
from tigerlink.cli.codegen import codegen_command
from tigerlink.cli.link import chain_command, link_command

logger = logging.getLogger("tigerlink.cli")


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        log_file: Also write plain-text logs to this file.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handlers: List[logging.Handler] = [
        RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            log_time_format="[%H:%M:%S]",
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tigerlink",
        description="tigerlink - native extension autolink and code generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file in addition to the console",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Codegen command
    codegen_parser = subparsers.add_parser(
        "codegen",
        help="Generate native and web stubs for the extension in the project root",
    )
    codegen_parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Extension root containing tiger.config.* (default: current directory)",
    )
    codegen_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional codegen settings. Can be a path to a TOML/JSON file or an "
            "inline TOML/JSON string. When omitted, built-in defaults are used."
        ),
    )
    codegen_parser.add_argument(
        "--src",
        help="Interface source relative to the project root (default: src/module.ts)",
    )
    codegen_parser.add_argument(
        "--no-android",
        action="store_true",
        help="Skip JVM target files",
    )
    codegen_parser.add_argument(
        "--no-ios",
        action="store_true",
        help="Skip Swift element templates",
    )
    codegen_parser.add_argument(
        "--no-web",
        action="store_true",
        help="Skip browser/runtime target files",
    )
    codegen_parser.add_argument(
        "--no-scripts",
        action="store_true",
        help="Refuse tiger.config.ts/.js manifests; only tiger.config.json is read",
    )

    # Link command
    link_parser = subparsers.add_parser(
        "link",
        help="Discover installed extensions and print their load order",
    )
    link_parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Application root containing node_modules (default: current directory)",
    )
    link_parser.add_argument(
        "--no-strict",
        action="store_true",
        help=(
            "Print a best-effort order even when circular or missing "
            "dependencies are found"
        ),
    )

    # Chain command
    chain_parser = subparsers.add_parser(
        "chain",
        help="Show the dependency chain of one extension, prerequisites first",
    )
    chain_parser.add_argument(
        "name",
        help="Extension name",
    )
    chain_parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Application root containing node_modules (default: current directory)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, getattr(args, "log_file", None))

    if args.command == "codegen":
        return codegen_command(args)
    elif args.command == "link":
        return link_command(args)
    elif args.command == "chain":
        return chain_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
