"""CLI commands for extension discovery and dependency ordering.

`link` prints the load order of every extension installed in a project;
`chain` prints what a single extension needs, prerequisites first.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.table import Table

from tigerlink.errors import AutolinkError, DependencyResolutionError
from tigerlink.graph.models import ExtensionInfo
from tigerlink.graph.resolver import DependencyResolver
from tigerlink.parsers.discovery import ExtensionDiscovery
from tigerlink.runtime.orchestrator import run_autolink

logger = logging.getLogger("tigerlink.cli.link")


def _extension_table(title: str, extensions: Sequence[ExtensionInfo]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Extension")
    table.add_column("Version")
    table.add_column("Platforms")
    table.add_column("Depends on")
    for idx, ext in enumerate(extensions, start=1):
        table.add_row(
            str(idx),
            ext.name,
            ext.version,
            ", ".join(ext.platforms),
            ", ".join(ext.dependencies) or "-",
        )
    return table


def link_command(args, console: Console | None = None) -> int:
    """Execute the link command.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        project_root = Path(getattr(args, "project", ".")).expanduser().resolve()
        strict = not getattr(args, "no_strict", False)

        report = run_autolink(project_root, strict=strict)

        for error in report.discovery_errors:
            console.print(f"[yellow]![/yellow] {error}")

        if not report.load_order:
            console.print("No extensions found.")
            return 0

        console.print(_extension_table("Extension load order", report.load_order))

        resolution = report.resolution
        if resolution is not None and resolution.has_errors:
            for cycle in resolution.circular_dependencies:
                console.print(f"[red]✗[/red] {cycle.message}")
            for name, missing in resolution.missing_dependencies.items():
                console.print(f"[red]✗[/red] {name} requires: {', '.join(missing)}")
        return 0

    except DependencyResolutionError as e:
        logger.error("Dependency validation failed:\n%s", e)
        return 1
    except AutolinkError as e:
        logger.error("%s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Link command failed: %s", e, exc_info=True)
        return 1


def chain_command(args, console: Console | None = None) -> int:
    """Execute the chain command.

    Returns:
        int: Exit code; 1 when the extension is not installed.
    """
    console = console or Console()
    try:
        project_root = Path(getattr(args, "project", ".")).expanduser().resolve()
        discovered = ExtensionDiscovery().discover(project_root)
        for error in discovered.errors:
            logger.warning("%s", error)

        chain = DependencyResolver().get_dependency_chain(args.name, discovered.extensions)
        if not chain:
            logger.error("Extension %s not found in %s", args.name, project_root)
            return 1

        console.print(_extension_table(f"Dependency chain of {args.name}", chain))
        return 0

    except AutolinkError as e:
        logger.error("%s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Chain command failed: %s", e, exc_info=True)
        return 1
