"""CLI command to run code generation for one extension."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from tigerlink.errors import AutolinkError
from tigerlink.runtime.config_loader import load_codegen_settings
from tigerlink.runtime.orchestrator import run_codegen

logger = logging.getLogger("tigerlink.cli.codegen")


def codegen_command(args, console: Console | None = None) -> int:
    """Execute the codegen command.

    Args:
        args: Parsed command-line arguments.
        console: Rich console for the summary (optional).

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        settings = load_codegen_settings(getattr(args, "config", None))
        overrides = {}
        if getattr(args, "src", None):
            overrides["src_file"] = args.src
        if getattr(args, "no_android", False):
            overrides["generate_android"] = False
        if getattr(args, "no_ios", False):
            overrides["generate_ios"] = False
        if getattr(args, "no_web", False):
            overrides["generate_web"] = False
        if getattr(args, "no_scripts", False):
            overrides["allow_scripts"] = False
        if overrides:
            settings = settings.model_copy(update=overrides)

        project_root = Path(getattr(args, "project", ".")).expanduser().resolve()
        report = run_codegen(project_root, settings)

        for entity in report.generated:
            console.print(
                f"[green]✓[/green] {entity.kind} {entity.name}: "
                f"{len(entity.written)} written, {len(entity.preserved)} kept"
            )
        for entity in report.skipped:
            console.print(f"[yellow]-[/yellow] {entity.kind} {entity.name}: {entity.reason}")
        for entity in report.failed:
            console.print(f"[red]✗[/red] {entity.kind} {entity.name}: {entity.reason}")

        return 0 if report.ok else 1

    except AutolinkError as e:
        logger.error("%s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Codegen command failed: %s", e, exc_info=True)
        return 1
