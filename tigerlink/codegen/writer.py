"""File output for generators.

Two write modes:

* authoritative: contracts that only the generator owns; always rewritten.
* template: files a developer is expected to edit; written only when absent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from tigerlink.errors import GenerationError

logger = logging.getLogger("tigerlink.codegen.writer")


def _write(path: Path, content: str) -> None:
    if not content.endswith("\n"):
        content += "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise GenerationError(f"Failed to write {path}: {exc}", path) from exc


def write_authoritative(path: Path, content: str) -> Path:
    _write(path, content)
    logger.debug("Wrote %s", path)
    return path


def write_if_absent(path: Path, content: str) -> bool:
    """Write a template file unless it exists; True when written."""
    if path.exists():
        logger.info("%s already exists, keeping manual changes", path.name)
        return False
    _write(path, content)
    logger.debug("Wrote template %s", path)
    return True


@dataclass
class EntityOutput:
    """Files produced for one module, element or service."""

    kind: str
    name: str
    written: List[Path] = field(default_factory=list)
    preserved: List[Path] = field(default_factory=list)

    def authoritative(self, path: Path, content: str) -> None:
        self.written.append(write_authoritative(path, content))

    def template(self, path: Path, content: str) -> None:
        if write_if_absent(path, content):
            self.written.append(path)
        else:
            self.preserved.append(path)
