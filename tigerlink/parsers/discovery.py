"""Extension discovery.

Scans a project's `node_modules` for extension packages, i.e. directories
carrying a `tiger.config.json`, and turns each one into an
:class:`~tigerlink.graph.models.ExtensionInfo`.

Broken packages do not stop the scan; each problem is recorded as a
:class:`~tigerlink.errors.DiscoveryError` on the result.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tigerlink.config.schema import ExtensionManifest
from tigerlink.errors import AutolinkError, DiscoveryError
from tigerlink.graph.models import ComponentInfo, ExtensionInfo
from tigerlink.runtime.config_loader import DATA_CONFIG_FILE, load_config_sync

logger = logging.getLogger("tigerlink.parsers.discovery")

NODE_MODULES = "node_modules"


@dataclass(frozen=True)
class DiscoveryResult:
    extensions: Tuple[ExtensionInfo, ...] = ()
    errors: Tuple[DiscoveryError, ...] = field(default_factory=tuple)


def iter_manifest_files(node_modules: Path) -> Iterator[Path]:
    """Yield every tiger.config.json below node_modules in sorted order.

    Hidden directories and nested node_modules directories are not entered.
    """
    stack = [node_modules]

    while stack:
        current_dir = stack.pop()
        try:
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except PermissionError:
            logger.debug("Skipping unreadable directory %s", current_dir)
            continue

        dirs: List[Path] = []
        for entry in entries:
            if entry.is_dir():
                if entry.name.startswith(".") or entry.name == NODE_MODULES:
                    continue
                dirs.append(Path(entry.path))
            elif entry.name == DATA_CONFIG_FILE:
                yield Path(entry.path)

        stack.extend(reversed(dirs))


def _read_package_json(package_path: Path) -> Optional[Dict[str, Any]]:
    package_json = package_path / "package.json"
    if not package_json.is_file():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.debug("Unreadable package.json at %s: %s", package_json, exc)
        return None
    return data if isinstance(data, dict) else None


def _platform_source(manifest: ExtensionManifest, platform: str) -> str:
    platforms = manifest.platforms
    if platform == "android" and platforms.android is not None:
        return platforms.android.source_dir
    if platform == "ios" and platforms.ios is not None:
        return platforms.ios.source_dir
    if platform == "web" and platforms.web is not None:
        return platforms.web.entry
    return ""


def build_extension_info(package_path: Path, manifest: ExtensionManifest) -> ExtensionInfo:
    """Expand a manifest into per-platform component records."""
    platforms = tuple(manifest.platforms.names())

    def components(kind: str, entries: List[Tuple[str, str]]) -> Tuple[ComponentInfo, ...]:
        return tuple(
            ComponentInfo(
                kind=kind,
                name=name,
                class_name=class_name,
                platform=platform,
                source_file=_platform_source(manifest, platform),
            )
            for name, class_name in entries
            for platform in platforms
        )

    return ExtensionInfo(
        name=manifest.name,
        version=manifest.version,
        path=package_path,
        manifest=manifest,
        platforms=platforms,
        dependencies=tuple(manifest.dependencies),
        native_modules=components(
            "module", [(m.name, m.class_name) for m in manifest.native_modules]
        ),
        elements=components("element", [(e.name, e.name) for e in manifest.elements]),
        services=components("service", [(s, s) for s in manifest.services]),
    )


class ExtensionDiscovery:
    """Finds extension packages installed in a project."""

    def discover(self, project_root: Path) -> DiscoveryResult:
        """Scan `<project_root>/node_modules` for extensions.

        A later package declaring an already-seen extension name replaces the
        earlier one.
        """
        project_root = Path(project_root)
        node_modules = project_root / NODE_MODULES

        if not node_modules.is_dir():
            logger.warning("No node_modules directory in %s", project_root)
            return DiscoveryResult(
                errors=(
                    DiscoveryError(
                        project_root,
                        "node_modules directory not found",
                        "Run npm install first",
                    ),
                )
            )

        extensions: Dict[str, ExtensionInfo] = {}
        errors: List[DiscoveryError] = []

        try:
            manifest_files = list(iter_manifest_files(node_modules))
        except OSError as exc:
            errors.append(
                DiscoveryError(project_root, "Failed to scan node_modules", str(exc))
            )
            manifest_files = []

        logger.info("Found %d extension manifest(s) in %s", len(manifest_files), node_modules)

        for manifest_file in manifest_files:
            package_path = manifest_file.parent
            extension, error = self._process_package(package_path)
            if error is not None:
                logger.warning("%s", error)
                errors.append(error)
                continue
            if extension.name in extensions:
                logger.warning(
                    "Duplicate extension %s at %s replaces %s",
                    extension.name,
                    package_path,
                    extensions[extension.name].path,
                )
            extensions[extension.name] = extension
            logger.debug("Discovered extension %s@%s", extension.name, extension.version)

        return DiscoveryResult(extensions=tuple(extensions.values()), errors=tuple(errors))

    def _process_package(
        self, package_path: Path
    ) -> Tuple[Optional[ExtensionInfo], Optional[DiscoveryError]]:
        try:
            manifest = load_config_sync(package_path).manifest
        except AutolinkError as exc:
            return None, DiscoveryError(
                package_path, f"Invalid {DATA_CONFIG_FILE} configuration", str(exc)
            )

        if _read_package_json(package_path) is None:
            return None, DiscoveryError(package_path, "Missing or invalid package.json")

        return build_extension_info(package_path, manifest), None
