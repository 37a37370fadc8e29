"""Value types shared by discovery and the dependency resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from tigerlink.config.schema import ExtensionManifest


@dataclass(frozen=True)
class ComponentInfo:
    """One native module, element or service of an extension on one platform.

    Attributes:
        kind: "module", "element" or "service".
        name: Registration name.
        class_name: Implementation class name.
        platform: "android", "ios" or "web".
        source_file: Platform source location relative to the package root.
    """

    kind: str
    name: str
    class_name: str
    platform: str
    source_file: str


@dataclass(frozen=True)
class ExtensionInfo:
    """Discovered extension package.

    Identity is `name`. `dependencies` keeps the declared order and may
    contain duplicates; the resolver collapses them.
    """

    name: str
    version: str = "0.0.0"
    path: Optional[Path] = None
    manifest: Optional[ExtensionManifest] = field(default=None, compare=False)
    platforms: Tuple[str, ...] = ()
    dependencies: Tuple[str, ...] = ()
    native_modules: Tuple[ComponentInfo, ...] = ()
    elements: Tuple[ComponentInfo, ...] = ()
    services: Tuple[ComponentInfo, ...] = ()


@dataclass(frozen=True)
class CircularDependency:
    """A closed dependency loop, e.g. ("A", "B", "A")."""

    cycle: Tuple[str, ...]
    message: str

    @classmethod
    def from_path(cls, cycle: Tuple[str, ...]) -> "CircularDependency":
        return cls(
            cycle=cycle,
            message=f"Circular dependency detected: {' -> '.join(cycle)}",
        )


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolve() call.

    Attributes:
        load_order: Extensions with every prerequisite before its dependents.
            Members of cycles, and extensions blocked by a missing
            dependency, are appended at the end without ordering guarantee.
        circular_dependencies: Cycles found, at most one per DFS root.
        missing_dependencies: Extension name -> declared names that are not
            part of the input. Extensions without missing names are absent.
    """

    load_order: Tuple[ExtensionInfo, ...]
    circular_dependencies: Tuple[CircularDependency, ...]
    missing_dependencies: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def load_order_names(self) -> Tuple[str, ...]:
        return tuple(ext.name for ext in self.load_order)

    @property
    def has_errors(self) -> bool:
        return bool(self.circular_dependencies or self.missing_dependencies)
