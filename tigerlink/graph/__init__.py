"""Extension dependency graph: models and resolver."""

from tigerlink.graph.models import (
    CircularDependency,
    ComponentInfo,
    ExtensionInfo,
    ResolutionResult,
)
from tigerlink.graph.resolver import DependencyResolver, build_dependency_graph

__all__ = [
    "CircularDependency",
    "ComponentInfo",
    "DependencyResolver",
    "ExtensionInfo",
    "ResolutionResult",
    "build_dependency_graph",
]
