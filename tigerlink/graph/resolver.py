"""Dependency resolution for discovered extensions.

Builds a dependency graph, detects circular dependencies, reports missing
dependencies and computes a load order with Kahn's algorithm.

The graph is a `networkx.DiGraph` built fresh for every call and passed
explicitly between the helpers. An edge `A -> B` means "A depends on B", so
the dependents of a node are its predecessors. Each node carries:

* `extension`: the ExtensionInfo
* `dependencies`: declared dependency names, deduplicated, declared order
"""

from __future__ import annotations

import logging
from collections import deque
from types import MappingProxyType
from typing import Deque, Dict, List, Sequence, Set, Tuple

import networkx as nx

from tigerlink.errors import DependencyResolutionError
from tigerlink.graph.models import CircularDependency, ExtensionInfo, ResolutionResult

logger = logging.getLogger("tigerlink.graph.resolver")


def build_dependency_graph(extensions: Sequence[ExtensionInfo]) -> nx.DiGraph:
    """Create one node per extension and one edge per present dependency.

    A later extension with an already-seen name replaces the earlier one but
    keeps its position in iteration order.
    """
    graph = nx.DiGraph()

    for extension in extensions:
        graph.add_node(
            extension.name,
            extension=extension,
            dependencies=tuple(dict.fromkeys(extension.dependencies)),
        )

    for name, dependencies in list(graph.nodes(data="dependencies")):
        for dep_name in dependencies:
            if dep_name in graph:
                graph.add_edge(name, dep_name)

    logger.debug(
        "Built dependency graph: %d extensions, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def dependents_of(graph: nx.DiGraph, name: str) -> List[str]:
    """Names of the extensions that declare `name` as a dependency."""
    return list(graph.predecessors(name))


def detect_circular_dependencies(graph: nx.DiGraph) -> Tuple[CircularDependency, ...]:
    """Report cycles with a DFS from every undiscovered node.

    The first back-edge found below a root ends that root's traversal;
    nodes left unvisited are picked up as later roots, so disjoint cycles are
    all reported.
    """
    cycles: List[CircularDependency] = []
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []

    def dfs(name: str) -> bool:
        visited.add(name)
        on_stack.add(name)
        path.append(name)
        try:
            for dep_name in graph.nodes[name]["dependencies"]:
                if dep_name not in graph:
                    # Missing dependency, reported separately.
                    continue
                if dep_name not in visited:
                    if dfs(dep_name):
                        return True
                elif dep_name in on_stack:
                    start = path.index(dep_name)
                    cycle = tuple(path[start:]) + (dep_name,)
                    cycles.append(CircularDependency.from_path(cycle))
                    return True
            return False
        finally:
            path.pop()
            on_stack.discard(name)

    for name in graph.nodes:
        if name not in visited:
            dfs(name)

    return tuple(cycles)


def find_missing_dependencies(graph: nx.DiGraph) -> Dict[str, Tuple[str, ...]]:
    """Map each extension to the declared dependencies absent from the graph."""
    missing: Dict[str, Tuple[str, ...]] = {}
    for name, dependencies in graph.nodes(data="dependencies"):
        absent = tuple(dep for dep in dependencies if dep not in graph)
        if absent:
            missing[name] = absent
    return missing


def topological_sort(graph: nx.DiGraph) -> Tuple[ExtensionInfo, ...]:
    """Kahn's algorithm with a FIFO queue seeded in graph order.

    In-degree counts every declared dependency, present or not. Nodes that
    never reach zero (cycle members and anything behind a missing dependency)
    are appended afterwards in graph order.
    """
    in_degree: Dict[str, int] = {}
    queue: Deque[str] = deque()

    for name, dependencies in graph.nodes(data="dependencies"):
        in_degree[name] = len(dependencies)
        if not dependencies:
            queue.append(name)

    ordered: List[str] = []
    while queue:
        name = queue.popleft()
        ordered.append(name)
        for dependent in dependents_of(graph, name):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(ordered) < graph.number_of_nodes():
        placed = set(ordered)
        remnants = [name for name in graph.nodes if name not in placed]
        logger.debug(
            "Appending %d unordered extension(s) after topological sort: %s",
            len(remnants),
            ", ".join(remnants),
        )
        ordered.extend(remnants)

    return tuple(graph.nodes[name]["extension"] for name in ordered)


class DependencyResolver:
    """Resolve load order and dependency problems for a set of extensions.

    The resolver holds no graph between calls; every method rebuilds it from
    the extensions it is given.
    """

    def resolve(self, extensions: Sequence[ExtensionInfo]) -> ResolutionResult:
        """Build the graph and compute load order, cycles and missing deps."""
        graph = build_dependency_graph(extensions)

        circular = detect_circular_dependencies(graph)
        missing = find_missing_dependencies(graph)
        load_order = topological_sort(graph)

        logger.info(
            "Resolved %d extension(s): %d cycle(s), %d with missing dependencies",
            len(load_order),
            len(circular),
            len(missing),
        )

        return ResolutionResult(
            load_order=load_order,
            circular_dependencies=circular,
            missing_dependencies=MappingProxyType(missing),
        )

    def validate_dependencies(
        self, extensions: Sequence[ExtensionInfo]
    ) -> ResolutionResult:
        """Resolve and fail on any circular or missing dependency.

        Every problem is collected into one error.

        Raises:
            DependencyResolutionError: With the structured cycles and missing
                dependencies attached.
        """
        result = self.resolve(extensions)
        lines: List[str] = []

        if result.circular_dependencies:
            lines.append("Circular dependencies detected:")
            lines.extend(f"  - {cd.message}" for cd in result.circular_dependencies)

        if result.missing_dependencies:
            lines.append("Missing dependencies:")
            for ext_name, missing in result.missing_dependencies.items():
                lines.append(f"  - {ext_name} requires: {', '.join(missing)}")

        if lines:
            raise DependencyResolutionError(
                "\n".join(lines),
                circular_dependencies=result.circular_dependencies,
                missing_dependencies=result.missing_dependencies,
            )
        return result

    def get_dependency_chain(
        self, extension_name: str, extensions: Sequence[ExtensionInfo]
    ) -> Tuple[ExtensionInfo, ...]:
        """Transitive dependencies of `extension_name` followed by itself.

        Post-order DFS: every prerequisite precedes its dependent. Missing
        names are skipped and a node already in progress is not re-entered,
        so cycles terminate without being reported.
        """
        graph = build_dependency_graph(extensions)
        chain: List[ExtensionInfo] = []
        visited: Set[str] = set()

        def collect(name: str) -> None:
            if name in visited:
                return
            visited.add(name)
            if name not in graph:
                return
            for dep_name in graph.nodes[name]["dependencies"]:
                collect(dep_name)
            chain.append(graph.nodes[name]["extension"])

        collect(extension_name)
        return tuple(chain)


__all__ = [
    "DependencyResolver",
    "build_dependency_graph",
    "dependents_of",
    "detect_circular_dependencies",
    "find_missing_dependencies",
    "topological_sort",
]
