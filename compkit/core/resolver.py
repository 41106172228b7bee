# compkit/core/resolver.py

"""
Registry dependency resolution.

Expands the requested component names into the closure of components
reachable through registryDependencies, plus the union of their external
packages. The registry graph may contain cycles; every component is visited
at most once.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set

from compkit.core.console import ConsoleAware
from compkit.core.exceptions import UnknownComponentError
from compkit.core.models import RegistryEntry, ResolutionResult

# ==============================================================
# DEPENDENCY RESOLVER CLASS
# ==============================================================

class DependencyResolver(ConsoleAware):
    """
    Computes the component closure for a request.

    Traversal is depth-first, starting from each requested name in request
    order and following registryDependencies in declared order, so the
    discovery order is stable for a given catalog and request.
    """

    def resolve(self, requested: Sequence[str], catalog: Iterable[RegistryEntry]) -> ResolutionResult:
        """
        Resolve requested components against the catalog.

        Raises:
            UnknownComponentError: One or more requested names are not in the
                catalog (all of them are reported at once)
        """
        graph: Dict[str, RegistryEntry] = {entry.name: entry for entry in catalog}

        unknown = [name for name in dict.fromkeys(requested) if name not in graph]
        if unknown:
            raise UnknownComponentError(unknown, list(graph))

        result = ResolutionResult()
        visited: Set[str] = set()
        packages: Dict[str, None] = {}

        for name in requested:
            self._visit(name, graph, visited, result, packages)

        result.external_packages = list(packages)
        self.log(
            f"[dim]Resolved[/] {len(result.components)} component(s), "
            f"{len(result.external_packages)} external package(s)"
        )
        return result

    def _visit(
        self,
        start: str,
        graph: Dict[str, RegistryEntry],
        visited: Set[str],
        result: ResolutionResult,
        packages: Dict[str, None],
    ) -> None:
        # Explicit stack; children pushed in reverse keep the recursive pre-order.
        stack: List[str] = [start]
        while stack:
            name = stack.pop()
            if name in visited:
                continue

            entry = graph.get(name)
            if entry is None:
                self.log(f"[yellow]Skip[/] unknown registry dependency '{name}'")
                visited.add(name)
                continue

            visited.add(name)
            result.components.append(name)
            for package in entry.dependencies:
                packages.setdefault(package, None)

            if entry.registry_dependencies:
                self.log(
                    f"[dim]Recursive:[/] {name} → {', '.join(entry.registry_dependencies)}"
                )
            for dep_name in reversed(entry.registry_dependencies):
                if dep_name not in visited:
                    stack.append(dep_name)
