"""Registration order for asset bundles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set, Tuple

from ..models import AssetDescriptor, Cyclic, Ordered, OrderResolution
from .builder import DependencyGraph
from .cycles import find_cycles


@dataclass
class RegistrationOrder:
    """Best-effort order plus the bundles left out because they sit on a cycle."""

    descriptors: List[AssetDescriptor] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped


def cyclic_names(graph: DependencyGraph) -> Set[str]:
    """Names lying on at least one cycle of known dependencies.

    Iterative Tarjan: every strongly connected component with more than one
    member, plus self-dependent nodes.
    """
    index_of: Dict[str, int] = {}
    low: Dict[str, int] = {}
    component_stack: List[str] = []
    on_stack: Set[str] = set()
    cyclic: Set[str] = set()

    for root in graph.names:
        if root in index_of:
            continue
        index_of[root] = low[root] = len(index_of)
        component_stack.append(root)
        on_stack.add(root)
        work: List[Tuple[str, Iterator[str]]] = [(root, iter(graph.known_dependencies(root)))]

        while work:
            name, dependencies = work[-1]
            dependency = next(dependencies, None)
            if dependency is not None:
                if dependency not in index_of:
                    index_of[dependency] = low[dependency] = len(index_of)
                    component_stack.append(dependency)
                    on_stack.add(dependency)
                    work.append((dependency, iter(graph.known_dependencies(dependency))))
                elif dependency in on_stack:
                    low[name] = min(low[name], index_of[dependency])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[name])
            if low[name] != index_of[name]:
                continue
            component: List[str] = []
            while True:
                member = component_stack.pop()
                on_stack.discard(member)
                component.append(member)
                if member == name:
                    break
            if len(component) > 1 or name in graph.known_dependencies(name):
                cyclic.update(component)

    return cyclic


def registration_order(graph: DependencyGraph) -> RegistrationOrder:
    """Order descriptors so every known dependency precedes its dependents.

    Bundles on a cycle are left out and listed in ``skipped`` in descriptor
    order. Every other bundle is emitted after its emitted dependencies;
    edges into skipped bundles and unresolved dependencies impose no
    constraint.
    """
    cyclic = cyclic_names(graph)
    result = RegistrationOrder(skipped=[name for name in graph.names if name in cyclic])
    done: Set[str] = set(cyclic)

    def dependencies_of(name: str) -> Iterator[str]:
        return iter([dep for dep in graph.known_dependencies(name) if dep not in cyclic])

    for root in graph.names:
        if root in done:
            continue
        done.add(root)
        stack: List[Tuple[str, Iterator[str]]] = [(root, dependencies_of(root))]
        while stack:
            name, dependencies = stack[-1]
            dependency = next(dependencies, None)
            if dependency is None:
                stack.pop()
                result.descriptors.append(graph.nodes[name])
            elif dependency not in done:
                done.add(dependency)
                stack.append((dependency, dependencies_of(dependency)))

    return result


def topological_order(graph: DependencyGraph) -> List[AssetDescriptor]:
    """Return the best-effort registration order; cyclic bundles are omitted."""
    return registration_order(graph).descriptors


def resolve_order(graph: DependencyGraph) -> OrderResolution:
    """Return the complete order, or the first cycle that prevents one."""
    cycles = find_cycles(graph)
    if cycles:
        return Cyclic(cycles[0])
    return Ordered(tuple(registration_order(graph).descriptors))


__all__ = [
    "RegistrationOrder",
    "cyclic_names",
    "registration_order",
    "resolve_order",
    "topological_order",
]
