"""Dependency graph assembled from asset descriptors."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..config import DEFAULT_SYSTEM_NAMESPACES
from ..models import AssetDescriptor


class DependencyGraph:
    """Name-keyed view over descriptors; edges are their declared dependencies.

    Dependency identifiers are not validated here. :meth:`resolve` maps an
    identifier to a node name, returning None for external leaves.
    """

    def __init__(
        self,
        descriptors: Iterable[AssetDescriptor],
        system_namespaces: Sequence[str] = DEFAULT_SYSTEM_NAMESPACES,
    ) -> None:
        self.nodes: Dict[str, AssetDescriptor] = {}
        self.names: List[str] = []
        for descriptor in descriptors:
            if descriptor.name not in self.nodes:
                self.names.append(descriptor.name)
            self.nodes[descriptor.name] = descriptor
        self.system_namespaces = tuple(system_namespaces)
        self._qualified: Dict[str, str] = {
            descriptor.qualified_name: name
            for name, descriptor in self.nodes.items()
            if descriptor.namespace
        }

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def is_system(self, identifier: str) -> bool:
        normalized = identifier.lstrip("\\")
        return any(normalized.startswith(prefix) for prefix in self.system_namespaces)

    def resolve(self, identifier: str) -> Optional[str]:
        """Return the node name an identifier refers to, or None for a leaf."""
        if self.is_system(identifier):
            return None
        if identifier in self.nodes:
            return identifier
        return self._qualified.get(identifier.lstrip("\\"))

    def successors(self, name: str) -> List[str]:
        """Targets of every declared edge; unresolved identifiers are kept verbatim."""
        descriptor = self.nodes.get(name)
        if descriptor is None:
            return []
        return [self.resolve(dep) or dep for dep in descriptor.depends]

    def known_dependencies(self, name: str) -> List[str]:
        """Resolved dependency names of ``name``, in declaration order."""
        descriptor = self.nodes.get(name)
        if descriptor is None:
            return []
        resolved: List[str] = []
        for dep in descriptor.depends:
            target = self.resolve(dep)
            if target is not None and target not in resolved:
                resolved.append(target)
        return resolved


def build_graph(
    descriptors: Iterable[AssetDescriptor],
    system_namespaces: Sequence[str] = DEFAULT_SYSTEM_NAMESPACES,
) -> DependencyGraph:
    """Build a graph keyed by descriptor name; later duplicates win."""
    return DependencyGraph(descriptors, system_namespaces)


__all__ = ["DependencyGraph", "build_graph"]
