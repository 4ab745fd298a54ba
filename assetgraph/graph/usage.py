"""Direct dependency and reverse dependency lookups."""

from __future__ import annotations

from typing import List

from ..index import ProjectAssetIndex
from ..models import AssetDescriptor, UsageReport
from .builder import DependencyGraph, build_graph


def describe_usage(index: ProjectAssetIndex, name: str) -> UsageReport:
    """Report what ``name`` declares and which descriptors declare ``name``.

    Only direct edges are considered in both directions. Raises
    AssetNotFoundError when ``name`` is not in the index.
    """
    descriptor = index.get(name)
    graph = build_graph(index.descriptors, index.system_namespaces)
    return UsageReport(
        descriptor=descriptor,
        dependencies=list(descriptor.depends),
        used_by=find_dependents(graph, index.descriptors, name),
    )


def find_dependents(
    graph: DependencyGraph, descriptors: List[AssetDescriptor], name: str
) -> List[AssetDescriptor]:
    dependents: List[AssetDescriptor] = []
    for candidate in descriptors:
        # Shadowed duplicates share the name and are not dependents of it.
        if candidate.name == name:
            continue
        if any(dep == name or graph.resolve(dep) == name for dep in candidate.depends):
            dependents.append(candidate)
    return dependents


__all__ = ["describe_usage", "find_dependents"]
