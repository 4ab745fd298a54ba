"""Circular dependency detection."""

from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from ..models import Cycle
from .builder import DependencyGraph


def find_cycles(graph: DependencyGraph) -> List[Cycle]:
    """Return every cycle closed during a depth-first walk of ``graph``.

    Roots are taken in descriptor order. Each cycle runs from the re-entered
    node through the current node and repeats the re-entered node at the end.
    Cycles sharing nodes may be reported more than once from different entry
    points.
    """
    cycles: List[Cycle] = []
    visited: Set[str] = set()
    on_stack: Set[str] = set()

    for root in graph.names:
        if root in visited:
            continue
        path: List[str] = [root]
        visited.add(root)
        on_stack.add(root)
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph.successors(root)))]

        while stack:
            name, successors = stack[-1]
            target = next(successors, None)
            if target is None:
                stack.pop()
                path.pop()
                on_stack.discard(name)
                continue
            if target in on_stack:
                start = path.index(target)
                cycles.append(Cycle(tuple(path[start:]) + (target,)))
                continue
            if target in visited:
                continue
            visited.add(target)
            on_stack.add(target)
            path.append(target)
            stack.append((target, iter(graph.successors(target))))

    return cycles


def has_cycles(graph: DependencyGraph) -> bool:
    return bool(find_cycles(graph))


__all__ = ["find_cycles", "has_cycles"]
