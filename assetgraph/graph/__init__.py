"""Dependency graph analysis over asset descriptors."""

from .builder import DependencyGraph, build_graph
from .cycles import find_cycles, has_cycles
from .ordering import (
    RegistrationOrder,
    cyclic_names,
    registration_order,
    resolve_order,
    topological_order,
)
from .usage import describe_usage, find_dependents

__all__ = [
    "DependencyGraph",
    "RegistrationOrder",
    "build_graph",
    "cyclic_names",
    "describe_usage",
    "find_cycles",
    "find_dependents",
    "has_cycles",
    "registration_order",
    "resolve_order",
    "topological_order",
]
