"""Core data models shared across assetgraph components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

APP_MODULE_LABEL = "app"


@dataclass
class AssetDescriptor:
    """A declared bundle of front-end resources parsed from an asset class file."""

    name: str
    path: str
    module: Optional[str] = None
    namespace: Optional[str] = None
    base_path: Optional[str] = None
    base_url: Optional[str] = None
    source_path: Optional[str] = None
    css: List[str] = field(default_factory=list)
    js: List[str] = field(default_factory=list)
    depends: List[str] = field(default_factory=list)
    publish_options: Optional[Dict[str, Any]] = None
    issues: List[str] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}\\{self.name}"
        return self.name

    @property
    def module_label(self) -> str:
        return self.module or APP_MODULE_LABEL


@dataclass
class WidgetDescriptor:
    """A widget class and the asset bundle it registers."""

    name: str
    path: str
    module: Optional[str] = None
    asset_bundle: Optional[str] = None
    uses: List[str] = field(default_factory=list)

    @property
    def module_label(self) -> str:
        return self.module or APP_MODULE_LABEL


@dataclass(frozen=True)
class Cycle:
    """Closed dependency path; the first and last names are equal."""

    names: Tuple[str, ...]

    def members(self) -> Tuple[str, ...]:
        """Distinct names on the cycle, without the closing repeat."""
        return self.names[:-1]

    def __str__(self) -> str:
        return " → ".join(self.names)


@dataclass
class UsageReport:
    """Direct dependencies of one descriptor and the descriptors that use it."""

    descriptor: AssetDescriptor
    dependencies: List[str]
    used_by: List[AssetDescriptor]


@dataclass(frozen=True)
class Ordered:
    """Complete registration order for an acyclic graph."""

    descriptors: Tuple[AssetDescriptor, ...]


@dataclass(frozen=True)
class Cyclic:
    """The cycle that prevents a complete registration order."""

    cycle: Cycle


OrderResolution = Union[Ordered, Cyclic]
