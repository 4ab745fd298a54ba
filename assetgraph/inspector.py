"""Tool-facing operations over a project's asset bundles."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .config import CONFIG_FILENAME, ProjectConfig, load_config
from .extractor import DescriptorExtractor
from .graph import (
    RegistrationOrder,
    build_graph,
    describe_usage,
    find_cycles,
    registration_order,
    resolve_order,
)
from .index import ProjectAssetIndex
from .logging import get_logger
from .models import AssetDescriptor, Cycle, OrderResolution, UsageReport
from .reporting import ReportRenderer


@dataclass
class DependencyAnalysis:
    """Project-wide dependency facts computed from one index."""

    roots: List[AssetDescriptor]
    complex_assets: List[AssetDescriptor]
    cycles: List[Cycle]
    order: RegistrationOrder
    duplicates: Dict[str, List[AssetDescriptor]] = field(default_factory=dict)


class AssetInspector:
    """Builds a fresh index per call and answers asset bundle questions about it."""

    def __init__(
        self,
        project_path: str | Path,
        *,
        config: ProjectConfig | None = None,
        extractor: DescriptorExtractor | None = None,
        renderer: ReportRenderer | None = None,
    ) -> None:
        self.project_path = Path(project_path).expanduser().resolve()
        if self.project_path.exists() and not self.project_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {self.project_path}")
        self.config = config or load_config(self.project_path / CONFIG_FILENAME)
        self._extractor = extractor
        self.renderer = renderer or ReportRenderer()
        self.logger = get_logger("inspector")

    def build_index(self, *, include_widgets: bool = True) -> ProjectAssetIndex:
        return ProjectAssetIndex.build(
            self.config, self._extractor, include_widgets=include_widgets
        )

    # Data operations

    def registration_order(self, index: ProjectAssetIndex | None = None) -> RegistrationOrder:
        if index is None:
            index = self.build_index(include_widgets=False)
        return registration_order(build_graph(index.descriptors, index.system_namespaces))

    def resolve_order(self, index: ProjectAssetIndex | None = None) -> OrderResolution:
        """Return the complete registration order, or the cycle preventing one."""
        if index is None:
            index = self.build_index(include_widgets=False)
        return resolve_order(build_graph(index.descriptors, index.system_namespaces))

    def cycles(self, index: ProjectAssetIndex | None = None) -> List[Cycle]:
        if index is None:
            index = self.build_index(include_widgets=False)
        return find_cycles(build_graph(index.descriptors, index.system_namespaces))

    def usage(self, name: str, index: ProjectAssetIndex | None = None) -> UsageReport:
        if index is None:
            index = self.build_index(include_widgets=False)
        return describe_usage(index, name)

    def dependency_analysis(self, index: ProjectAssetIndex | None = None) -> DependencyAnalysis:
        if index is None:
            index = self.build_index(include_widgets=False)
        graph = build_graph(index.descriptors, index.system_namespaces)
        roots = [
            descriptor
            for descriptor in index.descriptors
            if all(graph.is_system(dep) for dep in descriptor.depends)
        ]
        complex_assets = [
            descriptor
            for descriptor in index.descriptors
            if len(descriptor.depends) > self.config.complex_threshold
        ]
        cycles = find_cycles(graph)
        if cycles:
            self.logger.info("Detected %d circular dependency path(s)", len(cycles))
        return DependencyAnalysis(
            roots=roots,
            complex_assets=complex_assets,
            cycles=cycles,
            order=registration_order(graph),
            duplicates=dict(index.duplicates),
        )

    # Rendered operations

    def list_bundles(self, module_filter: Optional[str] = None) -> str:
        index = self.build_index(include_widgets=False)
        descriptors = index.filter_module(module_filter)
        return self.renderer.render_bundles(
            descriptors, root=self.config.root, module_filter=module_filter
        )

    def analyze_dependencies(self, asset_name: Optional[str] = None) -> str:
        """Render the report for one bundle, or for the whole project when no name is given."""
        index = self.build_index(include_widgets=False)
        if asset_name:
            report = self.usage(asset_name, index)
            return self.renderer.render_asset(report, root=self.config.root)

        analysis = self.dependency_analysis(index)
        return self.renderer.render_dependency_analysis(
            roots=analysis.roots,
            complex_assets=analysis.complex_assets,
            cycles=analysis.cycles,
            duplicates=analysis.duplicates,
            order=analysis.order,
            root=self.config.root,
        )

    def list_widgets(self, module_filter: Optional[str] = None) -> str:
        index = self.build_index()
        widgets = index.filter_widgets(module_filter)
        return self.renderer.render_widgets(
            widgets, root=self.config.root, module_filter=module_filter
        )


__all__ = ["AssetInspector", "DependencyAnalysis"]
