"""Descriptor extraction over project source roots."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import ProjectConfig, SourceRoot
from .logging import get_logger
from .models import AssetDescriptor, WidgetDescriptor
from .parsing import parse_asset_file, parse_widget_file
from .scanner import SourceScanner, load_ignore_rules


class DescriptorExtractor:
    """Finds asset bundle and widget classes below project directories."""

    def __init__(
        self,
        scanner: SourceScanner,
        asset_suffixes: Sequence[str],
    ) -> None:
        self.scanner = scanner
        self.asset_suffixes = tuple(asset_suffixes)
        self.logger = get_logger("extractor")

    @classmethod
    def for_project(cls, config: ProjectConfig) -> "DescriptorExtractor":
        rules = load_ignore_rules(config.root, config.exclude_paths)
        return cls(SourceScanner(config.root, rules), config.asset_suffixes)

    def extract(self, directory: Path, module: Optional[str] = None) -> List[AssetDescriptor]:
        """Parse every asset class file below ``directory`` in traversal order."""
        descriptors: List[AssetDescriptor] = []
        for path in self.scanner.iter_files(directory, self.asset_suffixes):
            descriptor = parse_asset_file(path, module)
            if descriptor is not None:
                descriptors.append(descriptor)
        self.logger.debug("Extracted %d asset bundles from %s", len(descriptors), directory)
        return descriptors

    def extract_widgets(
        self, directory: Path, module: Optional[str] = None
    ) -> List[WidgetDescriptor]:
        """Parse widget classes below ``directory``; asset class files are skipped."""
        widgets: List[WidgetDescriptor] = []
        for path in self.scanner.iter_files(directory, (".php",)):
            if path.name.endswith(self.asset_suffixes):
                continue
            widget = parse_widget_file(path, module)
            if widget is not None:
                widgets.append(widget)
        self.logger.debug("Extracted %d widgets from %s", len(widgets), directory)
        return widgets

    def extract_project_assets(self, roots: Sequence[SourceRoot]) -> List[AssetDescriptor]:
        descriptors: List[AssetDescriptor] = []
        for directory, module in self._expand_roots(roots):
            descriptors.extend(self.extract(directory, module))
        return descriptors

    def extract_project_widgets(self, roots: Sequence[SourceRoot]) -> List[WidgetDescriptor]:
        widgets: List[WidgetDescriptor] = []
        for directory, module in self._expand_roots(roots):
            widgets.extend(self.extract_widgets(directory, module))
        return widgets

    def _expand_roots(self, roots: Sequence[SourceRoot]) -> Iterator[Tuple[Path, Optional[str]]]:
        for root in roots:
            base = self.scanner.root / root.path
            if not base.is_dir():
                self.logger.debug("Source root %s not present; skipping", base)
                continue
            if not root.per_module:
                yield base, root.module
                continue
            for module_dir in self.scanner.iter_child_dirs(base):
                target = module_dir / root.subdir if root.subdir else module_dir
                if target.is_dir():
                    yield target, module_dir.name


__all__ = ["DescriptorExtractor"]
