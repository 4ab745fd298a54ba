"""Per-request index of the descriptors extracted from one project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .config import ProjectConfig
from .extractor import DescriptorExtractor
from .logging import get_logger
from .models import AssetDescriptor, WidgetDescriptor

logger = get_logger("index")


class AssetNotFoundError(LookupError):
    """Raised when a requested asset bundle is absent from the extracted set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Asset '{name}' not found")
        self.name = name


@dataclass
class ProjectAssetIndex:
    """Extraction output for a single analysis request.

    ``descriptors`` keeps every extracted bundle in extraction order, duplicates
    included; name lookups resolve to the last descriptor seen for a name.
    """

    descriptors: List[AssetDescriptor]
    widgets: List[WidgetDescriptor] = field(default_factory=list)
    system_namespaces: Sequence[str] = ()
    by_name: Dict[str, AssetDescriptor] = field(init=False, default_factory=dict)
    duplicates: Dict[str, List[AssetDescriptor]] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self.by_name = {}
        seen: Dict[str, List[AssetDescriptor]] = {}
        for descriptor in self.descriptors:
            self.by_name[descriptor.name] = descriptor
            seen.setdefault(descriptor.name, []).append(descriptor)
        self.duplicates = {name: group for name, group in seen.items() if len(group) > 1}
        for name, group in self.duplicates.items():
            logger.warning(
                "Asset name %s is declared %d times; %s shadows the others",
                name,
                len(group),
                group[-1].path,
            )

    @classmethod
    def build(
        cls,
        config: ProjectConfig,
        extractor: Optional[DescriptorExtractor] = None,
        *,
        include_widgets: bool = True,
    ) -> "ProjectAssetIndex":
        """Extract descriptors from every configured root of the project."""
        if not config.root.exists():
            raise FileNotFoundError(f"Project path not found: {config.root}")
        if not config.root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {config.root}")
        if not config.has_yii_script:
            logger.warning("No '%s' script found in %s; is this a Yii2 project?", "yii", config.root)

        extractor = extractor or DescriptorExtractor.for_project(config)
        descriptors = extractor.extract_project_assets(config.asset_roots)
        widgets = (
            extractor.extract_project_widgets(config.widget_roots) if include_widgets else []
        )
        logger.debug(
            "Indexed %d asset bundles and %d widgets in %s",
            len(descriptors),
            len(widgets),
            config.root,
        )
        return cls(
            descriptors=descriptors,
            widgets=widgets,
            system_namespaces=tuple(config.system_namespaces),
        )

    def get(self, name: str) -> AssetDescriptor:
        try:
            return self.by_name[name]
        except KeyError:
            raise AssetNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __len__(self) -> int:
        return len(self.descriptors)

    def filter_module(self, module_label: Optional[str]) -> List[AssetDescriptor]:
        """Return descriptors whose module label matches, or all when no label is given."""
        return _filter(self.descriptors, module_label)

    def filter_widgets(self, module_label: Optional[str]) -> List[WidgetDescriptor]:
        return _filter(self.widgets, module_label)


def _filter(items: Iterable, module_label: Optional[str]) -> list:
    if not module_label:
        return list(items)
    return [item for item in items if item.module_label == module_label]


__all__ = ["AssetNotFoundError", "ProjectAssetIndex"]
