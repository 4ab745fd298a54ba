"""Markdown rendering of analysis results through Jinja templates."""

from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from ..models import AssetDescriptor, Cycle, UsageReport, WidgetDescriptor

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
_PREVIEW_FILES = 3


class ReportRenderer:
    """Renders bundle listings and dependency reports as Markdown text."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = [str(_DEFAULT_TEMPLATES)]
        if templates_dir is not None and templates_dir != _DEFAULT_TEMPLATES:
            directories.insert(0, str(templates_dir))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["relative"] = _relative

    def render_bundles(
        self,
        descriptors: Sequence[AssetDescriptor],
        *,
        root: Path,
        module_filter: Optional[str] = None,
    ) -> str:
        return self._render(
            "bundles.md.j2",
            total=len(descriptors),
            groups=_group_by_module(descriptors),
            module_filter=module_filter,
            root=root,
            preview=_PREVIEW_FILES,
        )

    def render_dependency_analysis(
        self,
        *,
        roots: Sequence[AssetDescriptor],
        complex_assets: Sequence[AssetDescriptor],
        cycles: Sequence[Cycle],
        duplicates: Dict[str, List[AssetDescriptor]],
        order: Any,
        root: Path,
    ) -> str:
        return self._render(
            "dependencies.md.j2",
            roots=roots,
            complex=complex_assets,
            cycles=cycles,
            duplicates=duplicates,
            order=order,
            root=root,
        )

    def render_asset(self, report: UsageReport, *, root: Path) -> str:
        return self._render(
            "asset.md.j2",
            asset=report.descriptor,
            dependencies=report.dependencies,
            used_by=report.used_by,
            root=root,
        )

    def render_widgets(
        self,
        widgets: Sequence[WidgetDescriptor],
        *,
        root: Path,
        module_filter: Optional[str] = None,
    ) -> str:
        return self._render(
            "widgets.md.j2",
            total=len(widgets),
            groups=_group_by_module(widgets),
            module_filter=module_filter,
            root=root,
        )

    def _render(self, template_name: str, **context: Any) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context).rstrip() + "\n"


def _group_by_module(items: Iterable[Any]) -> List[Tuple[str, List[Any]]]:
    grouped: "OrderedDict[str, List[Any]]" = OrderedDict()
    for item in items:
        grouped.setdefault(item.module_label, []).append(item)
    return list(grouped.items())


def _relative(path: str, root: Path | str) -> str:
    try:
        return "/" + Path(path).relative_to(root).as_posix()
    except ValueError:
        return str(path)


__all__ = ["ReportRenderer"]
