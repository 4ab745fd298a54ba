"""Parsers turning asset bundle and widget class files into descriptors."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, List, Optional

from ..logging import get_logger
from ..models import AssetDescriptor, WidgetDescriptor
from .php import (
    ClassRef,
    PhpSyntaxError,
    as_text,
    read_namespace,
    read_property,
    read_use_statements,
    strip_comments,
)

_WIDGET_EXTENDS = re.compile(r"\bclass\s+\w+\s+extends\s+\\?(?:[\w]+\\)*(\w*Widget)\b")
_ASSET_REFERENCE = re.compile(r"(\w+Asset)::")

logger = get_logger("parsing")


def read_source(path: Path) -> Optional[str]:
    """Return file contents, or None when the file cannot be read or decoded."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def class_name_for(path: Path) -> str:
    return path.name[: -len(".php")] if path.name.endswith(".php") else path.stem


def parse_asset_file(path: Path, module: Optional[str] = None) -> Optional[AssetDescriptor]:
    """Parse one asset class file; unreadable files yield None."""
    source = read_source(path)
    if source is None:
        logger.debug("Skipping unreadable asset file %s", path)
        return None
    return parse_asset_source(class_name_for(path), str(path), source, module)


def parse_asset_source(
    name: str, path: str, source: str, module: Optional[str] = None
) -> AssetDescriptor:
    """Build a descriptor from PHP source; every field is parsed independently."""
    code = strip_comments(source)
    descriptor = AssetDescriptor(
        name=name,
        path=path,
        module=module,
        namespace=read_namespace(code),
    )

    descriptor.base_path = _read_field(code, "basePath", _as_string, descriptor)
    descriptor.base_url = _read_field(code, "baseUrl", _as_string, descriptor)
    descriptor.source_path = _read_field(code, "sourcePath", _as_string, descriptor)
    descriptor.css = _read_field(code, "css", _as_file_list, descriptor) or []
    descriptor.js = _read_field(code, "js", _as_file_list, descriptor) or []
    descriptor.depends = _read_field(code, "depends", _as_dependency_list, descriptor) or []
    descriptor.publish_options = _read_field(code, "publishOptions", _as_mapping, descriptor)

    if descriptor.issues:
        logger.debug("Asset %s has malformed fields: %s", path, "; ".join(descriptor.issues))
    return descriptor


def _read_field(
    code: str,
    field_name: str,
    convert: Callable[[Any], Any],
    descriptor: AssetDescriptor,
) -> Any:
    try:
        found, value = read_property(code, field_name)
        if not found:
            return None
        return convert(value)
    except (PhpSyntaxError, TypeError) as exc:
        descriptor.issues.append(f"${field_name}: {exc}")
        return None


def _as_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        raise TypeError("expected a string, got an array")
    return as_text(value)


def _as_file_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise TypeError("expected a list")
    files: List[str] = []
    for item in value:
        # ['print.css', 'media' => 'print'] style entries carry the file first.
        if isinstance(item, dict) and 0 in item:
            item = item[0]
        files.append(as_text(item))
    return files


def _as_dependency_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise TypeError("expected a list")
    dependencies: List[str] = []
    for item in value:
        if isinstance(item, ClassRef):
            dependencies.append(item.literal)
        elif isinstance(item, str):
            dependencies.append(item)
        else:
            raise TypeError(f"unsupported dependency entry {item!r}")
    return dependencies


def _as_mapping(value: Any) -> Optional[dict]:
    if value is None:
        return None
    if isinstance(value, list) and not value:
        return {}
    if not isinstance(value, dict):
        raise TypeError("expected an associative array")
    return value


def parse_widget_file(path: Path, module: Optional[str] = None) -> Optional[WidgetDescriptor]:
    """Parse a widget class file; returns None for unreadable files and non-widgets."""
    source = read_source(path)
    if source is None:
        logger.debug("Skipping unreadable widget file %s", path)
        return None
    return parse_widget_source(class_name_for(path), str(path), source, module)


def parse_widget_source(
    name: str, path: str, source: str, module: Optional[str] = None
) -> Optional[WidgetDescriptor]:
    code = strip_comments(source)
    if not _WIDGET_EXTENDS.search(code):
        return None
    reference = _ASSET_REFERENCE.search(code)
    return WidgetDescriptor(
        name=name,
        path=path,
        module=module,
        asset_bundle=reference.group(1) if reference else None,
        uses=read_use_statements(code),
    )


__all__ = [
    "class_name_for",
    "parse_asset_file",
    "parse_asset_source",
    "parse_widget_file",
    "parse_widget_source",
    "read_source",
]
