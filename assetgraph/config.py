"""Configuration loading for assetgraph (.assetgraph.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".assetgraph.yml"
YII_SCRIPT = "yii"

DEFAULT_ASSET_SUFFIXES = ("Asset.php", "Bundle.php")
DEFAULT_SYSTEM_NAMESPACES = ("yii\\",)
DEFAULT_COMPLEX_THRESHOLD = 2


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SourceRoot:
    """A directory scanned for descriptors, relative to the project root.

    With ``per_module`` every child directory is treated as a module named
    after the directory; ``subdir`` then selects a directory inside each module.
    """

    path: str
    module: Optional[str] = None
    per_module: bool = False
    subdir: Optional[str] = None


def _default_asset_roots() -> List[SourceRoot]:
    return [
        SourceRoot(path="assets"),
        SourceRoot(path="modules", per_module=True),
        SourceRoot(path="widgets", module="widgets"),
    ]


def _default_widget_roots() -> List[SourceRoot]:
    return [
        SourceRoot(path="widgets"),
        SourceRoot(path="modules", per_module=True, subdir="widgets"),
    ]


@dataclass
class ProjectConfig:
    """Represents the settings defined in .assetgraph.yml."""

    root: Path
    asset_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_ASSET_SUFFIXES))
    system_namespaces: List[str] = field(default_factory=lambda: list(DEFAULT_SYSTEM_NAMESPACES))
    asset_roots: List[SourceRoot] = field(default_factory=_default_asset_roots)
    widget_roots: List[SourceRoot] = field(default_factory=_default_widget_roots)
    exclude_paths: List[str] = field(default_factory=list)
    complex_threshold: int = DEFAULT_COMPLEX_THRESHOLD

    @property
    def has_yii_script(self) -> bool:
        return (self.root / YII_SCRIPT).is_file()


def load_config(config_path: Path) -> ProjectConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProjectConfig(root=root)

    data = _read_config(config_file)
    if data is None:
        return ProjectConfig(root=root)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ProjectConfig(root=root)

    suffixes = _as_str_list(data.get("asset_suffixes"))
    if suffixes:
        config.asset_suffixes = suffixes

    if "system_namespaces" in data:
        config.system_namespaces = _as_str_list(data.get("system_namespaces"))

    if "asset_roots" in data:
        config.asset_roots = _parse_roots(data.get("asset_roots"), "asset_roots")
    if "widget_roots" in data:
        config.widget_roots = _parse_roots(data.get("widget_roots"), "widget_roots")

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    threshold = _as_int(data.get("complex_threshold"))
    if threshold is not None:
        if threshold < 0:
            raise ConfigError("complex_threshold must not be negative")
        config.complex_threshold = threshold

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_file() or config_path.suffix in {".yml", ".yaml"}:
        return config_path
    return config_path / CONFIG_FILENAME


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def _parse_roots(value: Any, key: str) -> List[SourceRoot]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list")

    roots: List[SourceRoot] = []
    for entry in value:
        if isinstance(entry, str):
            roots.append(SourceRoot(path=entry))
            continue
        entry_data = _as_dict(entry)
        path = _as_str(entry_data.get("path"))
        if not path:
            raise ConfigError(f"Each entry in {key} needs a 'path'")
        roots.append(
            SourceRoot(
                path=path,
                module=_as_str(entry_data.get("module")),
                per_module=_as_bool(entry_data.get("per_module")) or False,
                subdir=_as_str(entry_data.get("subdir")),
            )
        )
    return roots


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
