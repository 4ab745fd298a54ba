"""Project tree walking with ignore rules."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

# Tooling, dependency and Yii runtime directories never hold project bundles.
_EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".idea",
        ".vscode",
        "node_modules",
        "vendor",
        "runtime",
        "bower_components",
    }
)


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style pattern from .gitignore or ``exclude_paths``."""

    pattern: str
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["IgnoreRule"]:
        """Build a rule from a pattern line; blank lines and comments yield None."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = text.startswith("!")
        if negate:
            text = text[1:]
        directory_only = text.endswith("/")
        anchored = text.startswith("/")
        text = text.strip("/")
        if not text:
            return None
        return cls(text, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored or "/" in self.pattern:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def load_ignore_rules(root: Path, exclude_paths: Sequence[str] = ()) -> List[IgnoreRule]:
    """Collect rules from the project's .gitignore followed by configured excludes.

    Later rules override earlier ones, so configured excludes win over
    .gitignore negations.
    """
    try:
        lines = (root / ".gitignore").read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        lines = []
    return [rule for rule in map(IgnoreRule.parse, [*lines, *exclude_paths]) if rule]


def is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class SourceScanner:
    """Walks directories below a project root in a stable, sorted order."""

    def __init__(self, root: Path, rules: Sequence[IgnoreRule] = ()) -> None:
        self.root = root
        self.rules = list(rules)

    def iter_files(self, directory: Path, suffixes: Sequence[str] = ()) -> Iterator[Path]:
        """Yield files below ``directory`` whose names end with one of ``suffixes``.

        Raises FileNotFoundError or NotADirectoryError when ``directory`` is unusable.
        """
        if not directory.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not directory.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {directory}")

        wanted = tuple(suffixes)
        for dirpath, dirnames, filenames in os.walk(directory):
            current_dir = Path(dirpath)
            rel_dir = self._relative(current_dir)

            kept = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                if is_ignored(_join(rel_dir, name), True, self.rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                if wanted and not filename.endswith(wanted):
                    continue
                if is_ignored(_join(rel_dir, filename), False, self.rules):
                    continue
                yield current_dir / filename

    def iter_child_dirs(self, directory: Path) -> Iterator[Path]:
        """Yield the immediate sub-directories of ``directory`` sorted by name."""
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError:
            return
        for entry in entries:
            if not entry.is_dir() or entry.name in _EXCLUDED_DIRS:
                continue
            if is_ignored(self._relative(entry), True, self.rules):
                continue
            yield entry

    def _relative(self, path: Path) -> str:
        try:
            rel = path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
        return "" if rel == "." else rel


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name
