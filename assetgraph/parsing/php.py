"""A small reader for the declarative subset of PHP used by asset bundle classes.

Only literal values are understood: strings, numbers, booleans, ``null``,
short and long array syntax, ``Foo::class`` / ``Foo::BAR`` references, bare
constants such as ``__DIR__`` and ``.`` concatenation of those. Anything else
raises :class:`PhpSyntaxError` so callers can tell a malformed declaration
apart from a missing one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

_NAMESPACE = re.compile(r"^\s*namespace\s+([\w\\]+)\s*;", re.MULTILINE)
_USE = re.compile(r"^\s*use\s+([^;(]+);", re.MULTILINE)
_NAME_CHARS = re.compile(r"\\?[A-Za-z_][\w\\]*")
_IDENTIFIER = re.compile(r"[A-Za-z_]\w*")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")

_DOUBLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "$": "$"}


class PhpSyntaxError(ValueError):
    """Raised when a property value cannot be read."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


@dataclass(frozen=True)
class ClassRef:
    """A ``Scope::CONSTANT`` reference."""

    scope: str
    constant: str

    @property
    def literal(self) -> str:
        if self.constant == "class":
            return self.scope
        return f"{self.scope}::{self.constant}"


@dataclass(frozen=True)
class Constant:
    """A bare constant such as ``__DIR__`` or ``YII_DEBUG``."""

    name: str


def strip_comments(source: str) -> str:
    """Blank out comments while keeping string literals and character offsets intact."""
    out: List[str] = []
    index = 0
    length = len(source)
    quote: Optional[str] = None
    while index < length:
        char = source[index]
        if quote:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(source[index + 1])
                index += 2
                continue
            if char == quote:
                quote = None
            index += 1
            continue
        if char in {"'", '"'}:
            quote = char
            out.append(char)
            index += 1
            continue
        if source.startswith("/*", index):
            end = source.find("*/", index + 2)
            end = length if end == -1 else end + 2
            out.append(_blank(source[index:end]))
            index = end
            continue
        if source.startswith("//", index) or (char == "#" and not source.startswith("#[", index)):
            end = source.find("\n", index)
            end = length if end == -1 else end
            out.append(" " * (end - index))
            index = end
            continue
        out.append(char)
        index += 1
    return "".join(out)


def _blank(text: str) -> str:
    return "".join("\n" if char == "\n" else " " for char in text)


def find_property(source: str, name: str) -> Optional[int]:
    """Return the offset just past ``$name =`` in comment-free source, if declared."""
    pattern = re.compile(r"\$" + re.escape(name) + r"\b\s*=(?![=>])")
    match = pattern.search(source)
    return match.end() if match else None


def read_property(source: str, name: str) -> Tuple[bool, Any]:
    """Return ``(found, value)`` for the first ``$name = <literal>`` in ``source``.

    ``source`` must already have comments stripped. Raises PhpSyntaxError when the
    declaration exists but its value is not a supported literal.
    """
    offset = find_property(source, name)
    if offset is None:
        return False, None
    reader = _Reader(source, offset)
    value = reader.value()
    reader.expect_statement_end()
    return True, value


def read_namespace(source: str) -> Optional[str]:
    match = _NAMESPACE.search(source)
    return match.group(1).strip("\\") if match else None


def read_use_statements(source: str) -> List[str]:
    """Return imported names from top-level ``use`` statements, grouped imports expanded."""
    imports: List[str] = []
    for match in _USE.finditer(source):
        body = " ".join(match.group(1).split())
        if "{" in body:
            prefix, _, rest = body.partition("{")
            prefix = prefix.strip().rstrip("\\")
            for item in rest.rstrip("}").split(","):
                item = item.strip()
                if item:
                    imports.append(f"{prefix}\\{item}")
        else:
            imports.extend(part.strip() for part in body.split(",") if part.strip())
    return imports


def as_text(value: Any) -> str:
    """Render a scalar value the way PHP string concatenation would."""
    if isinstance(value, str):
        return value
    if isinstance(value, Constant):
        return value.name
    if isinstance(value, ClassRef):
        return value.literal
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return ""
    raise TypeError(f"Cannot render {type(value).__name__} as text")


class _Reader:
    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.pos = position

    def value(self) -> Any:
        self._skip_ws()
        parts = [self._term()]
        while True:
            self._skip_ws()
            if self._peek() == "." and not self.text.startswith((".=", ".."), self.pos):
                self.pos += 1
                self._skip_ws()
                parts.append(self._term())
                continue
            break
        if len(parts) == 1:
            return parts[0]
        try:
            return "".join(as_text(part) for part in parts)
        except TypeError as exc:
            raise PhpSyntaxError(str(exc), self.pos) from exc

    def expect_statement_end(self) -> None:
        self._skip_ws()
        if self._peek() != ";":
            raise PhpSyntaxError("Expected ';'", self.pos)

    def _term(self) -> Any:
        char = self._peek()
        if char in {"'", '"'}:
            return self._string(char)
        if char == "[":
            self.pos += 1
            return self._array("]")
        if self._match_keyword("array"):
            self._skip_ws()
            if self._peek() != "(":
                raise PhpSyntaxError("Expected '(' after array", self.pos)
            self.pos += 1
            return self._array(")")
        number = _NUMBER.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            literal = number.group(0)
            return float(literal) if "." in literal else int(literal)
        if char == "\\" or char.isalpha() or char == "_":
            return self._name()
        if not char:
            raise PhpSyntaxError("Unexpected end of input", self.pos)
        raise PhpSyntaxError(f"Unexpected character {char!r}", self.pos)

    def _array(self, closer: str) -> Any:
        items: List[Any] = []
        keyed: Dict[Any, Any] = {}
        has_keys = False
        while True:
            self._skip_ws()
            if self._peek() == closer:
                self.pos += 1
                break
            if not self._peek():
                raise PhpSyntaxError(f"Unterminated array, expected {closer!r}", self.pos)
            entry = self.value()
            self._skip_ws()
            if self.text.startswith("=>", self.pos):
                self.pos += 2
                if not isinstance(entry, (str, int, float, bool, ClassRef, Constant)):
                    raise PhpSyntaxError("Unsupported array key", self.pos)
                key = entry.literal if isinstance(entry, ClassRef) else entry
                if isinstance(key, Constant):
                    key = key.name
                keyed[key] = self.value()
                has_keys = True
            else:
                keyed[len(items)] = entry
                items.append(entry)
            self._skip_ws()
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != closer:
                raise PhpSyntaxError(f"Expected ',' or {closer!r}", self.pos)
        return keyed if has_keys else items

    def _string(self, quote: str) -> str:
        self.pos += 1
        chunks: List[str] = []
        while True:
            if self.pos >= len(self.text):
                raise PhpSyntaxError("Unterminated string", self.pos)
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chunks)
            if char == "\\" and self.pos + 1 < len(self.text):
                following = self.text[self.pos + 1]
                if quote == "'" and following in {"'", "\\"}:
                    chunks.append(following)
                    self.pos += 2
                    continue
                if quote == '"' and following in _DOUBLE_QUOTE_ESCAPES:
                    chunks.append(_DOUBLE_QUOTE_ESCAPES[following])
                    self.pos += 2
                    continue
            chunks.append(char)
            self.pos += 1

    def _name(self) -> Any:
        match = _NAME_CHARS.match(self.text, self.pos)
        if not match:
            raise PhpSyntaxError("Expected a name", self.pos)
        name = match.group(0)
        self.pos = match.end()
        if self.text.startswith("::", self.pos):
            self.pos += 2
            constant = _IDENTIFIER.match(self.text, self.pos)
            if not constant:
                raise PhpSyntaxError("Expected a constant after '::'", self.pos)
            self.pos = constant.end()
            self._reject_call()
            return ClassRef(scope=name.lstrip("\\"), constant=constant.group(0))
        self._reject_call()
        lowered = name.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if lowered == "null":
            return None
        return Constant(name=name.lstrip("\\"))

    def _reject_call(self) -> None:
        self._skip_ws()
        if self._peek() == "(":
            raise PhpSyntaxError("Function and method calls are not supported", self.pos)

    def _match_keyword(self, keyword: str) -> bool:
        end = self.pos + len(keyword)
        if self.text[self.pos:end].lower() != keyword:
            return False
        if end < len(self.text) and (self.text[end].isalnum() or self.text[end] in "_\\"):
            return False
        self.pos = end
        return True

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1


__all__ = [
    "ClassRef",
    "Constant",
    "PhpSyntaxError",
    "as_text",
    "find_property",
    "read_namespace",
    "read_property",
    "read_use_statements",
    "strip_comments",
]
