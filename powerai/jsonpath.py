"""Reading and editing JSON documents with dot-separated paths."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

_INDEX = re.compile(r"[0-9]+")
_MISSING = object()
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})


class _Number(str):
    """A JSON number kept as its literal text."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _parse(document: str | bytes) -> Any:
    if isinstance(document, (bytes, bytearray)):
        document = document.decode("utf-8", errors="replace")
    return json.loads(
        document, parse_int=_Number, parse_float=_Number, parse_constant=_reject_constant
    )


def _dump_string(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _dump(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _Number):
        return str(value)
    if isinstance(value, str):
        return _dump_string(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ValueError("unsupported float value")
        return json.dumps(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        items = (f"{_dump_string(str(k))}:{_dump(v)}" for k, v in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_dump(item) for item in value) + "]"
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def _plain(value: Any) -> Any:
    if isinstance(value, _Number):
        text = str(value)
        if _INDEX.fullmatch(text.lstrip("-")):
            return int(text)
        return float(text)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Result:
    """The value found at a path, with its JSON text."""

    raw: str = ""
    exists: bool = False
    _data: Any = field(default=None, repr=False, compare=False)

    def string(self) -> str:
        """Return strings as-is, literals and numbers as text, containers as raw JSON."""
        data = self._data
        if not self.exists or data is None:
            return ""
        if isinstance(data, bool):
            return "true" if data else "false"
        if isinstance(data, _Number):
            return str(data)
        if isinstance(data, str):
            return data
        return self.raw

    def int(self) -> int:
        """Return the value as an integer, or 0 if it has none."""
        data = self._data
        if isinstance(data, bool):
            return int(data)
        if isinstance(data, str):
            try:
                return int(Decimal(str(data).strip()))
            except (InvalidOperation, ValueError, OverflowError):
                return 0
        return 0

    def float(self) -> float:
        """Return the value as a float, or 0.0 if it has none."""
        data = self._data
        if isinstance(data, bool):
            return 1.0 if data else 0.0
        if isinstance(data, str):
            try:
                return float(str(data))
            except ValueError:
                return 0.0
        return 0.0

    def bool(self) -> bool:
        """Return the value as a boolean."""
        data = self._data
        if isinstance(data, bool):
            return data
        if isinstance(data, _Number):
            return float(data) != 0
        if isinstance(data, str):
            return data in _TRUE_WORDS
        return False

    def value(self) -> Any:
        """Return the value as plain Python data (None when missing)."""
        return _plain(self._data) if self.exists else None

    @property
    def is_object(self) -> bool:
        return isinstance(self._data, dict)

    @property
    def is_array(self) -> bool:
        return isinstance(self._data, list)

    def array(self) -> list[Result]:
        """Return array elements as results; a scalar gives itself, null gives []."""
        if not self.exists or self._data is None:
            return []
        if isinstance(self._data, list):
            return [_result(item) for item in self._data]
        return [self]

    def get(self, path: str) -> Result:
        """Look up ``path`` inside this value."""
        if not self.exists or not path:
            return Result()
        return _result(_lookup(self._data, _split_path(path)))

    def __str__(self) -> str:
        return self.string()


def _result(value: Any) -> Result:
    if value is _MISSING:
        return Result()
    return Result(_dump(value), True, value)


@dataclass(frozen=True)
class _Component:
    text: str
    pattern: re.Pattern[str] | None


def _split_path(path: str) -> list[_Component]:
    components: list[_Component] = []
    text: list[str] = []
    regex: list[str] = []
    wildcard = False

    def finish() -> None:
        pattern = re.compile("".join(regex), re.DOTALL) if wildcard else None
        components.append(_Component("".join(text), pattern))

    chars = iter(path)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                break
            text.append(escaped)
            regex.append(re.escape(escaped))
        elif ch == ".":
            finish()
            text, regex, wildcard = [], [], False
        elif ch == "*":
            text.append(ch)
            regex.append(".*")
            wildcard = True
        elif ch == "?":
            text.append(ch)
            regex.append(".")
            wildcard = True
        else:
            text.append(ch)
            regex.append(re.escape(ch))
    finish()
    return components


def _lookup(node: Any, components: list[_Component]) -> Any:
    if not components:
        return node
    comp, rest = components[0], components[1:]
    if isinstance(node, dict):
        if comp.pattern is not None:
            for key, child in node.items():
                if comp.pattern.fullmatch(key):
                    return _lookup(child, rest)
            return _MISSING
        if comp.text in node:
            return _lookup(node[comp.text], rest)
        return _MISSING
    if isinstance(node, list):
        if comp.text == "#" and comp.pattern is None:
            if not rest:
                return _Number(str(len(node)))
            found = (_lookup(item, rest) for item in node)
            return [item for item in found if item is not _MISSING]
        if _INDEX.fullmatch(comp.text):
            index = int(comp.text)
            if index < len(node):
                return _lookup(node[index], rest)
    return _MISSING


def escape(component: str) -> str:
    """Escape characters that have a meaning in paths so ``component`` matches literally."""
    out = []
    for ch in component:
        safe = ch.isascii() and (ch.isalnum() or ch <= " " or ch in "_-:") or ch > "~"
        out.append(ch if safe else "\\" + ch)
    return "".join(out)


def get(document: str | bytes, path: str) -> Result:
    """Return the value at ``path`` such as ``name.last``, ``children.1`` or ``friends.#.first``.

    ``*`` and ``?`` match any run of characters or any one character in a
    key, ``#`` on an array gives its length or maps the rest of the path over
    its elements, and ``\\`` escapes the next character.
    """
    if not path:
        return Result()
    try:
        root = _parse(document)
    except ValueError:
        return Result()
    return _result(_lookup(root, _split_path(path)))


def get_many(document: str | bytes, *args: str) -> list[Result]:
    """Return one result per path."""
    try:
        root = _parse(document)
    except ValueError:
        return [Result() for _ in args]
    return [_result(_lookup(root, _split_path(path))) if path else Result() for path in args]


def _edit_path(path: str) -> list[_Component]:
    if not path:
        raise ValueError("path cannot be empty")
    components = _split_path(path)
    if any(comp.pattern is not None for comp in components):
        raise ValueError("wildcard characters not allowed in path")
    return components


def _is_array_key(text: str) -> bool:
    """Return True if a path component addresses an array slot (an index or ``-1``)."""
    return text == "-1" or _INDEX.fullmatch(text) is not None


def _assign(node: Any, components: list[_Component], value: Any) -> None:
    comp, rest = components[0], components[1:]
    if isinstance(node, dict):
        if not rest:
            node[comp.text] = value
            return
        child = node.get(comp.text)
        if not isinstance(child, (dict, list)):
            child = [] if _is_array_key(rest[0].text) else {}
            node[comp.text] = child
        _assign(child, rest, value)
        return
    if comp.text == "-1":
        index = len(node)
    elif _INDEX.fullmatch(comp.text):
        index = int(comp.text)
    else:
        raise ValueError(f"cannot use key {comp.text!r} on an array")
    while len(node) < index:
        node.append(None)
    if not rest:
        if index == len(node):
            node.append(value)
        else:
            node[index] = value
        return
    child = node[index] if index < len(node) else None
    if not isinstance(child, (dict, list)):
        child = [] if _is_array_key(rest[0].text) else {}
        if index == len(node):
            node.append(child)
        else:
            node[index] = child
    _assign(child, rest, value)


def _load_for_edit(document: str | bytes, first: _Component) -> Any:
    text = document.decode("utf-8", errors="replace") if isinstance(document, (bytes, bytearray)) else document
    if not text.strip():
        return [] if _is_array_key(first.text) else {}
    try:
        root = _parse(text)
    except ValueError as exc:
        raise ValueError(f"invalid json document: {exc}") from exc
    if not isinstance(root, (dict, list)):
        raise ValueError("json document is not an object or array")
    return root


def set_value(document: str | bytes, path: str, value: Any) -> str:
    """Return the document with ``value`` stored at ``path``, creating missing parents.

    ``-1`` on an array appends.
    """
    components = _edit_path(path)
    root = _load_for_edit(document, components[0])
    _dump(value)
    _assign(root, components, value)
    return _dump(root)


def set_raw(document: str | bytes, path: str, raw: str) -> str:
    """Store the JSON text ``raw`` at ``path``."""
    try:
        value = _parse(raw)
    except ValueError as exc:
        raise ValueError(f"invalid raw json: {exc}") from exc
    return set_value(document, path, value)


def delete(document: str | bytes, path: str) -> str:
    """Return the document without the value at ``path``; a missing path changes nothing."""
    components = _edit_path(path)
    text = document.decode("utf-8", errors="replace") if isinstance(document, (bytes, bytearray)) else document
    try:
        root = _parse(text)
    except ValueError as exc:
        raise ValueError(f"invalid json document: {exc}") from exc
    parent = _lookup(root, components[:-1])
    key = components[-1].text
    if isinstance(parent, dict) and key in parent:
        del parent[key]
    elif isinstance(parent, list) and key == "-1" and parent:
        parent.pop()
    elif isinstance(parent, list) and _INDEX.fullmatch(key) and int(key) < len(parent):
        del parent[int(key)]
    else:
        return text
    return _dump(root)


def valid(document: str | bytes) -> bool:
    """Return True if ``document`` is well-formed JSON."""
    try:
        _parse(document)
    except (ValueError, UnicodeDecodeError):
        return False
    return True