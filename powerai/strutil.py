"""General string helpers: base64, slicing around separators, trimming and searching."""

from __future__ import annotations

import base64
import binascii
import random
import re
from typing import Any, Iterable, Mapping

# Characters treated as white space (the Unicode White_Space set used for trimming and blank checks).
_SPACE_CHARS = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Unicode space separators (general category Zs).
_ZS_CHARS = (
    " \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u202f\u205f\u3000"
)

DEFAULT_TRIM_CHARS = "\t\v\n\r\f \x00\x85\xa0"

_WHITESPACE = re.compile(r"[\t\n\f\r ]")
_MULTI_WHITESPACE = re.compile(
    "[\t\n\v\f\r ]{2,}|[\t\n\f\r " + re.escape(_ZS_CHARS) + "]{2,}"
)
_TEMPLATE_KEY = re.compile(r"\{(\w+)\}", re.ASCII)
_URL_ALPHABET_VIOLATION = re.compile(r"[+/]")

_rng = random.Random()


def _decode_bytes(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def base64_decode_string(text: str) -> str:
    """Decode standard, padded base64 into a string; raise ValueError if malformed."""
    try:
        return _decode_bytes(base64.b64decode(text, validate=True))
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"illegal base64 data: {exc}") from exc


def base64_encode_string(text: str) -> str:
    """Encode a string with the URL-safe, padded base64 alphabet."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode_url_string(text: str) -> str:
    """Decode URL-safe, padded base64 into a string; raise ValueError if malformed."""
    if _URL_ALPHABET_VIOLATION.search(text):
        raise ValueError("illegal base64 data: character outside the URL-safe alphabet")
    try:
        return _decode_bytes(base64.b64decode(text, altchars=b"-_", validate=True))
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"illegal base64 data: {exc}") from exc


def base64_encode_url_string(text: str) -> str:
    """Encode a string with the URL-safe, padded base64 alphabet."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def before(text: str, sep: str) -> str:
    """Return the part before the first ``sep``, or the whole text if absent."""
    if not sep:
        return text
    head, found, _ = text.partition(sep)
    return head if found else text


def before_last(text: str, sep: str) -> str:
    """Return the part before the last ``sep``, or the whole text if absent."""
    if not sep:
        return text
    head, found, _ = text.rpartition(sep)
    return head if found else text


def after(text: str, sep: str) -> str:
    """Return the part after the first ``sep``, or the whole text if absent."""
    if not sep:
        return text
    _, found, tail = text.partition(sep)
    return tail if found else text


def after_last(text: str, sep: str) -> str:
    """Return the part after the last ``sep``, or the whole text if absent."""
    if not sep:
        return text
    _, found, tail = text.rpartition(sep)
    return tail if found else text


def is_string(value: Any) -> bool:
    """Return True if ``value`` is a string."""
    return isinstance(value, str)


def reverse(text: str) -> str:
    """Return the characters of ``text`` in reverse order."""
    return text[::-1]


def wrap(text: str, wrap_with: str) -> str:
    """Surround ``text`` with ``wrap_with`` on both sides; empty inputs are left alone."""
    if not text or not wrap_with:
        return text
    return f"{wrap_with}{text}{wrap_with}"


def unwrap(text: str, wrap_token: str) -> str:
    """Remove ``wrap_token`` from both ends if it is present on both."""
    if not wrap_token or not text.startswith(wrap_token) or not text.endswith(wrap_token):
        return text
    if len(text) < 2 * len(wrap_token):
        return text
    return text[len(wrap_token):len(text) - len(wrap_token)]


def split_ex(text: str, sep: str, remove_empty: bool) -> list[str]:
    """Split on ``sep``, optionally dropping empty pieces; an empty ``sep`` gives []."""
    if not sep:
        return []
    parts = text.split(sep)
    if remove_empty:
        return [part for part in parts if part]
    return parts


def substring(text: str, offset: int, length: int) -> str:
    """Return up to ``length`` characters from ``offset``; a negative offset counts from the end.

    NUL characters are removed from the result.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    size = len(text)
    if offset < 0:
        offset += size
    offset = max(offset, 0)
    if offset > size:
        return ""
    end = min(offset + length, size)
    return text[offset:end].replace("\x00", "")


def remove_non_printable(text: str) -> str:
    """Drop every character that is not printable."""
    return "".join(ch for ch in text if ch.isprintable())


def is_blank(text: str) -> bool:
    """Return True if ``text`` is empty or consists only of white space."""
    return all(ch in _SPACE_CHARS for ch in text)


def is_not_blank(text: str) -> bool:
    """Return True if ``text`` holds anything other than white space."""
    return not is_blank(text)


def has_prefix_any(text: str, prefixes: Iterable[str]) -> bool:
    """Return True if a non-empty ``text`` starts with any of ``prefixes``."""
    if not text:
        return False
    return any(text.startswith(prefix) for prefix in prefixes)


def has_suffix_any(text: str, suffixes: Iterable[str]) -> bool:
    """Return True if a non-empty ``text`` ends with any of ``suffixes``."""
    if not text:
        return False
    return any(text.endswith(suffix) for suffix in suffixes)


def index_offset(text: str, substr: str, idx_from: int) -> int:
    """Find ``substr`` searching from ``idx_from``.

    Returns -1 when ``idx_from`` is out of range; when the substring is not
    found the result is ``idx_from - 1``.
    """
    if idx_from > len(text) - 1 or idx_from < 0:
        return -1
    return text[idx_from:].find(substr) + idx_from


def replace_with_map(text: str, replaces: Mapping[str, str]) -> str:
    """Replace every occurrence of each key with its value, in mapping order."""
    for old, new in replaces.items():
        text = text.replace(old, new)
    return text


def trim(text: str, character_mask: str = "") -> str:
    """Strip default white space and NUL, plus any characters in ``character_mask``."""
    return text.strip(DEFAULT_TRIM_CHARS + character_mask)


def split_and_trim(text: str, delimiter: str, character_mask: str = "") -> list[str]:
    """Split on ``delimiter``, trim each piece and keep the non-empty ones."""
    parts = list(text) if delimiter == "" else text.split(delimiter)
    trimmed = (trim(part, character_mask) for part in parts)
    return [part for part in trimmed if part]


def hide_string(origin: str, start: int, end: int, replace_char: str) -> str:
    """Replace ``origin[start:end]`` with ``replace_char`` repeated once per character."""
    size = len(origin)
    if start > size - 1 or start < 0 or end < 0 or start > end:
        return origin
    end = min(end, size)
    if not replace_char:
        return origin
    return origin[:start] + replace_char * (end - start) + origin[end:]


def contains_all(text: str, substrs: Iterable[str]) -> bool:
    """Return True if ``text`` contains every one of ``substrs``."""
    return all(sub in text for sub in substrs)


def contains_any(text: str, substrs: Iterable[str]) -> bool:
    """Return True if ``text`` contains at least one of ``substrs``."""
    return any(sub in text for sub in substrs)


def remove_white_space(text: str, replace_all: bool) -> str:
    """Remove white space entirely, or collapse runs of it into single spaces."""
    if replace_all and text:
        text = "".join(ch for ch in text if ch not in _SPACE_CHARS)
    elif text:
        text = _MULTI_WHITESPACE.sub(" ", text)
        text = _WHITESPACE.sub(" ", text)
    return text.strip(_SPACE_CHARS)


def sub_in_between(text: str, start: str, end: str) -> str:
    """Return the text between the first ``start`` and the next ``end``, or ""."""
    _, found, rest = text.partition(start)
    if not found:
        return ""
    inner, found, _ = rest.partition(end)
    return inner if found else ""


def hamming_distance(a: str, b: str) -> int:
    """Count positions where the strings differ; raise ValueError on unequal lengths."""
    if len(a) != len(b):
        raise ValueError("a length and b length are unequal")
    return sum(1 for x, y in zip(a, b) if x != y)


def concat(*args: str) -> str:
    """Concatenate the given strings."""
    return "".join(args)


def ellipsis(text: str, length: int) -> str:
    """Strip ``text`` and cut it to ``length`` characters, appending "..." if cut."""
    text = text.strip(_SPACE_CHARS)
    if length <= 0:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def shuffle(text: str) -> str:
    """Return the characters of ``text`` in random order."""
    chars = list(text)
    _rng.shuffle(chars)
    return "".join(chars)


def rotate(text: str, shift: int) -> str:
    """Rotate right by ``shift`` characters; a negative shift rotates left."""
    length = len(text)
    if shift == 0 or length == 0:
        return text
    shift %= length
    return text[length - shift:] + text[:length - shift]


def template_replace(template: str, data: Mapping[str, str]) -> str:
    """Replace ``{key}`` placeholders from ``data``; ``{{`` and ``}}`` become single braces."""

    def substitute(match: re.Match[str]) -> str:
        return data.get(match.group(1), match.group(0))

    result = _TEMPLATE_KEY.sub(substitute, template)
    return result.replace("{{", "{").replace("}}", "}")


def regex_match_all_groups(pattern: str, text: str) -> list[list[str]]:
    """Return every match as ``[whole, group1, ...]``; unmatched groups are ""."""
    return [
        [match.group(0), *(group or "" for group in match.groups())]
        for match in re.finditer(pattern, text)
    ]


def extract_content(text: str, start: str, end: str) -> list[str]:
    """Return every piece of text found between ``start`` and a following ``end``."""
    if not start:
        raise ValueError("start must not be empty")
    result: list[str] = []
    while True:
        _, found, rest = text.partition(start)
        if not found:
            break
        inner, found, _ = rest.partition(end)
        if not found:
            break
        result.append(inner)
        text = rest
    return result


def find_all_occurrences(text: str, substr: str) -> list[int]:
    """Return the start positions of all, possibly overlapping, occurrences of ``substr``."""
    positions: list[int] = []
    i = 0
    while i < len(text):
        index = text.find(substr, i)
        if index == -1:
            break
        positions.append(index)
        i = index + 1
    return positions