"""Case conversion, padding and word splitting for strings."""

from __future__ import annotations

import string

_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

_LOWER, _UPPER, _DIGIT, _OTHER = 1, 2, 3, 4

# Letters in these half-open ranges are not counted as word characters.
_CJK_RANGES = (
    ("\u3034", "\u30ff"),
    ("\u3400", "\u4dbf"),
    ("\u4e00", "\u9fff"),
    ("\uf900", "\ufaff"),
    ("\uff66", "\uff9f"),
)


def _is_ascii_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_ascii_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _char_type(ch: str) -> int:
    if _is_ascii_lower(ch):
        return _LOWER
    if _is_ascii_upper(ch):
        return _UPPER
    if _is_ascii_digit(ch):
        return _DIGIT
    return _OTHER


def _split_into_strings(text: str, upper_case: bool) -> list[str]:
    groups: list[list[str]] = []
    last_type = 0
    for ch in text:
        kind = _char_type(ch)
        if kind == last_type:
            groups[-1].append(ch)
        else:
            groups.append([ch])
        last_type = kind

    # "HTTPServer" -> "HTTP", "Server": an upper run gives its last letter to a following lower run.
    for current, following in zip(groups, groups[1:]):
        if _is_ascii_upper(current[0]) and _is_ascii_lower(following[0]):
            following.insert(0, current.pop())

    table = _TO_UPPER if upper_case else _TO_LOWER
    return [
        "".join(group).translate(table)
        for group in groups
        if group and (group[0].isalpha() or _is_ascii_digit(group[0]))
    ]


def capitalize(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def camel_case(text: str) -> str:
    """Convert to camelCase, dropping characters that are not letters or digits."""
    parts = _split_into_strings(text, False)
    if not parts:
        return ""
    first, *rest = parts
    return first.lower() + "".join(capitalize(part) for part in rest)


def upper_first(text: str) -> str:
    """Upper-case the first character only."""
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    """Lower-case the first character only."""
    return text[:1].lower() + text[1:]


def kebab_case(text: str) -> str:
    """Convert to kebab-case."""
    return "-".join(_split_into_strings(text, False))


def upper_kebab_case(text: str) -> str:
    """Convert to UPPER-KEBAB-CASE."""
    return "-".join(_split_into_strings(text, True))


def snake_case(text: str) -> str:
    """Convert to snake_case."""
    return "_".join(_split_into_strings(text, False))


def upper_snake_case(text: str) -> str:
    """Convert to UPPER_SNAKE_CASE."""
    return "_".join(_split_into_strings(text, True))


def _repeat_to(pad_str: str, count: int) -> str:
    repeats = -(-count // len(pad_str))
    return (pad_str * repeats)[:count]


def _pad(source: str, size: int, pad_str: str, left_share) -> str:
    if len(source) >= size:
        return source
    pad_str = pad_str or " "
    total = size - len(source)
    left = left_share(total)
    return _repeat_to(pad_str, left) + source + _repeat_to(pad_str, total - left)


def pad(source: str, size: int, pad_str: str) -> str:
    """Pad both sides to ``size`` characters; the right side gets any odd one."""
    return _pad(source, size, pad_str, lambda total: total // 2)


def pad_start(source: str, size: int, pad_str: str) -> str:
    """Pad on the left to ``size`` characters."""
    return _pad(source, size, pad_str, lambda total: total)


def pad_end(source: str, size: int, pad_str: str) -> str:
    """Pad on the right to ``size`` characters."""
    return _pad(source, size, pad_str, lambda total: 0)


def _is_letter(ch: str) -> bool:
    if not ch.isalpha():
        return False
    return not any(low <= ch < high for low, high in _CJK_RANGES)


def _word_spans(text: str):
    start = None
    for index, ch in enumerate(text):
        if _is_letter(ch):
            if start is None:
                start = index
        elif start is not None and ch in "'-":
            continue
        elif start is not None:
            yield start, index
            start = None
    if start is not None:
        yield start, len(text)


def split_words(text: str) -> list[str]:
    """Split into words of letters, allowing inner apostrophes and hyphens; CJK is skipped."""
    return [text[start:end] for start, end in _word_spans(text)]


def word_count(text: str) -> int:
    """Count the words that ``split_words`` would return."""
    return sum(1 for _ in _word_spans(text))