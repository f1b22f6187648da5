"""File system helpers: existence checks, copying, reading, writing, CSV and content sniffing."""

from __future__ import annotations

import csv
import hashlib
import math
import os
import shutil
import stat
from decimal import Decimal
from typing import Any, BinaryIO, Callable, Iterator, Mapping, Sequence

_SNIFF_LEN = 512
_BINARY_FLAG = getattr(os, "O_BINARY", 0)

_UNSUPPORTED_CSV_VALUE = (
    "unsupported value type detected; only basic types are supported: \n"
    "bool, rune, string, int, int64, float32, float64, uint, byte, complex128, complex64, uintptr"
)


class FileReader:
    """Reads a file one line at a time and keeps track of the byte offset."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO = open(path, "rb")
        self._offset = 0

    def read_line(self) -> str:
        """Return the next line without its trailing CR/LF characters.

        A final line without a newline is returned as well; once nothing is
        left, EOFError is raised.
        """
        data = self._file.readline()
        self._offset += len(data)
        if not data:
            raise EOFError("end of file")
        return data.rstrip(b"\r\n").decode("utf-8", errors="replace")

    def offset(self) -> int:
        """Return the byte offset of the next read."""
        return self._offset

    def seek_offset(self, offset: int) -> None:
        """Continue reading from the byte ``offset``."""
        self._file.seek(offset)
        self._offset = offset

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __iter__(self) -> Iterator[str]:
        while True:
            try:
                yield self.read_line()
            except EOFError:
                return

    def __enter__(self) -> FileReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Existence, creation and removal
# ---------------------------------------------------------------------------


def is_exist(path: str | os.PathLike[str]) -> bool:
    """Return True if a file or directory exists at ``path``."""
    return os.path.exists(path)


def create_file(path: str | os.PathLike[str]) -> bool:
    """Create (or truncate) a file; return False if that fails."""
    try:
        with open(path, "wb"):
            pass
    except OSError:
        return False
    return True


def create_dir(path: str | os.PathLike[str]) -> None:
    """Create a directory and any missing parents."""
    os.makedirs(path, exist_ok=True)


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` is an existing directory."""
    return os.path.isdir(path)


def copy_file(src_path: str | os.PathLike[str], dst_path: str | os.PathLike[str]) -> None:
    """Copy the contents of one file to another, creating or truncating the target."""
    shutil.copyfile(src_path, dst_path)


def copy_dir(src_path: str | os.PathLike[str], dst_path: str | os.PathLike[str]) -> None:
    """Copy a directory tree recursively into ``dst_path``."""
    src = os.fspath(src_path)
    dst = os.fspath(dst_path)
    info = os.stat(src)
    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(f"source path is not a directory: {src}")
    os.makedirs(dst, 0o755, exist_ok=True)
    with os.scandir(src) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        target = os.path.join(dst, entry.name)
        if entry.is_dir(follow_symlinks=False):
            copy_dir(entry.path, target)
        else:
            copy_file(entry.path, target)


def remove_file(
    path: str | os.PathLike[str], on_delete: Callable[[str], Any] | None = None
) -> None:
    """Remove a file, calling ``on_delete(path)`` first; directories are refused."""
    target = os.fspath(path)
    info = os.stat(target)
    if stat.S_ISDIR(info.st_mode):
        raise IsADirectoryError(f"{target} is a directory")
    if on_delete is not None:
        on_delete(target)
    os.remove(target)


def _walk(path: str) -> Iterator[str]:
    """Yield ``path`` and everything below it, in lexical order, without following links."""
    yield path
    try:
        info = os.lstat(path)
    except OSError:
        return
    if not stat.S_ISDIR(info.st_mode):
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        return
    for name in names:
        yield from _walk(os.path.join(path, name))


def remove_dir(
    path: str | os.PathLike[str], on_delete: Callable[[str], Any] | None = None
) -> None:
    """Remove a directory tree, calling ``on_delete`` for every path in it first."""
    target = os.fspath(path)
    info = os.stat(target)
    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(f"{target} is not a directory")
    if on_delete is not None:
        for item in _walk(target):
            on_delete(item)
    shutil.rmtree(target)


def clear_file(path: str | os.PathLike[str]) -> None:
    """Truncate an existing file to zero length."""
    fd = os.open(path, os.O_WRONLY | os.O_TRUNC | _BINARY_FLAG)
    os.close(fd)


# ---------------------------------------------------------------------------
# Reading and inspecting
# ---------------------------------------------------------------------------


def read_file_to_string(path: str | os.PathLike[str]) -> str:
    """Return the whole file as text."""
    with open(path, "rb") as fh:
        return fh.read().decode("utf-8", errors="replace")


def read_file_by_line(path: str | os.PathLike[str]) -> list[str]:
    """Return the file's lines without their ``\\n`` or ``\\r\\n`` endings."""
    with open(path, "rb") as fh:
        data = fh.read()
    *complete, tail = data.split(b"\n")
    lines = [line[:-1] if line.endswith(b"\r") else line for line in complete]
    if tail:
        lines.append(tail)
    return [line.decode("utf-8", errors="replace") for line in lines]


def list_file_names(path: str | os.PathLike[str]) -> list[str]:
    """Return the sorted names of the non-directory entries in ``path``."""
    if not is_exist(path):
        return []
    with os.scandir(path) as entries:
        return sorted(entry.name for entry in entries if not entry.is_dir(follow_symlinks=False))


def is_link(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` is a symbolic link."""
    return os.path.islink(path)


def file_mode(path: str | os.PathLike[str]) -> int:
    """Return the mode bits of ``path`` without following a symbolic link."""
    return os.lstat(path).st_mode


def file_size(path: str | os.PathLike[str]) -> int:
    """Return the size of a file in bytes."""
    return os.stat(path).st_size


def dir_size(path: str | os.PathLike[str]) -> int:
    """Return the total size in bytes of everything that is not a directory below ``path``."""
    info = os.lstat(path)
    if not stat.S_ISDIR(info.st_mode):
        return info.st_size
    total = 0
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                total += dir_size(entry.path)
            else:
                total += entry.stat(follow_symlinks=False).st_size
    return total


def mtime(path: str | os.PathLike[str]) -> int:
    """Return the modification time as whole Unix seconds."""
    return os.stat(path).st_mtime_ns // 1_000_000_000


_SHA_FACTORIES = {1: hashlib.sha1, 256: hashlib.sha256, 512: hashlib.sha512}


def sha(path: str | os.PathLike[str], sha_type: int = 1) -> str:
    """Return the hex SHA digest of a file; ``sha_type`` is 1, 256 or 512."""
    with open(path, "rb") as fh:
        factory = _SHA_FACTORIES.get(sha_type)
        if factory is None:
            raise ValueError("param `shaType` should be 1, 256 or 512")
        digest = factory()
        for chunk in iter(lambda: fh.read(64 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


# ---------------------------------------------------------------------------
# Content type sniffing
# ---------------------------------------------------------------------------

_WHITESPACE = b"\t\n\x0c\r "
_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1", b"<DIV",
    b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B", b"<BODY", b"<BR", b"<P",
    b"<!--",
)

# Each signature is a sequence of (offset, bytes) parts that must all match.
_Signature = tuple[tuple[tuple[int, bytes], ...], str]


def _exact(pattern: bytes, mime: str) -> _Signature:
    return ((0, pattern),), mime


def _riff(kind: bytes, mime: str) -> _Signature:
    return ((0, b"RIFF"), (8, kind)), mime


_SIGNATURES_BEFORE_MP4: tuple[_Signature, ...] = (
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),
    _exact(b"\xfe\xff", "text/plain; charset=utf-16be"),
    _exact(b"\xff\xfe", "text/plain; charset=utf-16le"),
    _exact(b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _riff(b"WEBPVP", "image/webp"),
    _exact(b"\x89PNG\r\n\x1a\n", "image/png"),
    _exact(b"\xff\xd8\xff", "image/jpeg"),
    (((0, b"FORM"), (8, b"AIFF")), "audio/aiff"),
    _exact(b"ID3", "audio/mpeg"),
    _exact(b"OggS\x00", "application/ogg"),
    _exact(b"MThd\x00\x00\x00\x06", "audio/midi"),
    _riff(b"AVI ", "video/avi"),
    _riff(b"WAVE", "audio/wave"),
)

_SIGNATURES_AFTER_MP4: tuple[_Signature, ...] = (
    _exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),
    _exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00\x61\x73\x6d", "application/wasm"),
)

_BINARY_BYTES = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)]
)


def _matches(data: bytes, parts: tuple[tuple[int, bytes], ...]) -> bool:
    return all(data[offset:offset + len(pattern)] == pattern for offset, pattern in parts)


def _is_html(data: bytes) -> bool:
    for tag in _HTML_TAGS:
        if len(data) < len(tag) + 1:
            continue
        if data[:len(tag)].upper() == tag and data[len(tag)] in b" >":
            return True
    return False


def _is_mp4(data: bytes) -> bool:
    if len(data) < 12:
        return False
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return False
    if data[4:8] != b"ftyp":
        return False
    return any(
        data[start:start + 3] == b"mp4" for start in range(8, box_size, 4) if start != 12
    )


def _detect_content_type(data: bytes) -> str:
    data = data[:_SNIFF_LEN]
    trimmed = data.lstrip(_WHITESPACE)
    if _is_html(trimmed):
        return "text/html; charset=utf-8"
    if trimmed.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    for parts, mime in _SIGNATURES_BEFORE_MP4:
        if _matches(data, parts):
            return mime
    if _is_mp4(data):
        return "video/mp4"
    for parts, mime in _SIGNATURES_AFTER_MP4:
        if _matches(data, parts):
            return mime
    if any(byte in _BINARY_BYTES for byte in data):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def mime_type(file: Any) -> str:
    """Return the sniffed MIME type of a file path or a readable binary file.

    The first 512 bytes are examined in a zero-filled 512-byte window; an
    unreadable or empty file gives "".
    """
    if isinstance(file, (str, os.PathLike)):
        try:
            with open(file, "rb") as fh:
                chunk = fh.read(_SNIFF_LEN)
        except OSError:
            return ""
    elif hasattr(file, "read"):
        try:
            chunk = file.read(_SNIFF_LEN)
        except (OSError, ValueError):
            return ""
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
    else:
        return ""
    if not chunk:
        return ""
    return _detect_content_type(bytes(chunk).ljust(_SNIFF_LEN, b"\x00"))


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def write_string_to_file(path: str | os.PathLike[str], content: str, append: bool = False) -> None:
    """Write text to a file, replacing or appending to its contents."""
    with open(path, "a" if append else "w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def write_bytes_to_file(path: str | os.PathLike[str], content: bytes) -> None:
    """Replace a file's contents with ``content``."""
    with open(path, "wb") as fh:
        fh.write(content)


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def read_csv_file(path: str | os.PathLike[str], delimiter: str = ",") -> list[list[str]]:
    """Read every record of a CSV file; all records must have the same number of fields."""
    records: list[list[str]] = []
    with open(path, encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh, delimiter=delimiter, strict=True)
        for row in reader:
            if not row:
                continue
            if records and len(row) != len(records[0]):
                raise ValueError(f"record on line {reader.line_num}: wrong number of fields")
            records.append(row)
    return records


def _check_delimiter(delimiter: str) -> None:
    if len(delimiter) != 1 or delimiter in '"\r\n' or delimiter == "\ufffd":
        raise ValueError("csv: invalid field or comment delimiter")


def _escape_field(field: str, delimiter: str) -> str:
    escaped = field.replace('"', '""')
    if any(ch in escaped for ch in (delimiter, '"', "\n")):
        escaped = f'"{escaped}"'
    return escaped


def _needs_quotes(field: str, delimiter: str) -> bool:
    if not field:
        return False
    if field == "\\.":
        return True
    if any(ch in field for ch in ("\n", "\r", '"', delimiter)):
        return True
    return field[0].isspace()


def _csv_line(fields: Sequence[str], delimiter: str) -> str:
    cells = (
        '"' + field.replace('"', '""') + '"' if _needs_quotes(field, delimiter) else field
        for field in fields
    )
    return delimiter.join(cells) + "\n"


def write_csv_file(
    path: str | os.PathLike[str],
    records: Sequence[Sequence[str]],
    append: bool = False,
    delimiter: str = ",",
) -> None:
    """Write records to a CSV file.

    Cells holding the delimiter, a quote or a newline are first wrapped in
    quotes, then written with standard CSV quoting. Without ``append`` the
    file is written from its start but not truncated.
    """
    _check_delimiter(delimiter)
    text = "".join(
        _csv_line([_escape_field(field, delimiter) for field in row], delimiter)
        for row in records
    )
    flags = os.O_RDWR | os.O_CREAT | _BINARY_FLAG
    if append:
        flags |= os.O_APPEND
    fd = os.open(path, flags, 0o644)
    with os.fdopen(fd, "wb") as fh:
        fh.write(text.encode("utf-8"))


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0") or "0"
    assert isinstance(exponent, int)
    point = len(digit_tuple) + exponent
    count = len(digits)
    prefix = "-" if sign else ""
    exp = point - 1
    eprec = 6
    if eprec > count and count >= point:
        eprec = count
    if exp < -4 or exp >= eprec:
        mantissa = digits[0] + ("." + digits[1:] if count > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= count:
        return f"{prefix}{digits}{'0' * (point - count)}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, complex):
        imag = _format_float(value.imag)
        if not imag.startswith("-"):
            imag = "+" + imag
        return f"({_format_float(value.real)}{imag}i)"
    return str(value)


def _is_csv_supported(value: Any) -> bool:
    return isinstance(value, (bool, int, float, complex, str))


def write_maps_to_csv(
    path: str | os.PathLike[str],
    records: Sequence[Mapping[str, Any]],
    append_to_existing: bool = False,
    delimiter: str = ",",
    headers: Sequence[str] | None = None,
) -> None:
    """Write dictionaries as CSV rows.

    Columns follow ``headers``, or the sorted keys of the first record. A
    header row is written unless appending to an existing file.
    """
    for record in records:
        if not all(_is_csv_supported(value) for value in record.values()):
            raise TypeError(_UNSUPPORTED_CSV_VALUE)
    if headers is not None:
        columns = list(headers)
    else:
        if not records:
            raise ValueError("records must not be empty when no headers are given")
        columns = sorted(records[0])
    rows: list[list[str]] = [] if append_to_existing else [columns]
    rows.extend([_format_value(record.get(column)) for column in columns] for record in records)
    write_csv_file(path, rows, append_to_existing, delimiter)