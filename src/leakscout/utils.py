"""Small helpers for sizes, paths and display strings."""

from __future__ import annotations

import os
import re

_SIZE_UNITS = {
    "": 1,
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
}

_SIZE_RE = re.compile(r"^(\d+)\s*([KMGT]?B)?$")


def parse_size(value: str | int) -> int:
    """Parse a byte size such as ``10MB``, ``512 kb`` or ``1024``."""
    if isinstance(value, int):
        return value
    m = _SIZE_RE.match(value.strip().upper())
    if not m:
        raise ValueError(f"invalid size format: {value}")
    number, unit = m.groups()
    return int(number) * _SIZE_UNITS[unit or ""]


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} TB"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return "..."
    return text[: max_len - 3] + "..."


def shorten_path(file_path: str, base_dir: str) -> str:
    """Shorten *file_path* relative to the scan root when it lies beneath it."""
    base = os.path.abspath(base_dir)
    if os.path.isfile(base):
        base = os.path.dirname(base)
    if file_path.startswith(base + os.sep):
        return file_path[len(base) :].lstrip(os.sep)
    return file_path

