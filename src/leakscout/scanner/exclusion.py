"""Exclusion policy: which directories and files a scan never reads."""

from __future__ import annotations

import enum
import os
from collections.abc import Callable, Iterable

# Directories whose whole subtree is pruned
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".bzr",
        "node_modules",
        "vendor",
        ".venv",
        "venv",
        "env",
        ".env",
        "dist",
        "build",
        "target",
        ".idea",
        ".vscode",
        ".DS_Store",
    }
)

# Lockfiles and ignore files, matched on basename
DEFAULT_EXCLUDE_FILES: frozenset[str] = frozenset(
    {
        ".gitignore",
        ".dockerignore",
        "package-lock.json",
        "yarn.lock",
        "go.sum",
    }
)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".bin",
        ".o",
        ".a",
        ".pyc",
        ".pyo",
        ".class",
        ".jar",
        ".zip",
        ".tar",
        ".gz",
        ".7z",
        ".rar",
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".pdf",
        ".db",
        ".sqlite",
        ".iso",
    }
)

# 10 MiB
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class SkipReason(enum.Enum):
    """Why a file was not handed to the matcher."""

    EXCLUDED = "excluded"
    BINARY = "binary"
    OVERSIZE = "oversize"


class ExclusionPolicy:
    """Directory/file exclusions plus a size ceiling and binary classifier.

    Additions are cumulative. The policy must not be mutated while a scan
    that uses it is running.
    """

    def __init__(
        self,
        exclude_dirs: Iterable[str] = (),
        exclude_files: Iterable[str] = (),
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self._dirs: set[str] = set(DEFAULT_EXCLUDE_DIRS)
        self._files: set[str] = set(DEFAULT_EXCLUDE_FILES)
        self._max_file_size = DEFAULT_MAX_FILE_SIZE
        for name in exclude_dirs:
            self.add_dir(name)
        for name in exclude_files:
            self.add_file(name)
        self.set_max_file_size(max_file_size)

    @property
    def excluded_dirs(self) -> frozenset[str]:
        return frozenset(self._dirs)

    @property
    def excluded_files(self) -> frozenset[str]:
        return frozenset(self._files)

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    def add_dir(self, name: str) -> None:
        self._dirs.add(name)

    def add_file(self, name: str) -> None:
        self._files.add(name)

    def set_max_file_size(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"max file size must be non-negative, got {size}")
        self._max_file_size = size

    def should_skip_directory(self, name: str) -> bool:
        return name in self._dirs

    def should_skip_file(self, name: str) -> bool:
        return name in self._files

    def is_oversize(self, size: int) -> bool:
        return size > self._max_file_size

    @staticmethod
    def is_binary(path: str | os.PathLike[str]) -> bool:
        ext = os.path.splitext(os.fspath(path))[1]
        return ext.lower() in BINARY_EXTENSIONS

    def skip_reason(
        self,
        path: str | os.PathLike[str],
        size_of: Callable[[], int],
    ) -> SkipReason | None:
        """Classify a file entry, first matching rule wins.

        Order: basename exclusion, binary extension, size ceiling.
        *size_of* is only called when the first two rules pass, so a
        skipped file is never stat'ed needlessly. Errors from *size_of*
        propagate to the caller.
        """
        if self.should_skip_file(os.path.basename(os.fspath(path))):
            return SkipReason.EXCLUDED
        if self.is_binary(path):
            return SkipReason.BINARY
        if self.is_oversize(size_of()):
            return SkipReason.OVERSIZE
        return None
