"""Walk a repository and build the metadata index that detectors consume.

The index records file metadata only. Content is reached through
:meth:`RepoIndex.read`, which caps every read at :data:`READ_SAMPLE_SIZE`
bytes and caches the result.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

READ_SAMPLE_SIZE = 64 * 1024
"""Maximum number of bytes :meth:`RepoIndex.read` returns for one file."""

_IGNORED_DIRS = frozenset({".git", "node_modules", "vendor"})


@dataclass(frozen=True)
class FileEntry:
    """Metadata for one tracked file; ``path`` is repo-relative with ``/``."""

    path: str
    size: int
    mode: int


@dataclass
class RepoIndex:
    """Metadata-only view of a repository handed to every detector."""

    root: str
    files: list[FileEntry] = field(default_factory=list)
    by_name: dict[str, list[str]] = field(default_factory=dict)
    has_git: bool = False
    _cache: dict[str, bytes] = field(default_factory=dict, init=False, repr=False)

    def read(self, path: str) -> bytes:
        """Return up to ``READ_SAMPLE_SIZE`` bytes of a repo-relative file.

        Raises ``ValueError`` for a path that is not a clean relative
        path, and ``OSError`` (e.g. ``FileNotFoundError``) when the file
        cannot be read.
        """
        cached = self._cache.get(path)
        if cached is not None:
            return cached
        if not _valid_path(path):
            raise ValueError(f"invalid repository path {path!r}")
        with open(Path(self.root, *path.split("/")), "rb") as fh:
            data = fh.read(READ_SAMPLE_SIZE)
        self._cache[path] = data
        return data


def scan(root: str | os.PathLike[str]) -> RepoIndex:
    """Walk the repository at ``root`` and return its index."""
    root_str = os.fspath(root)
    index = RepoIndex(root=root_str)
    _walk(root_str, "", index)
    return index


def _walk(directory: str, rel: str, index: RepoIndex) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        path = f"{rel}/{entry.name}" if rel else entry.name
        # .git is noted even though its contents are never indexed.
        if path == ".git":
            index.has_git = True
        if entry.is_dir(follow_symlinks=False):
            if entry.name in _IGNORED_DIRS:
                continue
            _walk(entry.path, path, index)
            continue
        info = entry.stat(follow_symlinks=False)
        index.files.append(FileEntry(path=path, size=info.st_size, mode=info.st_mode))
        index.by_name.setdefault(entry.name, []).append(path)


def _valid_path(path: str) -> bool:
    if path == ".":
        return True
    if not path or path.startswith("/") or "\\" in path:
        return False
    return all(part not in ("", ".", "..") for part in path.split("/"))