"""ZIP packaging of a generated project tree.

Walks the tree (hidden files included), prunes dependency, VCS, cache and
build-output directories at any depth, skips OS metadata and log files, and
streams every remaining file into a deflate-compressed archive under a single
top-level directory named after the application.
"""

from __future__ import annotations

import asyncio
import fnmatch
import os
import stat
import zipfile
from collections.abc import Iterator
from pathlib import Path

from appforge.builder.errors import ArchiveError
from appforge.utils import format_size, print_success

EXCLUDED_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    ".next",
    ".cache",
    "dist",
    "build",
})

EXCLUDED_FILE_PATTERNS: tuple[str, ...] = (
    ".DS_Store",
    "*.log",
)


def is_excluded_file(name: str) -> bool:
    """Return ``True`` if a file name matches an exclusion pattern."""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in EXCLUDED_FILE_PATTERNS)


def iter_archive_entries(tree: Path, app_name: str) -> Iterator[tuple[Path, str]]:
    """Yield ``(source_path, archive_name)`` for every file to archive.

    Traversal is depth-first and sorted by name so the same tree always
    yields the same entry order.  Symlinks are followed like regular
    entries.

    Raises:
        OSError: A directory could not be listed or an entry could not be
            stat-ed (for example a dangling symlink).
    """
    root = Path(tree)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise, followlinks=True):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS)
        current = Path(dirpath)
        for filename in sorted(filenames):
            if is_excluded_file(filename):
                continue
            source = current / filename
            if not stat.S_ISREG(source.stat().st_mode):
                continue
            relative = source.relative_to(root).as_posix()
            yield source, f"{app_name}/{relative}"


def _raise(exc: OSError) -> None:
    raise exc


class ArchiveBuilder:
    """Builds ``<archive_root>/<app_name>-<build_id>.zip`` from a project tree."""

    def __init__(self, archive_root: Path, compression_level: int = 9) -> None:
        self.archive_root = Path(archive_root)
        self.compression_level = compression_level

    def archive_path(self, app_name: str, build_id: str) -> Path:
        return self.archive_root / f"{app_name}-{build_id}.zip"

    async def build(self, tree: Path, app_name: str, build_id: str) -> Path:
        """Create the archive and return its path.

        Raises:
            ArchiveError: A source file could not be read or the output could
                not be written.  Any partial archive is left for the caller
                to discard.
        """
        target = self.archive_path(app_name, build_id)
        count = await asyncio.to_thread(self._write, Path(tree), app_name, target)
        print_success(
            f"Archive created: {target} ({count} files, {format_size(target.stat().st_size)})"
        )
        return target

    def _write(self, tree: Path, app_name: str, target: Path) -> int:
        """Synchronous helper: stream entries into the ZIP as they are found."""
        count = 0
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(
                target,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compression_level,
            ) as archive:
                for source, name in iter_archive_entries(tree, app_name):
                    archive.write(source, arcname=name)
                    count += 1
        except OSError as exc:
            raise ArchiveError(f"Failed to create archive {target.name}: {exc}") from exc
        return count
