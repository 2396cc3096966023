"""Additional (full-content) file creation.

Runs before patching so a plugin can patch a file another plugin just
created.  Files are written one by one in plugin selection order: when two
plugins declare the same path the later one overwrites the earlier one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from appforge.models import AdditionalFile, BuildConfig
from appforge.plugins.base import FeaturePlugin


def collect_additional_files(
    plugins: Sequence[FeaturePlugin], config: BuildConfig
) -> list[AdditionalFile]:
    """All additional files declared by *plugins*, in selection order."""
    files: list[AdditionalFile] = []
    for plugin in plugins:
        if plugin.get_additional_files is not None:
            files.extend(plugin.get_additional_files(config))
    return files


async def materialize_additional_files(
    plugins: Sequence[FeaturePlugin], config: BuildConfig, tree: Path
) -> list[Path]:
    """Write every declared additional file under *tree*.

    Returns the written paths (duplicates included, in write order).
    """
    written: list[Path] = []
    for file in collect_additional_files(plugins, config):
        target = Path(tree) / file.path
        await asyncio.to_thread(_write_file, target, file.content)
        written.append(target)
    return written


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
