"""Textual patch application.

Collects every selected plugin's patch directives, groups them by target
file and applies each group to the project tree.  Groups are processed
concurrently (bounded by a semaphore); the directives inside one group are
folded strictly in order, each operating on the previous one's output.

Patches are plain regular-expression / string operations, not syntax-aware
edits.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from appforge.builder.errors import PatchError
from appforge.models import BuildConfig, PatchDirective, PatchKind
from appforge.plugins.base import FeaturePlugin

DEFAULT_CONCURRENCY = 8


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def collect(plugins: Sequence[FeaturePlugin], config: BuildConfig) -> list[PatchDirective]:
    """Flatten every plugin's directives: plugin order, then declared order."""
    directives: list[PatchDirective] = []
    for plugin in plugins:
        directives.extend(plugin.get_modifications(config))
    return directives


def group(directives: Iterable[PatchDirective]) -> dict[str, list[PatchDirective]]:
    """Partition directives by target file, keeping their relative order."""
    groups: dict[str, list[PatchDirective]] = {}
    for directive in directives:
        groups.setdefault(directive.file, []).append(directive)
    return groups


def apply_directive(content: str, directive: PatchDirective) -> str:
    """Apply one directive to *content* and return the new text.

    ``replace`` substitutes every non-overlapping match; the replacement is
    an ``re.sub`` template, so ``\\1`` and ``\\g<name>`` refer to groups.
    """
    if directive.kind is PatchKind.REPLACE:
        try:
            return re.sub(directive.pattern, directive.replacement, content)
        except re.error as exc:
            raise PatchError(
                f"{directive.file}: invalid replace directive {directive.pattern!r}: {exc}",
                file=directive.file,
            ) from exc
    if directive.kind is PatchKind.APPEND:
        return content + directive.content
    return directive.content + content


def apply_directives(content: str, directives: Iterable[PatchDirective]) -> str:
    """Fold *directives* over *content* in order."""
    for directive in directives:
        content = apply_directive(content, directive)
    return content


# ---------------------------------------------------------------------------
# PatchEngine
# ---------------------------------------------------------------------------


class PatchEngine:
    """Applies grouped patch directives to files under a project tree.

    Attributes:
        concurrency: Maximum number of file groups in flight at once.
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.concurrency = concurrency

    async def apply(
        self,
        plugins: Sequence[FeaturePlugin],
        config: BuildConfig,
        tree: Path,
    ) -> list[str]:
        """Apply every selected plugin's directives under *tree*.

        Returns the patched relative paths in first-seen order.  Every group
        runs to completion or failure; if any failed, a ``PatchError``
        listing the failed files is raised afterwards.
        """
        return await self.apply_groups(group(collect(plugins, config)), tree)

    async def apply_groups(
        self, groups: dict[str, list[PatchDirective]], tree: Path
    ) -> list[str]:
        """Apply pre-grouped directives under *tree* (see :meth:`apply`)."""
        tree = Path(tree)
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _run(relative_path: str, directives: list[PatchDirective]) -> None:
            async with semaphore:
                await asyncio.to_thread(_patch_file, tree / relative_path, directives)

        results = await asyncio.gather(
            *(_run(path, directives) for path, directives in groups.items()),
            return_exceptions=True,
        )

        failures = [
            (path, result)
            for path, result in zip(groups, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            first_path, first_exc = failures[0]
            if len(failures) == 1 and isinstance(first_exc, PatchError):
                raise first_exc
            details = "; ".join(f"{path}: {exc}" for path, exc in failures)
            raise PatchError(
                f"Failed to patch {len(failures)} file(s): {details}", file=first_path
            ) from first_exc

        return list(groups)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _patch_file(path: Path, directives: list[PatchDirective]) -> None:
    """Synchronous helper: read (or start empty), fold, write back."""
    try:
        content = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        path.parent.mkdir(parents=True, exist_ok=True)
        content = ""

    content = apply_directives(content, directives)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
