"""Base template lookup and copy.

Maps a ``BuildConfig`` to the directory holding its starter template and
copies that template into the build's working directory.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path

from appforge.builder.errors import TemplateNotFoundError
from appforge.config import Settings
from appforge.models import BuildConfig, Framework, Linting

# npm strips dotfiles and READMEs from published packages, so templates ship
# them under these names.
RENAMES: dict[str, str] = {
    "gitignore": ".gitignore",
    "README-template.md": "README.md",
}

_LINT_SUFFIX: dict[Linting, str] = {
    Linting.ESLINT: "es",
    Linting.BIOME: "biome",
    Linting.NONE: "no",
}


def nextjs_variant(config: BuildConfig) -> str:
    """Directory name of the Next.js template variant, e.g. ``app-tail-es``."""
    routing = "pages" if config.routing in ("pages-router", "pages") else "app"
    tailwind = "tail" if config.styling == "tailwind" else "notail"
    return f"{routing}-{tailwind}-{_LINT_SUFFIX[config.linting]}"


def template_candidates(config: BuildConfig, settings: Settings) -> list[Path]:
    """Ordered list of directories that may hold the template for *config*."""
    if config.framework is Framework.NEXTJS:
        return [settings.templates_dir / "nextjs" / nextjs_variant(config)]
    return [
        settings.templates_dir / config.framework.value / "ts",
        settings.create_vite_dir / f"template-{config.framework.value}-ts",
    ]


def resolve_template_dir(config: BuildConfig, settings: Settings) -> Path:
    """Return the first existing template directory for *config*.

    Raises:
        TemplateNotFoundError: None of the candidates exists.
    """
    candidates = template_candidates(config, settings)
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    if config.framework is Framework.NEXTJS:
        raise TemplateNotFoundError(
            f'Next.js template "{nextjs_variant(config)}" not found. '
            f"Ensure {candidates[0]} exists."
        )
    raise TemplateNotFoundError(f"Template not found for framework: {config.framework.value}")


def copy_template(source: Path, destination: Path) -> list[Path]:
    """Recursively copy *source* into *destination*, applying ``RENAMES``.

    Existing files in *destination* are overwritten.  Returns the written
    file paths.
    """
    source = Path(source)
    destination = Path(destination)
    written: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(source):
        dirnames.sort()
        relative_dir = Path(dirpath).relative_to(source)
        target_dir = destination / relative_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        for filename in sorted(filenames):
            target = target_dir / RENAMES.get(filename, filename)
            shutil.copy2(Path(dirpath) / filename, target)
            written.append(target)
    return written


async def copy_template_async(source: Path, destination: Path) -> list[Path]:
    """Run :func:`copy_template` in a worker thread."""
    return await asyncio.to_thread(copy_template, source, destination)
