"""Build orchestration.

``ProjectBuilder`` runs one build end to end:

1. resolve the base template (fails before any I/O if none exists)
2. copy it into a fresh working directory
3. select the feature plugins
4. merge ``package.json``
5. write plugin-provided files
6. apply patch directives
7. optionally install dependencies
8. pack the tree into a ZIP archive

Every failure is converted into a ``BuildResult`` with ``success=False``.
Working-directory and archive removal are separate, idempotent operations
that the caller invokes once the archive has been delivered.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from pathlib import Path

from appforge.builder.archive import ArchiveBuilder
from appforge.builder.files import materialize_additional_files
from appforge.builder.install import install_dependencies
from appforge.builder.manifest import ManifestMerger
from appforge.builder.patcher import PatchEngine
from appforge.builder.template_source import copy_template_async, resolve_template_dir
from appforge.config import Settings
from appforge.models import BuildConfig, BuildResult
from appforge.plugins import select_plugins
from appforge.utils import print_error, print_step, print_success, print_warning, remove_path


def new_build_id() -> str:
    """Millisecond timestamp plus a random token, unique per build."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


class ProjectBuilder:
    """Builds one project described by a ``BuildConfig``.

    Attributes:
        config: The build configuration.
        settings: Service-wide settings (roots, concurrency, compression).
        build_id: Identifier shared by the working directory and archive.
        project_path: Working directory holding the generated tree.
    """

    def __init__(self, config: BuildConfig, settings: Settings | None = None) -> None:
        self.config = config
        self.settings = settings or Settings()
        self.build_id = new_build_id()
        self.project_path = self.settings.build_root / f"{config.app_name}-{self.build_id}"
        self.archive_path: Path | None = None
        self.manifest_merger = ManifestMerger()
        self.patch_engine = PatchEngine(self.settings.patch_concurrency)
        self.archive_builder = ArchiveBuilder(
            self.settings.archive_root, self.settings.compression_level
        )

    # -- Public API --------------------------------------------------------

    async def build(self) -> BuildResult:
        """Run the full pipeline.  Never raises."""
        try:
            archive_path = await self._run()
        except Exception as exc:
            print_error(f"Build failed: {exc}")
            await self._discard_partial_archive()
            return BuildResult(success=False, error=str(exc) or type(exc).__name__)

        return BuildResult(
            success=True,
            project_path=str(self.project_path),
            archive_path=str(archive_path),
            archive_name=archive_path.name,
        )

    async def cleanup(self) -> None:
        """Remove the working directory.  Missing directories are fine."""
        try:
            removed = await asyncio.to_thread(remove_path, self.project_path)
        except OSError as exc:
            print_warning(f"Error during cleanup of {self.project_path}: {exc}")
            return
        if removed:
            print_success(f"Cleaned up {self.project_path}")

    async def cleanup_archive(self, archive_path: str | Path | None = None) -> None:
        """Remove the archive (this build's by default).  Missing files are fine."""
        target = archive_path or self.archive_path
        if target is None:
            return
        try:
            removed = await asyncio.to_thread(remove_path, target)
        except OSError as exc:
            print_warning(f"Error deleting archive {target}: {exc}")
            return
        if removed:
            print_success(f"Archive deleted: {target}")

    # -- Pipeline ----------------------------------------------------------

    async def _run(self) -> Path:
        config = self.config
        template_dir = resolve_template_dir(config, self.settings)

        print_step(f"Copying template {template_dir}")
        await asyncio.to_thread(self.settings.build_root.mkdir, parents=True, exist_ok=True)
        await copy_template_async(template_dir, self.project_path)

        plugins = select_plugins(config)
        if plugins:
            print_step("Plugins: " + ", ".join(p.name for p in plugins))

        print_step("Patching package.json")
        await self.manifest_merger.patch(self.project_path, plugins, config)

        print_step("Creating additional files")
        await materialize_additional_files(plugins, config, self.project_path)

        print_step("Applying plugin modifications")
        await self.patch_engine.apply(plugins, config, self.project_path)

        if self.settings.install_dependencies:
            print_step(f"Installing dependencies with {config.package_manager.value}")
            await install_dependencies(
                config.package_manager,
                self.project_path,
                timeout=self.settings.install_timeout,
            )

        print_step("Creating archive")
        self.archive_path = self.archive_builder.archive_path(config.app_name, self.build_id)
        await self.archive_builder.build(self.project_path, config.app_name, self.build_id)
        return self.archive_path

    async def _discard_partial_archive(self) -> None:
        if self.archive_path is None:
            return
        await self.cleanup_archive(self.archive_path)
        self.archive_path = None
