"""appforge runtime settings.

Centralised, typed settings for the build service. Everything is a Pydantic
v2 model so values are validated at construction time and can be read from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


def _default_tmp(name: str) -> Path:
    return Path(tempfile.gettempdir()) / name


class Settings(BaseModel):
    """Global appforge settings.

    Instances are typically created once by the CLI or the HTTP app and then
    passed to every ``ProjectBuilder``.
    """

    build_root: Path = Field(
        default_factory=lambda: _default_tmp("project-builds"),
        description="Parent directory of per-build working directories",
    )
    archive_root: Path = Field(
        default_factory=lambda: _default_tmp("project-archives"),
        description="Directory where finished ZIP archives are written",
    )
    templates_dir: Path = Field(
        default=Path("./templates"),
        description="Root of the local base templates (<framework>/ts, nextjs/<variant>)",
    )
    create_vite_dir: Path = Field(
        default=Path("./node_modules/create-vite"),
        description="Fallback location of the create-vite template-* directories",
    )
    patch_concurrency: int = Field(
        default=8, ge=1, description="Maximum file groups patched at the same time"
    )
    compression_level: int = Field(
        default=9, ge=0, le=9, description="Deflate level used for archives"
    )
    archive_grace_seconds: float = Field(
        default=5.0, ge=0, description="Delay before a transmitted archive is deleted"
    )
    install_dependencies: bool = Field(
        default=False, description="Run the package manager before archiving"
    )
    install_timeout: int = Field(default=600, ge=10, description="Install timeout in seconds")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            APPFORGE_BUILD_ROOT, APPFORGE_ARCHIVE_ROOT, APPFORGE_TEMPLATES_DIR,
            APPFORGE_CREATE_VITE_DIR, APPFORGE_PATCH_CONCURRENCY,
            APPFORGE_COMPRESSION_LEVEL, APPFORGE_ARCHIVE_GRACE_SECONDS,
            APPFORGE_INSTALL_DEPENDENCIES, APPFORGE_INSTALL_TIMEOUT,
            APPFORGE_HOST, PORT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("APPFORGE_BUILD_ROOT"):
            kwargs["build_root"] = Path(os.environ["APPFORGE_BUILD_ROOT"])
        if os.environ.get("APPFORGE_ARCHIVE_ROOT"):
            kwargs["archive_root"] = Path(os.environ["APPFORGE_ARCHIVE_ROOT"])
        if os.environ.get("APPFORGE_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["APPFORGE_TEMPLATES_DIR"])
        if os.environ.get("APPFORGE_CREATE_VITE_DIR"):
            kwargs["create_vite_dir"] = Path(os.environ["APPFORGE_CREATE_VITE_DIR"])
        if os.environ.get("APPFORGE_PATCH_CONCURRENCY"):
            kwargs["patch_concurrency"] = int(os.environ["APPFORGE_PATCH_CONCURRENCY"])
        if os.environ.get("APPFORGE_COMPRESSION_LEVEL"):
            kwargs["compression_level"] = int(os.environ["APPFORGE_COMPRESSION_LEVEL"])
        if os.environ.get("APPFORGE_ARCHIVE_GRACE_SECONDS"):
            kwargs["archive_grace_seconds"] = float(os.environ["APPFORGE_ARCHIVE_GRACE_SECONDS"])
        if os.environ.get("APPFORGE_INSTALL_DEPENDENCIES"):
            kwargs["install_dependencies"] = os.environ["APPFORGE_INSTALL_DEPENDENCIES"].lower() in (
                "1", "true", "yes", "on",
            )
        if os.environ.get("APPFORGE_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["APPFORGE_INSTALL_TIMEOUT"])
        if os.environ.get("APPFORGE_HOST"):
            kwargs["host"] = os.environ["APPFORGE_HOST"]
        if os.environ.get("PORT"):
            kwargs["port"] = int(os.environ["PORT"])
        return cls(**kwargs)

    def ensure_directories(self) -> None:
        """Create the build and archive roots if they do not exist yet."""
        for directory in (self.build_root, self.archive_root):
            directory.mkdir(parents=True, exist_ok=True)
