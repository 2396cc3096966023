"""Pydantic v2 models shared by every build stage.

Defines the build configuration, the declarations feature plugins produce
(dependency sets, patch directives, additional files), and the uniform build
result handed back to the boundary layer.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Supported base frameworks."""
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    NEXTJS = "nextjs"


class PackageManager(str, Enum):
    """Package managers the generated project may be installed with."""
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


class Linting(str, Enum):
    """Linting toolchain baked into the base template."""
    ESLINT = "eslint"
    BIOME = "biome"
    NONE = "none"


class PatchKind(str, Enum):
    """Kinds of textual patch a plugin can declare."""
    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"


# ---------------------------------------------------------------------------
# Build configuration
# ---------------------------------------------------------------------------

_APP_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*$")


class BuildConfig(BaseModel):
    """Immutable description of the project to build.

    Accepts both snake_case field names and the camelCase keys used by the
    HTTP API (``appName``, ``packageManager``, ``stateManager`` ...).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    app_name: str = Field(..., max_length=214, description="Project directory and package name")
    framework: Framework = Field(..., description="Base framework")
    package_manager: PackageManager = Field(..., description="Package manager identity")
    routing: str = Field(default="none", description="Routing option, e.g. 'react-router'")
    styling: str = Field(default="none", description="Styling option, e.g. 'tailwind'")
    state_manager: str = Field(default="none", description="State manager option, e.g. 'pinia'")
    linting: Linting = Field(default=Linting.ESLINT, description="Linting toolchain")
    extra_dependencies: tuple[str, ...] = Field(
        default=(),
        description="Additional runtime dependencies as 'name' or 'name@range'",
    )

    @field_validator("app_name")
    @classmethod
    def app_name_is_path_segment(cls, value: str) -> str:
        if value in (".", "..") or not _APP_NAME_RE.match(value):
            raise ValueError(
                f"app name {value!r} is not a valid path segment "
                "(letters, digits, '.', '_' and '-' only)"
            )
        return value

    @field_validator("routing", "styling", "state_manager", mode="before")
    @classmethod
    def blank_option_is_none(cls, value: Optional[str]) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "none"
        return value


# ---------------------------------------------------------------------------
# Plugin declarations
# ---------------------------------------------------------------------------

def _check_relative_path(value: str) -> str:
    path = PurePosixPath(value)
    if not value or path.is_absolute() or ".." in path.parts:
        raise ValueError(f"{value!r} must be a relative path inside the project")
    return value


class DependencySet(BaseModel):
    """Runtime and development dependencies declared by one plugin."""
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)


class PatchDirective(BaseModel):
    """A single textual change to one project file."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Target path relative to the project root")
    kind: PatchKind
    pattern: Optional[str] = Field(default=None, description="Regular expression (replace only)")
    replacement: Optional[str] = Field(default=None, description="re.sub template (replace only)")
    content: Optional[str] = Field(default=None, description="Literal text (append/prepend only)")

    @field_validator("file")
    @classmethod
    def file_is_relative(cls, value: str) -> str:
        return _check_relative_path(value)

    @model_validator(mode="after")
    def fields_match_kind(self) -> "PatchDirective":
        if self.kind is PatchKind.REPLACE:
            if self.pattern is None or self.replacement is None:
                raise ValueError("replace directives need both 'pattern' and 'replacement'")
        elif self.content is None:
            raise ValueError(f"{self.kind.value} directives need 'content'")
        return self

    @classmethod
    def replace(cls, file: str, pattern: str, replacement: str) -> "PatchDirective":
        return cls(file=file, kind=PatchKind.REPLACE, pattern=pattern, replacement=replacement)

    @classmethod
    def append(cls, file: str, content: str) -> "PatchDirective":
        return cls(file=file, kind=PatchKind.APPEND, content=content)

    @classmethod
    def prepend(cls, file: str, content: str) -> "PatchDirective":
        return cls(file=file, kind=PatchKind.PREPEND, content=content)


class AdditionalFile(BaseModel):
    """A file created verbatim inside the project."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Destination path relative to the project root")
    content: str = Field(default="")

    @field_validator("path")
    @classmethod
    def path_is_relative(cls, value: str) -> str:
        return _check_relative_path(value)


# ---------------------------------------------------------------------------
# Build result
# ---------------------------------------------------------------------------

class BuildResult(BaseModel):
    """Outcome of one build. Success carries paths, failure carries ``error``."""
    success: bool
    project_path: Optional[str] = None
    archive_path: Optional[str] = None
    archive_name: Optional[str] = None
    error: Optional[str] = None
