"""Feature plugin interface.

A plugin is a small table of pure functions.  Each one only *describes*
changes (dependencies, patch directives, extra files) for a given
``BuildConfig``; the builder stages perform the I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from appforge.models import (
    AdditionalFile,
    BuildConfig,
    DependencySet,
    Framework,
    PatchDirective,
)


class Axis(str, Enum):
    """Feature axes, in the order plugins are selected."""
    ROUTING = "routing"
    STATE_MANAGER = "state_manager"
    STYLING = "styling"


DependencyFn = Callable[[BuildConfig], DependencySet]
ModificationFn = Callable[[BuildConfig], Sequence[PatchDirective]]
AdditionalFilesFn = Callable[[BuildConfig], Sequence[AdditionalFile]]


@dataclass(frozen=True)
class FeaturePlugin:
    """A named, stateless capability unit."""

    name: str
    axis: Axis
    get_dependencies: DependencyFn
    get_modifications: ModificationFn
    get_additional_files: Optional[AdditionalFilesFn] = None

    def __repr__(self) -> str:
        return f"FeaturePlugin({self.name!r}, axis={self.axis.value})"


def no_modifications(config: BuildConfig) -> list[PatchDirective]:
    """Modification function for plugins that only add files or dependencies."""
    return []


def no_dependencies(config: BuildConfig) -> DependencySet:
    """Dependency function for plugins that add nothing to the manifest."""
    return DependencySet()


def is_typescript(config: BuildConfig) -> bool:
    """Whether generated script files for *config* should be TypeScript."""
    return config.framework in (Framework.REACT, Framework.NEXTJS)
