"""Zustand plugin: a single hook-based store, no entry point changes."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet
from appforge.plugins.base import Axis, FeaturePlugin, no_modifications
from appforge.plugins.renderer import build_context, default_renderer


def get_dependencies(config: BuildConfig) -> DependencySet:
    return DependencySet(dependencies={"zustand": "^4.4.7"})


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    content = default_renderer().render("zustand/useStore.j2", build_context(config))
    return [AdditionalFile(path="src/store/useStore.ts", content=content)]


plugin = FeaturePlugin(
    name="zustand",
    axis=Axis.STATE_MANAGER,
    get_dependencies=get_dependencies,
    get_modifications=no_modifications,
    get_additional_files=get_additional_files,
)
