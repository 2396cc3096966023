"""Pinia plugin: registers ``createPinia()`` on the Vue app."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet, PatchDirective
from appforge.plugins.base import Axis, FeaturePlugin
from appforge.plugins.renderer import build_context, default_renderer

ENTRY_FILE = "src/main.ts"


def get_dependencies(config: BuildConfig) -> DependencySet:
    return DependencySet(dependencies={"pinia": "^2.1.7"})


def get_modifications(config: BuildConfig) -> list[PatchDirective]:
    return [
        PatchDirective.append(ENTRY_FILE, "import { createPinia } from 'pinia';\n"),
        PatchDirective.replace(ENTRY_FILE, r"\.mount\(", ".use(createPinia()).mount("),
    ]


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    content = default_renderer().render("pinia/counter.ts.j2", build_context(config))
    return [AdditionalFile(path="src/stores/counter.ts", content=content)]


plugin = FeaturePlugin(
    name="pinia",
    axis=Axis.STATE_MANAGER,
    get_dependencies=get_dependencies,
    get_modifications=get_modifications,
    get_additional_files=get_additional_files,
)
