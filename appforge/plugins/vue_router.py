"""Vue Router plugin: installs a router built from ``src/router/index.ts``."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet, PatchDirective
from appforge.plugins.base import Axis, FeaturePlugin
from appforge.plugins.renderer import build_context, default_renderer

ENTRY_FILE = "src/main.ts"


def get_dependencies(config: BuildConfig) -> DependencySet:
    return DependencySet(dependencies={"vue-router": "^4.2.5"})


def get_modifications(config: BuildConfig) -> list[PatchDirective]:
    # The stock template mounts with ``createApp(App).mount('#app')``.
    return [
        PatchDirective.append(ENTRY_FILE, "import router from './router';\n"),
        PatchDirective.replace(ENTRY_FILE, r"\.mount\(", ".use(router).mount("),
    ]


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    renderer = default_renderer()
    ctx = build_context(config)
    return [
        AdditionalFile(path="src/router/index.ts", content=renderer.render("vue_router/router.ts.j2", ctx)),
        AdditionalFile(path="src/views/Home.vue", content=renderer.render("vue_router/Home.vue.j2", ctx)),
        AdditionalFile(path="src/views/About.vue", content=renderer.render("vue_router/About.vue.j2", ctx)),
    ]


plugin = FeaturePlugin(
    name="vue-router",
    axis=Axis.ROUTING,
    get_dependencies=get_dependencies,
    get_modifications=get_modifications,
    get_additional_files=get_additional_files,
)
