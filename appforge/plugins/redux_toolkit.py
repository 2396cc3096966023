"""Redux Toolkit plugin: adds a store and wraps ``<App />`` in a ``Provider``."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet, PatchDirective
from appforge.plugins.base import Axis, FeaturePlugin
from appforge.plugins.renderer import build_context, default_renderer


def get_dependencies(config: BuildConfig) -> DependencySet:
    return DependencySet(
        dependencies={
            "@reduxjs/toolkit": "^2.0.0",
            "react-redux": "^9.0.0",
        },
        dev_dependencies={"@types/react-redux": "^9.0.0"},
    )


def get_modifications(config: BuildConfig) -> list[PatchDirective]:
    entry = "src/main.tsx"
    return [
        PatchDirective.append(
            entry, "import { Provider } from 'react-redux';\nimport { store } from './store';\n"
        ),
        PatchDirective.replace(entry, "<App />", "<Provider store={store}><App /></Provider>"),
    ]


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    renderer = default_renderer()
    ctx = build_context(config)
    return [
        AdditionalFile(path="src/store/index.ts", content=renderer.render("redux_toolkit/store.j2", ctx)),
        AdditionalFile(
            path="src/store/counterSlice.ts",
            content=renderer.render("redux_toolkit/counterSlice.j2", ctx),
        ),
    ]


plugin = FeaturePlugin(
    name="redux-toolkit",
    axis=Axis.STATE_MANAGER,
    get_dependencies=get_dependencies,
    get_modifications=get_modifications,
    get_additional_files=get_additional_files,
)
