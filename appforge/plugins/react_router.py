"""React Router plugin: wraps the React entry point in ``BrowserRouter``."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet, PatchDirective
from appforge.plugins.base import Axis, FeaturePlugin
from appforge.plugins.renderer import build_context, default_renderer

# Registered for React only; the Vite react-ts template mounts from here.
ENTRY_FILE = "src/main.tsx"


def get_dependencies(config: BuildConfig) -> DependencySet:
    return DependencySet(
        dependencies={"react-router-dom": "^6.20.0"},
        dev_dependencies={"@types/react-router-dom": "^5.3.3"},
    )


def get_modifications(config: BuildConfig) -> list[PatchDirective]:
    return [
        PatchDirective.append(ENTRY_FILE, "import { BrowserRouter } from 'react-router-dom';\n"),
        PatchDirective.replace(ENTRY_FILE, "<App />", "<BrowserRouter><App /></BrowserRouter>"),
    ]


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    renderer = default_renderer()
    ctx = build_context(config)
    return [
        AdditionalFile(path="src/routes/index.tsx", content=renderer.render("react_router/routes.j2", ctx)),
        AdditionalFile(path="src/pages/Home.tsx", content=renderer.render("react_router/Home.j2", ctx)),
        AdditionalFile(path="src/pages/About.tsx", content=renderer.render("react_router/About.j2", ctx)),
    ]


plugin = FeaturePlugin(
    name="react-router",
    axis=Axis.ROUTING,
    get_dependencies=get_dependencies,
    get_modifications=get_modifications,
    get_additional_files=get_additional_files,
)
