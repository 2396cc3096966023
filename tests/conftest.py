"""Shared pytest fixtures for the appforge test suite.

Provides reusable fixtures for:
- Settings rooted in a temporary directory
- On-disk base templates (React, Vue and a Next.js variant)
- Sample build configurations
- A factory for ad-hoc feature plugins
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from appforge.config import Settings
from appforge.models import (
    AdditionalFile,
    BuildConfig,
    DependencySet,
    Framework,
    PackageManager,
    PatchDirective,
)
from appforge.plugins.base import Axis, FeaturePlugin


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------

REACT_MAIN = textwrap.dedent("""\
    import React from 'react'
    import ReactDOM from 'react-dom/client'
    import App from './App'
    import './index.css'

    ReactDOM.createRoot(document.getElementById('root')!).render(
      <React.StrictMode>
        <App />
      </React.StrictMode>,
    )
""")

VUE_MAIN = textwrap.dedent("""\
    import { createApp } from 'vue'
    import './style.css'
    import App from './App.vue'

    createApp(App).mount('#app')
""")

VITE_CONFIG = textwrap.dedent("""\
    import { defineConfig } from 'vite'
    import react from '@vitejs/plugin-react'

    export default defineConfig({
      plugins: [react()],
    })
""")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def _manifest(name: str, dependencies: dict[str, str], dev: dict[str, str]) -> str:
    return json.dumps(
        {
            "name": name,
            "private": True,
            "version": "0.0.0",
            "type": "module",
            "dependencies": dependencies,
            "devDependencies": dev,
        },
        indent=2,
    ) + "\n"


# ---------------------------------------------------------------------------
# Settings & templates
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A templates root holding ``react/ts``, ``vue/ts`` and ``nextjs/app-tail-es``."""
    root = tmp_path / "templates"
    _write(root / "react" / "ts", {
        "package.json": _manifest(
            "vite-react-typescript-starter",
            {"react": "^18.2.0", "react-dom": "^18.2.0"},
            {"vite": "^5.0.0", "typescript": "^5.0.0"},
        ),
        "index.html": "<div id=\"root\"></div>\n",
        "src/main.tsx": REACT_MAIN,
        "src/App.tsx": "export default function App() { return <h1>App</h1> }\n",
        "src/index.css": ":root { color: black; }\n",
        "vite.config.ts": VITE_CONFIG,
        "gitignore": "node_modules\ndist\n",
        "README-template.md": "# Starter\n",
    })
    _write(root / "vue" / "ts", {
        "package.json": _manifest(
            "vite-vue-typescript-starter",
            {"vue": "^3.4.15"},
            {"vite": "^5.0.0", "@vitejs/plugin-vue": "^5.0.0"},
        ),
        "src/main.ts": VUE_MAIN,
        "src/App.vue": "<template><h1>App</h1></template>\n",
        "src/style.css": "body { margin: 0; }\n",
        "vite.config.ts": VITE_CONFIG.replace("react", "vue"),
        "gitignore": "node_modules\n",
    })
    _write(root / "nextjs" / "app-tail-es", {
        "package.json": _manifest(
            "next-starter",
            {"next": "16.0.6", "react": "19.2.0", "react-dom": "19.2.0"},
            {"typescript": "^5"},
        ),
        "src/app/layout.tsx": "export default function RootLayout({ children }) { return children }\n",
        "src/app/globals.css": "body { margin: 0; }\n",
    })
    return root


@pytest.fixture
def settings(tmp_path: Path, templates_dir: Path) -> Settings:
    """Settings isolated under ``tmp_path`` with no archive grace period."""
    return Settings(
        build_root=tmp_path / "builds",
        archive_root=tmp_path / "archives",
        templates_dir=templates_dir,
        create_vite_dir=tmp_path / "create-vite",
        archive_grace_seconds=0,
    )


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def react_config() -> BuildConfig:
    return BuildConfig(
        app_name="demo-app",
        framework=Framework.REACT,
        package_manager=PackageManager.NPM,
    )


@pytest.fixture
def full_react_config() -> BuildConfig:
    """React with a plugin on every axis."""
    return BuildConfig(
        app_name="demo-app",
        framework=Framework.REACT,
        package_manager=PackageManager.PNPM,
        routing="react-router",
        state_manager="redux-toolkit",
        styling="tailwind",
    )


# ---------------------------------------------------------------------------
# Plugin factory
# ---------------------------------------------------------------------------

@pytest.fixture
def make_plugin() -> Callable[..., FeaturePlugin]:
    """Factory for plugins returning fixed declarations."""

    def _make(
        name: str = "fake",
        axis: Axis = Axis.STYLING,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        modifications: list[PatchDirective] | None = None,
        files: list[AdditionalFile] | None = None,
    ) -> FeaturePlugin:
        def get_dependencies(config: Any) -> DependencySet:
            return DependencySet(
                dependencies=dict(dependencies or {}),
                dev_dependencies=dict(dev_dependencies or {}),
            )

        return FeaturePlugin(
            name=name,
            axis=axis,
            get_dependencies=get_dependencies,
            get_modifications=lambda config: list(modifications or []),
            get_additional_files=(lambda config: list(files)) if files is not None else None,
        )

    return _make


# ---------------------------------------------------------------------------
# Entry-point sources
# ---------------------------------------------------------------------------

@pytest.fixture
def react_main() -> str:
    """``src/main.tsx`` of the stock React template."""
    return REACT_MAIN


@pytest.fixture
def vue_main() -> str:
    """``src/main.ts`` of the stock Vue template."""
    return VUE_MAIN


@pytest.fixture
def vite_config() -> str:
    return VITE_CONFIG
