"""``package.json`` merging.

Folds every selected plugin's dependency declarations into the base
template's manifest.  Later plugins win over earlier ones for the same
package name, and plugin entries win over the base manifest's.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from appforge.models import BuildConfig, Framework
from appforge.plugins.base import FeaturePlugin
from appforge.utils import load_json, print_warning, save_json


# ---------------------------------------------------------------------------
# Per-framework fallback manifests
# ---------------------------------------------------------------------------

_VITE_SCRIPTS: dict[str, str] = {
    "dev": "vite",
    "build": "vite build",
    "preview": "vite preview",
}

BASE_MANIFESTS: dict[Framework, dict[str, Any]] = {
    Framework.REACT: {
        "dependencies": {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        },
        "devDependencies": {
            "vite": "^5.0.0",
            "@vitejs/plugin-react": "^4.2.1",
            "typescript": "^5.0.0",
            "@types/react": "^18.2.0",
            "@types/react-dom": "^18.2.0",
        },
        "scripts": _VITE_SCRIPTS,
    },
    Framework.VUE: {
        "dependencies": {
            "vue": "^3.4.15",
        },
        "devDependencies": {
            "vite": "^5.0.0",
            "@vitejs/plugin-vue": "^5.0.0",
            "typescript": "^5.0.0",
        },
        "scripts": _VITE_SCRIPTS,
    },
    Framework.SVELTE: {
        "dependencies": {
            "svelte": "^4.2.0",
        },
        "devDependencies": {
            "vite": "^5.0.0",
            "@sveltejs/vite-plugin-svelte": "^3.0.0",
            "typescript": "^5.0.0",
        },
        "scripts": _VITE_SCRIPTS,
    },
    Framework.NEXTJS: {
        "dependencies": {
            "next": "16.0.6",
            "react": "19.2.0",
            "react-dom": "19.2.0",
        },
        "devDependencies": {
            "@tailwindcss/postcss": "^4",
            "@types/node": "^20",
            "@types/react": "^19",
            "@types/react-dom": "^19",
            "eslint": "^9",
            "eslint-config-next": "16.0.6",
            "tailwindcss": "^4",
            "typescript": "^5",
        },
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
            "lint": "eslint",
        },
    },
}


def _as_mapping(value: Any) -> dict[str, Any]:
    """A dependency section, or an empty one if it is not a JSON object."""
    return value if isinstance(value, dict) else {}


def default_manifest(config: BuildConfig) -> dict[str, Any]:
    """Synthesize the fallback manifest for *config*'s framework."""
    base = BASE_MANIFESTS.get(config.framework, BASE_MANIFESTS[Framework.REACT])
    return {
        "name": config.app_name,
        "version": "0.1.0",
        "private": True,
        **copy.deepcopy(base),
    }


def parse_extra_dependency(spec: str) -> tuple[str, str]:
    """Split ``name@range`` into ``(name, range)``.

    A leading ``@`` belongs to the scope (``@scope/pkg@^1`` ->
    ``("@scope/pkg", "^1")``); a bare name maps to ``latest``.
    """
    spec = spec.strip()
    at = spec.rfind("@")
    if at <= 0:
        return spec, "latest"
    name, version = spec[:at], spec[at + 1:]
    return name, version or "latest"


# ---------------------------------------------------------------------------
# ManifestMerger
# ---------------------------------------------------------------------------


class ManifestMerger:
    """Merges plugin dependency declarations into ``package.json``."""

    FILE_NAME = "package.json"

    def fold_dependencies(
        self, plugins: Sequence[FeaturePlugin], config: BuildConfig
    ) -> tuple[dict[str, str], dict[str, str]]:
        """Accumulate every plugin's dependencies in selection order.

        Returns ``(dependencies, dev_dependencies)``; for a package declared
        by several plugins the last one wins.
        """
        dependencies: dict[str, str] = {}
        dev_dependencies: dict[str, str] = {}
        for plugin in plugins:
            declared = plugin.get_dependencies(config)
            dependencies.update(declared.dependencies)
            dev_dependencies.update(declared.dev_dependencies)
        for spec in config.extra_dependencies:
            name, version = parse_extra_dependency(spec)
            if name:
                dependencies[name] = version
        return dependencies, dev_dependencies

    def merge(
        self,
        base: dict[str, Any] | None,
        plugins: Sequence[FeaturePlugin],
        config: BuildConfig,
    ) -> dict[str, Any]:
        """Return the final manifest without touching the disk.

        ``base`` is not mutated.  ``None`` means "use the framework default".
        """
        manifest = copy.deepcopy(base) if base is not None else default_manifest(config)
        manifest["name"] = config.app_name

        dependencies, dev_dependencies = self.fold_dependencies(plugins, config)

        manifest["dependencies"] = {
            **_as_mapping(manifest.get("dependencies")),
            **dependencies,
        }
        manifest["devDependencies"] = {
            **_as_mapping(manifest.get("devDependencies")),
            **dev_dependencies,
        }

        # dependencies stays even when empty; devDependencies does not.
        if not manifest["devDependencies"]:
            del manifest["devDependencies"]

        return manifest

    def read_base(self, project_path: Path) -> dict[str, Any] | None:
        """Read the template's manifest, or ``None`` if absent/unparsable."""
        path = Path(project_path) / self.FILE_NAME
        try:
            return load_json(path)
        except FileNotFoundError:
            print_warning(f"No {self.FILE_NAME} in template, using the default manifest")
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
            print_warning(f"Unparsable {self.FILE_NAME} ({exc}), using the default manifest")
        return None

    async def patch(
        self,
        project_path: Path,
        plugins: Sequence[FeaturePlugin],
        config: BuildConfig,
    ) -> dict[str, Any]:
        """Merge into ``<project_path>/package.json`` and write it back.

        Write failures propagate.
        """
        base = self.read_base(project_path)
        manifest = self.merge(base, plugins, config)
        await save_json(manifest, Path(project_path) / self.FILE_NAME)
        return manifest
