"""Tailwind CSS v4 plugin.

Vite-based templates get the ``@tailwindcss/vite`` plugin registered in
``vite.config.ts``; Next.js gets the PostCSS integration instead.
"""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig, DependencySet, Framework, PatchDirective
from appforge.plugins.base import Axis, FeaturePlugin
from appforge.plugins.renderer import build_context, default_renderer

_CSS_ENTRY: dict[Framework, str] = {
    Framework.REACT: "src/index.css",
    Framework.VUE: "src/style.css",
    Framework.SVELTE: "src/app.css",
    Framework.NEXTJS: "src/app/globals.css",
}


def get_dependencies(config: BuildConfig) -> DependencySet:
    if config.framework is Framework.NEXTJS:
        return DependencySet(
            dev_dependencies={
                "@tailwindcss/postcss": "^4",
                "tailwindcss": "^4",
            }
        )
    return DependencySet(
        dependencies={
            "@tailwindcss/vite": "^4.1.17",
            "tailwindcss": "^4.1.17",
        }
    )


def get_modifications(config: BuildConfig) -> list[PatchDirective]:
    modifications = [
        PatchDirective.append(_CSS_ENTRY[config.framework], '@import "tailwindcss";\n'),
    ]
    if config.framework is not Framework.NEXTJS:
        modifications += [
            PatchDirective.prepend("vite.config.ts", "import tailwindcss from '@tailwindcss/vite'\n"),
            PatchDirective.replace("vite.config.ts", r"plugins:\s*\[", "plugins: [tailwindcss(), "),
        ]
    return modifications


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    if config.framework is not Framework.NEXTJS:
        return []
    content = default_renderer().render("tailwind/postcss.config.mjs.j2", build_context(config))
    return [AdditionalFile(path="postcss.config.mjs", content=content)]


plugin = FeaturePlugin(
    name="tailwind",
    axis=Axis.STYLING,
    get_dependencies=get_dependencies,
    get_modifications=get_modifications,
    get_additional_files=get_additional_files,
)
