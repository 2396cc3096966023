"""CSS Modules plugin: ambient type declarations for ``*.module.css``."""

from __future__ import annotations

from appforge.models import AdditionalFile, BuildConfig
from appforge.plugins.base import Axis, FeaturePlugin, is_typescript, no_dependencies, no_modifications
from appforge.plugins.renderer import build_context, default_renderer


def get_additional_files(config: BuildConfig) -> list[AdditionalFile]:
    if not is_typescript(config):
        return []
    content = default_renderer().render("css_modules/css-modules.d.ts.j2", build_context(config))
    return [AdditionalFile(path="src/types/css-modules.d.ts", content=content)]


plugin = FeaturePlugin(
    name="css-modules",
    axis=Axis.STYLING,
    get_dependencies=no_dependencies,
    get_modifications=no_modifications,
    get_additional_files=get_additional_files,
)
