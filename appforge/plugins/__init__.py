"""Feature plugin registry.

Plugins are registered in a table keyed by ``(axis, option, framework)``.
``select_plugins`` walks the axes in a fixed order -- routing, state manager,
styling -- and picks at most one plugin per axis.  That order is the order in
which dependency sets are merged and patch directives are applied.

Quick usage::

    from appforge.plugins import select_plugins

    plugins = select_plugins(config)
    for plugin in plugins:
        print(plugin.name, plugin.get_dependencies(config))
"""

from __future__ import annotations

from appforge.models import BuildConfig, Framework
from appforge.plugins import (
    css_modules,
    pinia,
    react_router,
    redux_toolkit,
    tailwind,
    vue_router,
    zustand,
)
from appforge.plugins.base import Axis, FeaturePlugin

AXIS_ORDER: tuple[Axis, ...] = (Axis.ROUTING, Axis.STATE_MANAGER, Axis.STYLING)

REGISTRY: dict[tuple[Axis, str, Framework], FeaturePlugin] = {
    # Routing
    (Axis.ROUTING, "react-router", Framework.REACT): react_router.plugin,
    (Axis.ROUTING, "vue-router", Framework.VUE): vue_router.plugin,
    # State management
    (Axis.STATE_MANAGER, "redux-toolkit", Framework.REACT): redux_toolkit.plugin,
    (Axis.STATE_MANAGER, "zustand", Framework.REACT): zustand.plugin,
    (Axis.STATE_MANAGER, "pinia", Framework.VUE): pinia.plugin,
    # Styling.  CSS Modules is Vite-only: on Next.js it would only add a
    # redundant src/types declaration.
    **{
        (Axis.STYLING, "tailwind", framework): tailwind.plugin
        for framework in Framework
    },
    (Axis.STYLING, "css-modules", Framework.REACT): css_modules.plugin,
    (Axis.STYLING, "css-modules", Framework.VUE): css_modules.plugin,
}


def select_plugins(config: BuildConfig) -> list[FeaturePlugin]:
    """Return the plugins that apply to *config*, in merge order.

    Never raises: an option with no entry for the chosen framework (including
    the ``"none"`` default) simply contributes nothing.
    """
    selected: list[FeaturePlugin] = []
    for axis in AXIS_ORDER:
        option = getattr(config, axis.value)
        plugin = REGISTRY.get((axis, option, config.framework))
        if plugin is not None:
            selected.append(plugin)
    return selected


__all__ = [
    "AXIS_ORDER",
    "REGISTRY",
    "Axis",
    "FeaturePlugin",
    "select_plugins",
]
