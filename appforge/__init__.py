"""appforge -- assembles front-end starter projects from a base template plus
feature plugins and ships them as a single ZIP archive.

Quick usage::

    from appforge import BuildConfig, ProjectBuilder

    config = BuildConfig(
        app_name="my-app",
        framework="react",
        package_manager="npm",
        routing="react-router",
        styling="tailwind",
    )
    builder = ProjectBuilder(config)
    result = await builder.build()
"""

from appforge.lifecycle import ProjectBuilder
from appforge.models import BuildConfig, BuildResult

__version__ = "0.1.0"

__all__ = [
    "BuildConfig",
    "BuildResult",
    "ProjectBuilder",
]
