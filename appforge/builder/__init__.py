"""Build stages: manifest merge, additional files, patching, archiving.

Each stage is usable on its own; ``appforge.lifecycle.ProjectBuilder``
sequences them for a full build.
"""

from appforge.builder.archive import ArchiveBuilder, iter_archive_entries
from appforge.builder.errors import ArchiveError, BuildError, PatchError, TemplateNotFoundError
from appforge.builder.files import collect_additional_files, materialize_additional_files
from appforge.builder.manifest import ManifestMerger, default_manifest
from appforge.builder.patcher import PatchEngine, apply_directives, collect, group
from appforge.builder.template_source import copy_template, resolve_template_dir

__all__ = [
    "ArchiveBuilder",
    "ArchiveError",
    "BuildError",
    "ManifestMerger",
    "PatchEngine",
    "PatchError",
    "TemplateNotFoundError",
    "apply_directives",
    "collect",
    "collect_additional_files",
    "copy_template",
    "default_manifest",
    "group",
    "iter_archive_entries",
    "materialize_additional_files",
    "resolve_template_dir",
]
