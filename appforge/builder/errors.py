"""Exception types raised by the build stages."""

from __future__ import annotations


class BuildError(Exception):
    """Raised when a build stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(message)


class TemplateNotFoundError(BuildError):
    """No base template exists for the requested framework/variant."""

    def __init__(self, message: str) -> None:
        super().__init__("template", message)


class PatchError(BuildError):
    """A patch directive could not be applied or its file not written."""

    def __init__(self, message: str, file: str = "") -> None:
        self.file = file
        super().__init__("patch", message)


class ArchiveError(BuildError):
    """A source file could not be read or the archive stream failed."""

    def __init__(self, message: str) -> None:
        super().__init__("archive", message)
