"""Package-manager installation inside a generated project."""

from __future__ import annotations

from pathlib import Path

from appforge.builder.errors import BuildError
from appforge.models import PackageManager
from appforge.utils import run_command

INSTALL_ENV: dict[str, str] = {
    "ADBLOCK": "1",
    "NODE_ENV": "development",
    "DISABLE_OPENCOLLECTIVE": "1",
}


def install_command(package_manager: PackageManager, online: bool = True) -> list[str]:
    """Argument vector for ``<pm> install``."""
    cmd = [package_manager.value, "install"]
    if not online:
        cmd.append("--offline")
    return cmd


async def install_dependencies(
    package_manager: PackageManager,
    cwd: Path,
    online: bool = True,
    timeout: int = 600,
) -> None:
    """Install the project's dependencies with the chosen package manager.

    Raises:
        BuildError: The package manager could not be started or exited
            non-zero.
    """
    cmd = install_command(package_manager, online)
    try:
        returncode, _stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout, env=INSTALL_ENV)
    except FileNotFoundError as exc:
        raise BuildError("install", f"{package_manager.value} is not installed: {exc}") from exc
    if returncode != 0:
        detail = f": {stderr.splitlines()[-1]}" if stderr else ""
        raise BuildError("install", f"{' '.join(cmd)} failed with code {returncode}{detail}")
