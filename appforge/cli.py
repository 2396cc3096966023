"""Command-line entry point.

Usage::

    python -m appforge build --app-name my-app --framework react --routing react-router
    python -m appforge build --config request.yaml --output ./dist
    python -m appforge serve --port 3000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import shutil
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from appforge.config import Settings
from appforge.lifecycle import ProjectBuilder
from appforge.models import BuildConfig, Framework, Linting, PackageManager
from appforge.utils import ensure_dir, print_error, print_success, print_summary_table


def load_request_file(path: Path) -> dict[str, Any]:
    """Read a build request from a YAML or JSON file."""
    raw = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() == ".json":
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    """Combine ``--config`` file values with explicit command-line flags."""
    data: dict[str, Any] = load_request_file(args.config) if args.config else {}
    overrides = {
        "app_name": args.app_name,
        "framework": args.framework,
        "package_manager": args.package_manager,
        "routing": args.routing,
        "styling": args.styling,
        "state_manager": args.state_manager,
        "linting": args.linting,
    }
    # Camel-case keys take precedence over snake-case ones during validation.
    data.update({to_camel(key): value for key, value in overrides.items() if value is not None})
    if args.extra:
        data["extraDependencies"] = list(args.extra)
    if "packageManager" not in data and "package_manager" not in data:
        data["packageManager"] = PackageManager.NPM.value
    return BuildConfig.model_validate(data)


def settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    updates: dict[str, Any] = {}
    if getattr(args, "templates_dir", None):
        updates["templates_dir"] = Path(args.templates_dir)
    if getattr(args, "install", False):
        updates["install_dependencies"] = True
    if getattr(args, "host", None):
        updates["host"] = args.host
    if getattr(args, "port", None):
        updates["port"] = args.port
    return settings.model_copy(update=updates)


async def _build(config: BuildConfig, settings: Settings, output: Path | None, keep: bool) -> int:
    builder = ProjectBuilder(config, settings)
    result = await builder.build()
    if not result.success:
        print_error(f"Build failed: {result.error}")
        return 1

    archive = Path(result.archive_path)
    delivered = archive
    if output is not None:
        delivered = Path(shutil.copy2(archive, ensure_dir(output) / archive.name))

    print_summary_table(
        {
            "Project": config.app_name,
            "Framework": config.framework.value,
            "Archive": str(delivered),
            "Working directory": result.project_path if keep else "(removed)",
        },
        title="Build",
    )
    if not keep:
        await builder.cleanup()
        if output is not None:
            await builder.cleanup_archive()
    print_success("Build completed successfully!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appforge",
        description="appforge -- assemble a starter project and pack it as a ZIP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m appforge build --app-name my-app --framework react\n"
            "  python -m appforge build --config request.yaml -o ./dist\n"
            "  python -m appforge serve --port 3000\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a project archive")
    build.add_argument("--config", type=Path, default=None, help="YAML/JSON build request")
    build.add_argument("--app-name", default=None)
    build.add_argument("--framework", choices=[f.value for f in Framework], default=None)
    build.add_argument(
        "--package-manager", choices=[p.value for p in PackageManager], default=None
    )
    build.add_argument("--routing", default=None, help="e.g. react-router, vue-router")
    build.add_argument("--styling", default=None, help="e.g. tailwind, css-modules")
    build.add_argument("--state-manager", default=None, help="e.g. redux-toolkit, zustand, pinia")
    build.add_argument("--linting", choices=[lint.value for lint in Linting], default=None)
    build.add_argument(
        "--extra", action="append", default=[], help="Extra dependency 'name[@range]' (repeatable)"
    )
    build.add_argument("--templates-dir", default=None, help="Override the templates root")
    build.add_argument("--install", action="store_true", help="Run the package manager first")
    build.add_argument("--output", "-o", type=Path, default=None, help="Copy the archive here")
    build.add_argument("--keep", action="store_true", help="Keep the working directory")

    serve = sub.add_parser("serve", help="Run the HTTP build service")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m appforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        from appforge.server import run

        run(settings_from_args(args))
        return 0

    try:
        config = config_from_args(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        # ValidationError is a ValueError subclass.
        message = str(exc) if not isinstance(exc, ValidationError) else exc.errors()[0]["msg"]
        print_error(f"Invalid build request: {message}")
        return 1

    return asyncio.run(_build(config, settings_from_args(args), args.output, args.keep))


if __name__ == "__main__":
    sys.exit(main())
