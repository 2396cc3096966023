"""HTTP boundary for the build service.

Endpoints:

* ``GET /health``  -- liveness probe.
* ``POST /build``  -- build a project from a camelCase JSON body and stream
  the resulting ZIP back.  The working directory is removed once the
  response has been sent and the archive after a short grace period.
"""

from __future__ import annotations

import asyncio

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.background import BackgroundTask

from appforge.config import Settings
from appforge.lifecycle import ProjectBuilder
from appforge.models import BuildConfig
from appforge.utils import print_error, print_step, print_success


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg', 'invalid')}" if loc else error.get("msg", "invalid"))
    return "Invalid build request: " + "; ".join(parts)


async def _release(builder: ProjectBuilder, grace_seconds: float) -> None:
    """Remove the working directory now and the archive after *grace_seconds*."""
    await builder.cleanup()
    await asyncio.sleep(grace_seconds)
    await builder.cleanup_archive()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application bound to *settings*."""
    settings = settings or Settings.from_env()
    app = FastAPI(title="appforge")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": _describe_validation_error(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "message": "Agent is running"}

    @app.post("/build")
    async def build(config: BuildConfig):
        print_step(
            f"Starting build for project: {config.app_name} "
            f"({config.framework.value}, {config.package_manager.value}, "
            f"routing={config.routing}, styling={config.styling}, "
            f"state={config.state_manager})"
        )
        builder = ProjectBuilder(config, settings)
        result = await builder.build()

        if not result.success or not result.archive_path:
            await builder.cleanup()
            return JSONResponse(
                status_code=500,
                content={"success": False, "error": result.error or "Build failed"},
            )

        print_success(f"Build completed: {result.archive_name}")
        return FileResponse(
            result.archive_path,
            media_type="application/zip",
            filename=result.archive_name,
            background=BackgroundTask(_release, builder, settings.archive_grace_seconds),
        )

    return app


def run(settings: Settings | None = None) -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    settings = settings or Settings.from_env()
    settings.ensure_directories()
    try:
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    except OSError as exc:
        print_error(f"Could not start server on {settings.host}:{settings.port}: {exc}")
        raise
