"""
Membership Registry API Server

Entry point for the FastAPI application and the `membership-registry` CLI.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1 import router as api_v1_router
from .core.config import get_settings
from .core.errors import RegistryError
from .core.logging import configure_logging
from .core.store import get_store
from .seed import apply_seed, load_seed

log = structlog.get_logger()


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.to_body().model_dump(mode="json")},
    )


def create_app(seed_path: Optional[str] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    seed_path = seed_path or settings.seed_path

    app = FastAPI(
        title="Membership Registry",
        description="Identities, organizations, members and managers.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check endpoint for startup probes."""
        return {"status": "ready", "identities": len(get_store().identities)}

    @app.on_event("startup")
    async def on_startup():
        log.info("Membership registry starting", seed=seed_path)
        if seed_path:
            apply_seed(get_store().manager, load_seed(seed_path))

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("Membership registry shutting down")

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the registry."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Membership registry server")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument("--seed", default=settings.seed_path, help="YAML seed file applied at startup")
    args = parser.parse_args()

    configure_logging(settings.log_level, settings.log_format)

    if args.seed:
        try:
            load_seed(args.seed)
        except FileNotFoundError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        except Exception as exc:
            print(f"Seed file error: {exc}", file=sys.stderr)
            sys.exit(1)

    log.info("registry.config_loaded", host=args.host, port=args.port, seed=args.seed)
    uvicorn.run(create_app(seed_path=args.seed), host=args.host, port=args.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
